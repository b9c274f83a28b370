import asyncio
import json
import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field

from ...api.deps import get_query_dispatcher
from ...api.dispatcher import QueryDispatcher
from ...core.domain.entities.message import OutboundMessage
from ...core.domain.entities.query import Query
from ...core.domain.prompts import ReplyTemplates

logger = logging.getLogger(__name__)

router = APIRouter()


class ChatStreamRequest(BaseModel):
    content: str = Field(..., min_length=1)
    session_id: Optional[str] = None


def _parse_content(raw: str) -> Optional[str]:
    """Pull the utterance out of a client frame; None if the frame is unusable"""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict):
        return None
    content = data.get("content")
    return content if isinstance(content, str) else None


async def _deliver(websocket: WebSocket, dispatcher: QueryDispatcher, query: Query) -> None:
    try:
        async for message in dispatcher.stream(query):
            await websocket.send_json(message.to_dict())
    except WebSocketDisconnect:
        logger.info(f"[{query.session_id}] Client left while a reply was being delivered")
    except Exception as e:
        logger.exception(f"[{query.session_id}] Reply delivery failed: {e}")


@router.websocket("/ws")
async def chat_websocket(
        websocket: WebSocket,
        session_id: Optional[str] = None,
        dispatcher: QueryDispatcher = Depends(get_query_dispatcher),
):
    """
    Real-time chat. The client sends {"content": "..."} frames; the server
    echoes each one and then streams the reply messages.

    Replies are delivered from a separate task so the socket keeps being read
    while a query runs: a new frame supersedes the running query and a
    disconnect cancels it.
    """
    session_id = session_id or str(uuid.uuid4())
    await websocket.accept()
    logger.info(f"WebSocket connected: {session_id}")

    delivery: Optional[asyncio.Task] = None
    try:
        while True:
            content = _parse_content(await websocket.receive_text())
            if content is None:
                await websocket.send_json(OutboundMessage.error(ReplyTemplates.APOLOGY).to_dict())
                continue
            if not content.strip():
                continue

            if delivery is not None and not delivery.done():
                delivery.cancel()
            await websocket.send_json(OutboundMessage.from_user(content).to_dict())
            delivery = asyncio.create_task(_deliver(websocket, dispatcher, Query.create(content, session_id)))

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: {session_id}")
    finally:
        dispatcher.cancel()
        if delivery is not None and not delivery.done():
            delivery.cancel()
            await asyncio.gather(delivery, return_exceptions=True)


@router.post("/stream", status_code=200)
async def chat_stream(
        body: ChatStreamRequest,
        dispatcher: QueryDispatcher = Depends(get_query_dispatcher),
):
    """
    Send a message and get the reply as server-sent events, one
    OutboundMessage per event.
    """
    query = Query.create(body.content, body.session_id)

    async def event_generator():
        try:
            async for message in dispatcher.stream(query):
                yield f"data: {json.dumps(message.to_dict(), ensure_ascii=False)}\n\n"
        finally:
            dispatcher.cancel()

    return StreamingResponse(event_generator(), media_type="text/event-stream")

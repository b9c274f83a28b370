from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any
import time


class MessageType(Enum):
    TEXT = "text"
    HOTEL_CARD = "hotel_card"
    ERROR = "error"


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class OutboundMessage:
    """Domain entity representing one message delivered to the user"""
    type: MessageType
    content: str
    sender: str = "assistant"
    hotel_data: Optional[Dict[str, Any]] = None
    timestamp: int = field(default_factory=_now_ms)

    @classmethod
    def text(cls, content: str) -> "OutboundMessage":
        return cls(type=MessageType.TEXT, content=content)

    @classmethod
    def error(cls, content: str) -> "OutboundMessage":
        return cls(type=MessageType.ERROR, content=content)

    @classmethod
    def hotel_card(cls, content: str, hotel_data: Dict[str, Any]) -> "OutboundMessage":
        return cls(type=MessageType.HOTEL_CARD, content=content, hotel_data=hotel_data)

    @classmethod
    def from_user(cls, content: str) -> "OutboundMessage":
        """Echo of the user's own message, as the chat transport shows it"""
        return cls(type=MessageType.TEXT, content=content, sender="user")

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type.value,
            "content": self.content,
            "sender": self.sender,
            "timestamp": self.timestamp,
        }
        if self.hotel_data is not None:
            data["hotelData"] = self.hotel_data
        return data

from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Optional
import uuid


@dataclass(frozen=True)
class Query:
    """Domain entity representing one incoming user utterance"""
    text: str
    received_at: datetime
    session_id: str  # owned by the transport layer, never interpreted here

    @classmethod
    def create(cls, text: str, session_id: Optional[str] = None) -> "Query":
        """Factory method to create a query stamped with the arrival time"""
        return cls(
            text=text,
            received_at=datetime.now(UTC),
            session_id=session_id or str(uuid.uuid4()),
        )

    @property
    def is_blank(self) -> bool:
        return not self.text or not self.text.strip()

from enum import Enum
from typing import Optional


class IntentKind(Enum):
    """Types of user intents"""
    HOTEL_SEARCH = "hotel_search"  # Filtered similarity search over the catalog
    RESEARCH = "research"  # Open lookup: weather, flights, currency, visas...
    GENERAL_CHAT = "general_chat"  # Everything else


class Intent:
    """Represents the classified intent of a user query"""

    def __init__(
        self,
        intent_kind: IntentKind,
        matched_trigger: Optional[str] = None,
        reasoning: str = ""
    ):
        self.kind = intent_kind
        self.matched_trigger = matched_trigger
        self.reasoning = reasoning

    @property
    def requires_retrieval(self) -> bool:
        return self.kind == IntentKind.HOTEL_SEARCH

    def __repr__(self) -> str:
        return f"Intent(kind={self.kind.value}, matched_trigger={self.matched_trigger!r})"

import logging
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..domain.entities.intent import Intent, IntentKind
from ..domain.vocabulary import HOTEL_TRIGGERS, RESEARCH_TRIGGERS

logger = logging.getLogger(__name__)

# A predicate returns the keyword that fired, or None.
TriggerPredicate = Callable[[str], Optional[str]]


def contains_any(keywords: Iterable[str]) -> TriggerPredicate:
    """Case-insensitive substring predicate over a static keyword list"""
    keywords = tuple(k.lower() for k in keywords)

    def predicate(text: str) -> Optional[str]:
        lower = text.lower()
        for keyword in keywords:
            if keyword in lower:
                return keyword
        return None

    return predicate


# Hotel vocabulary is checked before research vocabulary, so a query that
# mentions both a destination and the weather is a hotel search. Keep this
# order: clients depend on it.
DEFAULT_RULES: Tuple[Tuple[TriggerPredicate, IntentKind], ...] = (
    (contains_any(HOTEL_TRIGGERS), IntentKind.HOTEL_SEARCH),
    (contains_any(RESEARCH_TRIGGERS), IntentKind.RESEARCH),
)


class IntentRouter:
    """Classifies an utterance with an ordered (predicate, intent) decision table"""

    def __init__(
        self,
        rules: Optional[Sequence[Tuple[TriggerPredicate, IntentKind]]] = None,
        default: IntentKind = IntentKind.GENERAL_CHAT
    ):
        self.rules: List[Tuple[TriggerPredicate, IntentKind]] = list(rules if rules is not None else DEFAULT_RULES)
        self.default = default

    def route(self, utterance: Optional[str]) -> Optional[Intent]:
        """
        Classify an utterance.

        Args:
            utterance: Raw user text

        Returns:
            The first matching Intent, the default intent when no rule
            matches, or None for an empty utterance (nothing to handle).
        """
        if utterance is None or not utterance.strip():
            logger.debug("Empty utterance, nothing to route")
            return None

        for predicate, kind in self.rules:
            trigger = predicate(utterance)
            if trigger is not None:
                logger.debug(f"Trigger '{trigger}' matched, routing to {kind.value}")
                return Intent(
                    intent_kind=kind,
                    matched_trigger=trigger,
                    reasoning=f"Matched trigger '{trigger}'"
                )

        return Intent(intent_kind=self.default, reasoning="No trigger matched")

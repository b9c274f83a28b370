"""
Tests for IntentRouter
"""
import pytest

from app.core.domain.entities.intent import IntentKind
from app.core.use_cases.intent_classification import IntentRouter, contains_any


@pytest.fixture
def router():
    return IntentRouter()


class TestHotelSearchDetection:
    """Tests for hotel-search routing"""

    @pytest.mark.parametrize("utterance", [
        "Хочу отель в Турции до 5000",
        "Подберите отель с аквапарком",
        "Есть что-нибудь в Хургаде с аквапарком?",
        "Looking for a hotel in Antalya",
        "all inclusive на майские",
    ])
    def test_hotel_queries(self, router, utterance):
        intent = router.route(utterance)

        assert intent.kind == IntentKind.HOTEL_SEARCH
        assert intent.requires_retrieval is True
        assert intent.matched_trigger is not None

    def test_trigger_match_is_case_insensitive(self, router):
        assert router.route("ОТЕЛЬ").kind == IntentKind.HOTEL_SEARCH


class TestResearchDetection:
    """Tests for research routing"""

    @pytest.mark.parametrize("utterance", [
        "Погода в Дубае",
        "Какой сейчас курс доллара?",
        "Нужна ли виза?",
        "What is the weather like?",
    ])
    def test_research_queries(self, router, utterance):
        intent = router.route(utterance)

        assert intent.kind == IntentKind.RESEARCH
        assert intent.requires_retrieval is False

    def test_hotel_vocabulary_wins_over_research(self, router):
        """A query with both vocabularies is a hotel search"""
        intent = router.route("Какая погода в Сочи и где там хороший отель?")

        assert intent.kind == IntentKind.HOTEL_SEARCH


class TestGeneralChatDetection:
    """Tests for the default route"""

    def test_no_trigger_is_general_chat(self, router):
        intent = router.route("Привет, как дела?")

        assert intent.kind == IntentKind.GENERAL_CHAT
        assert intent.matched_trigger is None
        assert "no trigger" in intent.reasoning.lower()

    @pytest.mark.parametrize("utterance", [None, "", "   "])
    def test_empty_utterance_is_not_routed(self, router, utterance):
        assert router.route(utterance) is None


class TestCustomRules:
    """Tests for injected rule tables"""

    def test_rules_are_checked_in_order(self):
        router = IntentRouter(rules=[
            (contains_any(["alpha"]), IntentKind.RESEARCH),
            (contains_any(["alpha"]), IntentKind.HOTEL_SEARCH),
        ])

        assert router.route("alpha beta").kind == IntentKind.RESEARCH

    def test_custom_default(self):
        router = IntentRouter(rules=[], default=IntentKind.RESEARCH)

        assert router.route("anything").kind == IntentKind.RESEARCH

    def test_contains_any_returns_matched_keyword(self):
        predicate = contains_any(["Foo", "bar"])

        assert predicate("xx FOO yy") == "foo"
        assert predicate("nothing") is None

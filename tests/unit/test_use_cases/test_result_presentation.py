"""
Tests for ResultPresenter
"""
import pytest

from app.core.domain.entities.hotel import HotelRecord
from app.core.domain.entities.message import MessageType
from app.core.domain.prompts import ReplyTemplates
from app.core.use_cases.result_presentation import ResultPresenter


@pytest.fixture
def presenter():
    return ResultPresenter()


class TestPresent:

    def test_empty_results_yield_single_not_found(self, presenter):
        messages = presenter.present([], "отель на Марсе")

        assert len(messages) == 1
        assert messages[0].type == MessageType.TEXT
        assert messages[0].content == ReplyTemplates.NOT_FOUND
        assert "Диапазон цен" in messages[0].content

    def test_header_cards_footer(self, presenter, sample_hotels):
        messages = presenter.present(sample_hotels, "отель в Турции")

        assert len(messages) == 1 + len(sample_hotels) + 1
        assert messages[0].type == MessageType.TEXT
        assert "3 отеля" in messages[0].content
        assert [m.type for m in messages[1:-1]] == [MessageType.HOTEL_CARD] * 3
        assert messages[-1].content == ReplyTemplates.FOOTER

    def test_cards_keep_ranked_order(self, presenter, sample_hotels):
        messages = presenter.present(sample_hotels, "отель в Турции")

        ids = [m.hotel_data["id"] for m in messages[1:-1]]
        assert ids == ["h-1", "h-2", "h-3"]

    def test_card_payload_carries_record_and_query(self, presenter, sample_hotels):
        card = presenter.present(sample_hotels[:1], "отель в Анталье")[1]

        assert card.hotel_data["name"] == "Sunrise Resort"
        assert card.hotel_data["similarity"] == 0.92
        assert card.hotel_data["query"] == "отель в Анталье"

    @pytest.mark.parametrize("count,noun", [(1, "отель"), (2, "отеля"), (5, "отелей"), (11, "отелей"), (21, "отель")])
    def test_header_plural(self, presenter, count, noun):
        hotels = [HotelRecord(id=f"h-{i}") for i in range(count)]

        header = presenter.present(hotels, "q")[0].content

        assert f"{count} {noun}:" in header


class TestFormatCard:

    def test_full_card(self, presenter, sample_hotels):
        card = presenter.format_card(sample_hotels[0])

        assert "Sunrise Resort" in card
        assert "5 звёзд" in card
        assert "Рейтинг: 4.8" in card
        assert "Анталья, Турция" in card
        assert "4500 ₽/ночь" in card
        assert "All Inclusive" in card
        assert "Детский клуб" in card
        assert "Аквапарк" not in card
        assert "Первая линия" in card

    def test_missing_fields(self, presenter):
        card = presenter.format_card(HotelRecord(id="h-9"))

        assert "Отель без названия" in card
        assert "без звёзд" in card
        assert "Цена по запросу" in card
        assert "📍" not in card


class TestFailureMessages:

    def test_apology(self, presenter):
        message = presenter.apology()

        assert message.type == MessageType.ERROR
        assert message.content == ReplyTemplates.APOLOGY

    def test_unavailable(self, presenter):
        message = presenter.unavailable()

        assert message.type == MessageType.ERROR
        assert message.content == ReplyTemplates.SEARCH_UNAVAILABLE

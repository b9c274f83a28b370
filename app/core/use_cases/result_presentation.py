from typing import List

from ..domain.entities.hotel import HotelRecord
from ..domain.entities.message import OutboundMessage
from ..domain.prompts import ReplyTemplates


class ResultPresenter:
    """Turns ranked hotels into the ordered messages shown to the user"""

    AMENITY_LABELS = (
        ("all_inclusive", "🍽️ All Inclusive"),
        ("kids_club", "👨‍👩‍👧‍👦 Детский клуб"),
        ("aquapark", "💦 Аквапарк"),
    )

    def present(self, results: List[HotelRecord], originating_query: str) -> List[OutboundMessage]:
        """
        Build the reply for a hotel search.

        Args:
            results: Hotels in ranked order
            originating_query: The user's text, kept on every card for follow-ups

        Returns:
            A single "not found" message, or header + one card per hotel + footer
        """
        if not results:
            return [OutboundMessage.text(ReplyTemplates.NOT_FOUND)]

        messages = [OutboundMessage.text(self._header(len(results)))]
        for hotel in results:
            hotel_data = hotel.to_dict()
            hotel_data["query"] = originating_query
            messages.append(OutboundMessage.hotel_card(self.format_card(hotel), hotel_data))
        messages.append(OutboundMessage.text(ReplyTemplates.FOOTER))
        return messages

    def apology(self) -> OutboundMessage:
        return OutboundMessage.error(ReplyTemplates.APOLOGY)

    def unavailable(self) -> OutboundMessage:
        return OutboundMessage.error(ReplyTemplates.SEARCH_UNAVAILABLE)

    def format_card(self, hotel: HotelRecord) -> str:
        lines = [f"🏨 {hotel.name or 'Отель без названия'}"]

        stars = f"{hotel.stars} {self._plural(hotel.stars, ('звезда', 'звезды', 'звёзд'))}" if hotel.stars else "без звёзд"
        rating = f" | Рейтинг: {hotel.rating:g}" if hotel.rating is not None else ""
        lines.append(f"⭐ {stars}{rating}")

        location = ", ".join(part for part in (hotel.city, hotel.country) if part)
        if location:
            lines.append(f"📍 {location}")

        if hotel.price_per_night is not None:
            lines.append(f"💰 {int(hotel.price_per_night)} ₽/ночь")
        else:
            lines.append("💰 Цена по запросу")

        amenities = hotel.amenities
        for key, label in self.AMENITY_LABELS:
            if key in amenities:
                lines.append(label)

        if hotel.description:
            lines.append("")
            lines.append(hotel.description)

        return "\n".join(lines)

    def _header(self, count: int) -> str:
        noun = self._plural(count, ("отель", "отеля", "отелей"))
        return ReplyTemplates.HEADER.format(count=count, noun=noun)

    @staticmethod
    def _plural(n: int, forms) -> str:
        """Russian plural form for one / few / many"""
        n = abs(n) % 100
        if 11 <= n <= 19:
            return forms[2]
        n %= 10
        if n == 1:
            return forms[0]
        if 2 <= n <= 4:
            return forms[1]
        return forms[2]

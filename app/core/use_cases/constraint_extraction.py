import re
import logging
from typing import Dict, Any, Optional, Sequence, Tuple

from ..domain.value_objects.constraints import ConstraintSet
from ..domain.vocabulary import (
    COUNTRY_ALIASES,
    CITY_ALIASES,
    LUXURY_MARKERS,
    KIDS_CLUB_MARKERS,
    ALL_INCLUSIVE_MARKERS,
    AQUAPARK_MARKERS,
)

logger = logging.getLogger(__name__)


class ConstraintExtractor:
    """Parses free-form query text into a ConstraintSet with deterministic rules"""

    # Separator between digit groups of three: "5 000", "5,000", "5.000", "5'000" (\s covers NBSP)
    THOUSANDS_SEPARATOR = re.compile(r"(?<=\d)[\s',.](?=\d{3}(?!\d))")

    PRICE_CEILING = re.compile(
        r"\b(?:не дороже|не более|не больше|максимум|(?<!не )дешевле|до"
        r"|no more than|not more than|at most|cheaper than|up to|under|below)"
        r"\s+(\d+)"
    )

    PRICE_FLOOR = re.compile(
        r"\b(?:не менее|не дешевле|минимум|свыше|(?<!не )более|(?<!не )больше|от"
        r"|at least|(?<!no )(?<!not )more than|from|over)"
        r"\s+(\d+)"
    )

    def extract(self, utterance: Optional[str]) -> ConstraintSet:
        """
        Extract constraints from an utterance. Never raises; a rule that
        does not match leaves its field unset.
        """
        if not utterance:
            return ConstraintSet()

        lower = self._normalize(utterance)
        fields: Dict[str, Any] = {}

        max_price = self._match_number(self.PRICE_CEILING, lower)
        if max_price is not None:
            fields["max_price"] = max_price

        min_price = self._match_number(self.PRICE_FLOOR, lower)
        if min_price is not None:
            fields["min_price"] = min_price
            # Conflicting signals: the later rule wins.
            if max_price is not None and min_price > max_price:
                logger.debug(f"Price floor {min_price} above ceiling {max_price}, dropping ceiling")
                fields.pop("max_price")

        country = self._first_alias(COUNTRY_ALIASES, lower)
        if country:
            fields["country"] = country

        city = self._first_alias(CITY_ALIASES, lower)
        if city:
            fields["city"] = city

        if self._contains_any(LUXURY_MARKERS, lower):
            fields["min_stars"] = 5

        if self._contains_any(KIDS_CLUB_MARKERS, lower):
            fields["kids_club"] = True
        if self._contains_any(ALL_INCLUSIVE_MARKERS, lower):
            fields["all_inclusive"] = True
        if self._contains_any(AQUAPARK_MARKERS, lower):
            fields["aquapark"] = True

        constraints = ConstraintSet(**fields)
        logger.info(f"Extracted constraints: {constraints.to_dict()}")
        return constraints

    def _normalize(self, text: str) -> str:
        lower = text.lower().replace("ё", "е")
        return self.THOUSANDS_SEPARATOR.sub("", lower)

    @staticmethod
    def _match_number(pattern: re.Pattern, text: str) -> Optional[int]:
        match = pattern.search(text)
        if not match:
            return None
        try:
            return int(match.group(1))
        except ValueError:
            return None

    @staticmethod
    def _first_alias(groups: Sequence[Tuple[str, Tuple[str, ...]]], text: str) -> Optional[str]:
        for canonical, forms in groups:
            if any(form in text for form in forms):
                return canonical
        return None

    @staticmethod
    def _contains_any(markers: Sequence[str], text: str) -> bool:
        return any(marker in text for marker in markers)

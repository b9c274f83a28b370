"""
Tests for the hotel payload codec.
"""
import pytest

from app.adapters.vector_store.payload_codec import (
    FieldKind,
    decode_hotel,
    decode_value,
    encode_flag,
    encode_hotel,
)
from app.core.domain.exceptions import DecodingAnomalyError


class TestFlags:

    def test_flags_are_written_as_text(self):
        assert encode_flag(True) == "true"
        assert encode_flag(False) == "false"

    @pytest.mark.parametrize("stored,expected", [
        ("true", True),
        ("TRUE", True),
        ("false", False),
        ("False", False),
        (True, True),
        (False, False),
        (None, None),
        ("yes", None),
        (1, None),
    ])
    def test_decode_flag(self, stored, expected):
        assert decode_value(stored, FieldKind.FLAG) is expected

    def test_three_valued_round_trip(self):
        """true and false survive the store; an unset flag stays unset"""
        payload = encode_hotel({"id": "h", "kids_club": True, "aquapark": False, "all_inclusive": None})

        hotel = decode_hotel("h", payload, similarity=0.5)

        assert hotel.kids_club is True
        assert hotel.aquapark is False
        assert hotel.all_inclusive is None


class TestScalars:

    @pytest.mark.parametrize("stored,expected", [(4, 4), (4.0, 4), ("4", 4), (4.5, None), ("four", None), (True, None)])
    def test_decode_integer(self, stored, expected):
        assert decode_value(stored, FieldKind.INTEGER) == expected

    @pytest.mark.parametrize("stored,expected", [(3200, 3200.0), (3200.5, 3200.5), ("3200", None), (False, None)])
    def test_decode_number(self, stored, expected):
        assert decode_value(stored, FieldKind.NUMBER) == expected

    @pytest.mark.parametrize("stored,expected", [("Сочи", "Сочи"), ("", None), (7, None)])
    def test_decode_text(self, stored, expected):
        assert decode_value(stored, FieldKind.TEXT) == expected


class TestEncodeHotel:

    def test_none_values_are_dropped(self):
        assert encode_hotel({"id": "h", "city": None}) == {"id": "h"}

    def test_nested_values_become_json_text(self):
        payload = encode_hotel({"id": "h", "reviews": ["отлично", "чисто"]})

        assert payload["reviews"] == '["отлично", "чисто"]'

    def test_scalars_are_kept(self):
        payload = encode_hotel({"id": "h", "stars": 5, "price_per_night": 4500.5, "name": "Sea"})

        assert payload == {"id": "h", "stars": 5, "price_per_night": 4500.5, "name": "Sea"}


class TestDecodeHotel:

    def test_full_record(self):
        payload = {
            "id": "antalya-palace", "name": "Antalya Palace", "country": "Турция", "city": "Анталья",
            "stars": 5, "price_per_night": 4800, "rating": 4.7, "description": "У моря",
            "kids_club": "true", "all_inclusive": "true", "aquapark": "false",
        }

        hotel = decode_hotel("antalya-palace", payload, similarity=0.93)

        assert hotel.id == "antalya-palace"
        assert hotel.stars == 5
        assert hotel.price_per_night == 4800.0
        assert hotel.aquapark is False
        assert hotel.similarity == 0.93

    def test_mistyped_field_is_unset_not_fatal(self):
        hotel = decode_hotel("h", {"name": "Sea", "stars": "five", "price_per_night": "cheap"}, similarity=None)

        assert hotel.name == "Sea"
        assert hotel.stars is None
        assert hotel.price_per_night is None

    def test_missing_payload_gives_bare_record(self):
        hotel = decode_hotel("h-1", None, similarity=0.1)

        assert hotel.id == "h-1"
        assert hotel.name is None

    def test_record_id_used_when_payload_has_none(self):
        assert decode_hotel("h-2", {"name": "Sea"}, similarity=None).id == "h-2"

    def test_non_mapping_payload_is_an_anomaly(self):
        with pytest.raises(DecodingAnomalyError) as exc_info:
            decode_hotel("h-3", ["not", "a", "map"], similarity=None)

        assert exc_info.value.record_id == "h-3"

    def test_missing_id_is_an_anomaly(self):
        with pytest.raises(DecodingAnomalyError):
            decode_hotel(None, {"name": "Sea"}, similarity=None)

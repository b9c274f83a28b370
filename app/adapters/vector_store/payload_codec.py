"""
Translation between the typed hotel model and the vector store payload.

The store keeps a loosely-typed metadata map per record and has no reliable
native boolean, so amenity flags are persisted as the text literals "true" and
"false". Everything that knows about that encoding lives in this module:
writing payloads, building flag filter conditions and decoding records.
"""
import json
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from ...core.domain.entities.hotel import HotelRecord
from ...core.domain.exceptions import DecodingAnomalyError

TRUE_TEXT = "true"
FALSE_TEXT = "false"

PayloadValue = Union[str, int, float]


class FieldKind(Enum):
    TEXT = "text"
    INTEGER = "integer"
    NUMBER = "number"
    FLAG = "flag"


HOTEL_FIELDS: Dict[str, FieldKind] = {
    "name": FieldKind.TEXT,
    "country": FieldKind.TEXT,
    "city": FieldKind.TEXT,
    "stars": FieldKind.INTEGER,
    "price_per_night": FieldKind.NUMBER,
    "rating": FieldKind.NUMBER,
    "description": FieldKind.TEXT,
    "kids_club": FieldKind.FLAG,
    "all_inclusive": FieldKind.FLAG,
    "aquapark": FieldKind.FLAG,
}

FLAG_FIELDS = tuple(name for name, kind in HOTEL_FIELDS.items() if kind == FieldKind.FLAG)


# ============================================================================
# ENCODING
# ============================================================================

def encode_flag(value: bool) -> str:
    return TRUE_TEXT if value else FALSE_TEXT


def encode_value(value: Any) -> Optional[PayloadValue]:
    """Convert one raw catalog value into something the store accepts; None means drop it"""
    if value is None:
        return None
    if isinstance(value, bool):
        return encode_flag(value)
    if isinstance(value, (int, float, str)):
        return value
    if isinstance(value, (list, tuple, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def encode_hotel(hotel: Mapping[str, Any]) -> Dict[str, PayloadValue]:
    """Build the store payload for a raw catalog entry"""
    payload: Dict[str, PayloadValue] = {}
    for key, value in hotel.items():
        encoded = encode_value(value)
        if encoded is not None:
            payload[str(key)] = encoded
    return payload


# ============================================================================
# DECODING
# ============================================================================

def decode_value(value: Any, kind: FieldKind) -> Any:
    """
    Decode one payload value by its expected kind.

    A missing or mistyped value decodes to None instead of raising, so a
    single bad field never fails the record.
    """
    if value is None:
        return None

    if kind == FieldKind.FLAG:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text == TRUE_TEXT:
                return True
            if text == FALSE_TEXT:
                return False
        return None

    # bool is an int subclass; a flag in a numeric field is a type mismatch
    if isinstance(value, bool):
        return None

    if kind == FieldKind.INTEGER:
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None

    if kind == FieldKind.NUMBER:
        if isinstance(value, (int, float)):
            return float(value)
        return None

    if kind == FieldKind.TEXT:
        if isinstance(value, str) and value:
            return value
        return None

    return None


def decode_hotel(record_id: Any, payload: Any, similarity: Optional[float]) -> HotelRecord:
    """
    Decode one stored record into a HotelRecord.

    Raises:
        DecodingAnomalyError: the record has no id or its payload is not a map
    """
    if record_id is None or record_id == "":
        raise DecodingAnomalyError("Record without id")
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise DecodingAnomalyError(
            f"Payload of record {record_id} is {type(payload).__name__}, expected a mapping",
            record_id=str(record_id),
        )

    values = {name: decode_value(payload.get(name), kind) for name, kind in HOTEL_FIELDS.items()}
    hotel_id = decode_value(payload.get("id"), FieldKind.TEXT) or str(record_id)

    return HotelRecord(id=hotel_id, similarity=similarity, **values)

from dataclasses import dataclass, asdict
from typing import Optional, Dict, Any


@dataclass(frozen=True)
class HotelRecord:
    """
    Domain entity representing one hotel returned by a similarity search.

    Payload-derived fields are Optional: a value missing from the store stays
    None instead of being defaulted. ``similarity`` is assigned at query time,
    is never persisted and is only comparable within a single search call.
    """
    id: str
    name: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    stars: Optional[int] = None
    price_per_night: Optional[float] = None
    rating: Optional[float] = None
    description: Optional[str] = None
    kids_club: Optional[bool] = None
    all_inclusive: Optional[bool] = None
    aquapark: Optional[bool] = None
    similarity: Optional[float] = None

    @property
    def amenities(self) -> Dict[str, bool]:
        """Amenity flags that are explicitly true"""
        flags = {
            "kids_club": self.kids_club,
            "all_inclusive": self.all_inclusive,
            "aquapark": self.aquapark,
        }
        return {k: True for k, v in flags.items() if v is True}

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

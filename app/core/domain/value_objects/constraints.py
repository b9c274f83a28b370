from dataclasses import dataclass, fields, asdict
from typing import Optional, Dict, Any


MIN_STARS = 1
MAX_STARS = 5


@dataclass(frozen=True)
class ConstraintSet:
    """
    Structured filter extracted from a hotel query.

    Every field is optional; None means "unconstrained" (never False or zero).
    """
    min_price: Optional[int] = None
    max_price: Optional[int] = None
    min_stars: Optional[int] = None
    max_stars: Optional[int] = None
    country: Optional[str] = None
    city: Optional[str] = None
    kids_club: Optional[bool] = None
    all_inclusive: Optional[bool] = None
    aquapark: Optional[bool] = None

    def __post_init__(self):
        if self.min_price is not None and self.max_price is not None and self.min_price > self.max_price:
            raise ValueError(f"Inverted price range: {self.min_price} > {self.max_price}")

        for name in ("min_stars", "max_stars"):
            value = getattr(self, name)
            if value is not None and not MIN_STARS <= value <= MAX_STARS:
                raise ValueError(f"{name} must be between {MIN_STARS} and {MAX_STARS}, got {value}")

        if self.min_stars is not None and self.max_stars is not None and self.min_stars > self.max_stars:
            raise ValueError(f"Inverted star range: {self.min_stars} > {self.max_stars}")

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def to_dict(self) -> Dict[str, Any]:
        """Only the fields that are set"""
        return {k: v for k, v in asdict(self).items() if v is not None}

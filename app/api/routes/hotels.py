import logging
from typing import Optional, List
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from ...api.deps import get_search_hotels_use_case
from ...core.use_cases.search_hotels import SearchHotelsUseCase
from ...core.domain.entities.hotel import HotelRecord
from ...core.domain.exceptions import IndexUnavailableError, InvalidQueryError
from ...core.domain.value_objects.constraints import ConstraintSet

logger = logging.getLogger(__name__)

router = APIRouter()


class HotelSearchFilters(BaseModel):
    min_price: Optional[int] = Field(None, ge=0)
    max_price: Optional[int] = Field(None, ge=0)
    min_stars: Optional[int] = None
    max_stars: Optional[int] = None
    country: Optional[str] = None
    city: Optional[str] = None
    kids_club: Optional[bool] = None
    all_inclusive: Optional[bool] = None
    aquapark: Optional[bool] = None


class HotelSearchRequest(BaseModel):
    query: str = Field(..., min_length=1)
    filters: Optional[HotelSearchFilters] = None
    # Not range-checked here: a non-positive value is reported by the index as a 400
    top_k: int = 5


class HotelResponse(BaseModel):
    id: str
    name: Optional[str]
    country: Optional[str]
    city: Optional[str]
    stars: Optional[int]
    price_per_night: Optional[float]
    rating: Optional[float]
    description: Optional[str]
    kids_club: Optional[bool]
    all_inclusive: Optional[bool]
    aquapark: Optional[bool]
    similarity: Optional[float]


def to_hotel_response(hotel: HotelRecord) -> HotelResponse:
    return HotelResponse(**hotel.to_dict())


@router.post("/search", response_model=List[HotelResponse])
async def search_hotels(
        req: HotelSearchRequest,
        use_case: SearchHotelsUseCase = Depends(get_search_hotels_use_case),
):
    """
    Filtered similarity search. Explicit filters replace the ones that would
    otherwise be extracted from the query text.
    """
    constraints = None
    if req.filters is not None:
        try:
            constraints = ConstraintSet(**req.filters.model_dump())
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    try:
        results = await use_case.search_hotels(
            query_text=req.query,
            top_k=req.top_k,
            constraints=constraints,
        )
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except IndexUnavailableError as e:
        logger.error(f"Hotel search unavailable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Hotel search is temporarily unavailable"
        )

    return [to_hotel_response(hotel) for hotel in results]

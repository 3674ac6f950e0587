"""
Combination endpoints for API v1.

CRUD routes for outfit combinations plus a search listing.  The
listing accepts three optional query parameters:

- ``tags``: comma-separated tags, any of which must be present;
- ``combos``: text contained in the combination name (case-insensitive);
- ``wardrobe``: comma-separated ``category:item`` pairs such as
  ``top:white-tee,shoes:loafers``.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from capsulify_api.app.api.deps import get_combination_service
from capsulify_api.app.core.errors import NotFoundError, ValidationError
from capsulify_api.app.schemas.combination import (
    CombinationDetail,
    CombinationList,
    CombinationPayload,
    CombinationWriteResult,
    MessageResponse,
)
from capsulify_api.app.services.combination_service import CombinationService

router = APIRouter()


@router.get("/", response_model=CombinationList, response_model_exclude_none=True)
async def list_combinations(
    tags: Optional[str] = Query(None),
    combos: Optional[str] = Query(None),
    wardrobe: Optional[str] = Query(None),
    service: CombinationService = Depends(get_combination_service),
) -> CombinationList:
    """Search combinations by tags, name and garment slots."""
    criteria = service.build_filter(tags=tags, combos=combos, wardrobe=wardrobe)
    combinations = await service.list_combinations(criteria)
    return CombinationList(combinations=combinations)


@router.get("/{combo_id}", response_model=CombinationDetail, response_model_exclude_none=True)
async def get_combination(
    combo_id: str,
    service: CombinationService = Depends(get_combination_service),
) -> CombinationDetail:
    """Retrieve a single combination.

    Returns HTTP 400 for a malformed id and 404 if it does not exist.
    """
    try:
        combination = await service.get_combination(combo_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return CombinationDetail(combinations=combination)


@router.post("/", response_model=CombinationWriteResult, status_code=status.HTTP_201_CREATED)
async def create_combination(
    payload: CombinationPayload,
    service: CombinationService = Depends(get_combination_service),
) -> CombinationWriteResult:
    """Create a new combination.

    ``comboName``, ``top``, ``bottom``, ``shoes``, ``bag``, ``tags`` and
    ``layer`` are required; any missing field answers HTTP 400.
    """
    try:
        combination = await service.create_combination(payload.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    return CombinationWriteResult(message="New style created successfully", combination=combination)


@router.put("/{combo_id}", response_model=CombinationWriteResult)
async def update_combination(
    combo_id: str,
    payload: CombinationPayload,
    service: CombinationService = Depends(get_combination_service),
) -> CombinationWriteResult:
    """Replace a combination's fields.

    The body's ``comboName`` must be the current name of the combination
    at ``combo_id``.  Tags must name existing tags; they are stored as
    tag ids.
    """
    try:
        combination = await service.update_combination(combo_id, payload.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return CombinationWriteResult(message="Combo updated successfully", combination=combination)


@router.delete("/{combo_id}", response_model=MessageResponse)
async def delete_combination(
    combo_id: str,
    service: CombinationService = Depends(get_combination_service),
) -> MessageResponse:
    """Delete a combination by id."""
    try:
        await service.delete_combination(combo_id)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    return MessageResponse(message="Combination deleted successfully")

"""API routes for the Combination Generator."""

from fastapi import APIRouter, Depends, HTTPException, Request

from src.models.generator import CountResponse, GenerateRequest, GenerateResponse
from src.services import (
    CombinationService,
    CombinationValidationError,
    PersistenceError,
)
from src.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["generator"])


def get_combination_service(request: Request) -> CombinationService:
    """Build the service around the store opened by the application lifespan."""
    return CombinationService(request.app.state.store)


@router.post("/generate", response_model=GenerateResponse)
async def generate(
    request: GenerateRequest,
    service: CombinationService = Depends(get_combination_service),
):
    """
    Generate every combination of `length` items drawn from distinct groups.

    The request and its combinations are stored in one transaction. When
    `length` exceeds the number of non-empty groups nothing is stored and the
    response is `{"id": null, "combination": []}`.
    """
    try:
        result = await service.generate_and_store(request.items, request.length)
    except CombinationValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except PersistenceError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error generating combinations: {e}")
        raise HTTPException(status_code=500, detail=f"Error generating combinations: {str(e)}")

    return GenerateResponse(id=result.id, combination=result.combination)


@router.post("/generate/count", response_model=CountResponse)
async def calculate_count(
    request: GenerateRequest,
    service: CombinationService = Depends(get_combination_service),
):
    """
    Calculate the total number of combinations without generating them.
    """
    try:
        return service.count(request.items, request.length)
    except CombinationValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

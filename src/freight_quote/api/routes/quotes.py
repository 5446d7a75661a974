"""Quote endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import JSONResponse

from ...errors import GeocodingError, InvalidInputError, OutOfRegionError, QuoteComputationError
from ...schemas.quotes import QuoteListResponse, QuoteRequest, QuoteResponse
from ...services.quotes.service import create_quote, get_quote, list_quotes

router = APIRouter(prefix="/quotes", tags=["quotes"])

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error, "message": message},
    )


@router.post("", response_model=QuoteResponse, status_code=status.HTTP_201_CREATED)
def create(payload: QuoteRequest):
    try:
        return create_quote(payload)
    except InvalidInputError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, "Validation error", str(exc))
    except GeocodingError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, "Geocoding error", str(exc))
    except OutOfRegionError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, "Outside supported region", str(exc))
    except QuoteComputationError as exc:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Distance calculation error", str(exc))
    except Exception as exc:
        logger.exception("Error creating quote")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create quote",
        ) from exc


@router.get("", response_model=QuoteListResponse, status_code=status.HTTP_200_OK)
def list_all(
    page: int = Query(default=1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(default=10, ge=1, le=100, description="Quotes per page"),
) -> QuoteListResponse:
    return list_quotes(page=page, limit=limit)


@router.get("/{quote_id}", response_model=QuoteResponse, status_code=status.HTTP_200_OK)
def get_one(quote_id: str) -> QuoteResponse:
    quote = get_quote(quote_id)
    if quote is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Quote with ID {quote_id} not found",
        )
    return QuoteResponse(message="Quote retrieved successfully", data=quote)

"""Quote endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.quotes import QuoteRequest, QuoteResponse
from ...services.geocoding import GeocodingError
from ...services.quotes.service import request_quote

router = APIRouter(prefix="/quotes", tags=["quotes"])

logger = logging.getLogger(__name__)


@router.post("/optimize", response_model=QuoteResponse, status_code=status.HTTP_200_OK)
def optimize_quote(payload: QuoteRequest) -> QuoteResponse:
    try:
        return request_quote(payload)
    except GeocodingError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error optimizing quote: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize quote: {str(exc)}"
        ) from exc

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from app.config.openai_client import (
    ClientFactory,
    get_openai_api_key,
    get_openai_client_factory,
)
from app.schemas import BrandStrategy, StoreProfile
from app.services.strategy_service import (
    StrategyParseError,
    UpstreamAPIError,
    generate_brand_strategy,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    body: Dict[str, Any] = {"error": error}
    if detail is not None:
        body["detail"] = detail
    return JSONResponse(body, status_code=status_code)


@router.post(
    "/generate-strategy",
    responses={
        200: {"model": BrandStrategy},
        400: {"description": "Invalid JSON body"},
        405: {"description": "Method Not Allowed"},
        500: {"description": "Missing credential, OpenAI failure or unexpected error"},
    },
)
async def generate_strategy_endpoint(
    request: Request,
    api_key: Optional[str] = Depends(get_openai_api_key),
    client_factory: ClientFactory = Depends(get_openai_client_factory),
) -> Response:
    if not api_key:
        return _error_response(500, "OPENAI_API_KEY is not set")

    try:
        payload = await request.json()
    except ValueError:
        return _error_response(400, "Invalid JSON body")

    try:
        profile = StoreProfile.model_validate(payload)
        strategy = await generate_brand_strategy(
            profile,
            api_key=api_key,
            client_factory=client_factory,
        )
        return JSONResponse(strategy, status_code=200)
    except UpstreamAPIError as exc:
        return _error_response(500, "OpenAI API error", detail=exc.detail)
    except StrategyParseError:
        return _error_response(500, "Failed to parse JSON from OpenAI")
    except Exception:
        logger.exception("Unexpected error while generating brand strategy")
        return _error_response(500, "Unexpected server error")

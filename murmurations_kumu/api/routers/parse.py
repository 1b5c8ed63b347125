import logging
from typing import Optional

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from murmurations_kumu.models.kumu import ErrorResponse, KumuMap
from murmurations_kumu.services.http_client import get_default_index
from murmurations_kumu.services.kumu_service import build_kumu_map

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])


@router.get(
    "/api/parse",
    response_model=KumuMap,
    response_model_exclude_unset=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def api_parse(
    url: Optional[str] = Query(None, description="URL of the Murmurations profile to map"),
    index: Optional[str] = Query(None, description="'test' for the test index, anything else for production"),
):
    """Build a Kumu map for a Murmurations profile and its reciprocal relationships."""
    if not url:
        return JSONResponse(status_code=400, content={"error": "Missing `url` query parameter"})

    try:
        return build_kumu_map(url, index or get_default_index())
    except Exception as exc:
        logger.exception("Failed to build Kumu map for %s", url)
        return JSONResponse(status_code=500, content={"error": str(exc)})

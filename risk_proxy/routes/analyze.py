"""Upload proxy endpoint.

Forwards an uploaded spreadsheet to the external scoring service and
reshapes the answer for the dashboard:

  - JSON responses are passed through untouched
  - spreadsheet responses are parsed and mapped to risk profiles plus a
    batch summary
  - anything else is reported as an unexpected upstream format (502)
"""

import logging
from typing import Union

from fastapi import APIRouter, Depends, File, Query, Request, Response, UploadFile
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from risk_proxy.config import ProxySettings
from risk_proxy.errors import (
    MissingInputError,
    ProcessingError,
    ProxyError,
    UnexpectedFormatError,
)
from risk_proxy.models import AnalysisResponse, ErrorResponse
from risk_proxy.profiling.profiler import build_profiles
from risk_proxy.profiling.summary import summarize
from risk_proxy.upstream.client import UpstreamClient
from risk_proxy.upstream.content import JSON, SPREADSHEET, classify_content_type
from risk_proxy.upstream.workbook import read_first_sheet

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def get_upstream(request: Request) -> UpstreamClient:
    """Retrieve the shared upstream client from application state."""
    return request.app.state.upstream


def get_settings(request: Request) -> ProxySettings:
    return request.app.state.settings


@router.post(
    "/analyze",
    response_model=AnalysisResponse,
    responses={
        400: {"model": ErrorResponse, "description": "No file provided"},
        500: {"model": ErrorResponse, "description": "Processing failure"},
        502: {"description": "Unexpected upstream response format"},
    },
)
async def analyze_upload(
    file: Union[UploadFile, str, None] = File(default=None),
    use_llm: str = Query(default="true"),
    upstream: UpstreamClient = Depends(get_upstream),
    settings: ProxySettings = Depends(get_settings),
):
    """Screen an uploaded spreadsheet through the external scoring service.

    ``use_llm`` is forwarded verbatim and toggles the scoring service's
    language-model enrichment pass.
    """
    # A plain text field named "file" is not an upload
    if not isinstance(file, StarletteUploadFile):
        raise MissingInputError()

    try:
        return await _forward_and_reshape(file, use_llm, upstream, settings)
    except ProxyError:
        raise
    except Exception as exc:
        logger.exception("Failed to process upload %s", file.filename)
        raise ProcessingError(str(exc)) from exc


async def _forward_and_reshape(
    file: UploadFile,
    use_llm: str,
    upstream: UpstreamClient,
    settings: ProxySettings,
) -> Response:
    content = await file.read()
    filename = file.filename or "upload.xlsx"
    logger.info("File upload: %s | %d bytes", filename, len(content))

    response = await upstream.analyze_batch(filename, content, use_llm=use_llm)

    content_type = response.headers.get("content-type", "")
    kind = classify_content_type(content_type)

    if kind == JSON:
        return JSONResponse(content=response.json())

    if kind == SPREADSHEET:
        rows = read_first_sheet(response.content)
        logger.info("Parsed %d rows from spreadsheet response", len(rows))

        profiles = build_profiles(rows)
        summary = summarize(profiles)
        result = AnalysisResponse(
            overall_score=summary.overall_score,
            total_users=summary.total_users,
            risk_distribution=summary.risk_distribution,
            users=profiles,
        )
        return JSONResponse(content=result.model_dump(mode="json", by_alias=True))

    raise UnexpectedFormatError(content_type, response.text[: settings.preview_length])


@router.options("/analyze")
async def analyze_preflight() -> Response:
    """Answer CORS preflight requests for the upload endpoint."""
    return Response(status_code=200, headers=CORS_HEADERS)

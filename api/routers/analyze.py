"""Page analysis endpoint."""

import asyncio
from typing import Any

import structlog
from fastapi import APIRouter

from api.deps import PipelineDep, StoreDep
from api.schemas.analysis import AnalyzeRequest
from api.schemas.responses import SuccessResponse

router = APIRouter(prefix="/analyze", tags=["analyze"])
logger = structlog.get_logger(__name__)


@router.post(
    "",
    response_model=SuccessResponse[dict[str, Any]],
    summary="Analyze a page",
)
async def analyze_page(
    request: AnalyzeRequest,
    pipeline: PipelineDep,
    store: StoreDep,
) -> SuccessResponse[dict[str, Any]]:
    """
    Fetch, render and score a single URL.

    - SEO score (0-100) and GEO citability score (0-800)
    - Issues and prioritized recommendations for both
    - The report is stored and can be fetched again from /v1/results

    Pages that cannot be fetched return 502 with the failure reason.
    """
    report = await pipeline.analyze(request.url, include_content=request.include_content)
    data = report.to_dict()
    await asyncio.to_thread(store.save, data)
    return SuccessResponse(data=data)

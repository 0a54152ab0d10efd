"""LLM enhancement endpoints."""

import asyncio
from typing import Any

from fastapi import APIRouter

from analyzer.enhancement.llm import heuristic_query_simulation
from api.deps import EnhancerDep, StoreDep
from api.exceptions import NotFoundError, ServiceNotConfiguredError, ValidationError
from api.schemas.analysis import EnhanceRequest, SimulateQueryRequest
from api.schemas.responses import MessageResponse, SuccessResponse

router = APIRouter(prefix="/llm", tags=["llm"])

LLM_HINT = "Set ANTHROPIC_API_KEY or OPENAI_API_KEY to enable AI insights"


@router.get(
    "/status",
    response_model=SuccessResponse[dict[str, Any]],
    summary="LLM availability",
)
async def llm_status(enhancer: EnhancerDep) -> SuccessResponse[dict[str, Any]]:
    return SuccessResponse(data=enhancer.status())


@router.post(
    "/enhance",
    response_model=SuccessResponse[dict[str, Any]],
    summary="Add AI insights to a stored result",
)
async def enhance_result(
    request: EnhanceRequest,
    enhancer: EnhancerDep,
    store: StoreDep,
) -> SuccessResponse[dict[str, Any]]:
    """
    Citation assessment, query coverage and content suggestions.

    Scores are never changed. Returns 503 when no LLM is configured.
    """
    if not enhancer.available:
        raise ServiceNotConfiguredError("llm", LLM_HINT)

    report = await asyncio.to_thread(store.get_by_id, request.result_id)
    if report is None:
        raise NotFoundError("Result", request.result_id)

    text = request.text or (report.get("page_content") or {}).get("text") or ""
    if not text:
        raise ValidationError("No page text stored for this result; pass text", field="text")

    return SuccessResponse(data=await enhancer.enhance(report, text))


@router.post(
    "/simulate-query",
    response_model=SuccessResponse[dict[str, Any]],
    summary="Simulate an AI search citation decision",
)
async def simulate_query(
    request: SimulateQueryRequest,
    enhancer: EnhancerDep,
) -> SuccessResponse[dict[str, Any]]:
    """Without an LLM, answers from ``geo_score`` when given, else 503."""
    if not enhancer.available:
        if request.geo_score is None:
            raise ServiceNotConfiguredError("llm", LLM_HINT)
        return SuccessResponse(
            data=heuristic_query_simulation(request.query, request.url, request.geo_score)
        )
    result = await enhancer.simulate_query(request.query, request.text, request.url)
    return SuccessResponse(data=result)


@router.delete(
    "/cache",
    response_model=MessageResponse,
    summary="Clear the LLM response cache",
)
async def clear_cache(enhancer: EnhancerDep) -> MessageResponse:
    enhancer.cache.clear()
    return MessageResponse(message="LLM cache cleared")

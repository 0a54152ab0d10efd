"""Stored analysis results."""

import asyncio
from typing import Any

from fastapi import APIRouter, status

from api.deps import StoreDep
from api.exceptions import NotFoundError
from api.schemas.analysis import DeletedResponse, ResultSummary
from api.schemas.responses import SuccessResponse

router = APIRouter(prefix="/results", tags=["results"])


@router.get(
    "",
    response_model=SuccessResponse[list[ResultSummary]],
    summary="List stored results",
)
async def list_results(store: StoreDep) -> SuccessResponse[list[ResultSummary]]:
    """Most recent results first."""
    index = await asyncio.to_thread(store.list)
    entries = [ResultSummary.model_validate(entry) for entry in index]
    return SuccessResponse(data=entries, meta={"total": len(entries)})


@router.get(
    "/{result_id}",
    response_model=SuccessResponse[dict[str, Any]],
    summary="Get a stored result",
)
async def get_result(result_id: str, store: StoreDep) -> SuccessResponse[dict[str, Any]]:
    result = await asyncio.to_thread(store.get_by_id, result_id)
    if result is None:
        raise NotFoundError("Result", result_id)
    return SuccessResponse(data=result)


@router.delete(
    "/{result_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a stored result",
)
async def delete_result(result_id: str, store: StoreDep) -> None:
    if not await asyncio.to_thread(store.delete, result_id):
        raise NotFoundError("Result", result_id)


@router.delete(
    "",
    response_model=SuccessResponse[DeletedResponse],
    summary="Delete all stored results",
)
async def clear_results(store: StoreDep) -> SuccessResponse[DeletedResponse]:
    deleted = await asyncio.to_thread(store.clear)
    return SuccessResponse(data=DeletedResponse(deleted=deleted))

"""FastAPI dependencies for dependency injection."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from analyzer.enhancement.llm import LLMEnhancer
from analyzer.pipeline import AnalysisPipeline
from analyzer.storage import ResultStore
from api.config import Settings, get_settings

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_store(settings: SettingsDep) -> ResultStore:
    """Result store rooted at the configured results path."""
    return ResultStore(settings.results_path, index_limit=settings.results_index_limit)


StoreDep = Annotated[ResultStore, Depends(get_store)]


def get_pipeline(settings: SettingsDep) -> AnalysisPipeline:
    return AnalysisPipeline(settings=settings)


PipelineDep = Annotated[AnalysisPipeline, Depends(get_pipeline)]


@lru_cache
def get_enhancer() -> LLMEnhancer:
    """Process-wide enhancer so its cache and rate limiter are shared."""
    return LLMEnhancer.from_settings(get_settings())


EnhancerDep = Annotated[LLMEnhancer, Depends(get_enhancer)]

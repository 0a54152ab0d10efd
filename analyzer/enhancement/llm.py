"""LLM enhancement: citation assessment, query coverage and content suggestions."""

import asyncio
import json
import re
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

import httpx
import structlog

from analyzer.enhancement.cache import RateLimiter, TTLCache, cache_key
from analyzer.enhancement.prompts import (
    citation_assessment_prompt,
    content_suggestions_prompt,
    query_coverage_prompt,
    query_simulation_prompt,
)
from api.config import Settings, get_settings
from api.exceptions import ExternalServiceError, ServiceNotConfiguredError

logger = structlog.get_logger(__name__)

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
OPENAI_URL = "https://api.openai.com/v1/chat/completions"

WEAK_PILLAR_PERCENTAGE = 60
ERROR_BODY_CHARS = 200

# GEO score at which the keyless simulation assumes a citation
HEURISTIC_CITE_SCORE = 500
HEURISTIC_IMPROVEMENTS = (
    "Improve content depth and specificity",
    "Add more citable facts and statistics",
    "Include authoritative sources and citations",
)

FENCED_JSON = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


def parse_json_response(text: str) -> dict[str, Any]:
    """
    JSON object from a model response.

    Reads a fenced ```json block when present, otherwise the whole text,
    falling back to the outermost ``{...}``.

    Raises:
        ValueError: no JSON object could be parsed
    """
    fenced = FENCED_JSON.search(text)
    candidate = (fenced.group(1) if fenced else text).strip()

    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError:
        match = JSON_OBJECT.search(candidate)
        if match is None:
            raise ValueError("Response did not contain JSON") from None
        try:
            parsed = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in response: {e}") from e

    if not isinstance(parsed, dict):
        raise ValueError("Response JSON is not an object")
    return parsed


class LLMProvider(ABC):
    """Request/response shape of one chat API."""

    name: str
    url: str

    def __init__(self, api_key: str, model: str, max_tokens: int):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens

    @abstractmethod
    def headers(self) -> dict[str, str]: ...

    @abstractmethod
    def payload(self, prompt: str) -> dict[str, Any]: ...

    @abstractmethod
    def extract_text(self, data: dict[str, Any]) -> str: ...


class AnthropicProvider(LLMProvider):
    name = "anthropic"
    url = ANTHROPIC_URL

    def headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": ANTHROPIC_VERSION,
            "content-type": "application/json",
        }

    def payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }

    def extract_text(self, data: dict[str, Any]) -> str:
        blocks = data.get("content", [])
        return "".join(block.get("text", "") for block in blocks if block.get("type") == "text")


class OpenAIProvider(LLMProvider):
    name = "openai"
    url = OPENAI_URL

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def payload(self, prompt: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "temperature": 0.3,
            "messages": [{"role": "user", "content": prompt}],
        }

    def extract_text(self, data: dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"] or ""


PROVIDERS: dict[str, type[LLMProvider]] = {
    "anthropic": AnthropicProvider,
    "openai": OpenAIProvider,
}


def weak_pillars(report: dict[str, Any]) -> list[str]:
    """Names of GEO pillars scoring below 60%."""
    pillars = (report.get("geo") or {}).get("pillars") or {}
    return [
        pillar.get("name", key)
        for key, pillar in pillars.items()
        if pillar.get("percentage", 0) < WEAK_PILLAR_PERCENTAGE
    ]


def heuristic_query_simulation(query: str, url: str, geo_score: int) -> dict[str, Any]:
    """Citation guess from the GEO score alone, for when no LLM is configured."""
    would_cite = geo_score >= HEURISTIC_CITE_SCORE
    outlook = "would likely" if would_cite else "may not"
    return {
        "query": query,
        "url": url,
        "would_cite": would_cite,
        "confidence": "low",
        "simulated_response": (
            f"Based on a GEO score of {geo_score}/800, this page {outlook} "
            "be cited by AI search engines."
        ),
        "reasoning": "No LLM configured; estimated from the GEO score.",
        "improvements": [] if would_cite else list(HEURISTIC_IMPROVEMENTS),
        "heuristic": True,
    }


class LLMEnhancer:
    """
    Adds model-written insights to a finished report.

    The score itself is never changed. Results are cached per URL and
    content, and calls are spaced by a rate limiter.
    """

    def __init__(
        self,
        provider: str,
        api_key: str | None,
        model: str,
        max_tokens: int = 1024,
        timeout: float = 60.0,
        cache: TTLCache | None = None,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if provider not in PROVIDERS:
            raise ValueError(f"Unknown LLM provider: {provider}")
        self.provider_name = provider
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.provider = PROVIDERS[provider](api_key or "", model, max_tokens)
        self.cache = cache or TTLCache(ttl_seconds=24 * 60 * 60)
        self.rate_limiter = rate_limiter or RateLimiter(min_interval=0.1)
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "LLMEnhancer":
        settings = settings or get_settings()
        return cls(
            provider=settings.llm_provider,
            api_key=settings.llm_api_key,
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            timeout=settings.llm_timeout_seconds,
            cache=TTLCache(
                ttl_seconds=settings.llm_cache_ttl_seconds,
                max_entries=settings.llm_cache_max_entries,
            ),
            rate_limiter=RateLimiter(min_interval=settings.llm_min_interval_seconds),
        )

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def status(self) -> dict[str, Any]:
        return {
            "available": self.available,
            "provider": self.provider_name,
            "model": self.model if self.available else None,
            "cached_entries": len(self.cache),
        }

    async def complete(self, prompt: str) -> str:
        """
        Send one prompt and return the response text.

        Raises:
            ServiceNotConfiguredError: no API key
            ExternalServiceError: HTTP error, timeout or malformed response
        """
        if not self.available:
            raise ServiceNotConfiguredError("llm", "Set ANTHROPIC_API_KEY or OPENAI_API_KEY")

        await self.rate_limiter.wait()

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.provider.url,
                    headers=self.provider.headers(),
                    json=self.provider.payload(prompt),
                )
        except httpx.TimeoutException as e:
            raise ExternalServiceError(
                self.provider_name, f"Request timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(self.provider_name, str(e)) from e

        if response.status_code != 200:
            raise ExternalServiceError(
                self.provider_name,
                f"HTTP {response.status_code}: {response.text[:ERROR_BODY_CHARS]}",
            )

        try:
            return self.provider.extract_text(response.json())
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ExternalServiceError(self.provider_name, f"Unexpected response: {e}") from e

    async def _run_prompt(self, name: str, prompt: str) -> dict[str, Any]:
        """One enhancement section; failures are reported in place."""
        try:
            return parse_json_response(await self.complete(prompt))
        except (ExternalServiceError, ValueError) as e:
            logger.warning("llm_prompt_failed", prompt=name, error=str(e))
            return {"error": str(e)}

    def fallback(self) -> dict[str, Any]:
        return {
            "available": False,
            "message": "LLM enhancement is not configured",
            "hint": "Set ANTHROPIC_API_KEY or OPENAI_API_KEY to enable AI insights",
        }

    async def enhance(self, report: dict[str, Any], text: str) -> dict[str, Any]:
        """Citation assessment, query coverage and suggestions for a stored report."""
        if not self.available:
            return self.fallback()

        url = report.get("url", "")
        key = cache_key(url, text)
        cached = self.cache.get(key)
        if cached is not None:
            logger.info("llm_cache_hit", url=url)
            return {**cached, "from_cache": True}

        geo = report.get("geo") or {}
        page_content = report.get("page_content") or {}
        title = page_content.get("title", "")
        page_type = (geo.get("page_type") or {}).get("type", "other")
        has_schema = bool(
            (((report.get("seo") or {}).get("categories") or {}).get("structured_data") or {})
            .get("checks", {})
            .get("json_ld", {})
            .get("passed")
        )

        citation, coverage, suggestions = await asyncio.gather(
            self._run_prompt(
                "citation_assessment",
                citation_assessment_prompt(
                    text,
                    url=url,
                    title=title,
                    word_count=page_content.get("word_count", len(text.split())),
                    page_type=page_type,
                    has_schema=has_schema,
                    geo_score=geo.get("score", 0),
                ),
            ),
            self._run_prompt("query_coverage", query_coverage_prompt(text, title=title)),
            self._run_prompt(
                "content_suggestions",
                content_suggestions_prompt(text, title=title, weak_pillars=weak_pillars(report)),
            ),
        )

        enhancement = {
            "available": True,
            "provider": self.provider_name,
            "model": self.model,
            "generated_at": datetime.now(UTC).isoformat(),
            "citation_assessment": citation,
            "query_coverage": coverage,
            "content_suggestions": suggestions,
        }
        self.cache.set(key, enhancement)

        logger.info(
            "llm_enhancement_complete",
            url=url,
            provider=self.provider_name,
            errors=sum(1 for part in (citation, coverage, suggestions) if "error" in part),
        )
        return {**enhancement, "from_cache": False}

    async def simulate_query(self, query: str, text: str, url: str) -> dict[str, Any]:
        """
        Ask the model whether it would cite the page for ``query``.

        Raises:
            ServiceNotConfiguredError: no API key
            ExternalServiceError: the call failed or returned no JSON
        """
        response = await self.complete(query_simulation_prompt(query, text, url=url))
        try:
            result = parse_json_response(response)
        except ValueError as e:
            raise ExternalServiceError(self.provider_name, str(e)) from e
        return {"query": query, "url": url, **result}

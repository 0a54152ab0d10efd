"""Optional LLM insights layered on top of a finished analysis."""

# Use explicit imports when needed:
# from analyzer.enhancement.llm import LLMEnhancer
# from analyzer.enhancement.cache import TTLCache, RateLimiter

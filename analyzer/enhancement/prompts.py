"""Prompt templates for LLM enhancement. Responses are requested as JSON."""

from string import Template

CITATION_CONTENT_CHARS = 3000
COVERAGE_CONTENT_CHARS = 2500
SUGGESTIONS_CONTENT_CHARS = 2000
SIMULATION_CONTENT_CHARS = 2500

CITATION_ASSESSMENT = Template(
    """You are simulating how AI search engines (ChatGPT, Perplexity, Claude) evaluate sources for citation.

PAGE CONTENT (truncated to 3000 chars):
$content

PAGE METADATA:
- URL: $url
- Title: $title
- Word Count: $word_count
- Page Type: $page_type
- Has Schema: $has_schema

CURRENT GEO SCORE: $geo_score/800

TASK: Evaluate this page's likelihood of being cited by AI systems. Score each factor 1-10:

1. SPECIFICITY: Contains specific facts, numbers, measurements that AI can quote?
2. AUTHORITY: Claims backed by sources, certifications, or demonstrated expertise?
3. STRUCTURE: Information organized in a way that's easy to extract in chunks?
4. FRESHNESS: Signals that this content is current and maintained?
5. UNIQUENESS: Offers information not easily found elsewhere?

Then provide an overall citation score (1-100), the top 3 improvements and
3 queries this page could be cited for.

Respond with JSON only:
{
  "scores": {"specificity": 0, "authority": 0, "structure": 0, "freshness": 0, "uniqueness": 0},
  "overall_score": 0,
  "improvements": ["...", "...", "..."],
  "sample_queries": ["...", "...", "..."],
  "reasoning": "One paragraph explanation of the assessment"
}"""
)

QUERY_COVERAGE = Template(
    """Given this page content, identify what questions it can answer.

PAGE CONTENT (truncated):
$content

TITLE: $title

List 5-10 questions this page could answer. For each, rate 1-5 how completely
the page answers it and note whether the answer is explicit or inferred.
Also list the main topics covered and the topics that should be covered but are not.

Respond with JSON only:
{
  "queries": [
    {"question": "...", "answer_quality": 0, "answer_type": "explicit|inferred", "evidence": "..."}
  ],
  "topics_covered": ["..."],
  "missing_topics": ["..."],
  "overall_coverage": "Brief assessment of query coverage depth"
}"""
)

CONTENT_SUGGESTIONS = Template(
    """You are an expert in Generative Engine Optimization (GEO): optimizing content for AI search citation.

PAGE: $title
WEAK AREAS: $weak_pillars

CONTENT SAMPLE:
$content

Give 3 specific content improvements that would increase AI citation likelihood.
For each, quote the exact sentence to improve (or describe where to add content),
provide ready-to-use text and explain why it increases citability. Prefer
statistics, source citations, quotable definitions and extractable structure.

Respond with JSON only:
{
  "suggestions": [
    {
      "location": "...",
      "current_text": null,
      "improved_text": "...",
      "rationale": "...",
      "pillar_impact": "...",
      "estimated_impact": "low|medium|high"
    }
  ],
  "quick_wins": ["..."],
  "strategic_changes": ["..."]
}"""
)

QUERY_SIMULATION = Template(
    """You are simulating an AI search engine (like Perplexity or ChatGPT with browsing).

USER QUERY: "$query"

CANDIDATE SOURCE:
URL: $url
CONTENT (first 2500 chars):
$content

Would you cite this source when answering the query? Consider whether it
answers the query directly, has specific facts to cite, is trustworthy and is current.

Respond with JSON only:
{
  "would_cite": true,
  "citation_probability": 0,
  "reasoning": "...",
  "what_would_get_cited": "...",
  "whats_missing": ["..."],
  "competitor_advantages": ["..."],
  "suggested_improvements": ["..."]
}"""
)


def citation_assessment_prompt(
    content: str,
    *,
    url: str,
    title: str,
    word_count: int,
    page_type: str,
    has_schema: bool,
    geo_score: int,
) -> str:
    return CITATION_ASSESSMENT.substitute(
        content=content[:CITATION_CONTENT_CHARS],
        url=url,
        title=title or "(none)",
        word_count=word_count,
        page_type=page_type,
        has_schema="yes" if has_schema else "no",
        geo_score=geo_score,
    )


def query_coverage_prompt(content: str, *, title: str) -> str:
    return QUERY_COVERAGE.substitute(
        content=content[:COVERAGE_CONTENT_CHARS], title=title or "(none)"
    )


def content_suggestions_prompt(content: str, *, title: str, weak_pillars: list[str]) -> str:
    return CONTENT_SUGGESTIONS.substitute(
        content=content[:SUGGESTIONS_CONTENT_CHARS],
        title=title or "(none)",
        weak_pillars=", ".join(weak_pillars) or "none",
    )


def query_simulation_prompt(query: str, content: str, *, url: str) -> str:
    return QUERY_SIMULATION.substitute(
        query=query, url=url, content=content[:SIMULATION_CONTENT_CHARS]
    )

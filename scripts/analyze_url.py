#!/usr/bin/env python
"""Analyze a single page from the command line.

Runs the full pipeline (render, robots.txt, extraction, classification,
SEO and GEO scoring), prints a summary and writes the JSON report.

Usage:
    python scripts/analyze_url.py https://example.com/page [output.json]
"""

import asyncio
import json
import sys
from pathlib import Path

from analyzer.pipeline import AnalysisReport, AnalysisPipeline
from api.exceptions import AcquisitionError
from api.logging import setup_logging

TOP_RECOMMENDATIONS = 5


def print_summary(report: AnalysisReport) -> None:
    seo, geo, overall = report.seo, report.geo, report.overall_score

    print(f"\n{'='*60}")
    print(f"URL: {report.url}")
    print(f"Page type: {geo.page_type.name} ({geo.page_type.confidence}% confidence)")
    print(f"{'='*60}")
    print(f"Overall:  {overall.score}/100  grade {overall.grade}")
    print(f"SEO:      {seo.score}/100  {seo.status}")
    print(f"GEO:      {geo.score}/800  {geo.band}")
    if geo.is_gated:
        print(f"          crawl access gate applied (x{geo.gate_multiplier})")

    print("\nGEO pillars:")
    for pillar in geo.pillars.values():
        print(f"  {pillar.name:<45} {pillar.percentage:>3}%")

    recommendations = (geo.recommendations + seo.recommendations)[:TOP_RECOMMENDATIONS]
    if recommendations:
        print("\nTop recommendations:")
        for rec in recommendations:
            priority = rec.priority.value if rec.priority else "-"
            print(f"  [{priority}] {rec.message}")
    print()


async def run(url: str, output: Path) -> int:
    try:
        report = await AnalysisPipeline().analyze(url)
    except AcquisitionError as e:
        print(f"Could not fetch {url}: {e.message} ({e.details.get('reason')})")
        return 1

    print_summary(report)
    output.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
    print(f"Report written to {output}")
    return 0


def main() -> None:
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    url = sys.argv[1]
    if "://" not in url:
        url = f"https://{url}"
    output = Path(sys.argv[2]) if len(sys.argv) > 2 else Path("analysis.json")

    setup_logging()
    sys.exit(asyncio.run(run(url, output)))


if __name__ == "__main__":
    main()

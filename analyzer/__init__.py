"""PageLens analyzer core: acquisition, extraction, classification and scoring."""

# Use explicit imports when needed:
# from analyzer.pipeline import AnalysisPipeline, analyze_url, score_page
# from analyzer.crawler.acquire import PageAcquirer
# from analyzer.extraction.page_data import extract_page_data

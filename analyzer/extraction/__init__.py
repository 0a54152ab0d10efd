"""Markup extraction into the immutable PageData record."""

# Use explicit imports when needed:
# from analyzer.extraction.page_data import PageData, extract_page_data
# from analyzer.extraction.cleaner import extract_narrative_text, count_words
# from analyzer.extraction.structured_data import extract_structured_data

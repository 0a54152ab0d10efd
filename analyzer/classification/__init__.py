"""Page type classification against a static signal registry."""

# Use explicit imports when needed:
# from analyzer.classification.classifier import PageTypeClassifier, classify_page
# from analyzer.classification.page_types import PAGE_TYPES, PageType

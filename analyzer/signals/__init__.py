"""Text signal detectors and the composite content analyses built on them."""

# Use explicit imports when needed:
# from analyzer.signals.patterns import count_statistics, find_quotable_sentences
# from analyzer.signals.content import analyze_freshness, analyze_depth

"""Scoring engine: the 0-100 SEO model, the gated 0-800 GEO model and aggregation."""

# Use explicit imports when needed:
# from analyzer.scoring.seo import SEOAnalyzer, analyze_seo
# from analyzer.scoring.geo import GEOAnalyzer, analyze_geo
# from analyzer.scoring.aggregator import collect_issues, prioritize_recommendations

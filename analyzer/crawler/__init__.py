"""Page acquisition: rendering, robots.txt fetching and rule interpretation."""

# Use explicit imports when needed:
# from analyzer.crawler.acquire import PageAcquirer, AcquiredPage
# from analyzer.crawler.render import PageRenderer, fetch_rendered_page
# from analyzer.crawler.robots import RobotsFile, RobotsRule
# from analyzer.crawler.robots_ai import check_robots_access, evaluate_robots_access

"""Tests for robots.txt parser."""

from analyzer.crawler.robots import RobotsFile, RobotsRule


class TestRobotsRule:
    """Tests for RobotsRule class."""

    def test_simple_path_match(self) -> None:
        """Test simple path matching."""
        rule = RobotsRule(path="/admin", allowed=False)
        assert rule.matches("/admin") is True
        assert rule.matches("/admin/users") is True
        assert rule.matches("/about") is False

    def test_wildcard_match(self) -> None:
        """Test wildcard pattern matching."""
        rule = RobotsRule(path="/page/*.html", allowed=False)
        assert rule.matches("/page/test.html") is True
        assert rule.matches("/page/other.html") is True
        assert rule.matches("/page/test.php") is False

    def test_end_anchor(self) -> None:
        """Test end anchor pattern."""
        rule = RobotsRule(path="/*.pdf$", allowed=False)
        assert rule.matches("/doc.pdf") is True
        assert rule.matches("/doc.pdf?query") is False

    def test_directive_label(self) -> None:
        assert RobotsRule(path="/private", allowed=False).directive == "Disallow: /private"
        assert RobotsRule(path="/", allowed=True).directive == "Allow: /"


class TestRobotsFile:
    """Tests for RobotsFile parsing and decisions."""

    def test_empty_robots(self) -> None:
        """Test empty robots.txt allows all."""
        robots = RobotsFile.parse("")
        assert robots.is_allowed("GPTBot", "/any/path") is True
        assert robots.decide("GPTBot", "/").source == "none"

    def test_disallow_all(self) -> None:
        """Test disallow all directive."""
        content = """
User-agent: *
Disallow: /
"""
        robots = RobotsFile.parse(content)
        assert robots.is_allowed("Googlebot", "/") is False
        assert robots.is_allowed("Googlebot", "/any/path") is False
        assert robots.global_deny is True

    def test_empty_disallow_allows_all(self) -> None:
        """Test empty Disallow line allows everything."""
        content = """
User-agent: *
Disallow:
"""
        robots = RobotsFile.parse(content)
        assert robots.is_allowed("Googlebot", "/any/path") is True
        assert robots.global_deny is False

    def test_longest_match_wins(self) -> None:
        """A longer Allow overrides a shorter Disallow and vice versa."""
        content = """
User-agent: *
Disallow: /private
Allow: /private/public
"""
        robots = RobotsFile.parse(content)
        assert robots.is_allowed("GPTBot", "/private/x") is False
        assert robots.is_allowed("GPTBot", "/private/public/y") is True

        decision = robots.decide("GPTBot", "/private/public/y")
        assert decision.rule == "Allow: /private/public"
        assert decision.source == "wildcard"

    def test_tie_goes_to_allow(self) -> None:
        content = """
User-agent: *
Disallow: /docs
Allow: /docs
"""
        robots = RobotsFile.parse(content)
        assert robots.is_allowed("Googlebot", "/docs/intro") is True

    def test_dedicated_block_replaces_wildcard(self) -> None:
        """An agent with its own block ignores the * rules."""
        content = """
User-agent: *
Disallow: /

User-agent: OAI-SearchBot
Allow: /
"""
        robots = RobotsFile.parse(content)
        assert robots.is_allowed("OAI-SearchBot", "/pricing") is True
        assert robots.decide("OAI-SearchBot", "/pricing").source == "dedicated"
        assert robots.is_allowed("GPTBot", "/pricing") is False

    def test_agent_match_is_exact(self) -> None:
        """Agent names are matched exactly, not by prefix."""
        content = """
User-agent: GPTBot
Disallow: /
"""
        robots = RobotsFile.parse(content)
        assert robots.is_allowed("GPTBot", "/") is False
        assert robots.is_allowed("GPTBot-Image", "/") is True
        assert robots.is_allowed("gptbot", "/") is True

    def test_grouped_user_agents_share_rules(self) -> None:
        content = """
User-agent: GPTBot
User-agent: CCBot
Disallow: /
"""
        robots = RobotsFile.parse(content)
        assert robots.is_allowed("GPTBot", "/a") is False
        assert robots.is_allowed("CCBot", "/a") is False
        assert len(robots.groups) == 1

    def test_comments_sitemaps_and_crawl_delay(self) -> None:
        content = """
# Our robots file
Sitemap: https://example.com/sitemap.xml
User-agent: *  # everyone
Crawl-delay: 2.5
Disallow: /tmp  # scratch space
"""
        robots = RobotsFile.parse(content)
        assert robots.sitemaps == ["https://example.com/sitemap.xml"]
        assert robots.wildcard_group is not None
        assert robots.wildcard_group.crawl_delay == 2.5
        assert robots.is_allowed("Googlebot", "/tmp/file") is False
        assert robots.is_allowed("Googlebot", "/tmpl") is False
        assert robots.is_allowed("Googlebot", "/about") is True

    def test_rules_before_user_agent_ignored(self) -> None:
        content = """
Disallow: /
User-agent: *
Disallow: /admin
"""
        robots = RobotsFile.parse(content)
        assert robots.is_allowed("Googlebot", "/") is True
        assert robots.is_allowed("Googlebot", "/admin") is False

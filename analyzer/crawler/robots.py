"""Robots.txt parser and rule interpreter.

Rules are grouped into ordered user-agent blocks. A tracked agent uses its
dedicated block (exact, case-sensitive name match) and falls back to the
``*`` block. Within a block the longest matching pattern decides.
"""

import contextlib
import re
from dataclasses import dataclass, field
from functools import cached_property

WILDCARD_AGENT = "*"
GLOBAL_DENY_PATHS = frozenset({"/", "/*"})


@dataclass(frozen=True)
class RobotsRule:
    """A single Allow/Disallow rule."""

    path: str
    allowed: bool

    @cached_property
    def _pattern(self) -> re.Pattern[str]:
        anchored = self.path.endswith("$")
        body = self.path[:-1] if anchored else self.path
        regex = ".*".join(re.escape(part) for part in body.split("*"))
        return re.compile(regex + ("$" if anchored else ""))

    @property
    def specificity(self) -> int:
        """Pattern length used for longest-match precedence."""
        return len(self.path)

    @property
    def directive(self) -> str:
        return f"{'Allow' if self.allowed else 'Disallow'}: {self.path}"

    def matches(self, url_path: str) -> bool:
        """Check if this rule matches a URL path (prefix match unless ``$``-anchored)."""
        return self._pattern.match(url_path) is not None


@dataclass
class RobotsGroup:
    """One user-agent block."""

    user_agents: list[str] = field(default_factory=list)
    rules: list[RobotsRule] = field(default_factory=list)
    crawl_delay: float | None = None

    @property
    def is_wildcard(self) -> bool:
        return WILDCARD_AGENT in self.user_agents


@dataclass(frozen=True)
class RuleDecision:
    """Outcome of evaluating a path for one agent."""

    allowed: bool
    rule: str | None = None  # Matched directive, e.g. "Disallow: /private"
    source: str = "none"  # "dedicated", "wildcard" or "none"


@dataclass
class RobotsFile:
    """Parsed robots.txt content."""

    groups: list[RobotsGroup] = field(default_factory=list)
    sitemaps: list[str] = field(default_factory=list)

    @classmethod
    def parse(cls, content: str) -> "RobotsFile":
        """
        Parse robots.txt content into ordered user-agent groups.

        Consecutive ``User-agent`` lines share one group; a ``User-agent``
        line that follows rules opens a new group. Empty ``Disallow`` lines
        are dropped since they allow everything.

        Args:
            content: The robots.txt file content

        Returns:
            RobotsFile with groups in file order
        """
        robots = cls()
        current: RobotsGroup | None = None
        collecting_agents = False

        for raw_line in content.splitlines():
            line = raw_line.split("#", 1)[0].strip()
            if not line or ":" not in line:
                continue

            directive, _, value = line.partition(":")
            directive = directive.strip().lower()
            value = value.strip()

            if directive == "user-agent":
                if not value:
                    continue
                if current is None or not collecting_agents:
                    current = RobotsGroup()
                    robots.groups.append(current)
                    collecting_agents = True
                current.user_agents.append(value)
                continue

            if directive == "sitemap":
                if value:
                    robots.sitemaps.append(value)
                continue

            if current is None:
                # Rules before any User-agent line belong to no group
                continue
            collecting_agents = False

            if directive in ("allow", "disallow") and value:
                current.rules.append(RobotsRule(path=value, allowed=directive == "allow"))
            elif directive == "crawl-delay":
                with contextlib.suppress(ValueError):
                    current.crawl_delay = float(value)

        return robots

    def _merged(self, predicate) -> RobotsGroup | None:
        matching = [group for group in self.groups if predicate(group)]
        if not matching:
            return None
        merged = RobotsGroup()
        for group in matching:
            merged.user_agents.extend(group.user_agents)
            merged.rules.extend(group.rules)
            if merged.crawl_delay is None:
                merged.crawl_delay = group.crawl_delay
        return merged

    def dedicated_group(self, agent: str) -> RobotsGroup | None:
        """Merged rules of every block naming ``agent`` exactly."""
        return self._merged(lambda group: agent in group.user_agents)

    @property
    def wildcard_group(self) -> RobotsGroup | None:
        return self._merged(lambda group: group.is_wildcard)

    def group_for(self, agent: str) -> tuple[RobotsGroup | None, str]:
        """Select the block that governs ``agent`` and say where it came from."""
        if agent != WILDCARD_AGENT:
            dedicated = self.dedicated_group(agent)
            if dedicated is not None:
                return dedicated, "dedicated"
        wildcard = self.wildcard_group
        if wildcard is not None:
            return wildcard, "wildcard"
        return None, "none"

    @property
    def global_deny(self) -> bool:
        """True when the wildcard block disallows the whole site."""
        wildcard = self.wildcard_group
        if wildcard is None:
            return False
        return any(
            not rule.allowed and rule.path in GLOBAL_DENY_PATHS for rule in wildcard.rules
        )

    def decide(self, agent: str, path: str) -> RuleDecision:
        """
        Decide whether ``agent`` may fetch ``path``.

        The longest matching rule wins; on an exact length tie Allow wins.
        With no matching rule the path is allowed.
        """
        group, source = self.group_for(agent)
        if group is None:
            return RuleDecision(allowed=True)

        best: RobotsRule | None = None
        for rule in group.rules:
            if not rule.matches(path):
                continue
            if (
                best is None
                or rule.specificity > best.specificity
                or (rule.specificity == best.specificity and rule.allowed and not best.allowed)
            ):
                best = rule

        if best is None:
            return RuleDecision(allowed=True, source=source)
        return RuleDecision(allowed=best.allowed, rule=best.directive, source=source)

    def is_allowed(self, agent: str, path: str) -> bool:
        """Check if ``agent`` may fetch ``path``."""
        return self.decide(agent, path).allowed

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, NamedTuple, Optional


class RequestRate(NamedTuple):
    requests: int
    seconds: int


@dataclass(frozen=True)
class Rule:
    """A single Allow (allow=True) or Disallow (allow=False) line and its path."""

    path: str
    allow: bool

    def __post_init__(self) -> None:
        # an empty Disallow value means allow everything
        if self.path == "" and not self.allow:
            object.__setattr__(self, "allow", True)

    def applies_to(self, path: str) -> bool:
        return self.path == "*" or path.startswith(self.path)


@dataclass
class Group:
    """One or more user-agents and the directives that follow them."""

    agents: List[str] = field(default_factory=list)
    rules: List[Rule] = field(default_factory=list)
    crawl_delay: Optional[timedelta] = None
    sitemaps: List[str] = field(default_factory=list)
    request_rate: Optional[RequestRate] = None

    def applies_to(self, user_agent: str) -> bool:
        # only the product token counts: "ExampleBot/2.0" -> "examplebot"
        token = user_agent.split("/", 1)[0].lower()
        for agent in self.agents:
            if agent == "*" or agent in token:
                return True
        return False

    def allowance(self, path: str) -> bool:
        """Return the verdict of the first rule matching ``path``.

        ``path`` must already be percent-decoded. No matching rule means the
        path is allowed.
        """
        for rule in self.rules:
            if rule.applies_to(path):
                return rule.allow
        return True

    def push_agent(self, agent: str) -> None:
        self.agents.append(agent.lower())

    def push_rule(self, rule: Rule) -> None:
        self.rules.append(rule)

    def has_agent(self, agent: str) -> bool:
        return agent in self.agents

    def is_empty(self) -> bool:
        return not self.agents and not self.rules

    def set_crawl_delay(self, delay: timedelta) -> None:
        self.crawl_delay = delay

    def add_sitemap(self, url: str) -> None:
        self.sitemaps.append(url)

    def set_request_rate(self, rate: RequestRate) -> None:
        self.request_rate = rate

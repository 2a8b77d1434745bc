from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import List, Optional, Tuple

from .parser import Ruleset, parse_response
from .rules import RequestRate
from .utils.io import read_text_source
from .utils.logging import get_logger


@dataclass
class RunConfig:
    source: str
    user_agent: str
    urls: List[str] = field(default_factory=list)
    status_code: int = 200  # status the robots.txt was served with
    log_level: str = "INFO"


@dataclass
class Verdict:
    url: str
    allowed: bool


@dataclass
class Report:
    user_agent: str
    verdicts: List[Verdict]
    crawl_delay: Optional[timedelta]
    request_rate: Optional[RequestRate]
    sitemaps: Optional[Tuple[str, ...]]
    group_count: int
    has_default_group: bool

    def all_allowed(self) -> bool:
        return all(v.allowed for v in self.verdicts)


def load_ruleset(cfg: RunConfig) -> Ruleset:
    logger = get_logger()
    read = read_text_source(cfg.source)
    logger.debug(f"Read {read.bytes_read} bytes from {read.source}")
    return parse_response(cfg.status_code, read.text)


def evaluate(ruleset: Ruleset, user_agent: str, urls: List[str]) -> Report:
    return Report(
        user_agent=user_agent,
        verdicts=[Verdict(url=u, allowed=ruleset.can_fetch(user_agent, u)) for u in urls],
        crawl_delay=ruleset.crawl_delay(user_agent),
        request_rate=ruleset.request_rate(user_agent),
        sitemaps=ruleset.sitemaps(user_agent),
        group_count=len(ruleset.groups),
        has_default_group=not ruleset.default_group.is_empty(),
    )


def run(cfg: RunConfig) -> Report:
    logger = get_logger()
    logger.info(f"Source: {cfg.source} (status {cfg.status_code})")
    ruleset = load_ruleset(cfg)
    report = evaluate(ruleset, cfg.user_agent, cfg.urls)
    for v in report.verdicts:
        logger.info(f"{cfg.user_agent} {'may' if v.allowed else 'may not'} fetch {v.url}")
    return report

"""robots.txt parsing and access queries.

The protocol is the classic one from http://www.robotstxt.org/norobots-rfc.txt:
groups start with one or more ``User-agent`` lines, rules are plain path
prefixes and the first matching rule of the first matching group decides.

    rs = parse("User-agent: crawler1\\nAllow: /a/b\\nDisallow: /a/\\n")
    rs.can_fetch("crawler1", "/a/b")   # True
    rs.can_fetch("crawler1", "/a/c")   # False
"""
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from datetime import timedelta
from enum import IntEnum
from typing import Iterable, Optional, Tuple

from .rules import Group, RequestRate, Rule
from .utils.logging import get_logger
from .utils.url import parse_absolute_url, percent_decode


logger = get_logger("robotstxt.parser")

_delay_re = re.compile(r"^\+?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$", re.ASCII)
_count_re = re.compile(r"^\+?\d+$", re.ASCII)


class State(IntEnum):
    START = 0
    SAW_AGENT = 1
    SAW_RULE = 2


@dataclass(frozen=True)
class Ruleset:
    groups: Tuple[Group, ...] = ()
    default_group: Group = field(default_factory=Group)
    disallow_all: bool = False
    allow_all: bool = False

    # groups are mutable dataclasses
    __hash__ = None

    def with_overrides(self, disallow_all: bool = False, allow_all: bool = False) -> "Ruleset":
        return replace(self, disallow_all=disallow_all, allow_all=allow_all)

    def can_fetch(self, user_agent: str, url: str) -> bool:
        if self.disallow_all:
            return False
        if self.allow_all:
            return True
        path = percent_decode(url.strip()) or "/"
        for group in self.groups:
            if group.applies_to(user_agent):
                return group.allowance(path)
        # the default group is considered last
        if not self.default_group.is_empty():
            return self.default_group.allowance(path)
        # agent not found ==> access granted
        return True

    def _explicit_group(self, user_agent: str) -> Optional[Group]:
        # the metadata queries never fall back to the "*" group
        for group in self.groups:
            if group.applies_to(user_agent):
                return group
        return None

    def crawl_delay(self, user_agent: str) -> Optional[timedelta]:
        group = self._explicit_group(user_agent)
        return group.crawl_delay if group else None

    def sitemaps(self, user_agent: str) -> Optional[Tuple[str, ...]]:
        group = self._explicit_group(user_agent)
        return tuple(group.sitemaps) if group else None

    def request_rate(self, user_agent: str) -> Optional[RequestRate]:
        group = self._explicit_group(user_agent)
        return group.request_rate if group else None


@dataclass
class _ParseContext:
    groups: list = field(default_factory=list)
    default_group: Group = field(default_factory=Group)
    group: Group = field(default_factory=Group)
    state: State = State.START

    def add_group(self) -> None:
        group, self.group = self.group, Group()
        if group.has_agent("*"):
            if self.default_group.is_empty():
                self.default_group = group
            else:
                logger.debug(f"Dropping repeated '*' group with {len(group.rules)} rules")
        else:
            self.groups.append(group)

    def end_block(self) -> None:
        if self.state == State.SAW_AGENT:
            logger.debug(f"Dropping user-agent block without directives: {self.group.agents}")
            self.group = Group()
        elif self.state == State.SAW_RULE:
            self.add_group()
        self.state = State.START

    def finish(self) -> Ruleset:
        if self.state == State.SAW_RULE:
            self.add_group()
        return Ruleset(groups=tuple(self.groups), default_group=self.default_group)


def parse_crawl_delay(value: str) -> Optional[timedelta]:
    if not _delay_re.match(value):
        return None
    seconds = float(value)
    if math.isinf(seconds):
        return None
    try:
        return timedelta(seconds=seconds)
    except (OverflowError, ValueError):
        return None


def parse_request_rate(value: str) -> Optional[RequestRate]:
    parts = value.split("/")
    if len(parts) != 2 or not all(_count_re.match(p) for p in parts):
        return None
    return RequestRate(requests=int(parts[0]), seconds=int(parts[1]))


def _split_lines(text: str) -> Iterable[str]:
    for line in text.split("\n"):
        yield line[:-1] if line.endswith("\r") else line


def _apply_line(ctx: _ParseContext, line: str, lineno: int) -> None:
    if line == "":
        ctx.end_block()
        return
    line = line.split("#", 1)[0].strip()
    if not line:
        return
    if ":" not in line:
        logger.debug(f"Line {lineno}: no ':' separator, ignored")
        return
    name, value = line.split(":", 1)
    name = name.strip().lower()
    value = percent_decode(value.strip())

    if name == "user-agent":
        if ctx.state == State.SAW_RULE:
            ctx.add_group()
        ctx.group.push_agent(value)
        ctx.state = State.SAW_AGENT
        return
    if name not in ("disallow", "allow", "crawl-delay", "sitemap", "request-rate"):
        logger.debug(f"Line {lineno}: unknown directive {name!r}, ignored")
        return
    if ctx.state == State.START:
        logger.debug(f"Line {lineno}: {name!r} before any user-agent, ignored")
        return

    if name == "disallow":
        ctx.group.push_rule(Rule(value, False))
    elif name == "allow":
        ctx.group.push_rule(Rule(value, True))
    elif name == "crawl-delay":
        delay = parse_crawl_delay(value)
        if delay is None:
            logger.debug(f"Line {lineno}: bad crawl-delay {value!r}")
        else:
            ctx.group.set_crawl_delay(delay)
    elif name == "sitemap":
        url = parse_absolute_url(value)
        if url is None:
            logger.debug(f"Line {lineno}: bad sitemap URL {value!r}")
        else:
            ctx.group.add_sitemap(url)
    else:
        rate = parse_request_rate(value)
        if rate is None:
            logger.debug(f"Line {lineno}: bad request-rate {value!r}")
        else:
            ctx.group.set_request_rate(rate)
    ctx.state = State.SAW_RULE


def parse(text: str) -> Ruleset:
    """Build a Ruleset from robots.txt text. Never raises on malformed input.

    A user-agent line does not need to be preceded by a blank line.
    """
    ctx = _ParseContext()
    for lineno, line in enumerate(_split_lines(text), start=1):
        _apply_line(ctx, line, lineno)
    return ctx.finish()


def overrides_for_status(status_code: int) -> Tuple[bool, bool]:
    """Map the HTTP status of a robots.txt fetch to (disallow_all, allow_all)."""
    if status_code in (401, 403):
        return True, False
    if 400 <= status_code < 500:
        return False, True
    return False, False


def parse_response(status_code: int, text: str = "") -> Ruleset:
    if 200 <= status_code < 300:
        return parse(text)
    disallow_all, allow_all = overrides_for_status(status_code)
    logger.debug(f"robots.txt status {status_code}: disallow_all={disallow_all} allow_all={allow_all}")
    return Ruleset().with_overrides(disallow_all=disallow_all, allow_all=allow_all)

from robotstxt.parser import Ruleset, overrides_for_status, parse, parse_response


def test_override_flags_default_off():
    rs = parse("User-agent: *\nDisallow: /\n")
    assert rs.disallow_all is False
    assert rs.allow_all is False


def test_with_overrides_returns_new_ruleset():
    rs = parse("User-agent: *\nDisallow: /\n")
    opened = rs.with_overrides(allow_all=True)
    assert opened is not rs
    assert opened.can_fetch("bot", "/x") is True
    assert rs.can_fetch("bot", "/x") is False
    # disallow_all is checked first
    assert rs.with_overrides(disallow_all=True, allow_all=True).can_fetch("bot", "/x") is False


def test_overrides_for_status():
    assert overrides_for_status(200) == (False, False)
    assert overrides_for_status(401) == (True, False)
    assert overrides_for_status(403) == (True, False)
    assert overrides_for_status(404) == (False, True)
    assert overrides_for_status(503) == (False, False)


def test_parse_response():
    assert parse_response(200, "User-agent: *\nDisallow: /\n").can_fetch("bot", "/") is False
    assert parse_response(403, "User-agent: *\nAllow: /\n").can_fetch("bot", "/") is False
    assert parse_response(404).can_fetch("bot", "/") is True
    assert parse_response(500) == Ruleset()

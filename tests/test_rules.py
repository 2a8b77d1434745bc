from datetime import timedelta

from robotstxt.rules import Group, RequestRate, Rule


def test_empty_disallow_becomes_allow_all():
    rule = Rule("", False)
    assert rule.allow is True
    assert rule.applies_to("/anything")


def test_rule_prefix_match_is_case_sensitive():
    rule = Rule("/Private", False)
    assert rule.applies_to("/Private/x")
    assert not rule.applies_to("/private/x")


def test_star_rule_matches_everything_but_is_not_a_wildcard():
    assert Rule("*", False).applies_to("/whatever")
    # "*" inside a path is taken literally
    assert not Rule("/a*b", False).applies_to("/axxb")
    assert Rule("/a*b", False).applies_to("/a*b/c")


def test_group_agent_matching_uses_product_token_substring():
    group = Group()
    group.push_agent("Bot")
    assert group.agents == ["bot"]
    assert group.applies_to("ExampleBot/2.0")
    assert group.applies_to("SuperBOT")
    # only the part before the first "/" is considered
    assert not group.applies_to("Mozilla/5.0 (compatible; Bot)")


def test_group_with_star_applies_to_any_agent():
    group = Group()
    group.push_agent("*")
    assert group.has_agent("*")
    assert group.applies_to("anything/1.0")


def test_group_allowance_first_match_wins():
    group = Group()
    group.push_agent("a")
    group.push_rule(Rule("/x", False))
    group.push_rule(Rule("/x/y", True))
    assert group.allowance("/x/y") is False
    assert group.allowance("/other") is True


def test_group_emptiness_and_setters():
    group = Group()
    assert group.is_empty()
    group.set_crawl_delay(timedelta(seconds=2))
    group.add_sitemap("https://example.com/sitemap.xml")
    group.set_request_rate(RequestRate(1, 5))
    # metadata alone does not make a group non-empty
    assert group.is_empty()
    group.push_agent("a")
    group.push_agent("a")
    assert group.agents == ["a", "a"]
    assert not group.is_empty()

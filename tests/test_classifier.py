# File: tests/test_classifier.py
from link_scout.crawler.classifier import classify
from link_scout.crawler.frontier import FrontierState, PageQueue
from link_scout.crawler.normalizer import site_origin

ROOT = "http://example.com"
ORIGIN = site_origin(ROOT)


def test_partition_pages_links_and_discards():
    hrefs = {
        "/b",
        "/b/",
        "https://ext.test/x",
        "mailto:someone@example.com",
        "javascript:void(0)",
        "",
        "#top",
        "http://example.com/",
        "http://[::1",
    }
    result = classify(hrefs, page=ROOT, origin=ORIGIN, state=FrontierState())
    assert result.new_pages == {"http://example.com/b"}
    assert result.new_links == {"https://ext.test/x"}
    assert result.batch == ["http://example.com/b", "https://ext.test/x"]


def test_lookalike_host_and_other_scheme_are_links():
    hrefs = {"http://example.com.evil.test/a", "https://example.com/secure"}
    result = classify(hrefs, page=ROOT, origin=ORIGIN, state=FrontierState())
    assert result.new_pages == frozenset()
    assert result.new_links == {"http://example.com.evil.test/a", "https://example.com/secure"}


def test_known_urls_are_not_new():
    state = FrontierState(
        pending_pages=PageQueue(["http://example.com/pending"]),
        visited_pages={"http://example.com/done"},
        visited_links={"https://ext.test/seen"},
    )
    hrefs = {"/pending", "/done/", "https://ext.test/seen", "/fresh", "https://ext.test/fresh"}
    result = classify(hrefs, page="http://example.com/current", origin=ORIGIN, state=state)
    assert result.new_pages == {"http://example.com/fresh"}
    assert result.new_links == {"https://ext.test/fresh"}


def test_classification_is_idempotent_after_fold():
    state = FrontierState.seeded(ROOT)
    page = state.pending_pages.pop()
    hrefs = {"/a", "/b", "https://ext.test/x"}

    first = classify(hrefs, page=page, origin=ORIGIN, state=state)
    state.fold(page, first, [])
    second = classify(hrefs, page=page, origin=ORIGIN, state=state)

    assert first.new_pages and first.new_links
    assert second.new_pages == frozenset()
    assert second.new_links == frozenset()


def test_partition_is_disjoint_from_each_other_and_prior_state():
    state = FrontierState(visited_pages={ROOT + "/old"}, visited_links={"https://ext.test/old"})
    hrefs = {"/old", "/new", "https://ext.test/old", "https://ext.test/new", "http://other.test/"}
    result = classify(hrefs, page=ROOT, origin=ORIGIN, state=state)
    assert not result.new_pages & result.new_links
    assert not result.new_pages & state.visited_pages
    assert not result.new_links & state.visited_links


def test_default_port_href_is_an_internal_page():
    result = classify({"http://example.com:80/p"}, page=ROOT, origin=ORIGIN, state=FrontierState())
    assert result.new_pages == {"http://example.com/p"}
    assert result.new_links == frozenset()


def test_hrefs_resolve_against_base_when_given():
    hrefs = {"child", "../up"}
    result = classify(
        hrefs,
        page="http://example.com/old",
        base="http://example.com/docs/new/",
        origin=ORIGIN,
        state=FrontierState(),
    )
    assert result.new_pages == {"http://example.com/docs/new/child", "http://example.com/docs/up"}

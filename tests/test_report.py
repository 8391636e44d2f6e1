# File: tests/test_report.py
from link_scout.aggregator import aggregate_results
from link_scout.crawler.frontier import FrontierState
from link_scout.crawler.models import Failed, Ok
from link_scout.report import render_text


def _state() -> FrontierState:
    return FrontierState(
        visited_pages={"http://a.test/b", "http://a.test"},
        visited_links={"https://ext.test/x", "https://ext.test/dead"},
        results={
            Ok("http://a.test/b"),
            Ok("https://ext.test/x"),
            Failed("https://ext.test/dead", "http://a.test", status=404),
            Failed("https://ext.test/dead", "http://a.test/b", error="timeout after 30s"),
        },
    )


def test_aggregate_sorts_everything():
    report = aggregate_results(_state(), elapsed=3.7)
    assert report.pages == ["http://a.test", "http://a.test/b"]
    assert report.links == ["https://ext.test/dead", "https://ext.test/x"]
    assert [f.page for f in report.failures] == ["http://a.test", "http://a.test/b"]
    assert report.elapsed == 3.7
    assert not report.success


def test_render_with_failures_and_timer():
    text = render_text(aggregate_results(_state(), elapsed=3.7), show_timer=True)
    assert text.splitlines() == [
        "--> pages found on the site (2):",
        "http://a.test",
        "http://a.test/b",
        "--> external links checked (2):",
        "https://ext.test/dead",
        "https://ext.test/x",
        "--> WARNING: broken urls found (2):",
        "https://ext.test/dead on http://a.test gave status 404",
        "https://ext.test/dead on http://a.test/b gave error: timeout after 30s",
        "Timer: 3 seconds.",
    ]


def test_render_success_without_timer():
    state = FrontierState(visited_pages={"http://a.test"}, results={Ok("http://a.test")})
    report = aggregate_results(state, elapsed=1.0)
    text = render_text(report)
    assert report.success
    assert "--> no broken urls found." in text
    assert "Timer" not in text

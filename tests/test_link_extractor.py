# File: tests/test_link_extractor.py
from link_scout.crawler.link_extractor import extract_hrefs


def test_extract_hrefs_collects_anchor_hrefs():
    markup = """
    <html><head><link href="/style.css" rel="stylesheet"></head>
    <body>
      <a href="/a">A</a>
      <a href="/a">A again</a>
      <div><a href="https://ext.test/x">ext</a></div>
      <a href="mailto:someone@example.com">mail</a>
      <a name="anchor-without-href">no href</a>
    </body></html>
    """
    assert extract_hrefs(markup) == {"/a", "https://ext.test/x", "mailto:someone@example.com", ""}


def test_extract_hrefs_empty_document():
    assert extract_hrefs("") == set()
    assert extract_hrefs("<p>no links here</p>") == set()

# link_scout/crawler/__init__.py
"""Crawl/check engine: normalizer, extractor, fetcher, classifier, frontier and loop."""

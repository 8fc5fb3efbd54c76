# site_scraper/crawler/__init__.py
"""BFS crawl: URL normalization, link discovery, fetching and scheduling."""

# site_scraper/__init__.py
"""
SiteScraper package initializer.
Bounded breadth-first crawler with selector-based extraction.
"""
__version__ = "0.2.0"

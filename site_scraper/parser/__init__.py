# site_scraper/parser/__init__.py
"""Selector compilation and value extraction from parsed pages."""

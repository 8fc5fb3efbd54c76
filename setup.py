# setup.py
from setuptools import setup, find_packages

setup(
    name="site_scraper",
    version="0.2.0",
    description="Bounded breadth-first crawler with selector-based extraction",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"site_scraper": ["report/templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "click>=8.2",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["site_scraper=site_scraper.cli:cli"],
    },
    python_requires=">=3.11",
)

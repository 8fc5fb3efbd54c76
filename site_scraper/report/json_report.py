# site_scraper/report/json_report.py

"""
JSON report generation for SiteScraper.

Writes the crawl response payload (selector -> attribute -> values) to a file.
"""
import json
from pathlib import Path

from site_scraper.aggregator import ResultPayload


def render_json(results: ResultPayload, output_path: Path | str, pretty: bool = True) -> Path:
    """
    Save *results* as JSON at *output_path*.

    :param results: payload from ``ResultTable.to_dict()``
    :param output_path: JSON file path; parent directories are created
    :param pretty: indent by 2 spaces
    :return: Path of the saved file

    Example:
    ```python
    from site_scraper.report.json_report import render_json
    report_path = render_json(table.to_dict(), 'reports/result.json')
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(results, f, ensure_ascii=False, indent=2 if pretty else None)

    return output

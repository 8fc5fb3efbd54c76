# File: site_scraper/report/html_report.py
"""site_scraper.report.html_report: HTML report rendering with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

from jinja2 import BaseLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from site_scraper.aggregator import ResultPayload

TEMPLATE_NAME = "results.html.j2"


def render_html(
    results: ResultPayload,
    output_path: Union[Path, str],
    template_dir: Optional[Union[Path, str]] = None,
) -> Path:
    """Render *results* into an HTML table and save it at *output_path*.

    Args:
        results: payload from ``ResultTable.to_dict()``.
        output_path: path of the resulting HTML file.
        template_dir: directory holding ``results.html.j2``; the packaged
            template is used when omitted.

    Returns:
        Path of the saved HTML file.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    loader: BaseLoader
    if template_dir is None:
        loader = PackageLoader("site_scraper", "report/templates")
    else:
        loader = FileSystemLoader(str(template_dir))
    env = Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "j2"]))
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "results": results,
        "total_values": sum(len(v) for group in results.values() for v in group.values()),
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path

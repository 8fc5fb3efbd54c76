# === FILE: site_scraper/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for SiteScraper.

Commands:
  scrape JOB   Run the crawl job from a YAML/JSON file and print/save the result
  serve        Run the HTTP service (GET /, POST /scrape)
  config       Show the effective settings

Common options:
  --config PATH       Settings file (YAML/JSON; default: configs/default.yaml if present)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Log format (e.g. "%(asctime)s %(levelname)s %(message)s")

scrape options:
  --json PATH         Save the JSON result to a file
  --html PATH         Save an HTML report to a file
  --template DIR      Directory with a custom results.html.j2
  --pretty            Indent JSON output by 2
  --scan-timeout SEC  Timeout of the whole crawl (seconds)

Also:
  --version, -v       Show the SiteScraper version

Example:
  site_scraper scrape jobs/example.yaml --json result.json --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from site_scraper import __version__
from site_scraper.config import load_config, load_job
from site_scraper.errors import ConfigError, FetchError
from site_scraper.logger import DEFAULT_FORMAT, configure
from site_scraper.engine import run_crawl
from site_scraper.report.json_report import render_json
from site_scraper.report.html_report import render_html
from site_scraper.server import run_server

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteScraper, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Settings file (YAML/JSON).'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Log file (stdout if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Log format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """SiteScraper command group."""
    configure(level=log_level, log_file=log_file, log_format=log_format)
    try:
        settings = load_config(config_path)
    except Exception as e:
        print_error(f'Failed to load settings: {e}')
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.argument('job_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON result to a file'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save an HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with a custom results.html.j2'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON output by 2'
)
@click.option(
    '--scan-timeout', 'scan_timeout',
    type=float,
    default=None,
    help='Timeout of the whole crawl (seconds)'
)
@click.pass_context
def scrape(ctx, job_path, json_output, html_output, template_dir, pretty, scan_timeout):
    """Run a crawl job and print or save the result."""
    settings = ctx.obj['settings']
    try:
        job = load_job(job_path)
    except Exception as e:
        print_error(f'Failed to load job: {e}')

    try:
        if scan_timeout:
            table = asyncio.run(
                asyncio.wait_for(run_crawl(job, settings), timeout=scan_timeout)
            )
        else:
            table = asyncio.run(run_crawl(job, settings))
    except asyncio.TimeoutError:
        print_error(f'Crawl did not finish within {scan_timeout} seconds')
    except ConfigError as e:
        print_error(f'Invalid job: {e}')
    except FetchError as e:
        print_error(f'Crawl aborted: {e}')

    results = table.to_dict()

    # nothing to save: print to stdout
    if not json_output and not html_output:
        click.echo(json.dumps(results, ensure_ascii=False, indent=2 if pretty else None))
        return

    if json_output:
        try:
            saved_json = render_json(results, json_output, pretty=pretty)
            click.echo(f'JSON report: {saved_json}')
        except OSError as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(results, html_output, template_dir)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')


@cli.command('serve', context_settings=CONTEXT_SETTINGS)
@click.option('--host', default=None, help='Listen address (overrides settings)')
@click.option('--port', type=click.IntRange(1, 65535), default=None, help='Listen port (overrides settings)')
@click.pass_context
def serve(ctx, host, port):
    """Run the HTTP service."""
    settings = ctx.obj['settings']
    overrides = {k: v for k, v in (('host', host), ('port', port)) if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)
    run_server(settings)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective settings as JSON."""
    settings = ctx.obj['settings']
    click.echo(settings.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()

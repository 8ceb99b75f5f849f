# === FILE: sitemap_probe/cli.py ===
"""
Command line entry point for SitemapProbe.

Commands:
  scrape SITEMAP_URL  Extract page URLs from a sitemap and check them for 404s
  loadtest            Run a load test on extracted URLs
  config              Show the effective configuration

Global options:
  --config PATH       YAML/JSON config (default: configs/default.yaml if present)
  --output-dir DIR    Directory for JSON artifacts (default: output)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FORMAT Logging format string

Load test options:
  --concurrency N     Number of concurrent requests (default: 10)
  --requests N        Requests per URL (default: 1)
  --duration SEC      Max duration for the test (optional)
  --urls FILE         Path to URLs JSON file (default: output/urls.json)

Examples:
  sitemap-probe scrape https://example.com/sitemap.xml
  sitemap-probe loadtest --concurrency 20 --requests 5
  sitemap-probe loadtest --concurrency 50 --duration 60
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from sitemap_probe import __version__
from sitemap_probe.config import load_config
from sitemap_probe.engine import check_urls, resolve_sitemap, run_load_test
from sitemap_probe.logger import init_logging
from sitemap_probe.report.console import print_summary
from sitemap_probe.report.json_report import save_load_test, save_not_found, save_urls
from sitemap_probe.utils import read_url_list

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SitemapProbe, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to a YAML or JSON config file.'
)
@click.option(
    '--output-dir', '-o', 'output_dir',
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help='Directory for JSON artifacts (overrides output_dir).'
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
    help='Log file path (stdout if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Logging format string'
)
@click.pass_context
def cli(ctx, config_path, output_dir, log_level, log_file, log_format):
    """SitemapProbe: sitemap URL extraction, 404 checks and load testing."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
        cfg = cfg.with_overrides(output_dir=output_dir)
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed to load configuration: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.argument('sitemap_url')
@click.pass_context
def scrape(ctx, sitemap_url):
    """Extract page URLs from SITEMAP_URL and check each one for 404."""
    cfg = ctx.obj['config']
    urls = asyncio.run(resolve_sitemap(cfg, sitemap_url))
    click.echo(f'Extracted URLs: {len(urls)}')
    try:
        urls_path = save_urls(urls, cfg.output_dir)
    except OSError as e:
        print_error(f'Failed to save URLs: {e}')
    click.echo(f'URLs saved to {urls_path}')

    report = asyncio.run(check_urls(cfg, urls))
    try:
        not_found_path = save_not_found(report.not_found, cfg.output_dir)
    except OSError as e:
        print_error(f'Failed to save 404 pages: {e}')
    click.echo(f'\nFound {len(report.not_found)} pages returning 404')
    if report.unknown:
        click.echo(f'Could not check {len(report.unknown)} pages (see log)')
    click.echo(f'404 pages saved to {not_found_path}')
    click.echo("\nTip: run 'sitemap-probe loadtest' to perform a load test on these URLs")


@cli.command('loadtest', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--concurrency', 'concurrency',
    type=click.IntRange(min=1),
    default=None,
    help='Number of concurrent requests (default: 10)'
)
@click.option(
    '--requests', 'requests_per_url',
    type=click.IntRange(min=1),
    default=None,
    help='Requests per URL (default: 1)'
)
@click.option(
    '--duration', 'duration',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Max duration for the test in seconds (optional)'
)
@click.option(
    '--urls', 'urls_file',
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help='Path to URLs JSON file (default: <output-dir>/urls.json)'
)
@click.pass_context
def loadtest(ctx, concurrency, requests_per_url, duration, urls_file):
    """Run a load test on previously extracted URLs."""
    try:
        cfg = ctx.obj['config'].with_overrides(
            concurrency=concurrency,
            requests_per_url=requests_per_url,
            duration=duration,
            urls_file=urls_file,
        )
    except ValidationError as e:
        print_error(f'Invalid load test options: {e}')

    source = cfg.resolved_urls_file
    try:
        urls = read_url_list(source)
    except FileNotFoundError:
        print_error(
            f'Error: URLs file not found: {source}\n'
            'Run the scraper first to extract URLs, or specify a different file with --urls'
        )
    except ValueError as e:
        print_error(f'Error: {e}')
    if not urls:
        print_error('Error: No URLs found in the file')
    click.echo(f'Loaded {len(urls)} URLs from {source}')

    results, summary = asyncio.run(run_load_test(cfg, urls))
    print_summary(summary)

    try:
        results_path, summary_path = save_load_test(summary, results, cfg.output_dir)
    except OSError as e:
        print_error(f'Failed to save load test results: {e}')
    click.echo(f'Detailed results saved to {results_path}')
    click.echo(f'Summary saved to {summary_path}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()

# sitemap_probe/report/json_report.py

"""
JSON artifacts for SitemapProbe.

All files are written pretty-printed (indent 2) under the output directory.
"""
import json
from pathlib import Path
from typing import Any, Sequence, Tuple

from sitemap_probe.crawler.models import LoadTestResult, LoadTestSummary
from sitemap_probe.utils import artifact_timestamp


def _write(data: Any, output_path: Path | str) -> Path:
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
    return output


def save_urls(urls: Sequence[str], output_dir: Path | str) -> Path:
    """Write discovered page URLs, in resolver order, to ``urls.json``."""
    return _write(list(urls), Path(output_dir) / 'urls.json')


def save_not_found(urls: Sequence[str], output_dir: Path | str) -> Path:
    """Write URLs confirmed as 404 to ``404-pages.json``."""
    return _write(list(urls), Path(output_dir) / '404-pages.json')


def save_load_test(
    summary: LoadTestSummary,
    results: Sequence[LoadTestResult],
    output_dir: Path | str,
    timestamp: str | None = None,
) -> Tuple[Path, Path]:
    """
    Save the detailed results file and the summary file of one load test.

    :param summary: aggregated statistics
    :param results: per-request results in completion order
    :param output_dir: target directory
    :param timestamp: file name suffix, current UTC time if omitted
    :return: (results path, summary path)

    Example:
    ```python
    results_path, summary_path = save_load_test(summary, results, 'output')
    print(f"Detailed results saved to {results_path}")
    ```
    """
    stamp = timestamp or artifact_timestamp()
    out = Path(output_dir)
    results_path = _write(
        {'summary': summary.to_dict(), 'results': [r.to_dict() for r in results]},
        out / f'loadtest-results-{stamp}.json',
    )
    summary_path = _write(summary.to_dict(), out / f'loadtest-summary-{stamp}.json')
    return results_path, summary_path

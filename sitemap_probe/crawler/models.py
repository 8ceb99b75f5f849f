# sitemap_probe/crawler/models.py
"""
Data models for sitemap resolution, reachability checks and load testing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class SitemapIndex:
    """A ``<sitemapindex>`` document: ordered child sitemap locations."""

    url: str
    children: Tuple[str, ...]

    @property
    def locations(self) -> Tuple[str, ...]:
        return self.children


@dataclass(frozen=True, slots=True)
class UrlSet:
    """A ``<urlset>`` document: ordered page (or nested sitemap) locations."""

    url: str
    entries: Tuple[str, ...]

    @property
    def locations(self) -> Tuple[str, ...]:
        return self.entries


SitemapNode = Union[SitemapIndex, UrlSet]


class RequestQueueItem(NamedTuple):
    url: str
    repetition: int


@dataclass(frozen=True, slots=True)
class LoadTestResult:
    """Outcome of one dispatched load-test request. Times are in milliseconds."""

    url: str
    success: bool
    response_time: float
    timestamp: int
    status_code: Optional[int] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"url": self.url, "success": self.success}
        if self.status_code is not None:
            data["statusCode"] = self.status_code
        data["responseTime"] = self.response_time
        if self.error is not None:
            data["error"] = self.error
        data["timestamp"] = self.timestamp
        return data


@dataclass(frozen=True, slots=True)
class LoadTestSummary:
    """Aggregate statistics of a finished load test."""

    total_requests: int
    successful_requests: int
    failed_requests: int
    average_response_time: float
    min_response_time: float
    max_response_time: float
    requests_per_second: float
    duration: float
    status_code_distribution: Dict[int, int] = field(default_factory=dict)
    errors: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalRequests": self.total_requests,
            "successfulRequests": self.successful_requests,
            "failedRequests": self.failed_requests,
            "averageResponseTime": self.average_response_time,
            "minResponseTime": self.min_response_time,
            "maxResponseTime": self.max_response_time,
            "requestsPerSecond": self.requests_per_second,
            "duration": self.duration,
            "statusCodeDistribution": {str(k): v for k, v in self.status_code_distribution.items()},
            "errors": dict(self.errors),
        }


@dataclass(slots=True)
class ReachabilityReport:
    """Three-way outcome of a reachability scan; ``unknown`` holds URLs whose check failed."""

    ok: List[str] = field(default_factory=list)
    not_found: List[str] = field(default_factory=list)
    unknown: List[str] = field(default_factory=list)

# === FILE: sitemap_probe/config.py ===
"""
Loading and validation of SitemapProbe settings.
Pydantic describes the schema and checks the values.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
SITEMAP_USER_AGENT = "Mozilla/5.0 (compatible; SitemapBot/1.0)"
SITEMAP_ACCEPT = "application/xml, text/xml, */*"


class ProbeConfig(BaseModel):
    """Settings for one scrape or load-test run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    concurrency: int = Field(10, ge=1, description="Max number of outstanding load-test requests.")
    requests_per_url: int = Field(1, ge=1, description="How many times each URL is requested.")
    duration: Optional[float] = Field(None, gt=0, description="Soft cap on load-test dispatch (seconds).")
    timeout: float = Field(15.0, gt=0, description="Timeout for one request (seconds).")
    user_agent: str = Field(BROWSER_USER_AGENT, min_length=1, description="User-Agent for page requests.")
    sitemap_user_agent: str = Field(
        SITEMAP_USER_AGENT, min_length=1, description="User-Agent for sitemap requests."
    )
    sitemap_delay: float = Field(0.5, ge=0, description="Pause before each nested sitemap fetch.")
    check_delay: float = Field(0.3, ge=0, description="Pause after each reachability check.")
    output_dir: Path = Field(Path("output"), description="Directory for JSON artifacts.")
    urls_file: Optional[Path] = Field(None, description="Load-test input; <output_dir>/urls.json if unset.")

    @field_validator("user_agent", "sitemap_user_agent", mode="before")
    def _strip(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def resolved_urls_file(self) -> Path:
        return self.urls_file if self.urls_file is not None else self.output_dir / "urls.json"

    def page_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent}

    def sitemap_headers(self) -> dict[str, str]:
        return {"User-Agent": self.sitemap_user_agent, "Accept": SITEMAP_ACCEPT}

    def with_overrides(self, **overrides: Any) -> ProbeConfig:
        """Return a validated copy; ``None`` values leave the field untouched."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return ProbeConfig(**data)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> ProbeConfig:
    """
    Read YAML or JSON and return a validated ProbeConfig.

    With ``path=None`` the default file is used when it exists, otherwise the
    built-in defaults. An explicit path that does not exist raises FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ProbeConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return ProbeConfig(**data)


__all__ = [
    "ProbeConfig",
    "ValidationError",
    "load_config",
    "BROWSER_USER_AGENT",
    "SITEMAP_USER_AGENT",
]

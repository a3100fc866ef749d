# evidencemesh/config.py
"""Search configuration, overridable through environment variables."""

import os
from dataclasses import dataclass, field


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return int(value)


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return float(value)


@dataclass(frozen=True)
class SearchConfig:
    """Limits and credentials for one resilient search.

    All settings can be overridden via environment variables with the
    prefix EVIDENCEMESH_. The provider API key comes from PUBMED_API_KEY;
    an empty key is allowed but gets lower provider rate limits.
    """

    max_results: int = field(default_factory=lambda: _env_int("EVIDENCEMESH_MAX_RESULTS", 20))
    return_top_n: int = field(default_factory=lambda: _env_int("EVIDENCEMESH_RETURN_TOP_N", 5))
    summary_chunk_size: int = field(
        default_factory=lambda: _env_int("EVIDENCEMESH_SUMMARY_CHUNK_SIZE", 10)
    )
    fetch_concurrency: int = field(
        default_factory=lambda: _env_int("EVIDENCEMESH_FETCH_CONCURRENCY", 3)
    )
    retry_attempts: int = field(default_factory=lambda: _env_int("EVIDENCEMESH_RETRY_ATTEMPTS", 3))
    api_key: str = field(default_factory=lambda: os.getenv("PUBMED_API_KEY", ""))
    summary_delay: float = field(
        default_factory=lambda: _env_float("EVIDENCEMESH_SUMMARY_DELAY", 1.2)
    )
    request_timeout: float = field(
        default_factory=lambda: _env_float("EVIDENCEMESH_REQUEST_TIMEOUT", 30.0)
    )

    def __post_init__(self) -> None:
        for name in ("max_results", "return_top_n", "summary_chunk_size", "fetch_concurrency"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.retry_attempts < 0:
            raise ValueError(f"retry_attempts must not be negative, got {self.retry_attempts}")
        if self.summary_delay < 0:
            raise ValueError(f"summary_delay must not be negative, got {self.summary_delay}")
        if self.request_timeout <= 0:
            raise ValueError(f"request_timeout must be positive, got {self.request_timeout}")

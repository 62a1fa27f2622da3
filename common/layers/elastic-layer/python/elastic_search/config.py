"""Connection settings read from the environment, SSM and Secrets Manager."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from common_utils import configure_logger, get_secret, get_setting

__all__ = ["ElasticConfig"]

logger = configure_logger(__name__)

DEFAULT_URL = "http://localhost:9200"
DEFAULT_INDEX = "docs"
DEFAULT_TIMEOUT = 10.0


def _timeout(raw: Optional[str]) -> float:
    """Parse ``ELASTIC_TIMEOUT``, falling back to the default when malformed."""

    if raw is None or str(raw).strip() == "":
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid ELASTIC_TIMEOUT %r, using %ss", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    if value <= 0:
        logger.warning("ELASTIC_TIMEOUT must be positive, got %r, using %ss", raw, DEFAULT_TIMEOUT)
        return DEFAULT_TIMEOUT
    return value


@dataclass(frozen=True)
class ElasticConfig:
    url: str = DEFAULT_URL
    index: str = DEFAULT_INDEX
    doc_type: Optional[str] = None
    username: str = ""
    password: str = ""
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls) -> "ElasticConfig":
        """Build settings from ``ELASTIC_*`` variables.

        Each value is looked up in the environment first and then in
        Parameter Store. The password falls back to Secrets Manager when
        ``ELASTIC_PASS_SECRET_NAME`` is set.
        """

        password = get_setting("ELASTIC_PASS", decrypt=True) or ""
        if not password and os.environ.get("ELASTIC_PASS_SECRET_NAME"):
            password = get_secret("ELASTIC_PASS") or ""
        return cls(
            url=get_setting("ELASTIC_URL", DEFAULT_URL),
            index=get_setting("ELASTIC_INDEX", DEFAULT_INDEX),
            doc_type=get_setting("ELASTIC_TYPE"),
            username=get_setting("ELASTIC_USER", "") or "",
            password=password,
            timeout=_timeout(get_setting("ELASTIC_TIMEOUT")),
        )

"""
Gateway configuration.

Reads settings from the environment (and a local .env file) once at
process start. The resulting settings object is immutable.
"""

import logging
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_INFINO_ENDPOINT = "http://localhost:3000"
DEFAULT_SEARCH_WINDOW_DAYS = 7
DEFAULT_WORKER_THREADS = 4
DEFAULT_MIRROR_THREADS = 2
DEFAULT_SHUTDOWN_TIMEOUT = 10.0
DEFAULT_OPENSEARCH_HOST = "http://localhost:9200"


def resolve_endpoint(value: Optional[str]) -> str:
    """
    Resolve the Infino server URL.

    Args:
        value: Raw value of INFINO_SERVER_URL, possibly missing or empty

    Returns:
        The endpoint without a trailing slash, or the default endpoint
    """
    if value is None or not value.strip():
        logger.info("Setting Infino Server URL to its default value: %s", DEFAULT_INFINO_ENDPOINT)
        return DEFAULT_INFINO_ENDPOINT
    return value.strip().rstrip("/")


class GatewaySettings(BaseModel):
    """Process-wide gateway settings."""

    model_config = ConfigDict(frozen=True)

    infino_endpoint: str = DEFAULT_INFINO_ENDPOINT
    default_window_days: int = Field(DEFAULT_SEARCH_WINDOW_DAYS, ge=1)
    worker_threads: int = Field(DEFAULT_WORKER_THREADS, ge=1)
    mirror_threads: int = Field(DEFAULT_MIRROR_THREADS, ge=1)
    shutdown_timeout: float = Field(DEFAULT_SHUTDOWN_TIMEOUT, ge=0)
    opensearch_host: str = DEFAULT_OPENSEARCH_HOST

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GatewaySettings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to os.environ after
                     loading a .env file if one is present.

        Returns:
            Resolved GatewaySettings
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        return cls(
            infino_endpoint=resolve_endpoint(environ.get("INFINO_SERVER_URL")),
            default_window_days=int(
                environ.get("INFINO_DEFAULT_WINDOW_DAYS") or DEFAULT_SEARCH_WINDOW_DAYS
            ),
            worker_threads=int(environ.get("INFINO_WORKER_THREADS") or DEFAULT_WORKER_THREADS),
            mirror_threads=int(environ.get("INFINO_MIRROR_THREADS") or DEFAULT_MIRROR_THREADS),
            shutdown_timeout=float(
                environ.get("INFINO_SHUTDOWN_TIMEOUT") or DEFAULT_SHUTDOWN_TIMEOUT
            ),
            opensearch_host=environ.get("OPENSEARCH_HOST") or DEFAULT_OPENSEARCH_HOST,
        )

"""Process configuration read from environment variables."""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from metadict.ausplots import CATEGORICAL_VARIABLES_CONTAINER_ID

DEFAULT_JSONLD_URL = "https://linkeddata.tern.org.au/viewer/ausplots/download?format=json-ld"
DEFAULT_CACHE_EXPIRY_SECONDS = 4 * 60 * 60


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    """Read a positive integer; unset, unparseable or non-positive values give the default."""
    try:
        value = int(env.get(name, ""))
    except ValueError:
        return default
    return value if value > 0 else default


class ServerConfig(BaseModel):
    """Settings for the dictionary server.

    Attributes:
        port: Port the HTTP server listens on.
        cache_expiry_seconds: TTL of the built dictionary.
        jsonld_url: Location of the vocabulary JSON-LD export.
        container_id: Identifier of the categorical-variable container.
        sentry_dsn: Sentry DSN; telemetry is disabled when unset.
        log_level: Logging level name.
        fetch_timeout_seconds: Timeout for downloading the vocabulary.
    """

    model_config = {"frozen": True}

    port: int = Field(3000, gt=0, lt=65536)
    cache_expiry_seconds: int = Field(DEFAULT_CACHE_EXPIRY_SECONDS, gt=0)
    jsonld_url: str = DEFAULT_JSONLD_URL
    container_id: str = CATEGORICAL_VARIABLES_CONTAINER_ID
    sentry_dsn: Optional[str] = None
    log_level: str = "info"
    fetch_timeout_seconds: int = Field(60, gt=0)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        """Build a config from PORT, CACHE_EXPIRY_SECONDS, JSONLD_URL, CAT_VAR_ID,
        SENTRY_DSN, LOG_LEVEL and FETCH_TIMEOUT_SECONDS."""
        env = os.environ if env is None else env
        return cls(
            port=_int_env(env, "PORT", 3000),
            cache_expiry_seconds=_int_env(env, "CACHE_EXPIRY_SECONDS", DEFAULT_CACHE_EXPIRY_SECONDS),
            jsonld_url=env.get("JSONLD_URL") or DEFAULT_JSONLD_URL,
            container_id=env.get("CAT_VAR_ID") or CATEGORICAL_VARIABLES_CONTAINER_ID,
            sentry_dsn=env.get("SENTRY_DSN") or None,
            log_level=env.get("LOG_LEVEL") or "info",
            fetch_timeout_seconds=_int_env(env, "FETCH_TIMEOUT_SECONDS", 60),
        )

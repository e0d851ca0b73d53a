"""Error telemetry via Sentry.

Sentry is only initialised when a DSN is configured. The capture helpers are
safe to call either way: without an initialised client the sentry_sdk calls
are no-ops, so warnings and exceptions still reach the log.
"""

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.starlette import StarletteIntegration

from metadict.errors import DataQualityWarning
from metadict.logging import setup_logging

logger = setup_logging()


def init_telemetry(dsn: str | None, environment: str | None = None) -> bool:
    """Initialise Sentry if a DSN is given. Returns whether Sentry is enabled."""
    if not dsn:
        logger.debug("No Sentry DSN, refusing to initialise Sentry")
        return False
    logger.debug("Initialising Sentry")
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[
            StarletteIntegration(transaction_style="endpoint"),
            FastApiIntegration(transaction_style="endpoint"),
        ],
    )
    return True


def report_warning(event: DataQualityWarning) -> None:
    """Log a data-quality warning and send it to Sentry at warning level."""
    logger.warning(
        {
            "message": event.message(),
            **event.model_dump(),
        },
        pprint=True,
    )
    with sentry_sdk.new_scope() as scope:
        scope.set_level("warning")
        scope.set_tag("data_quality", event.kind)
        scope.set_context("data_quality", event.model_dump())
        sentry_sdk.capture_message(event.message(), level="warning")


def report_exception(exc: BaseException) -> None:
    """Log a failure with its traceback and send it to Sentry."""
    logger.error(
        {
            "message": "Failed to build metadata dictionary",
            "error": f"{type(exc).__name__}: {exc}",
        },
        pprint=True,
        exc_info=exc,
    )
    sentry_sdk.capture_exception(exc)

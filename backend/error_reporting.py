"""Error reporting to Sentry."""

import logging
from importlib.metadata import PackageNotFoundError, version

import sentry_sdk

from config import Settings

logger = logging.getLogger(__name__)


def _release() -> str | None:
    try:
        return version("spark-stats")
    except PackageNotFoundError:
        return None


def init_sentry(settings: Settings) -> bool:
    """Initialize the Sentry SDK. Returns False when no DSN is configured."""
    if not settings.SENTRY_DSN:
        logger.warning("SENTRY_DSN not configured - error reporting disabled")
        return False

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        release=_release(),
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        send_default_pii=False,
    )
    logger.info(f"Sentry initialized (environment: {settings.SENTRY_ENVIRONMENT})")
    return True


def report_exception(error: BaseException) -> None:
    sentry_sdk.capture_exception(error)

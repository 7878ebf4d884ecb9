"""Optional Sentry error reporting.

Flask is not imported here so the seeding tools can share the same setup.
"""

from __future__ import annotations

from typing import Any

from loguru import logger

_SENTRY_INITIALIZED = False


def _sentry_init_kwargs(sentry_cfg: Any) -> dict[str, Any] | None:
    """Build `sentry_sdk.init` kwargs, or None when reporting is disabled."""
    enabled = bool(getattr(sentry_cfg, "enabled", False))
    dsn = str(getattr(sentry_cfg, "dsn", "") or "").strip()
    if not enabled or not dsn:
        return None

    kwargs: dict[str, Any] = {
        "dsn": dsn,
        "send_default_pii": False,
        "attach_stacktrace": True,
    }
    for name in ("environment", "release"):
        value = str(getattr(sentry_cfg, name, "") or "").strip()
        if value:
            kwargs[name] = value
    for name in ("traces_sample_rate", "profiles_sample_rate"):
        rate = float(getattr(sentry_cfg, name, 0.0) or 0.0)
        if rate > 0:
            kwargs[name] = rate
    return kwargs


def initialize_sentry(*, settings_obj: Any | None = None) -> bool:
    """Initialize Sentry if `settings.sentry` is enabled and has a DSN.

    Returns True when Sentry is active after the call.
    """
    global _SENTRY_INITIALIZED
    if _SENTRY_INITIALIZED:
        return True

    if settings_obj is None:
        from config import settings as settings_obj

    init_kwargs = _sentry_init_kwargs(getattr(settings_obj, "sentry", None))
    if init_kwargs is None:
        return False

    try:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.logging import LoggingIntegration

        init_kwargs["integrations"] = [
            LoggingIntegration(level=None, event_level="ERROR"),
            FlaskIntegration(),
        ]
        sentry_sdk.init(**init_kwargs)
    except Exception:
        logger.opt(exception=True).warning("Failed to initialize Sentry (ignored)")
        return False

    _SENTRY_INITIALIZED = True
    logger.info("Sentry initialized")
    return True

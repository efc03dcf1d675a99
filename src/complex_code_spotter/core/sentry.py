"""Sentry error tracking integration for complex-code-spotter."""
import os
from typing import Any

import sentry_sdk

from complex_code_spotter.constants import EnvVars
from complex_code_spotter.core.logging import get_logger


def init_sentry(service_name: str = "complex-code-spotter", component: str = "cli") -> bool:
    """Initialize Sentry with service tagging.

    Args:
        service_name: Unique service identifier
        component: Surface being run ("cli" or "mcp-server")

    Returns:
        True when Sentry was initialized, False when SENTRY_DSN is unset
    """
    def _tag_event(event: Any, hint: Any) -> Any:
        """Add service tags to every event."""
        event.setdefault("tags", {})
        event["tags"]["service"] = service_name
        event["tags"]["language"] = "python"
        event["tags"]["component"] = component
        return event

    dsn = os.getenv(EnvVars.SENTRY_DSN)
    if not dsn:
        return False

    environment = os.getenv(EnvVars.SENTRY_ENVIRONMENT, "development")
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=1.0 if environment == "development" else 0.1,
        attach_stacktrace=True,
        max_breadcrumbs=50,
        debug=environment == "development",
        before_send=_tag_event,
    )

    sentry_sdk.set_tag("service", service_name)
    sentry_sdk.set_tag("component", component)

    logger = get_logger("sentry")
    logger.info(
        "sentry_initialized",
        service=service_name,
        component=component,
        environment=environment,
    )
    return True

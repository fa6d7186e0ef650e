"""
Event logger utility for authentication events.
"""
from datetime import datetime
from typing import Optional
from fastapi import Request
import sys
import logging
import os

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "register_success",
    "register_failure",
    "login_success",
    "login_failure",
}


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure stdout logging, plus a file handler when log_dir is set.

    Args:
        level: Root log level name, e.g. "INFO" or "DEBUG"
        log_dir: Directory for school_api.log (optional)
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handler, but continue without it if directory creation fails
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "school_api.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s:%(name)s:%(message)s",
        handlers=handlers,
        force=True
    )


def client_ip(request: Request) -> Optional[str]:
    """Client address with X-Forwarded-For fallback."""
    ip_address = None
    if request.client:
        ip_address = request.client.host

    # X-Forwarded-For can contain multiple IPs, take the first one
    if not ip_address and request.headers.get("x-forwarded-for"):
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()

    return ip_address


def log_auth_event(
    event_type: str,
    email: Optional[str],
    request: Request,
    reason: Optional[str] = None
) -> None:
    """
    Log an authentication event.

    Args:
        event_type: One of: register_success, register_failure,
                    login_success, login_failure
        email: Email the request was made for (may be None if missing)
        request: FastAPI Request object
        reason: Optional short failure reason

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    level = logging.INFO if event_type.endswith("_success") else logging.WARNING
    logger.log(
        level,
        "AUTH %s email=%s ip=%s user_agent=%s reason=%s timestamp=%s",
        event_type, email, client_ip(request), request.headers.get("user-agent"),
        reason, datetime.utcnow().isoformat()
    )

import hashlib
import logging
from typing import Any

# Create the library logger
logger = logging.getLogger("pagecursor")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact_value(value: Any) -> str:
    """
    Redacts a cursor value for logging.
    Cursor values may hold user data (emails, names), so only a short hash
    is logged. The hash still allows correlating log lines of one request.
    """
    if value is None:
        return "<none>"
    try:
        return hashlib.sha256(str(value).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"

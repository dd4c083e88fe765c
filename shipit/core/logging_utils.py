"""
Redaction helpers for log output.

Credentials must never reach the logs. Response bodies are truncated and
scrubbed of e-mail addresses and phone numbers before being logged.
"""
import re

_REDACT_PATTERNS = [
    # Emails
    (r'\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b', '[EMAIL]'),
    # Chilean mobile/landline numbers, with or without +56
    (r'\+?56[-.\s]?\d{1,2}[-.\s]?\d{3,4}[-.\s]?\d{4}\b', '[PHONE]'),
    (r'\b9[-.\s]?\d{4}[-.\s]?\d{4}\b', '[PHONE]'),
]


def mask_secret(value: str, visible: int = 4) -> str:
    """Keep only the last `visible` characters of a secret."""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]


def sanitize_for_logging(text: str, max_length: int = 500) -> str:
    """
    Remove PII from text for safe logging.

    Args:
        text: Text that may contain PII
        max_length: Maximum length of result

    Returns:
        Sanitized text safe for logging
    """
    if not text:
        return ""

    sanitized = text[:max_length]

    for pattern, replacement in _REDACT_PATTERNS:
        sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

    return sanitized

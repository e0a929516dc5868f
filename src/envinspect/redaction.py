"""Display-safe redaction of matched secrets."""

REDACTED_MARKER = "***REDACTED***"
MASK_CHAR = "*"

# Characters kept verbatim at each end of a redacted value
_KEEP_HEAD = 4
_KEEP_TAIL = 2


def redact_secret(value: str) -> str:
    """Redact a secret value, showing only the first 4 and last 2 chars.

    Values of 8 characters or fewer are replaced by a constant marker. Longer
    values keep their length, so the output still hints at the secret size.
    """
    if not value or len(value) <= 8:
        return REDACTED_MARKER
    hidden = len(value) - _KEEP_HEAD - _KEEP_TAIL
    return f"{value[:_KEEP_HEAD]}{MASK_CHAR * hidden}{value[-_KEEP_TAIL:]}"

# mcapi/services/errors.py
# Fatal error classification: permanent (bad address, unroutable) vs transient check failures

# Ordered; matched as lowercase substrings of the failure text.
FATAL_SERVER_ERRORS = (
    "no such host",
    "no route",
    "unknown port",
    "too many colons in address",
    "invalid argument",
    # texts produced by Python's resolver/socket layer for the same conditions
    "name or service not known",
    "nodename nor servname provided",
    "no address associated with hostname",
    "name has no usable address",
    "network is unreachable",
)


def fatal_pattern(error) -> str | None:
    """Return the first pattern matching ``error`` (exception or text), or None."""
    text = str(error).lower()
    for pattern in FATAL_SERVER_ERRORS:
        if pattern in text:
            return pattern
    return None


def is_fatal_error(error) -> bool:
    return fatal_pattern(error) is not None

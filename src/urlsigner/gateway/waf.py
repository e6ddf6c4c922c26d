"""Edge firewall style predicate for timed HMAC tokens.

Mirrors the boolean expression typically configured on a WAF rule, which
receives a single ``<message><separator><timestamp>-<mac>`` string such as
``/previews/song.mp3?verify=1700000000-abc%2B...%3D``.
"""

from __future__ import annotations

from urlsigner.common import hmac as hmac_utils

_ASCII_DIGITS = frozenset("0123456789")


def is_timed_hmac_valid(
    secret: bytes | str,
    message_mac: str,
    ttl_seconds: int,
    current_timestamp: int,
    separator_length: int = 0,
) -> bool:
    """
    Evaluate a timed HMAC the way an edge rule would.

    Args:
        secret: Shared HMAC secret
        message_mac: Request URI carrying the token at its end
        ttl_seconds: Maximum allowed distance between token time and now
        current_timestamp: Request time in Unix seconds
        separator_length: Length of the text between message and timestamp
            (``len("?verify=")`` for the default query layout)

    Returns:
        True if the token is fresh and its MAC matches
    """
    if isinstance(secret, str):
        secret = secret.encode("utf-8")

    hyphen = message_mac.rfind("-")
    if hyphen <= 0 or hyphen == len(message_mac) - 1:
        return False
    mac = message_mac[hyphen + 1 :]

    ts_start = hyphen
    while ts_start > 0 and message_mac[ts_start - 1] in _ASCII_DIGITS:
        ts_start -= 1
    timestamp = message_mac[ts_start:hyphen]
    if not timestamp or ts_start < separator_length:
        return False

    if abs(current_timestamp - int(timestamp)) > ttl_seconds:
        return False

    message = message_mac[: ts_start - separator_length]
    return hmac_utils.verify(secret, hmac_utils.build_message(message, timestamp), mac)

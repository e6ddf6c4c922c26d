"""Common utilities for urlsigner."""

from urlsigner.common.errors import ErrorCode, SignerConfigError
from urlsigner.common.settings import Settings, get_settings

__all__ = [
    "ErrorCode",
    "Settings",
    "SignerConfigError",
    "get_settings",
]

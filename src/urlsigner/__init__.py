"""
urlsigner: time-limited, tamper-evident URLs.

Signs resource paths with an HMAC token that an edge gateway can verify
without a database lookup or network call.
"""

__version__ = "1.0.0"

"""Akismet client package.

Client talks to the Akismet comment spam API; the api module wraps it in
one-call functions driven by an AkismetConfig.
"""

from .client import Client, PARAM_TO_API_PARAM, format_param, map_params
from .config import AkismetConfig
from .errors import AkismetError, ArgumentError, ProtocolError, UsageError
from .version import VERSION
from . import api

__all__ = [
    # Client
    "Client",
    "PARAM_TO_API_PARAM",
    "format_param",
    "map_params",
    # Configuration
    "AkismetConfig",
    # Errors
    "AkismetError",
    "ArgumentError",
    "ProtocolError",
    "UsageError",
    # Convenience API
    "api",
    "VERSION",
]

"""
One-call wrappers around Client.

Each function takes an AkismetConfig, opens a client with it, makes one call
and closes the client again.
"""

from typing import Any, Callable, Tuple

from .client import Client
from .config import AkismetConfig
from .errors import UsageError


def _with_client(config: AkismetConfig, block: Callable[[Client], Any]) -> Any:
    if not config.api_key:
        raise UsageError("Set api_key")
    if not config.app_url:
        raise UsageError("Set app_url")

    return Client.open_with(
        config.api_key,
        config.app_url,
        block,
        app_name=config.app_name,
        app_version=config.app_version,
        timeout=config.timeout
    )


def verify_key(config: AkismetConfig) -> bool:
    """See Client.verify_key."""
    return _with_client(config, lambda client: client.verify_key())


def check(config: AkismetConfig, user_ip: str, user_agent: str, **params: Any) -> Tuple[bool, bool]:
    """See Client.check."""
    return _with_client(config, lambda client: client.check(user_ip, user_agent, **params))


def is_spam(config: AkismetConfig, user_ip: str, user_agent: str, **params: Any) -> bool:
    """See Client.is_spam."""
    return _with_client(config, lambda client: client.is_spam(user_ip, user_agent, **params))


def report_as_spam(config: AkismetConfig, user_ip: str, user_agent: str, **params: Any) -> None:
    """See Client.report_as_spam."""
    _with_client(config, lambda client: client.report_as_spam(user_ip, user_agent, **params))


def report_as_ham(config: AkismetConfig, user_ip: str, user_agent: str, **params: Any) -> None:
    """See Client.report_as_ham."""
    _with_client(config, lambda client: client.report_as_ham(user_ip, user_agent, **params))


def open(config: AkismetConfig, block: Callable[[Client], Any]) -> Any:
    """
    Run block with an open client built from config.

    Use it to make several calls over one connection:

        api.open(config, lambda client: [client.is_spam(ip, ua, text=t) for t in texts])
    """
    return _with_client(config, block)

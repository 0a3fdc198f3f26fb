"""Akismet API client with connection reuse and typed errors."""

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterator, Optional, Tuple

import requests

from .errors import ArgumentError, ProtocolError, UsageError
from .version import VERSION


logger = logging.getLogger(__name__)


SERVICE_HOST = "rest.akismet.com"
SERVICE_PORT = 80
API_VERSION = "1.1"
DEFAULT_TIMEOUT = 30

USER_AGENT_PLUGIN = f"Python Akismet/{VERSION}"
SUCCESSFUL_SUBMIT_BODY = "Thanks for making the web a better place."

DEBUG_HELP_HEADER = "X-akismet-debug-help"
PRO_TIP_HEADER = "X-akismet-pro-tip"
PRO_TIP_DISCARD = "discard"

# Caller-facing option name -> Akismet form field
PARAM_TO_API_PARAM = {
    "referrer": "referrer",
    "post_url": "permalink",
    "post_modified_at": "comment_post_modified_gmt",
    "text": "comment_content",
    "created_at": "comment_date_gmt",
    "type": "comment_type",
    "author": "comment_author",
    "author_url": "comment_author_url",
    "author_email": "comment_author_email",
    "languages": "blog_lang",
    "user_role": "user_role",
    "test": "is_test",
}

# Fields the client always sets itself
FIXED_API_PARAMS = ("blog", "user_ip", "user_agent", "blog_charset")

RESERVED_API_PARAMS = frozenset(PARAM_TO_API_PARAM.values()) | frozenset(FIXED_API_PARAMS)


def format_param(value: Any) -> str:
    """
    Serialize a parameter value the way Akismet expects it.

    Booleans become "1"/"0", dates and date-times become ISO-8601 strings,
    lists and tuples are joined with ", " after formatting each element.
    Anything else is passed through str().
    """
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return ", ".join(format_param(element) for element in value)
    return str(value)


def map_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate caller-facing options into Akismet form fields.

    Args:
        params: Options keyed by name (see PARAM_TO_API_PARAM). The special
            "env" key holds a mapping of extra fields, such as HTTP headers of
            the original submission, which are sent verbatim.

    Returns:
        Dictionary keyed by Akismet field name. Options and env fields whose
        value is None are left out.

    Raises:
        ArgumentError: An option is unknown, or an env key would overwrite
            a field the client sets itself
    """
    params = dict(params)
    env = params.pop("env", None) or {}

    api_params = {}
    for key, value in env.items():
        key = str(key)
        if key in RESERVED_API_PARAMS:
            raise ArgumentError(
                f"Environment variable '{key}' conflicts with built-in API parameter"
            )
        if value is not None:
            api_params[key] = value

    for name, value in params.items():
        api_name = PARAM_TO_API_PARAM.get(name)
        if api_name is None:
            raise ArgumentError(f"Invalid param: {name}")
        if value is not None:
            api_params[api_name] = value

    return api_params


class Client:
    """
    Client for the Akismet comment spam API.

    Comment methods (check, report_as_spam, report_as_ham) reuse the open
    connection if there is one; otherwise each call opens and closes its own.
    Open the client explicitly to make several calls over one connection:

        with Client(api_key, "http://example.com") as client:
            client.check(ip, ua, text="...")
            client.report_as_spam(ip, ua, text="...")

    An instance is not safe for concurrent use from several threads.
    """

    def __init__(
        self,
        api_key: str,
        app_url: str,
        app_name: Optional[str] = None,
        app_version: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT
    ):
        """
        Initialize Akismet client.

        Args:
            api_key: API key obtained at akismet.com
            app_url: URL of the home page of the application making requests
            app_name: Name of the application, e.g. "example.com". Forms part
                of the User-Agent header.
            app_version: Version of the application, e.g. "1.0". Ignored if
                app_name is not provided.
            timeout: Request timeout in seconds
        """
        self._api_key = api_key
        self._app_url = app_url
        self._app_name = app_name
        self._app_version = app_version
        self._timeout = timeout
        self._session: Optional[requests.Session] = None

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def app_url(self) -> str:
        return self._app_url

    @property
    def app_name(self) -> Optional[str]:
        return self._app_name

    @property
    def app_version(self) -> Optional[str]:
        return self._app_version

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def user_agent(self) -> str:
        """
        User-Agent sent with every request.

        Akismet asks for "Application Name/Version | Plugin Name/Version";
        the application part is omitted when no app_name was given.
        """
        app = None
        if self._app_name:
            app = "/".join(p for p in (self._app_name, self._app_version) if p)
        return " | ".join(p for p in (app, USER_AGENT_PLUGIN) if p)

    # Managing connections

    @classmethod
    def open_with(
        cls,
        api_key: str,
        app_url: str,
        block: Callable[["Client"], Any],
        app_name: Optional[str] = None,
        app_version: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT
    ) -> Any:
        """
        Create a client, open it, pass it to block and close it afterwards.

        Returns:
            The return value of block

        Raises:
            UsageError: block is None
        """
        if block is None:
            raise UsageError("Block required")
        client = cls(
            api_key,
            app_url,
            app_name=app_name,
            app_version=app_version,
            timeout=timeout
        )
        return client.open(block)

    def open(self, block: Optional[Callable[["Client"], Any]] = None) -> Any:
        """
        Open the client, creating a new connection.

        Opening is only needed to make several calls over one connection;
        comment methods open the client on their own when it is closed.
        verify_key always uses its own connection.

        Args:
            block: Optional callable taking the client. When given, it is
                called while the client is open and the client is closed
                when it returns or raises.

        Returns:
            The return value of block, or the client itself if no block was given

        Raises:
            UsageError: The client is already open
        """
        if self.is_open():
            raise UsageError("Already open")

        logger.debug("Opening connection to %s", SERVICE_HOST)
        self._session = requests.Session()

        if block is None:
            return self
        try:
            return block(self)
        finally:
            self.close()

    def close(self) -> "Client":
        """Close the client. Closing a closed client does nothing."""
        if self._session is not None:
            logger.debug("Closing connection to %s", SERVICE_HOST)
            self._session.close()
        self._session = None
        return self

    def is_open(self) -> bool:
        return self._session is not None

    def __enter__(self) -> "Client":
        if not self.is_open():
            self.open()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    # Verifying keys

    def verify_key(self) -> bool:
        """
        Check whether the API key is valid.

        Returns:
            True for a valid key, False for an invalid one

        Raises:
            ProtocolError: The service answered with anything but
                "valid" or "invalid"
        """
        # The key cannot be verified through its own subdomain
        session = requests.Session()
        try:
            response = self._invoke(
                session,
                SERVICE_HOST,
                "verify-key",
                {"blog": self._app_url, "key": self._api_key}
            )
        finally:
            session.close()

        if response.text not in ("valid", "invalid"):
            self._raise_with_response(response)

        return response.text == "valid"

    # Checking

    def check(self, user_ip: str, user_agent: str, **params: Any) -> Tuple[bool, bool]:
        """
        Check whether a comment is spam and whether it is blatant.

        Args:
            user_ip: The comment author's IP address
            user_agent: The comment author's user agent
            **params: Optional parameters; pass as many as possible.
                referrer: The HTTP_REFERER of the submission
                post_url: URL of the post the comment was made on
                post_modified_at: When the post was last modified
                type: e.g. "comment", "trackback", "pingback"
                text: The comment text
                created_at: When the comment was created
                author, author_email, author_url: The comment author
                languages: ISO 639-1 codes of the languages used on the site
                user_role: Role of the author, e.g. "administrator"
                test: When True Akismet does not learn from the call
                env: Mapping of extra fields such as HTTP headers

        Returns:
            Tuple (is_spam, is_blatant). A blatant comment can be discarded
            without review.

        Raises:
            ArgumentError: Invalid param, or env conflicts with a built-in field
            ProtocolError: The service returned an error
        """
        response = self._invoke_comment_method("comment-check", user_ip, user_agent, params)

        if response.text not in ("true", "false"):
            self._raise_with_response(response)

        return (
            response.text == "true",
            response.headers.get(PRO_TIP_HEADER) == PRO_TIP_DISCARD
        )

    comment_check = check

    def is_spam(self, user_ip: str, user_agent: str, **params: Any) -> bool:
        """Check whether a comment is spam. Takes the same arguments as check."""
        return self.check(user_ip, user_agent, **params)[0]

    # Reporting

    def report_as_spam(self, user_ip: str, user_agent: str, **params: Any) -> None:
        """
        Submit a comment that was missed by check as spam.

        Takes the same arguments as check.

        Raises:
            ArgumentError: Invalid param, or env conflicts with a built-in field
            ProtocolError: The service returned an error
        """
        response = self._invoke_comment_method("submit-spam", user_ip, user_agent, params)

        if response.text != SUCCESSFUL_SUBMIT_BODY:
            self._raise_with_response(response)

    submit_spam = report_as_spam
    spam = report_as_spam

    def report_as_ham(self, user_ip: str, user_agent: str, **params: Any) -> None:
        """
        Submit a comment wrongly flagged by check as not spam.

        Takes the same arguments as check.

        Raises:
            ArgumentError: Invalid param, or env conflicts with a built-in field
            ProtocolError: The service returned an error
        """
        response = self._invoke_comment_method("submit-ham", user_ip, user_agent, params)

        if response.text != SUCCESSFUL_SUBMIT_BODY:
            self._raise_with_response(response)

    submit_ham = report_as_ham
    ham = report_as_ham

    # Internals

    def _comment_host(self) -> str:
        return f"{self._api_key}.{SERVICE_HOST}"

    @contextmanager
    def _http_session(self) -> Iterator[requests.Session]:
        """Yield the open session, or one opened and closed around the block."""
        if self.is_open():
            yield self._session
            return

        self.open()
        try:
            yield self._session
        finally:
            self.close()

    def _invoke_comment_method(
        self,
        method_name: str,
        user_ip: str,
        user_agent: str,
        params: Dict[str, Any]
    ) -> requests.Response:
        api_params = map_params(params)
        api_params.update(blog=self._app_url, user_ip=user_ip, user_agent=user_agent)

        with self._http_session() as session:
            return self._invoke(session, self._comment_host(), method_name, api_params)

    def _invoke(
        self,
        session: requests.Session,
        host: str,
        method_name: str,
        params: Dict[str, Any]
    ) -> requests.Response:
        """
        POST form-encoded params to an API method.

        Raises:
            ProtocolError: Any status other than 200 was received
            requests.RequestException: The request itself failed
        """
        data = {name: format_param(value) for name, value in params.items()}
        data["blog_charset"] = "UTF-8"

        url = f"http://{host}:{SERVICE_PORT}/{API_VERSION}/{method_name}"
        logger.debug("POST %s with fields: %s", method_name, ", ".join(sorted(data)))

        try:
            response = session.post(
                url,
                data=data,
                headers=self._http_headers(),
                timeout=self._timeout
            )
        except requests.exceptions.RequestException as e:
            # The exception text names the host, which contains the API key
            logger.error("Request to %s failed: %s", method_name, type(e).__name__)
            raise

        if response.status_code != 200:
            logger.error("HTTP %d received from %s", response.status_code, method_name)
            raise ProtocolError(
                f"HTTP {response.status_code} received (expected 200)",
                status_code=response.status_code,
                body=response.text,
                debug_help=response.headers.get(DEBUG_HELP_HEADER)
            )

        return response

    def _http_headers(self) -> Dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "Content-Type": "application/x-www-form-urlencoded"
        }

    @staticmethod
    def _raise_with_response(response: requests.Response):
        debug_help = response.headers.get(DEBUG_HELP_HEADER)
        # Comment methods answer "invalid" when the key in the host is bad
        code = ProtocolError.INVALID_API_KEY if response.text == "invalid" else ProtocolError.UNKNOWN

        logger.error("Unexpected response from Akismet: %r (%s)", response.text, debug_help)
        raise ProtocolError(
            debug_help or "Unknown error",
            code=code,
            status_code=response.status_code,
            body=response.text,
            debug_help=debug_help
        )

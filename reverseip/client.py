"""Entry point: a configured client for the Reverse IP/DNS API."""

from __future__ import annotations

import requests

from .config import DEFAULT_BASE_URL, MAX_RESPONSE_SIZE, REQUEST_TIMEOUT, USER_AGENT
from .context import Context
from .models import LookupResponse, Response
from .options import Option
from .service import IPInput, ReverseIPService
from .transport import Transport, validate_url


class Client:
    """Reverse IP/DNS API client.

    Usage::

        client = Client("at_...")
        page, raw = client.get("8.8.8.8", from_domain("1"))
        for record in page.results:
            print(record.name, record.first_seen_at)

    The configuration is fixed at construction; a client may be shared
    between threads.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        max_response_size: int = MAX_RESPONSE_SIZE,
        user_agent: str = USER_AGENT,
    ):
        validate_url(base_url)

        self.transport = Transport(
            session=session,
            timeout=timeout,
            max_response_size=max_response_size,
            user_agent=user_agent,
        )
        self.reverse_ip = ReverseIPService(self.transport, base_url, api_key)

    @property
    def base_url(self) -> str:
        return self.reverse_ip.base_url

    def get(
        self, ip: IPInput, *options: Option, ctx: Context | None = None
    ) -> tuple[LookupResponse, Response]:
        """Parsed lookup; see :meth:`ReverseIPService.get`."""
        return self.reverse_ip.get(ip, *options, ctx=ctx)

    def get_raw(self, ip: IPInput, *options: Option, ctx: Context | None = None) -> Response:
        """Raw lookup; see :meth:`ReverseIPService.get_raw`."""
        return self.reverse_ip.get_raw(ip, *options, ctx=ctx)

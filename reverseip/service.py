"""Reverse IP/DNS API calls: parsed lookups and raw responses."""

from __future__ import annotations

import ipaddress
import logging
from typing import Union

from .context import Context
from .errors import ArgumentError, ParseError
from .models import LookupResponse, Response
from .options import Option, apply_options, output_format
from .parser import parse
from .transport import Transport, check_response

logger = logging.getLogger(__name__)

IPInput = Union[str, bytes, bytearray, ipaddress.IPv4Address, ipaddress.IPv6Address, None]


class ReverseIPService:
    """Operations of the Reverse IP/DNS API."""

    def __init__(self, transport: Transport, base_url: str, api_key: str):
        self.transport = transport
        self.base_url = base_url
        self._api_key = api_key

    def new_request(self, params: dict[str, str] | None = None):
        """Create the API request with the API key and *params* attached."""
        query = {"apiKey": self._api_key}
        query.update(params or {})
        return self.transport.new_request(self.base_url, query)

    def get(
        self, ip: IPInput, *options: Option, ctx: Context | None = None
    ) -> tuple[LookupResponse, Response]:
        """Look up the domains seen on *ip*.

        Returns the parsed page together with the raw response. The output
        format is always JSON; an ``output_format`` option is overridden.

        The status code is not checked: a body holding an error report
        raises :class:`APIError` whatever the status, and an undecodable
        body raises :class:`ParseError`. Both carry the raw response.
        """
        ip_string = ip_to_string(ip)

        resp = self._request(ctx, ip_string, (*options, output_format("JSON")))

        try:
            envelope = parse(resp.body)
        except ParseError as exc:
            exc.response = resp
            raise

        if envelope.is_error:
            logger.debug("error payload for %s: code=%d", ip_string, envelope.code)
            err = envelope.api_error()
            err.response = resp
            raise err

        return envelope.lookup_response(), resp

    def get_raw(self, ip: IPInput, *options: Option, ctx: Context | None = None) -> Response:
        """Fetch the response for *ip* without decoding it.

        A non-2xx status raises :class:`StatusError`; the response is still
        available as the exception's ``response``.
        """
        ip_string = ip_to_string(ip)

        resp = self._request(ctx, ip_string, options)
        check_response(resp)
        return resp

    def _request(self, ctx: Context | None, ip: str, options) -> Response:
        params = apply_options({}, options)
        params["ip"] = ip

        request = self.new_request(params)
        return self.transport.do(ctx if ctx is not None else Context(), request)


def ip_to_string(ip: IPInput) -> str:
    """Render *ip* as the text sent to the API.

    Accepts text, :mod:`ipaddress` objects, and packed 4- or 16-byte
    addresses. Packed bytes of any other length are sent as ``?`` plus
    their hex digits and left for the service to reject. Raises
    :class:`ArgumentError` for an empty value.
    """
    if isinstance(ip, (bytes, bytearray)):
        if not ip:
            raise ArgumentError("ip", "can not be empty")
        if len(ip) not in (4, 16):
            return "?" + bytes(ip).hex()
        ip = ipaddress.ip_address(bytes(ip))

    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped

    text = "" if ip is None else str(ip).strip()
    if not text:
        raise ArgumentError("ip", "can not be empty")
    return text

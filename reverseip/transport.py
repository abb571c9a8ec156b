"""HTTP execution: build requests, send them, and drain response bodies."""

from __future__ import annotations

import logging
import socket
import threading
from urllib.parse import urlsplit

import requests
from requests.structures import CaseInsensitiveDict
from urllib3.exceptions import ProtocolError

from .config import MAX_RESPONSE_SIZE, READ_CHUNK_SIZE, REQUEST_TIMEOUT, USER_AGENT
from .context import Context
from .errors import (
    CancelledError,
    DeadlineExceededError,
    ReadError,
    StatusError,
    TransportError,
)
from .models import Response

logger = logging.getLogger(__name__)


class Transport:
    """Wraps a ``requests.Session`` with the client's fixed settings.

    Settings are read-only after construction, so one transport can serve
    several threads.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        max_response_size: int = MAX_RESPONSE_SIZE,
        user_agent: str = USER_AGENT,
    ):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.max_response_size = max_response_size
        self.user_agent = user_agent

    def new_request(self, url: str, params: dict[str, str] | None = None) -> requests.Request:
        """Create a GET request for *url* with the given query parameters."""
        validate_url(url)
        return requests.Request(
            "GET",
            url,
            params=dict(params or {}),
            headers={"User-Agent": self.user_agent, "Accept": "application/json"},
        )

    def do(self, ctx: Context, request: requests.Request) -> Response:
        """Send *request* and read the whole body, whatever the status.

        Errors carry the :class:`Response` captured so far, except for
        cancellation, which carries none.
        """
        ctx.check()

        prepared = self.session.prepare_request(request)
        timeout = self._socket_timeout(ctx)
        logger.debug("GET %s (timeout=%.1fs)", _redact(request.url), timeout)

        try:
            resp = self.session.send(prepared, stream=True, timeout=timeout)
        except requests.Timeout as exc:
            if ctx.expired():
                raise DeadlineExceededError() from exc
            raise TransportError(str(exc), Response(url=request.url)) from exc
        except requests.RequestException as exc:
            raise TransportError(str(exc), Response(url=request.url)) from exc

        watchdog = _Watchdog(ctx, resp)
        try:
            ctx.check()
            return self._read(ctx, resp, watchdog)
        finally:
            watchdog.stop()
            resp.close()

    def _read(self, ctx: Context, resp: requests.Response, watchdog: _Watchdog) -> Response:
        body = bytearray()
        request_url = resp.url or ""

        def snapshot() -> Response:
            return Response(
                status_code=resp.status_code,
                headers=CaseInsensitiveDict(resp.headers),
                body=bytes(body),
                url=request_url,
                reason=resp.reason or "",
            )

        try:
            for chunk in resp.iter_content(chunk_size=READ_CHUNK_SIZE):
                err = watchdog.error or ctx.error()
                if err is not None:
                    raise err
                body.extend(chunk)
                if len(body) > self.max_response_size:
                    del body[self.max_response_size:]
                    raise ReadError(
                        f"body exceeds {self.max_response_size} bytes", snapshot()
                    )
        except CancelledError:
            logger.debug("read of %s abandoned after %d bytes", _redact(request_url), len(body))
            raise
        except (requests.RequestException, ProtocolError, OSError) as exc:
            if watchdog.error is not None:
                raise watchdog.error from exc
            if ctx.expired():
                raise DeadlineExceededError() from exc
            # A body cut short of its Content-Length surfaces as a broken stream.
            if isinstance(exc, (requests.exceptions.ChunkedEncodingError, ProtocolError)):
                reason = "unexpected EOF"
            else:
                reason = str(exc)
            logger.debug("read of %s failed after %d bytes: %s", _redact(request_url), len(body), exc)
            raise ReadError(reason, snapshot()) from exc

        # An aborted stream without Content-Length ends like a complete one.
        if watchdog.error is not None:
            raise watchdog.error

        logger.debug(
            "%s %s: %d bytes", resp.status_code, _redact(request_url), len(body)
        )
        return snapshot()

    def _socket_timeout(self, ctx: Context) -> float:
        remaining = ctx.remaining()
        if remaining is None:
            return self.timeout
        if remaining <= 0:
            raise DeadlineExceededError()
        return min(self.timeout, remaining)


def validate_url(url: str) -> None:
    """Raise ValueError unless *url* is an absolute http(s) URL."""
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"invalid base URL: {url!r}")


def check_response(response: Response) -> None:
    """Raise :class:`StatusError` unless the status code is 2xx."""
    if response.ok:
        return
    logger.debug("status %d classified as failure", response.status_code)
    raise StatusError(response.status_code, response)


def _redact(url: str | None) -> str:
    """Drop the query string, which holds the API key."""
    if not url:
        return ""
    return url.split("?", 1)[0]


class _Watchdog:
    """Aborts a streamed response once its context is cancelled or expires.

    Shutting the socket down wakes a read blocked in another thread; the
    reader then sees a broken stream and raises :attr:`error` instead.
    """

    def __init__(self, ctx: Context, resp: requests.Response):
        self.error: CancelledError | None = None
        self._resp = resp
        self._timer = None
        self._unregister = ctx.on_cancel(lambda: self._abort(CancelledError()))

        remaining = ctx.remaining()
        if remaining is not None and self.error is None:
            self._timer = threading.Timer(remaining, self._abort, args=(DeadlineExceededError(),))
            self._timer.daemon = True
            self._timer.start()

    def stop(self) -> None:
        self._unregister()
        if self._timer is not None:
            self._timer.cancel()

    def _abort(self, error: CancelledError) -> None:
        if self.error is not None:
            return
        self.error = error
        logger.debug("aborting response read: %s", error)
        conn = getattr(getattr(self._resp, "raw", None), "connection", None)
        sock = getattr(conn, "sock", None)
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass

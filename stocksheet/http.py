from collections.abc import MutableMapping
from dataclasses import dataclass, field
from http.client import HTTPException, HTTPResponse
from typing import cast
import logging
import urllib.error
import urllib.parse
import urllib.request

from stocksheet.errors import ConnectionError

logger = logging.getLogger(__name__)


@dataclass
class Response:
    status: int = 0
    headers: dict[str, object] = field(default_factory=dict)
    body: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def request(
    url: str,
    method: str = "GET",
    headers: MutableMapping[str, str] | None = None,
    params: dict[str, object] | None = None,
    timeout: float = 10.0,
) -> Response:
    """
    Issue a single HTTP request.

    Args:
        url (str): The URL to request.
        method (str): HTTP method ('GET', 'POST', etc.).
        headers (dict): Optional HTTP headers.
        params (dict): Query parameters for GET requests.
        timeout (float): Timeout in seconds.

    Returns:
        Response: status, headers and decoded body. Non-2xx answers are
        returned too, it is up to the caller to inspect the status.

    Raises:
        ConnectionError: the server could not be reached, timed out or
            sent a broken answer. Undecodable bytes in the body are replaced,
            not raised.
    """
    if params and method.upper() == "GET":
        query_string = urllib.parse.urlencode(params, safe="|")
        url = f"{url}?{query_string}"

    headers = headers or {}
    req = urllib.request.Request(url, headers=dict(headers), method=method)
    logger.debug(f"{method} {url}")

    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp_any:
            response = cast(HTTPResponse, resp_any)
            body = response.read().decode("utf-8", errors="replace").strip()

            return Response(
                status=response.status,
                headers=dict(response.getheaders()),
                body=body,
            )
    except urllib.error.HTTPError as e:
        # HTTPError is also a URLError, so it has to be handled first
        try:
            body = e.read().decode("utf-8", errors="replace").strip()
        except (OSError, HTTPException):
            body = None
        return Response(
            status=e.code,
            headers=dict(e.headers.items()) if e.headers else {},
            body=body,
        )
    except urllib.error.URLError as e:
        raise ConnectionError(e.reason) from e
    except (OSError, HTTPException) as e:
        raise ConnectionError(e) from e

"""Shared fixtures for the stocksheet tests."""

import io
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from email.message import Message
from decimal import Decimal

import pytest

from stocksheet.data.chart import Quote


class FakeClient:
    """Answers fetch() from a symbol -> Quote | QuoteError table."""

    def __init__(self, answers: dict[str, Quote | Exception]):
        self.answers = answers
        self.calls: list[str] = []

    def fetch(self, symbol: str) -> Quote:
        self.calls.append(symbol)
        answer = self.answers[symbol]
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture(autouse=True)
def _isolate_logging_and_cache(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    yield
    logger = logging.getLogger("stocksheet")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def quote():
    def _quote(price="100.00", previous_close="98.00", currency="USD") -> Quote:
        return Quote(
            price=Decimal(price),
            previous_close=Decimal(previous_close),
            currency=currency,
        )

    return _quote


@pytest.fixture
def chart_body():
    def _chart_body(symbol="GOOG", result=True, error=None, **meta) -> str:
        fields = {
            "symbol": symbol,
            "currency": "USD",
            "exchangeName": "NMS",
            "instrumentType": "EQUITY",
            "regularMarketPrice": 100.0,
            "previousClose": 98.0,
            "chartPreviousClose": 97.5,
            "regularMarketTime": 1718049600,
            "gmtoffset": -14400,
        }
        fields.update(meta)
        fields = {k: v for k, v in fields.items() if v is not None}
        return json.dumps(
            {
                "chart": {
                    "result": [{"meta": fields, "timestamp": []}] if result else [],
                    "error": error,
                }
            }
        )

    return _chart_body


class WireResponse:
    """Stands in for the object urlopen returns."""

    def __init__(self, status: int, body: bytes, error: Exception | None = None):
        self.status = status
        self._body = body
        self._error = error

    def read(self) -> bytes:
        if self._error:
            raise self._error
        return self._body

    def getheaders(self):
        return [("Content-Type", "application/json")]

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False


@pytest.fixture
def wire(monkeypatch):
    """
    Replaces urlopen with a symbol -> answer table. An answer is raw body
    bytes for a 200, a (status, bytes) pair, or an exception raised while
    reading the body.
    """

    def _wire(answers: dict[str, object]) -> None:
        def fake_urlopen(req, timeout):
            path = urllib.parse.urlsplit(req.full_url).path
            answer = answers[urllib.parse.unquote(path.rsplit("/", 1)[-1])]
            if isinstance(answer, Exception):
                return WireResponse(200, b"", error=answer)
            if isinstance(answer, tuple):
                status, body = answer
                raise urllib.error.HTTPError(
                    req.full_url, status, "error", Message(), io.BytesIO(body)
                )
            return WireResponse(200, answer)

        monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    return _wire

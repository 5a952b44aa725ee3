import json
import logging
import urllib.parse
from decimal import Decimal
from typing import cast

from dacite import Config, DaciteError, from_dict

from stocksheet import http
from stocksheet.data.chart import ChartResponse, Quote
from stocksheet.errors import HttpError, MalformedResponse, NoDataError
from stocksheet.util import misc

logger = logging.getLogger(__name__)

CHART_URL = "https://query1.finance.yahoo.com/v8/finance/chart/{symbol}"
USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

dacite_config = Config(type_hooks={Decimal: misc.decimal_hook})


def _decode(body: str | None) -> ChartResponse:
    if not body:
        raise MalformedResponse("empty response body")
    try:
        json_data = json.loads(body, parse_float=Decimal)
    except ValueError as e:
        raise MalformedResponse(e) from e
    if not isinstance(json_data, dict):
        raise MalformedResponse("expected a json object")
    try:
        return from_dict(
            data_class=ChartResponse,
            data=cast(dict[str, object], json_data),
            config=dacite_config,
        )
    except DaciteError as e:
        raise MalformedResponse(e) from e


def _error_description(body: str | None) -> str | None:
    """
    Yahoo explains most failures in chart.error, even on a 404.
    """
    try:
        chart = _decode(body).chart
    except MalformedResponse:
        return None
    if chart.error and chart.error.description:
        return chart.error.description
    return None


class YahooClient:
    def __init__(self, timeout: float = 10.0, events: bool = False) -> None:
        self.timeout = timeout
        self.events = events

    def chart_url(self, symbol: str) -> str:
        return CHART_URL.format(symbol=urllib.parse.quote(symbol, safe=""))

    def params(self, symbol: str) -> dict[str, object]:
        params: dict[str, object] = {
            "symbol": symbol,
            "interval": "1m",
            "range": "1m",
        }
        if self.events:
            params["events"] = "div|split"
        return params

    def fetch(self, symbol: str) -> Quote:
        """
        Fetch the latest quote for a symbol. One attempt, no retries.

        Raises:
            ConnectionError: the api could not be reached.
            HttpError: the api answered with a non-2xx status.
            MalformedResponse: the body is not the chart document we expect.
            NoDataError: the api returned an empty result set.
        """
        logger.debug(f"requesting quote for {symbol}")
        response = http.request(
            url=self.chart_url(symbol),
            method="GET",
            headers={"Accept": "application/json", "User-Agent": USER_AGENT},
            params=self.params(symbol),
            timeout=self.timeout,
        )

        if not response.ok:
            raise HttpError(response.status, _error_description(response.body))

        chart = _decode(response.body).chart
        if not chart.result:
            raise NoDataError(symbol)

        meta = chart.result[0].meta
        if meta.symbol and meta.symbol.upper() != symbol.upper():
            raise MalformedResponse(
                f"asked for {symbol} but received {meta.symbol}"
            )
        if meta.regularMarketPrice is None:
            raise MalformedResponse("missing regularMarketPrice")

        previous_close = (
            meta.previousClose
            if meta.previousClose is not None
            else meta.chartPreviousClose
        )
        if previous_close is None:
            raise MalformedResponse("missing previousClose and chartPreviousClose")
        if meta.currency is None:
            raise MalformedResponse("missing currency")

        return Quote(
            price=meta.regularMarketPrice,
            previous_close=previous_close,
            currency=meta.currency,
        )

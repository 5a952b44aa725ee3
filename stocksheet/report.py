import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol

from stocksheet.data.chart import Quote
from stocksheet.data.config import Ticker
from stocksheet.errors import QuoteError
from stocksheet.pacing import Pacer

logger = logging.getLogger(__name__)


class QuoteSource(Protocol):
    def fetch(self, symbol: str) -> Quote: ...


@dataclass(frozen=True)
class QuoteRow:
    ticker: str
    quantity: int
    price: Decimal
    change: Decimal
    total: Decimal
    currency: str


@dataclass(frozen=True)
class FailedRow:
    ticker: str
    quantity: int
    error: str | None = None


Row = QuoteRow | FailedRow


@dataclass
class Report:
    rows: list[Row] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        """
        Sum of the unrounded valuations of every successful row.
        """
        return sum(
            (row.total for row in self.rows if isinstance(row, QuoteRow)),
            Decimal(0),
        )

    @property
    def failures(self) -> list[FailedRow]:
        return [row for row in self.rows if isinstance(row, FailedRow)]


def build_row(
    ticker: Ticker, quote: Quote | None = None, error: QuoteError | None = None
) -> Row:
    if quote is not None:
        return QuoteRow(
            ticker=ticker.id,
            quantity=ticker.quantity,
            price=quote.price,
            change=quote.change,
            total=quote.price * ticker.quantity,
            currency=quote.currency,
        )

    logger.warning(f"failed to get a quote for {ticker.id}: {error}")
    return FailedRow(
        ticker=ticker.id,
        quantity=ticker.quantity,
        error=str(error) if error else None,
    )


def assemble(
    tickers: Iterable[Ticker],
    client: QuoteSource,
    pacer: Pacer,
    progress: Callable[[Ticker], None] | None = None,
) -> Report:
    """
    Fetch a quote for every ticker, one at a time, and build the report.

    A ticker whose quote cannot be fetched ends up as a FailedRow, the
    remaining tickers are still processed. Rows keep the order of `tickers`.
    """
    report = Report()

    for ticker in tickers:
        logger.debug(f"fetching {ticker.id}")
        try:
            with pacer:
                quote = client.fetch(ticker.id)
        except QuoteError as e:
            report.rows.append(build_row(ticker=ticker, error=e))
        else:
            report.rows.append(build_row(ticker=ticker, quote=quote))

        if progress:
            progress(ticker)

    logger.info(
        f"fetched {len(report.rows) - len(report.failures)} of {len(report.rows)} quotes"
    )
    return report

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class ChartMeta:
    symbol: str | None = None
    currency: str | None = None
    exchangeName: str | None = None
    instrumentType: str | None = None
    regularMarketPrice: Decimal | None = None
    previousClose: Decimal | None = None
    chartPreviousClose: Decimal | None = None


@dataclass
class ChartResult:
    meta: ChartMeta = field(default_factory=ChartMeta)


@dataclass
class ChartError:
    code: str | None = None
    description: str | None = None


@dataclass
class Chart:
    result: list[ChartResult] | None = None
    error: ChartError | None = None


@dataclass
class ChartResponse:
    chart: Chart


@dataclass(frozen=True)
class Quote:
    price: Decimal
    previous_close: Decimal
    currency: str

    @property
    def change(self) -> Decimal:
        return self.price - self.previous_close

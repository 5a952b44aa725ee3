from dataclasses import dataclass, field


@dataclass(frozen=True)
class Ticker:
    id: str
    quantity: int = 0


@dataclass(frozen=True)
class Configuration:
    output_file: str | None = None
    tickers: list[Ticker] = field(default_factory=list)

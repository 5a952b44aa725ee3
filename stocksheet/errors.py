class StockSheetError(Exception):
    """
    Base class for every error raised by stocksheet.
    """


class QuoteError(StockSheetError):
    """
    A quote could not be obtained for a single ticker. Recoverable, the
    report carries on with the next ticker.
    """


class ConnectionError(QuoteError):
    def __init__(self, reason: object) -> None:
        super().__init__(f"failed to connect to yahoo api: {reason}")
        self.reason = reason


class HttpError(QuoteError):
    def __init__(self, status: int, description: str | None = None) -> None:
        message = f"yahoo responded with http code: {status}"
        if description:
            message = f"{message} ({description})"
        super().__init__(message)
        self.status = status
        self.description = description


class MalformedResponse(QuoteError):
    def __init__(self, detail: object) -> None:
        super().__init__(f"failed to deserialize json: {detail}")
        self.detail = detail


class NoDataError(QuoteError):
    def __init__(self, symbol: str) -> None:
        super().__init__(f"no data provided for {symbol}")
        self.symbol = symbol


class ConfigError(StockSheetError):
    pass

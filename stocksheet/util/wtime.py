from datetime import datetime


def query_timestamp(now: datetime | None = None) -> str:
    """
    Local wall-clock time of a query, to the second.
    """
    now = now or datetime.now()
    return now.replace(microsecond=0).isoformat(sep=" ")

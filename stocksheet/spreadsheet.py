import csv
import logging
from pathlib import Path

from stocksheet.report import FailedRow, QuoteRow, Report, Row
from stocksheet.util.conversion import pad_float

logger = logging.getLogger(__name__)

HEADER = ["Ticker", "Price", "Change", "Quantity", "Total", "Currency"]


def render_row(row: Row) -> list[str]:
    match row:
        case QuoteRow():
            return [
                row.ticker,
                pad_float(row.price),
                pad_float(row.change),
                str(row.quantity),
                pad_float(row.total),
                row.currency,
            ]
        case FailedRow():
            return [row.ticker, "", "", str(row.quantity), "", ""]
    raise TypeError(f"not a report row: {row!r}")


def render(report: Report) -> list[list[str]]:
    """
    Lay the report out as spreadsheet lines: header, one line per row, a
    blank separator and the total under the Total column.
    """
    lines = [list(HEADER)]
    lines.extend(render_row(row) for row in report.rows)
    lines.append([""] * len(HEADER))
    lines.append(["", "", "", "", pad_float(report.total), ""])
    return lines


def write(report: Report, path: Path) -> list[list[str]]:
    """
    Write the report to `path` as CSV. OSError propagates to the caller.
    """
    lines = render(report)
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerows(lines)
    logger.info(f"wrote {len(report.rows)} rows to {path}")
    return lines

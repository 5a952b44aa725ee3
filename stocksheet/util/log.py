import logging
import sys
from pathlib import Path


class BracketLevelFormatter(logging.Formatter):
    """
    Exposes %(level)s as "[WARNING]" and %(level_column)s as the same text
    left-justified to the widest level name, for aligned logfiles.
    """

    width = len("[CRITICAL]")

    def format(self, record):
        record.level = f"[{record.levelname}]"
        record.level_column = record.level.ljust(self.width)
        return super().format(record)


def configure(
    debug: bool, name: str = "stocksheet", logfile: Path | None = None
) -> logging.Logger:
    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Warnings go to the terminal, everything goes to the logfile
    logger.propagate = False

    # Do not add handlers twice
    if logger.handlers:
        for h in logger.handlers:
            if not isinstance(h, logging.FileHandler):
                h.setLevel(level if debug else logging.WARNING)
        return logger

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level if debug else logging.WARNING)
    console.setFormatter(BracketLevelFormatter("%(level)s %(message)s"))
    logger.addHandler(console)

    if logfile:
        handler = logging.FileHandler(logfile, mode="a", encoding="utf-8")
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(
            BracketLevelFormatter(
                "%(asctime)s %(level_column)s %(name)s.%(funcName)s - %(message)s"
            )
        )
        logger.addHandler(handler)

    return logger

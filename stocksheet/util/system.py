import logging
import os
from pathlib import Path

import click

logger = logging.getLogger(__name__)

APP_NAME = "stock-spreadsheet"


def get_cache_directory() -> Path | None:
    """
    Return the directory the logfile lives in, creating it when needed, or
    None when it cannot be created.
    """
    xdg_cache = os.environ.get("XDG_CACHE_HOME")
    if xdg_cache:
        cache_dir = Path(xdg_cache) / APP_NAME
    else:
        cache_dir = Path.home() / ".cache" / APP_NAME

    if not cache_dir.exists():
        try:
            cache_dir.mkdir(mode=0o700, parents=True)
        except OSError as e:
            click.echo(f'Couldn\'t create "{cache_dir}": {e}', err=True)
            return None

    return cache_dir


def open_file(path: Path) -> bool:
    """
    Ask the desktop to open `path` with its default application. Failures are
    logged and reported through the return value, never raised.
    """
    try:
        rc = click.launch(str(path))
    except OSError as e:
        logger.warning(f"failed to open {path}: {e}")
        return False

    if rc != 0:
        logger.warning(f"failed to open {path}: the opener exited with {rc}")
        return False

    logger.debug(f"opened {path}")
    return True

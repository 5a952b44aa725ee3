import logging
import tomllib
from pathlib import Path
from typing import cast

from dacite import Config, DaciteError, from_dict

from stocksheet.data.config import Configuration
from stocksheet.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = b"""\
# output_file = "portfolio.csv"

[[tickers]]
id = "GOOG"

[[tickers]]
id = "MSFT"
quantity = 7
"""


def _normalize(data: dict[str, object]) -> dict[str, object]:
    # older config files call the held quantity "volume"
    tickers = data.get("tickers", [])
    if not isinstance(tickers, list):
        return data

    normalized: list[object] = []
    for entry in tickers:
        if isinstance(entry, dict) and "volume" in entry:
            if "quantity" in entry:
                raise ConfigError(
                    f"ticker {entry.get('id')} sets both quantity and volume"
                )
            entry = dict(entry)
            entry["quantity"] = entry.pop("volume")
        normalized.append(entry)

    return {**data, "tickers": normalized}


def _validate(configuration: Configuration):
    for ticker in configuration.tickers:
        if not ticker.id.strip():
            raise ConfigError("ticker id must not be empty")
        if isinstance(ticker.quantity, bool) or ticker.quantity < 0:
            raise ConfigError(
                f"quantity for {ticker.id} must be a non-negative integer"
            )


def parse(text: str) -> Configuration:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"failed to parse configuration file: {e}") from e

    try:
        configuration = from_dict(
            data_class=Configuration,
            data=_normalize(cast(dict[str, object], data)),
            config=Config(strict=True),
        )
    except DaciteError as e:
        raise ConfigError(f"invalid configuration: {e}") from e

    _validate(configuration)
    return configuration


def load(path: Path) -> Configuration:
    """
    Load the configuration from `path`, creating the default one first if the
    file does not exist. OSError propagates to the caller.
    """
    if not path.exists():
        logger.warning(f"no config file found, creating the default one at {path}")
        path.write_bytes(DEFAULT_CONFIG)

    configuration = parse(path.read_text(encoding="utf-8"))
    logger.debug(f"loaded {len(configuration.tickers)} tickers from {path}")
    return configuration


def output_path(config_path: Path, configuration: Configuration) -> Path:
    """
    Where the spreadsheet goes: the configured output_file, otherwise the
    config path with a .csv suffix.
    """
    if configuration.output_file:
        return Path(configuration.output_file).expanduser()
    return config_path.with_suffix(".csv")

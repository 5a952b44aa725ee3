import logging
import time
from pathlib import Path

import click

from stocksheet import config, report, spreadsheet
from stocksheet.data.config import Configuration
from stocksheet.errors import ConfigError
from stocksheet.pacing import Pacer
from stocksheet.util import log, system, wtime
from stocksheet.yahoo import YahooClient

context_settings = dict(help_option_names=["-h", "--help"])
logger: logging.Logger = logging.getLogger("stocksheet")


def render_table(lines: list[list[str]]) -> str:
    widths = [0] * max(len(line) for line in lines)
    for line in lines:
        for idx, value in enumerate(line):
            widths[idx] = len(value) if len(value) > widths[idx] else widths[idx]

    table: list[str] = []
    for line in lines:
        table.append(
            "  ".join(f"{value:{widths[idx]}}" for idx, value in enumerate(line))
            .rstrip()
        )
    return "\n".join(table)


def generate(
    configuration: Configuration,
    output: Path,
    client: YahooClient,
    pacer: Pacer,
    quiet: bool,
) -> report.Report:
    click.echo(f"Query time: {wtime.query_timestamp()}")

    with click.progressbar(
        length=len(configuration.tickers), label="Fetching quotes"
    ) as bar:
        result = report.assemble(
            tickers=configuration.tickers,
            client=client,
            pacer=pacer,
            progress=lambda _ticker: bar.update(1),
        )

    try:
        lines = spreadsheet.write(report=result, path=output)
    except OSError as e:
        raise click.ClickException(f"unable to write {output}: {e}") from e

    if not quiet:
        click.echo(render_table(lines))

    if result.failures:
        click.echo(
            f"{len(result.failures)} of {len(result.rows)} quotes could not be fetched",
            err=True,
        )

    return result


def wait(interval: int):
    with click.progressbar(
        range(interval), label="Next query in", show_eta=False
    ) as bar:
        for _ in bar:
            time.sleep(1)


@click.command(
    help="Create a spreadsheet of your stock holdings from Yahoo! Finance quotes",
    context_settings=context_settings,
)
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default="stocks.toml",
    show_default=True,
    help="The TOML file listing the tickers, created if missing",
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the spreadsheet here instead of the configured path",
)
@click.option(
    "--delay",
    type=click.IntRange(min=0),
    default=300,
    show_default=True,
    help="Minimum gap between two requests (in milliseconds), 0 disables it",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=10.0,
    show_default=True,
    help="Give up on a single request after this many seconds",
)
@click.option(
    "--events",
    default=False,
    is_flag=True,
    help="Ask Yahoo for dividend and split events along with the quote",
)
@click.option(
    "--open/--no-open",
    "open_file",
    default=True,
    show_default=True,
    help="Open the spreadsheet when it has been written",
)
@click.option(
    "-q", "--quiet", default=False, is_flag=True, help="Do not print the table"
)
@click.option(
    "-i",
    "--interval",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Query again every N seconds, 0 queries once",
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(
    config_file: Path,
    output: Path | None,
    delay: int,
    timeout: float,
    events: bool,
    open_file: bool,
    quiet: bool,
    interval: int,
    debug: bool,
):
    global logger

    cache_dir = system.get_cache_directory()
    logfile = cache_dir / "stock-spreadsheet.log" if cache_dir else None
    logger = log.configure(debug=debug, name="stocksheet", logfile=logfile)
    logger.info("entering function")

    try:
        configuration = config.load(config_file)
    except ConfigError as e:
        raise click.ClickException(f"{config_file}: {e}") from e
    except OSError as e:
        raise click.ClickException(f"unable to read {config_file}: {e}") from e

    output = output or config.output_path(config_file, configuration)
    logger.info(f"{len(configuration.tickers)} tickers, writing to {output}")

    client = YahooClient(timeout=timeout, events=events)
    pacer = Pacer(delay=delay / 1000)
    opened = False

    while True:
        generate(
            configuration=configuration,
            output=output,
            client=client,
            pacer=pacer,
            quiet=quiet,
        )

        if open_file and not opened:
            system.open_file(output)
            opened = True

        if interval == 0:
            break
        wait(interval)


if __name__ == "__main__":
    main()

import asyncio

import click

from .api import preload_caching_fetch, serialize_cache
from .cli_options import LOG_LEVELS, SnapshotOptions, configure_logging
from .config import resolve_url
from .errors import CachingFetchError


@click.command()
@click.argument("url", required=False)
@click.option(
    "--output",
    "output_path",
    type=click.Path(dir_okay=False, path_type=str),
    default="-",
    show_default=True,
    help="File to write the serialized cache to; '-' writes to stdout.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity.",
)
def click_main(url: str | None, output_path: str, log_level: str) -> None:
    """Fetch the people resource once and write the serialized cache.

    This is the server half of the handoff: the output is the text a client
    passes to hydrate. URL defaults to $CACHING_FETCH_URL.
    """
    options = SnapshotOptions(
        url=resolve_url(url),
        output_path=output_path,
        log_level=log_level,
    )
    _run_snapshot(options)


def _run_snapshot(options: SnapshotOptions) -> None:
    configure_logging(options.log_level)
    try:
        asyncio.run(preload_caching_fetch(options.url))
    except CachingFetchError as exc:
        raise click.ClickException(str(exc)) from exc

    serialized = serialize_cache()
    if options.writes_to_stdout():
        click.echo(serialized)
        return
    with open(options.output_path, "w", encoding="utf-8") as handle:
        handle.write(serialized + "\n")
    click.echo(f"Serialized cache written to {options.output_path}")


def main() -> None:
    click_main(standalone_mode=True)


if __name__ == "__main__":
    main()

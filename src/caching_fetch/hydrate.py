import asyncio

import click

from .api import fetch_or_reuse, initialize_cache
from .cli_options import LOG_LEVELS, HydrateOptions, configure_logging
from .config import resolve_url
from .errors import CachingFetchError
from .fetcher import default_coordinator


@click.command()
@click.argument(
    "cache_file", type=click.Path(exists=True, dir_okay=False, path_type=str)
)
@click.argument("url", required=False)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Logging verbosity.",
)
def click_main(cache_file: str, url: str | None, log_level: str) -> None:
    """Initialize the cache from a snapshot file and list the people it serves.

    A non-empty snapshot is served without touching the network; an empty one
    falls back to fetching URL (default $CACHING_FETCH_URL).
    """
    options = HydrateOptions(
        cache_file=cache_file,
        url=resolve_url(url),
        log_level=log_level,
    )
    _run_hydrate(options)


def _run_hydrate(options: HydrateOptions) -> None:
    configure_logging(options.log_level)
    with open(options.cache_file, "r", encoding="utf-8") as handle:
        serialized = handle.read()

    try:
        initialize_cache(serialized)
        people = asyncio.run(fetch_or_reuse(options.url))
    except CachingFetchError as exc:
        raise click.ClickException(str(exc)) from exc

    for person in people:
        click.echo(_describe(person))
    click.echo(
        f"{len(people)} people served from {default_coordinator.last_response_source}"
    )


def _describe(person) -> str:
    if not isinstance(person, dict):
        return repr(person)
    name = " ".join(
        part for part in (person.get("first"), person.get("last")) if part
    )
    email = person.get("email")
    return f"{name} <{email}>" if email else name


def main() -> None:
    click_main(standalone_mode=True)


if __name__ == "__main__":
    main()

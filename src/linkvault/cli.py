"""CLI entry point for linkvault."""

import sys
from pathlib import Path

import click

from .config import Config, load_config
from .enrichment import generate_summary, save_summary_and_generate_tags
from .exceptions import (
    ConfigError,
    InvalidInputError,
    ItemNotFoundError,
    LinkVaultError,
    StoreError,
)
from .extractor import Extractor
from .formatter import format_item, format_item_line, format_progress, progress_json
from .lifecycle import ItemStatus
from .llm import get_llm_provider
from .logging_setup import setup_logging
from .pipeline import bulk_import, single_import
from .store import ItemStore


class AppContext:
    """Lazily built collaborators shared by all commands."""

    def __init__(self, config: Config):
        self.config = config
        self._store = None
        self._extractor = None

    @property
    def user_id(self) -> str:
        if not self.config.user_id:
            _fail("A user is required. Pass --user or set LINKVAULT_USER.")
        return self.config.user_id

    @property
    def store(self) -> ItemStore:
        if self._store is None:
            self._store = ItemStore.from_url(self.config.database_url)
            self._store.init_schema()
        return self._store

    @property
    def extractor(self) -> Extractor:
        if self._extractor is None:
            _require(self.config, require_firecrawl=True)
            self._extractor = Extractor.from_config(self.config)
        return self._extractor


def _require(config: Config, **kwargs) -> None:
    try:
        config.validate(**kwargs)
    except ConfigError as e:
        _fail(f"Configuration error: {e}")


def _fail(message: str, code: int = 2) -> None:
    click.echo(message, err=True)
    sys.exit(code)


def _read_url_file(path: str) -> list[str]:
    lines = (line.strip() for line in Path(path).read_text(encoding="utf-8").splitlines())
    return [line for line in lines if line and not line.startswith("#")]


def _run_bulk(app: AppContext, urls: list[str], as_json: bool) -> None:
    try:
        run = bulk_import(urls, app.user_id, app.store, app.extractor)
    except (InvalidInputError, StoreError) as e:
        _fail(str(e))

    if not as_json:
        click.echo(f"Importing {run.total} URL(s)...")

    try:
        for event in run:
            click.echo(progress_json(event) if as_json else format_progress(event))
    except StoreError as e:
        _fail(f"Import aborted after {len(run.outcomes)} URL(s): {e}")

    if not as_json:
        click.echo(f"\nDone: {run.succeeded} imported, {run.failed} failed")

    if run.succeeded == 0:
        sys.exit(2)
    elif run.failed:
        sys.exit(1)


@click.group()
@click.option(
    "--user", "-u",
    "user_id",
    default=None,
    help="Id of the (already authenticated) user (default: LINKVAULT_USER env var)",
)
@click.option(
    "--database-url",
    default=None,
    help="SQLAlchemy database URL (default: DATABASE_URL env var)",
)
@click.option(
    "--provider",
    type=click.Choice(["claude", "openai", "openrouter"]),
    default=None,
    help="LLM provider for summaries and tags (default: LLM_PROVIDER env var)",
)
@click.option("--model", default=None, help="LLM model to use")
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
@click.pass_context
def main(ctx, user_id, database_url, provider, model, verbose):
    """Save web pages to your library.

    Example: linkvault -u alice bulk-import https://a.test/one https://b.test/two
    """
    try:
        config = load_config(
            database_url=database_url,
            provider=provider,
            model=model,
            user_id=user_id,
            verbose=verbose,
        )
    except ConfigError as e:
        _fail(f"Configuration error: {e}")

    setup_logging(config)
    ctx.obj = AppContext(config)


@main.command("init-db")
@click.pass_obj
def init_db_command(app: AppContext):
    """Create database tables."""
    try:
        ItemStore.from_url(app.config.database_url).init_schema()
    except LinkVaultError as e:
        _fail(f"Database error: {e}")
    click.echo(f"Database ready: {app.config.database_url}")


@main.command("import")
@click.argument("url")
@click.pass_obj
def import_command(app: AppContext, url):
    """Import a single URL."""
    try:
        item = single_import(url, app.user_id, app.store, app.extractor)
    except (InvalidInputError, StoreError) as e:
        _fail(str(e))

    if item.status == ItemStatus.FAILED:
        click.echo(f"Failed to import {url} (item {item.id})", err=True)
        sys.exit(1)
    click.echo(f"Imported: {item.title or url} (item {item.id})")


@main.command("bulk-import")
@click.argument("urls", nargs=-1)
@click.option(
    "--file", "-f",
    "url_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Read URLs from a file, one per line",
)
@click.option("--json", "as_json", is_flag=True, help="Print progress as JSON lines")
@click.pass_obj
def bulk_import_command(app: AppContext, urls, url_file, as_json):
    """Import several URLs, one at a time, reporting progress as it goes."""
    all_urls = list(urls)
    if url_file:
        all_urls.extend(_read_url_file(url_file))
    if not all_urls:
        _fail("No URLs given. Pass URLs as arguments or use --file.")
    _run_bulk(app, all_urls, as_json)


@main.command()
@click.argument("url")
@click.option("--search", "-s", default=None, help="Only keep links matching this term")
@click.option("--import", "do_import", is_flag=True, help="Bulk-import the discovered links")
@click.option("--json", "as_json", is_flag=True, help="Print import progress as JSON lines")
@click.pass_obj
def discover(app: AppContext, url, search, do_import, as_json):
    """Discover links under a site."""
    try:
        links = app.extractor.map_url(url, search=search)
    except LinkVaultError as e:
        _fail(f"Discovery failed: {e}")

    if not links:
        click.echo("No links found.")
        return

    if not do_import:
        for link in links:
            click.echo(link)
        return

    _run_bulk(app, links, as_json)


@main.command()
@click.argument("query")
@click.pass_obj
def search(app: AppContext, query):
    """Search the web for pages to import."""
    try:
        results = app.extractor.search_web(query)
    except LinkVaultError as e:
        _fail(f"Search failed: {e}")

    if not results:
        click.echo("No results.")
        return

    for i, result in enumerate(results, 1):
        click.echo(f"{i}. {result.title or result.url}")
        click.echo(f"   {result.url}")
        if result.description:
            click.echo(f"   {result.description}")


@main.command("items")
@click.pass_obj
def list_items(app: AppContext):
    """List saved items, newest first."""
    items = app.store.find_many(app.user_id)
    if not items:
        click.echo("No saved items.")
        return
    for item in items:
        click.echo(format_item_line(item))


@main.command()
@click.argument("item_id")
@click.pass_obj
def show(app: AppContext, item_id):
    """Show one saved item as markdown."""
    try:
        item = app.store.find_one(item_id, app.user_id)
    except ItemNotFoundError as e:
        _fail(str(e), code=1)
    click.echo(format_item(item), nl=False)


@main.command()
@click.argument("item_id")
@click.pass_obj
def summarize(app: AppContext, item_id):
    """Summarize an item with the LLM and tag it."""
    _require(app.config, require_llm=True)
    llm = get_llm_provider(app.config)

    try:
        item = app.store.find_one(item_id, app.user_id)
        summary = generate_summary(item, llm)
        item = save_summary_and_generate_tags(
            item.id, app.user_id, summary, app.store, llm
        )
    except ItemNotFoundError as e:
        _fail(str(e), code=1)
    except LinkVaultError as e:
        _fail(f"Summary failed: {e}")

    click.echo(item.summary)
    click.echo(f"\nTags: {', '.join(item.tags or []) or '(none)'}")


if __name__ == "__main__":
    main()

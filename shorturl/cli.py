"""
Operational CLI for the short URL store.

The HTTP API never deletes mappings; operators list, inspect and remove
them here, against the store configured by the same environment variables
the service reads.

Usage:
    python -m shorturl.cli list [--prefix PREFIX]
    python -m shorturl.cli get SLUG
    python -m shorturl.cli delete SLUG [--yes]
"""

import asyncio
import functools
import sys

import click

from shorturl.core.exceptions import StorageError
from shorturl.core.setting import get_settings
from shorturl.db import create_store


def async_command(f):
    """Run an async click command to completion."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        return asyncio.run(f(*args, **kwargs))
    return wrapper


def handle_storage_errors(f):
    """Turn storage failures into a clean non-zero exit."""
    @functools.wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except StorageError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    return wrapper


async def _with_store(operation):
    store = await create_store(get_settings())
    try:
        return await operation(store)
    finally:
        await store.close()


@click.group()
@click.version_option(version="1.0.0", prog_name="shorturl")
def cli():
    """Short URL store administration."""


@cli.command("list")
@click.option("--prefix", "-p", default=None, help="Only list slugs starting with PREFIX")
@handle_storage_errors
@async_command
async def list_slugs(prefix):
    """List stored slugs and their URLs."""
    async def operation(store):
        for key in await store.list(prefix):
            click.echo(f"{key}\t{await store.get(key)}")

    await _with_store(operation)


@cli.command("get")
@click.argument("slug")
@handle_storage_errors
@async_command
async def get_slug(slug):
    """Print the URL stored under SLUG."""
    url = await _with_store(lambda store: store.get(slug))
    if url is None:
        click.echo(f"Slug '{slug}' not found", err=True)
        sys.exit(1)
    click.echo(url)


@cli.command("delete")
@click.argument("slug")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@handle_storage_errors
@async_command
async def delete_slug(slug, yes):
    """Delete the mapping stored under SLUG."""
    if not yes and not click.confirm(f"Delete '{slug}'?"):
        click.echo("Aborted")
        return

    deleted = await _with_store(lambda store: store.delete(slug))
    if not deleted:
        click.echo(f"Slug '{slug}' not found", err=True)
        sys.exit(1)
    click.echo(f"Deleted '{slug}'")


if __name__ == "__main__":
    cli()

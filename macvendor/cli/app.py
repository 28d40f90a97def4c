"""Typer CLI application for macvendor."""

from __future__ import annotations

import typer

from macvendor.cli.commands import cmd_load_cache, cmd_lookup, cmd_normalize

app = typer.Typer(
    name="macvendor",
    help="macvendor: look up the vendor behind a MAC address.",
    no_args_is_help=True,
    add_completion=False,
)

app.command("lookup", help="Print the vendor record for one or more MAC addresses.")(cmd_lookup)
app.command("load-cache", help="Bulk-load the full OUI registry into the cache.")(cmd_load_cache)
app.command("normalize", help="Print the OUI key for one or more MAC addresses.")(cmd_normalize)


if __name__ == "__main__":
    app()

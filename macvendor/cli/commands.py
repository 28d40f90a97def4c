"""CLI command implementations for macvendor."""

from __future__ import annotations

import json
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from macvendor.config import Settings, get_settings
from macvendor.core.cache import CacheStore, JsonFileCacheStore, MemoryCacheStore
from macvendor.core.errors import FormatError, MacVendorError
from macvendor.core.models import Vendor
from macvendor.core.normalize import normalize_mac
from macvendor.core.resolver import VendorResolver

console = Console(emoji=False)


def _setup_logging(level: str = "WARNING") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _settings(**overrides: Optional[str]) -> Settings:
    """Settings with only the options the user actually passed."""
    return get_settings(**{k: v for k, v in overrides.items() if v is not None})


def _open_cache(settings: Settings) -> CacheStore:
    path = settings.resolved_cache_path
    if path is not None:
        return JsonFileCacheStore(path)
    return MemoryCacheStore()


def _flush(cache: CacheStore) -> None:
    if isinstance(cache, JsonFileCacheStore):
        cache.flush()


def cmd_lookup(
    macs: List[str] = typer.Argument(help="MAC addresses (at least the first three bytes)."),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Custom OUI source URL."),
    load: bool = typer.Option(False, "--load-cache", help="Bulk-load the registry before looking up."),
    oui_url: Optional[str] = typer.Option(None, "--oui-url", help="Registry dump used by --load-cache."),
    cache_path: Optional[str] = typer.Option(None, "--cache-path", help="JSON file to persist the cache in."),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Logging level."),
) -> None:
    """Look up each address and print its vendor record."""
    settings = _settings(oui_source=source, cache_path=cache_path, log_level=log_level)
    _setup_logging(settings.log_level)

    cache = _open_cache(settings)
    with VendorResolver(cache=cache, settings=settings) as resolver:
        if load and resolver.load_cache(oui_url) is None:
            console.print("[yellow]Warning:[/] could not load the registry; falling back to per-address lookups.")
        results = resolver.lookup_many(macs)
    _flush(cache)

    failed = False
    exported: list[dict] = []
    for mac, result in results.items():
        if isinstance(result, MacVendorError):
            failed = True
            if as_json:
                exported.append({"mac": mac, "error": str(result)})
            else:
                console.print(f"[bold]{escape(mac)}[/]\n  [red]{escape(str(result))}[/]")
            continue

        vendor = Vendor.from_record(normalize_mac(mac), result)
        if as_json:
            exported.append({"mac": mac, **vendor.model_dump(mode="json")})
        else:
            body = "\n".join(f"  {escape(line)}" for line in result)
            console.print(f"[bold]{escape(mac)}[/]\n{body}")

    if as_json:
        console.print_json(json.dumps(exported))

    if failed:
        raise typer.Exit(1)


def cmd_load_cache(
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Registry dump URL or path."),
    dest: Optional[str] = typer.Option(None, "--dest", "-d", help="Save the raw dump to this file."),
    cache_path: Optional[str] = typer.Option(None, "--cache-path", help="JSON file to persist the cache in."),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Logging level."),
) -> None:
    """Fetch the full registry dump and populate the cache."""
    settings = _settings(cache_path=cache_path, log_level=log_level)
    _setup_logging(settings.log_level)

    cache = _open_cache(settings)
    with VendorResolver(cache=cache, settings=settings) as resolver:
        count = resolver.load_cache(source, dest=dest)
    if count is None:
        console.print(
            Panel(
                f"Could not load OUI data from [bold]{escape(source or settings.oui_url)}[/].\n"
                "Lookups will still work one address at a time.",
                title="Load failed",
                border_style="red",
            )
        )
        raise typer.Exit(1)

    _flush(cache)
    console.print(f"[green]Loaded {count} OUI records.[/]")
    if dest:
        console.print(f"Raw dump saved to {escape(dest)}")


def cmd_normalize(
    macs: List[str] = typer.Argument(help="MAC addresses to normalize."),
) -> None:
    """Print the canonical OUI key for each address."""
    failed = False
    for mac in macs:
        try:
            console.print(f"{escape(mac)}  {normalize_mac(mac)}", highlight=False)
        except FormatError as exc:
            failed = True
            console.print(f"[red]{escape(str(exc))}[/]")
    if failed:
        raise typer.Exit(1)

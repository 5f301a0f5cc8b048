from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import typer
from rich import print as rprint
from rich.table import Table

from tiercache.cache.tiered_cache import TieredCache
from tiercache.config import get_settings, parse_tier_specs
from tiercache.observability.logging import get_logger

app = typer.Typer(add_completion=False)


def parse_op(raw: str) -> Tuple[str, str, Optional[str]]:
    """
    "set:KEY=VALUE" -> ("set", KEY, VALUE); "get:KEY" -> ("get", KEY, None).
    """
    verb, sep, rest = raw.partition(":")
    verb = verb.strip().lower()
    if not sep or not rest:
        raise ValueError(f"Malformed operation {raw!r}; expected set:KEY=VALUE or get:KEY")
    if verb == "get":
        return "get", rest, None
    if verb == "set":
        key, eq, value = rest.partition("=")
        if not eq or not key:
            raise ValueError(f"Malformed set operation {raw!r}; expected set:KEY=VALUE")
        return "set", key, value
    raise ValueError(f"Unknown operation {verb!r} in {raw!r}")


def _residency_table(cache: TieredCache) -> Table:
    table = Table(title="Tier residency (front = next eviction)")
    table.add_column("tier", justify="right")
    table.add_column("policy")
    table.add_column("size", justify="right")
    table.add_column("keys")
    for idx, tier in enumerate(cache.tiers):
        table.add_row(
            str(idx),
            tier.policy.value,
            f"{len(tier)}/{tier.capacity}",
            ", ".join(str(k) for k in tier.keys()),
        )
    return table


@app.command()
def run(
    ops: List[str] = typer.Argument(..., help="Operations: set:KEY=VALUE or get:KEY"),
    tiers: str = typer.Option(None, "--tiers", "-t", help="Tier layout, e.g. 3:LRU,2:FIFO"),
    debug: bool = typer.Option(False, "--debug", help="Log promotions, demotions and drops"),
):
    """
    Replay a sequence of operations against a tiered cache and show where entries end up.
    """
    try:
        settings = get_settings()
        specs = parse_tier_specs(tiers) if tiers else settings.tiers
        parsed = [parse_op(o) for o in ops]
        get_logger(level=logging.DEBUG if debug else settings.log_level)
    except ValueError as e:
        rprint(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    cache = TieredCache.from_specs(specs)
    rprint(f"[dim]{cache!r}[/dim]")
    for verb, key, value in parsed:
        if verb == "set":
            cache.set(key, value)
            continue
        found = cache.get(key)
        shown = found if key in cache else "[yellow]<absent>[/yellow]"
        rprint(f"[bold]get[/bold] {key} -> {shown}")
    rprint(_residency_table(cache))


def main():
    app()


if __name__ == "__main__":
    main()

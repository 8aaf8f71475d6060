# SPDX-License-Identifier: MIT
# Copyright (c) 2026 The studio-assets contributors
"""Command line entry point for the asset pipeline."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from ..config import Config, ConfigError, load_config
from ..logging import configure, fail
from ..orchestration import build_assets

app = typer.Typer(
    name="studio-assets",
    help="Compile scripts, styles, icons and course content into the output tree.",
    no_args_is_help=True,
    add_completion=False,
)

RootOption = Annotated[
    Path,
    typer.Option("--root", "-r", help="Project root holding the configuration.", file_okay=False),
]


def _load(root: Path, *, emoji: bool | None = None, color: bool | None = None) -> Config:
    """Return the configuration at ``root`` with CLI presentation overrides applied."""

    overrides: dict[str, bool] = {}
    if emoji is not None:
        overrides["emoji"] = emoji
    if color is not None:
        overrides["color"] = color
    try:
        return load_config(root, overrides={"output": overrides} if overrides else None)
    except ConfigError as exc:
        fail(str(exc))
        raise typer.Exit(code=1) from exc


@app.command("build")
def build(
    root: RootOption = Path("."),
    minify: Annotated[
        bool | None,
        typer.Option("--minify/--no-minify", help="Minify compiled output (default from configuration)."),
    ] = None,
    watch: Annotated[bool, typer.Option("--watch", "-w", help="Rebuild affected units on change.")] = False,
    locale: Annotated[
        list[str] | None,
        typer.Option("--locale", "-l", help="Locale to emit; repeat for several (default from configuration)."),
    ] = None,
    emoji: Annotated[bool | None, typer.Option("--emoji/--no-emoji", help="Toggle emoji in output.")] = None,
    color: Annotated[bool | None, typer.Option("--color/--no-color", help="Toggle coloured output.")] = None,
) -> None:
    """Build every asset once, or keep rebuilding with ``--watch``."""

    config = _load(root.resolve(), emoji=emoji, color=color)
    build_assets(
        minify=config.build.minify if minify is None else minify,
        watch=watch,
        locales=locale or None,
        config=config,
    )


@app.command("config")
def show_config(root: RootOption = Path(".")) -> None:
    """Print the effective configuration as JSON."""

    config = _load(root.resolve())
    typer.echo(json.dumps(config.to_dict(), indent=2, sort_keys=True))


def main() -> None:
    """Run the ``studio-assets`` application."""

    configure()
    app()


__all__ = ["app", "main"]

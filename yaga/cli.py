"""Yaga CLI -- badge rules and reactions.

Provides commands for listing the installed rules, inspecting a rule's
criteria form, rendering a profile reactions feed, and cache maintenance.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
import yaml
from pydantic import ValidationError

from yaga.cache import MemoryCache
from yaga.config import Config
from yaga.errors import ConfigError, YagaError
from yaga.locale import translate

# ---------------------------------------------------------------------------
# App and sub-apps
# ---------------------------------------------------------------------------

app = typer.Typer(
    name="yaga",
    help="Yaga badge rules -- list rules, inspect criteria forms, render reactions.",
    no_args_is_help=True,
)

rules_app = typer.Typer(
    name="rules",
    help="Inspect the installed badge rules.",
    no_args_is_help=True,
)

config_app = typer.Typer(
    name="config",
    help="Inspect Yaga configuration.",
    no_args_is_help=True,
)

cache_app = typer.Typer(
    name="cache",
    help="Manage the rule cache.",
    no_args_is_help=True,
)

app.add_typer(rules_app, name="rules")
app.add_typer(config_app, name="config")
app.add_typer(cache_app, name="cache")


# ---------------------------------------------------------------------------
# Global option types
# ---------------------------------------------------------------------------

JsonFlag = Annotated[bool, typer.Option("--json", help="Output as JSON.")]
PlainFlag = Annotated[bool, typer.Option("--plain", help="Output as plain text (no color).")]
VerboseFlag = Annotated[bool, typer.Option("--verbose", "-v", help="Verbose output.")]
QuietFlag = Annotated[bool, typer.Option("--quiet", "-q", help="Suppress non-essential output.")]
ConfigOption = Annotated[
    Optional[Path], typer.Option("--config", "-c", help="Path to config YAML file.")
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _get_format(json_flag: bool = False, plain_flag: bool = False) -> str:
    """Determine output format: json > plain > TTY auto-detect > rich."""
    if json_flag:
        return "json"
    if plain_flag:
        return "plain"
    if sys.stdout.isatty():
        return "rich"
    return "plain"


def _setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)


def _error_panel(message: str) -> None:
    """Print an error message, using Rich panel if available."""
    try:
        from rich.console import Console
        from rich.panel import Panel

        console = Console(stderr=True)
        console.print(Panel(message, title="Error", border_style="red"))
    except Exception:
        typer.echo(f"Error: {message}", err=True)


def _load_config(path: Optional[Path]) -> Config:
    try:
        return Config.load(path)
    except ConfigError as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=2)


def _load_contents(file: str) -> list[dict]:
    """Load feed content rows from a YAML file.

    Accepts either a list of rows or a mapping with a ``Content`` list.
    """
    path = Path(file)

    if not path.exists():
        hint = ""
        if not path.is_absolute():
            hint = f" (looked in {Path.cwd()})"
        raise typer.BadParameter(
            f"File not found: {file}{hint}\n  Hint: Check the file path and try again."
        )

    try:
        with open(path) as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        msg = f"YAML parse error in {file}"
        if hasattr(exc, "problem_mark") and exc.problem_mark is not None:
            mark = exc.problem_mark
            msg += f" at line {mark.line + 1}, column {mark.column + 1}"
        if hasattr(exc, "problem") and exc.problem:
            msg += f": {exc.problem}"
        raise typer.BadParameter(msg)

    if isinstance(raw, dict):
        raw = raw.get("Content", [])
    if not isinstance(raw, list):
        raise typer.BadParameter(
            f"Expected a YAML list of content rows in {file}, got {type(raw).__name__}"
        )
    return raw


# ---------------------------------------------------------------------------
# Rule commands
# ---------------------------------------------------------------------------


@rules_app.command(name="list")
def rules_list(
    interactive: Annotated[
        bool, typer.Option("--interactive", "-i", help="Only rules triggered by another user.")
    ] = False,
    no_cache: Annotated[
        bool, typer.Option("--no-cache", help="Rebuild without reading or writing the cache.")
    ] = False,
    config: ConfigOption = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """List installed rules sorted by name."""
    _setup_logging(verbose, quiet)
    from yaga.controller import build_controller
    from yaga.output import get_formatter

    cfg = _load_config(config)
    controller = build_controller(cfg, cache=MemoryCache() if no_cache else None)
    try:
        if interactive:
            rules = controller.get_interaction_rules()
            title = translate("Interactive Rules")
        else:
            rules = controller.get_rules()
            title = translate("Rules")
    except YagaError as exc:
        _error_panel(str(exc))
        raise typer.Exit(code=1)

    formatter = get_formatter(_get_format(json, plain))
    typer.echo(formatter.format_rules(rules, title=title))


@rules_app.command(name="form")
def rules_form(
    rule_class: str = typer.Argument(help="Rule class name, e.g. PostCount"),
    config: ConfigOption = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Show the criteria form for a rule."""
    _setup_logging(verbose, quiet)
    from yaga.controller import build_controller
    from yaga.output import get_formatter

    cfg = _load_config(config)
    controller = build_controller(cfg)
    try:
        payload = controller.get_criteria_form(rule_class)
    except YagaError as exc:
        _error_panel(f"{exc} ({rule_class})")
        raise typer.Exit(code=1)

    formatter = get_formatter(_get_format(json, plain))
    typer.echo(formatter.format_criteria_form(payload))


# ---------------------------------------------------------------------------
# Feed command
# ---------------------------------------------------------------------------


@app.command()
def feed(
    file: str = typer.Argument(help="Path to a YAML file of content rows"),
    guest: Annotated[
        bool, typer.Option("--guest", help="Render as a viewer without reaction permissions.")
    ] = False,
    config: ConfigOption = None,
    json: JsonFlag = False,
    plain: PlainFlag = False,
    verbose: VerboseFlag = False,
    quiet: QuietFlag = False,
) -> None:
    """Render a profile reactions feed."""
    _setup_logging(verbose, quiet)
    from yaga.feed import VIEW_REACTIONS_PERMISSION, StaticSession, build_feed
    from yaga.output import get_formatter

    cfg = _load_config(config)
    contents = _load_contents(file)
    session = StaticSession([] if guest else [VIEW_REACTIONS_PERMISSION])

    try:
        profile_feed = build_feed(contents, cfg, session)
    except ValidationError as exc:
        lines = [f"Validation errors in {file}:"]
        for err in exc.errors():
            loc = " -> ".join(str(x) for x in err["loc"])
            lines.append(f"  {loc}: {err['msg']}")
        raise typer.BadParameter("\n".join(lines))

    formatter = get_formatter(_get_format(json, plain))
    typer.echo(formatter.format_feed(profile_feed))


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command(name="show")
def config_show(config: ConfigOption = None) -> None:
    """Print the effective configuration."""
    cfg = _load_config(config)
    values = cfg.as_dict()
    if not values:
        typer.echo("No configuration set.")
        return
    typer.echo(yaml.safe_dump(values, sort_keys=False).rstrip())


# ---------------------------------------------------------------------------
# Cache commands
# ---------------------------------------------------------------------------


@cache_app.command(name="clear")
def cache_clear(config: ConfigOption = None) -> None:
    """Clear the cached rule sets."""
    from yaga.cache import FileCache
    from yaga.controller import CACHE_DIR_CONFIG_KEY

    cfg = _load_config(config)
    cache_dir = cfg.get(CACHE_DIR_CONFIG_KEY)
    cache = FileCache(Path(cache_dir).expanduser() if cache_dir else None)
    cache.clear()
    typer.echo("Rule cache cleared.")


if __name__ == "__main__":
    app()

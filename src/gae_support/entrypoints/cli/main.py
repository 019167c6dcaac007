"""gae-support CLI entry point.

Defines the top-level ``gae-support`` command (via Click-Extra) and the
inspection commands exposed by the project.

Commands
- ``gae-support env``   — show the detected App Engine hosting context.
- ``gae-support paths`` — show the resolved cache and storage paths.
- ``gae-support dump``  — dump a JSON value through the redirected CLI dumper.

Examples
    $ gae-support --version
    $ GAE_ENV=standard gae-support paths --base-path /srv/app
"""

import io
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click
import click_extra as clickx
from platformdirs import user_log_dir

from gae_support import __version__
from gae_support.bootstrap import create_application
from gae_support.config import BASE_PATH_ENV, ConfigError
from gae_support.foundation.errors import GaeSupportError
from gae_support.logging import config_console_handler, config_flight_recorder, log_startup

from .helpers import parse_log_level, success, warn

if TYPE_CHECKING:
    from logging import Handler

    from gae_support.foundation import GaeApplication

logger = logging.getLogger(__name__)


HELP = """gae-support command-line interface.

    Inspect how an application would be bootstrapped on Google App Engine:
    which hosting context is detected, where cached config, routes, services
    and storage resolve to, and what the debug dumpers write.
    """


@clickx.extra_group(
    version=__version__,
    help=HELP,
    params=[
        clickx.ColorOption(show_envvar=True),
        clickx.TimerOption(show_envvar=True),
        clickx.ExtraVersionOption(),
    ],
)
@click.option(
    "--verbose",
    "-v",
    "verbose_count",
    count=True,
    help="Increase the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--quiet",
    "-q",
    "quiet_count",
    count=True,
    help="Decrease the default WARNING verbosity by one level per repetition.",
    default=0,
)
@click.option(
    "--debug/--no-debug",
    is_flag=True,
    help="Enable debug mode (DEBUG console output with source locations).",
    default=False,
)
@click.option(
    "--log-path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Path the flight recorder writes to.",
    default=Path(user_log_dir("gae-support", appauthor=False, ensure_exists=True))
    / "latest.log",
    envvar="GAE_SUPPORT_LOG_PATH",
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--flight-recorder/--no-flight-recorder",
    "flight_recorder",
    is_flag=True,
    help=(
        "Keep recent log records in memory at DEBUG granularity and write them "
        "to --log-path when a WARNING/ERROR occurs."
    ),
    default=True,
    show_envvar=True,
)
@click.option(
    "-L",
    "--logger-level",
    "logger_levels",
    multiple=True,
    callback=parse_log_level,
    help="Set MINIMUM LEVEL for specific LOGGERS (NAME=LEVEL). Repeatable.",
    default=("click_extra=WARNING",),
    show_default=True,
    show_envvar=True,
)
@click.option(
    "--base-path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Application base path.",
    default=None,
    envvar=BASE_PATH_ENV,
    show_envvar=True,
)
@clickx.pass_context
def gae_support(  # pylint: disable=too-many-arguments, too-many-positional-arguments
    ctx: click.Context,
    verbose_count: int,
    quiet_count: int,
    debug: bool,
    log_path: Path,
    flight_recorder: bool,
    logger_levels: dict[str, int],
    base_path: Path | None,
) -> None:
    """gae-support command-line interface."""

    level = logging.WARNING - (10 * verbose_count) + (10 * quiet_count)
    level = max(logging.DEBUG, min(logging.CRITICAL, level))

    handlers: list[Handler] = [
        config_console_handler(level=level, debug_mode=debug, color=ctx.color is not False)
    ]
    if flight_recorder:
        handlers.append(config_flight_recorder(path=log_path))

    logging.basicConfig(level=logging.DEBUG, handlers=handlers, force=True)
    for name, lvl in logger_levels.items():
        logging.getLogger(name).setLevel(lvl)

    log_startup(
        logger,
        app_version=__version__,
        level=level,
        handlers=handlers,
        log_path=log_path,
        flight_recorder=flight_recorder,
        logger_levels=logger_levels,
    )

    ctx.ensure_object(dict)
    ctx.obj["base_path"] = base_path
    ctx.call_on_close(logging.shutdown)


def _build_application(ctx: click.Context) -> "GaeApplication":
    try:
        return create_application(ctx.obj["base_path"], output=io.StringIO())
    except (GaeSupportError, ConfigError, OSError) as e:
        raise click.ClickException(str(e)) from e


@gae_support.command()
@click.pass_context
def env(ctx: click.Context) -> None:
    """Show the detected hosting context."""
    app = _build_application(ctx)
    context = app.hosting_context

    click.echo(f"hosting: {context.kind.value}")
    if not app.is_running_on_gae():
        warn("Not running on App Engine; framework defaults apply.")
        return
    click.echo(f"project: {app.gae_app_id()}")
    click.echo(f"service: {app.gae_app_service()}")
    click.echo(f"version: {app.gae_app_version()}")
    success(f"Running on the App Engine {context.kind.value} runtime.")


@gae_support.command()
@click.option("--json", "as_json", is_flag=True, help="Print the paths as JSON.")
@click.pass_context
def paths(ctx: click.Context, as_json: bool) -> None:
    """Show the resolved cache and storage paths."""
    app = _build_application(ctx)
    try:
        resolved = {
            "config_cache": app.cached_config_path(),
            "routes_cache": app.cached_routes_path(),
            "services_cache": app.cached_services_path(),
            "storage": app.storage_path(),
        }
    except OSError as e:
        raise click.ClickException(f"Cannot prepare storage: {e}") from e

    if as_json:
        click.echo(json.dumps({key: str(path) for key, path in resolved.items()}, indent=2))
        return
    for key, path in resolved.items():
        click.echo(f"{key}: {path}")


@gae_support.command()
@click.argument("value")
@click.option("--html", "as_html", is_flag=True, help="Use the HTML dumper.")
@click.pass_context
def dump(ctx: click.Context, value: str, as_html: bool) -> None:
    """Dump a JSON VALUE through the application's debug dumper."""
    try:
        decoded = json.loads(value)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="VALUE") from e

    app = _build_application(ctx)
    dumper = app.dumpers.html() if as_html else app.dumpers.cli()
    dumper.dump(decoded)
    click.echo(app.output.getvalue(), nl=False)

"""CLI entry point — command definitions using Click.

Commands:
    init          Generate a template config file
    analyse       Import Lizard / OCLint / FauxPas reports for a project
    profiles      Show the bundled rule profiles
    rules         Show the bundled rules of a repository
    check-rules   Compare bundled rules with the SonarQube server
    push-profile  Restore a bundled profile on the SonarQube server
"""

import json
import logging
import sys
from typing import Any

import click

from sonar_objc import __version__


# ---------------------------------------------------------------------------
# Helpers shared by all data commands
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool, debug: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(ctx: click.Context, require_server: bool = False):
    """Load config (optional unless *require_server*). Exits on error."""
    from sonar_objc.config import ConfigError, load

    obj = ctx.obj
    try:
        return load(obj["config_path"], missing_ok=not require_server,
                    require_server=require_server)
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(1)


def _make_client(ctx: click.Context):
    """Load config and return a ready SonarClient. Exits on error."""
    from sonar_objc.client import SonarClient

    config = _load_config(ctx, require_server=True)
    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Connecting to {config.url}", err=True)
    return config, SonarClient(url=config.url, token=config.token)


def _emit_json(data: Any, ctx: click.Context) -> None:
    """Write JSON to stdout or to the file specified by --output."""
    obj = ctx.obj
    indent = 2 if obj["pretty"] else None
    text = json.dumps(data, indent=indent, ensure_ascii=False)

    output_path: str | None = obj["output_path"]
    if output_path:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
        click.echo(f"Report written to '{output_path}'", err=True)
    else:
        click.echo(text)


def _handle_errors(func):
    """Decorator that catches plugin and client exceptions and exits cleanly."""
    import functools

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        from sonar_objc.api import ReportParseError
        from sonar_objc.client import (
            AuthenticationError,
            NetworkError,
            NotFoundError,
            PermissionDeniedError,
            SonarClientError,
        )
        from sonar_objc.config import ConfigError
        from sonar_objc.plugin import UnknownRepositoryError

        try:
            return func(*args, **kwargs)
        except ConfigError as exc:
            click.echo(f"Configuration error: {exc}", err=True)
            sys.exit(1)
        except ReportParseError as exc:
            click.echo(f"Report error: {exc}", err=True)
            sys.exit(1)
        except FileNotFoundError as exc:
            click.echo(f"Report not found: {exc.filename}", err=True)
            sys.exit(1)
        except UnknownRepositoryError as exc:
            click.echo(f"Error: {exc}", err=True)
            sys.exit(1)
        except AuthenticationError as exc:
            click.echo(f"Authentication error: {exc}", err=True)
            sys.exit(1)
        except PermissionDeniedError as exc:
            click.echo(f"Permission error: {exc}", err=True)
            sys.exit(1)
        except NotFoundError as exc:
            click.echo(f"Not found: {exc}", err=True)
            sys.exit(1)
        except NetworkError as exc:
            click.echo(f"Network error: {exc}", err=True)
            sys.exit(1)
        except SonarClientError as exc:
            click.echo(f"SonarQube error: {exc}", err=True)
            sys.exit(1)

    return wrapper


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------

@click.group()
@click.option("--config", "config_path", default="sonar-objc.yaml", show_default=True,
              help="Path to the configuration file.")
@click.option("--output", "output_path", default=None,
              help="Write JSON output to a file instead of stdout.")
@click.option("--pretty", is_flag=True, default=False,
              help="Pretty-print the JSON output.")
@click.option("-D", "--define", "defines", multiple=True, metavar="KEY=VALUE",
              help="Set a plugin property (overrides the config file).")
@click.option("--verbose", is_flag=True, default=False,
              help="Enable verbose logging.")
@click.option("--debug", is_flag=True, default=False,
              help="Enable debug logging.")
@click.version_option(__version__, prog_name="sonar-objc")
@click.pass_context
def cli(ctx: click.Context, config_path: str, output_path: str | None, pretty: bool,
        defines: tuple[str, ...], verbose: bool, debug: bool) -> None:
    """Objective-C report import for SonarQube — Lizard, OCLint and FauxPas."""
    from sonar_objc.config import ConfigError, parse_property_overrides

    _setup_logging(verbose, debug)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["output_path"] = output_path
    ctx.obj["pretty"] = pretty
    ctx.obj["verbose"] = verbose or debug
    try:
        ctx.obj["overrides"] = parse_property_overrides(defines)
    except ConfigError as exc:
        raise click.BadParameter(str(exc), param_hint="-D") from exc


# ---------------------------------------------------------------------------
# init
# ---------------------------------------------------------------------------

@cli.command("init")
@click.option("--output", "output_path", default="sonar-objc.yaml", show_default=True,
              help="Path where the template config file will be written.")
def init_command(output_path: str) -> None:
    """Generate a template sonar-objc.yaml file."""
    from sonar_objc.config import ConfigError, generate_template
    try:
        generate_template(output_path)
        click.echo(f"Template written to '{output_path}'.")
        click.echo("Edit it with your report paths and, for server commands, URL and token.")
    except ConfigError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


# ---------------------------------------------------------------------------
# analyse
# ---------------------------------------------------------------------------

@cli.command("analyse")
@click.argument("base_dir", required=False)
@click.option("--format", "output_format", type=click.Choice(["report", "generic"]),
              default="report", show_default=True,
              help="'generic' emits only issues, in the external issues import format.")
@click.pass_context
@_handle_errors
def analyse_command(ctx: click.Context, base_dir: str | None, output_format: str) -> None:
    """Run the sensors on BASE_DIR (defaults to project.base_dir)."""
    from sonar_objc.api import FileSystem
    from sonar_objc.plugin import ObjectiveCPlugin
    from sonar_objc.reports.issues import build_generic_issues, build_issues_report
    from sonar_objc.reports.measures import build_measures_report

    config = _load_config(ctx)
    settings = config.settings(ctx.obj["overrides"])
    file_system = FileSystem(base_dir or config.base_dir)

    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Analysing {file_system.base_dir}", err=True)

    plugin = ObjectiveCPlugin()
    context = plugin.run_analysis(file_system, settings)

    if output_format == "generic":
        _emit_json(build_generic_issues(context), ctx)
        return

    project_key = settings.get_string(ObjectiveCPlugin.PROJECT_KEY_PROPERTY) or file_system.base_dir.name
    _emit_json({
        "report_type": "analysis",
        "project_key": project_key,
        "base_dir": str(file_system.base_dir),
        "measures": build_measures_report(context, project_key),
        "issues": build_issues_report(context, project_key),
    }, ctx)


# ---------------------------------------------------------------------------
# profiles / rules
# ---------------------------------------------------------------------------

@cli.command("profiles")
@click.pass_context
@_handle_errors
def profiles_command(ctx: click.Context) -> None:
    """Show the bundled rule profiles and any import warnings."""
    from sonar_objc.plugin import ObjectiveCPlugin

    profiles = [
        {**profile.to_dict(), "messages": messages.to_dict()}
        for profile, messages in ObjectiveCPlugin().create_profiles()
    ]
    _emit_json({"report_type": "profiles", "profiles": profiles}, ctx)


@cli.command("rules")
@click.argument("repository", required=False)
@click.pass_context
@_handle_errors
def rules_command(ctx: click.Context, repository: str | None) -> None:
    """Show the bundled rules (of REPOSITORY, or of every repository)."""
    from sonar_objc.plugin import ObjectiveCPlugin

    plugin = ObjectiveCPlugin()
    repositories = [plugin.rule_repository(repository)] if repository else plugin.rule_repositories
    _emit_json({
        "report_type": "rules",
        "repositories": {
            repo.key: [rule.to_dict() for rule in repo.create_rules()]
            for repo in repositories
        },
    }, ctx)


# ---------------------------------------------------------------------------
# check-rules / push-profile
# ---------------------------------------------------------------------------

@cli.command("check-rules")
@click.argument("repository")
@click.pass_context
@_handle_errors
def check_rules_command(ctx: click.Context, repository: str) -> None:
    """Compare the bundled REPOSITORY rules with those known to the server."""
    from sonar_objc.plugin import ObjectiveCPlugin
    from sonar_objc.reports.rules import get_rules_diff

    repo = ObjectiveCPlugin().rule_repository(repository)
    _, client = _make_client(ctx)

    if ctx.obj["verbose"]:
        click.echo(f"[verbose] Fetching server rules for repository '{repo.key}'", err=True)

    _emit_json(get_rules_diff(client, repo), ctx)


@cli.command("push-profile")
@click.argument("repository")
@click.pass_context
@_handle_errors
def push_profile_command(ctx: click.Context, repository: str) -> None:
    """Restore the bundled REPOSITORY profile on the server."""
    from sonar_objc.plugin import ObjectiveCPlugin
    from sonar_objc.reports.rules import push_profile

    profile, messages = ObjectiveCPlugin().create_profile(repository)
    if messages.has_errors():
        for error in messages.errors:
            click.echo(f"Profile error: {error}", err=True)
        sys.exit(1)

    _, client = _make_client(ctx)
    _emit_json(push_profile(client, profile), ctx)


def main() -> None:
    cli(obj={})

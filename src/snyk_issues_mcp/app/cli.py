from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable

import typer
from dotenv import load_dotenv

from .config import AppConfig
from .container import Container
from .cli_formatter import format_issue_detail, format_issues_result, format_projects_result
from ..core.domain.exceptions import ConfigurationError, IssueNotFoundError, SnykApiError
from ..core.domain.models import OrgContext

load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _build_container() -> Container:
    config = AppConfig()
    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


def _run(
    require_slug: bool,
    run: Callable[[Container, OrgContext], Awaitable[dict[str, Any]]],
) -> dict[str, Any]:
    """Resolve the org context, run a use case and map errors to exit codes.

    Exit codes: 2 for missing configuration, 1 for API / input errors.
    """
    container = _build_container()
    try:
        org = OrgContext.resolve(
            container.config.snyk.org_id(),
            container.config.snyk.org_slug(),
            require_slug=require_slug,
        )
        return asyncio.run(run(container, org))
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)
    except (SnykApiError, IssueNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        container.shutdown_resources()


def _echo_json(result: dict[str, Any]) -> None:
    typer.echo(json.dumps(result, ensure_ascii=False, indent=2))


@app.command()
def serve(
    mode: str = typer.Option("stdio", "--mode", "-m", help="Transport mode: 'stdio' or 'streamable-http'"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port number (required for streamable-http)"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Log level for library loggers", case_sensitive=False),
):
    """Start the MCP server exposing get_issues, get_repo_issues, get_issue and find_projects.

    TRANSPORT MODES:
      stdio           - Direct communication via stdin/stdout (default)
      streamable-http - HTTP server (requires --port)

    Examples:
      snyk-issues-mcp serve
      snyk-issues-mcp serve --mode streamable-http --port 18080
    """
    if mode not in ("stdio", "streamable-http"):
        typer.echo(f"Error: Invalid mode '{mode}'. Must be 'stdio' or 'streamable-http'.", err=True)
        raise typer.Exit(code=1)

    if mode == "streamable-http" and port is None:
        typer.echo("Error: --port is required for streamable-http mode.", err=True)
        raise typer.Exit(code=1)

    if mode == "stdio" and port is not None:
        typer.echo("Warning: --port is ignored in stdio mode.", err=True)
        port = None

    # Library loggers go to stderr; stdout belongs to the stdio transport
    level = logging.getLevelName(log_level.upper())
    logging.basicConfig(level=level if isinstance(level, int) else logging.WARNING, format='%(levelname)s: %(message)s', force=True)

    container = _build_container()
    try:
        mcp_server = container.mcp_server()
        if mode == "streamable-http":
            typer.echo(f"Starting MCP server on port {port}...", err=True)
        mcp_server.run(transport=mode, port=port)
    except KeyboardInterrupt:
        typer.echo("\nShutting down MCP server...", err=True)
    finally:
        container.shutdown_resources()


@app.command()
def issues(
    repo: str = typer.Argument(None, help="Project UUID or exact project name. Omit for all projects."),
    status: str = typer.Option("open", "--status", "-s", help="open | resolved | ignored"),
    severity: str | None = typer.Option(None, "--severity", help="low | medium | high | critical"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """List issues of the organization, optionally for one project."""
    result = _run(
        True,
        lambda c, org: c.get_issues_uc().execute(org=org, repo=repo, status=status, severity=severity),
    )
    if json_output:
        _echo_json(result)
    else:
        typer.echo(format_issues_result(result))


@app.command(name="repo-issues")
def repo_issues(
    repository_name: str = typer.Argument(..., help="Repository name or part of it, e.g. acme/app"),
    status: str = typer.Option("open", "--status", "-s", help="open | resolved | ignored"),
    severity: str | None = typer.Option(None, "--severity", help="low | medium | high | critical"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Aggregate issues over every project whose name contains REPOSITORY_NAME."""
    result = _run(
        True,
        lambda c, org: c.get_repo_issues_uc().execute(
            org=org, repository_name=repository_name, status=status, severity=severity
        ),
    )
    if json_output:
        _echo_json(result)
    else:
        typer.echo(format_issues_result(result))


@app.command()
def issue(
    issue_id: str = typer.Argument(..., help="Issue UUID (not the SNYK-... key)"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Show one issue with remediation details."""
    result = _run(True, lambda c, org: c.get_issue_uc().execute(org=org, issue_id=issue_id))
    if json_output:
        _echo_json(result)
    else:
        typer.echo(format_issue_detail(result))


@app.command()
def projects(
    query: str = typer.Argument(..., help="Substring of the project name"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Search projects by name (case-insensitive substring)."""
    result = _run(False, lambda c, org: c.find_projects_uc().execute(org=org, query=query))
    if json_output:
        _echo_json(result)
    else:
        typer.echo(format_projects_result(result))


if __name__ == "__main__":
    app()

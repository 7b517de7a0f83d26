"""
Main CLI application using Typer.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from remoteserver.assertions import RemoteServer
from remoteserver.cli.formatters import RichReporter, format_summary, print_tools
from remoteserver.cli.plan import PlanError, load_plan, run_plan
from remoteserver.core.config import ProbeConfig
from remoteserver.core.detector import SystemDetector
from remoteserver.probes.ssh import SshAuthProbe
from remoteserver.report.reporters import (
    CsvReporter,
    MultiReporter,
    RecordingReporter,
    Reporter,
    TapReporter,
)
from remoteserver.storage.logger import setup_logging

app = typer.Typer(
    name="remoteserver",
    help="Reachability and security-posture checks for remote servers",
    add_completion=False,
)

console = Console()

TimeoutOption = typer.Option(None, "--timeout", "-t", help="Probe timeout in seconds (default 5)")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
FormatOption = typer.Option("tap", "--format", "-f", help="Output format: 'tap' (default) or 'rich'")
CsvOption = typer.Option(None, "--csv", help="Append results to this CSV file")
LogDirOption = typer.Option(None, "--log-dir", help="Directory for remoteserver.log")


def _init_context(
    timeout: Optional[float],
    verbose: bool,
    output_format: str,
    csv_path: Optional[Path] = None,
    log_dir: Optional[Path] = None,
) -> tuple[RemoteServer, RecordingReporter, Optional[TapReporter]]:
    """
    Build the configured RemoteServer and its reporters.

    Uses the optional config file (~/.remoteserver.yaml or ./.remoteserver.yaml)
    and REMOTESERVER_* environment variables for values the CLI does not set.
    """
    setup_logging(log_dir, verbose)

    if output_format not in ("tap", "rich"):
        console.print(f"[red]Unknown format {escape(repr(output_format))}; use 'tap' or 'rich'[/red]")
        raise typer.Exit(2)

    try:
        config = ProbeConfig.from_sources(timeout=timeout)
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(2)

    recorder = RecordingReporter()
    tap = TapReporter() if output_format == "tap" else None
    reporters: List[Reporter] = [recorder, tap or RichReporter(console)]
    if csv_path is not None:
        reporters.append(CsvReporter(csv_path))

    server = RemoteServer(config=config, reporter=MultiReporter(*reporters))
    return server, recorder, tap


def _finish(recorder: RecordingReporter, tap: Optional[TapReporter], summary: bool = False) -> None:
    """Close the TAP stream or print the summary, then exit with 0 iff all passed."""
    if tap is not None:
        tap.done_testing()
    elif summary:
        format_summary(recorder.outcomes, console)
    raise typer.Exit(0 if recorder.failed == 0 else 1)


@app.command()
def ping(
    host: str = typer.Argument(..., help="Target IP or hostname"),
    ipv6: bool = typer.Option(False, "--ipv6", "-6", help="Use ICMPv6 (ping6)"),
    description: str = typer.Option("", "--description", "-d"),
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
    output_format: str = FormatOption,
):
    """
    Check that HOST answers a single ping.
    """
    server, recorder, tap = _init_context(timeout, verbose, output_format)
    description = description or f"{host} answers ping{'6' if ipv6 else ''}"
    if ipv6:
        server.ping6_ok(host, description)
    else:
        server.ping_ok(host, description)
    _finish(recorder, tap)


@app.command()
def resolve(
    host: str = typer.Argument(..., help="Name to look up"),
    description: str = typer.Option("", "--description", "-d"),
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
    output_format: str = FormatOption,
):
    """
    Check that HOST resolves to at least one record.
    """
    server, recorder, tap = _init_context(timeout, verbose, output_format)
    server.resolves(host, description or f"{host} resolves")
    _finish(recorder, tap)


@app.command()
def port(
    host: str = typer.Argument(..., help="Target IP or hostname"),
    port_number: int = typer.Argument(..., metavar="PORT", help="TCP port"),
    closed: bool = typer.Option(False, "--closed", help="Expect the port to be closed"),
    description: str = typer.Option("", "--description", "-d"),
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
    output_format: str = FormatOption,
):
    """
    Check that a TCP port is open (or, with --closed, that it is not).
    """
    server, recorder, tap = _init_context(timeout, verbose, output_format)
    if closed:
        server.socket_closed(host, port_number, description or f"{host}:{port_number} is closed")
    else:
        server.socket_open(host, port_number, description or f"{host}:{port_number} is open")
    _finish(recorder, tap)


@app.command("ssh-auth")
def ssh_auth(
    target: str = typer.Argument(..., help="SSH server as host or host:port"),
    method: str = typer.Argument(..., help="Authentication method, e.g. password"),
    disabled: bool = typer.Option(False, "--disabled", help="Expect the method to be refused"),
    description: str = typer.Option("", "--description", "-d"),
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
    output_format: str = FormatOption,
):
    """
    Check whether an SSH server offers an authentication method.
    """
    server, recorder, tap = _init_context(timeout, verbose, output_format)
    if disabled:
        server.ssh_auth_disabled(target, method, description or f"{target} refuses {method}")
    else:
        server.ssh_auth_enabled(target, method, description or f"{target} offers {method}")
    _finish(recorder, tap)


@app.command("ssh-methods")
def ssh_methods(
    target: str = typer.Argument(..., help="SSH server as host or host:port"),
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
):
    """
    List the authentication methods an SSH server advertises.
    """
    setup_logging(None, verbose)
    try:
        config = ProbeConfig.from_sources(timeout=timeout)
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(2)
    methods, error = SshAuthProbe(config).probe(target)
    if not methods:
        console.print(f"[red]No authentication methods observed:[/red] {escape(str(error))}")
        raise typer.Exit(1)
    for method in methods:
        console.print(method, highlight=False)


@app.command()
def run(
    plan_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML check plan"),
    timeout: Optional[float] = TimeoutOption,
    verbose: bool = VerboseOption,
    output_format: str = FormatOption,
    csv_path: Optional[Path] = CsvOption,
    log_dir: Optional[Path] = LogDirOption,
):
    """
    Run every check listed in a YAML plan.
    """
    try:
        plan = load_plan(plan_file)
    except PlanError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(2)

    server, recorder, tap = _init_context(
        timeout if timeout is not None else plan.timeout,
        verbose,
        output_format,
        csv_path=csv_path,
        log_dir=log_dir,
    )
    if tap is not None:
        tap.plan(len(plan.checks))
    run_plan(server, plan)
    _finish(recorder, tap, summary=True)


@app.command()
def tools():
    """
    Show whether the probe utilities (ping, ping6, ssh) are installed.
    """
    detector = SystemDetector()
    names = ["ping", "ping6", "ssh"]
    paths = {name: detector.get_tool_path(name) for name in names}
    missing = detector.check_required_tools(names)
    print_tools(detector.detect_system(), paths, missing, console)
    if any(tool.name != "ping6" for tool in missing):
        raise typer.Exit(1)

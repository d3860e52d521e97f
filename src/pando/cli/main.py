# ~/pando-language-server/src/pando/cli/main.py
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..analyzer import ERROR, TOKEN_MODIFIERS, TOKEN_TYPES, analyze
from ..config import ServerConfig, parse_file_flags
from ..toolchain import ProcessFailedError, ToolchainError, ToolchainOrchestrator

console = Console()
err_console = Console(stderr=True)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def _configure_logging(level):
    # stdout may carry the protocol, so logs always go to stderr
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _read_source(file):
    return Path(file).read_text(encoding="utf-8")


@click.group()
@click.version_option(version=__version__, prog_name="Pando")
@click.option('--log-level', type=click.Choice(LOG_LEVELS, case_sensitive=False),
              default=None, help="Logging verbosity (default: $PANDO_LOG_LEVEL or WARNING)")
@click.pass_context
def cli(ctx, log_level):
    """Pando language tools - analyzer, language server and toolchain driver"""
    config = ServerConfig.from_env().with_overrides(log_level=log_level)
    _configure_logging(config.log_level)
    ctx.obj = config


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def check(file):
    """Report diagnostics for a Pando file"""
    result = analyze(_read_source(file))

    if not result.diagnostics:
        console.print("[bold green]✅ No problems found![/bold green]")
        return

    table = Table(title=f"Diagnostics for {file}")
    table.add_column("Line", style="yellow", justify="right")
    table.add_column("Column", style="yellow", justify="right")
    table.add_column("Severity")
    table.add_column("Code", style="cyan", no_wrap=True)
    table.add_column("Message")

    for d in result.diagnostics:
        severity = "[red]error[/red]" if d.severity == ERROR else "[yellow]warning[/yellow]"
        table.add_row(str(d.span.line + 1), str(d.span.start + 1), severity, d.code, d.message)

    console.print(table)
    if result.errors:
        sys.exit(1)


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def tokens(file):
    """Show semantic highlight tokens of a Pando file"""
    result = analyze(_read_source(file))

    table = Table(title="Tokens")
    table.add_column("Line", style="yellow", justify="right")
    table.add_column("Column", style="yellow", justify="right")
    table.add_column("Length", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Modifiers", style="green")

    for tok in result.tokens:
        modifiers = [name for bit, name in enumerate(TOKEN_MODIFIERS) if tok.modifiers & (1 << bit)]
        table.add_row(
            str(tok.line + 1), str(tok.start + 1), str(tok.length),
            TOKEN_TYPES[tok.token_type], ", ".join(modifiers),
        )

    console.print(table)


@cli.command()
@click.option('--tcp', is_flag=True, help="Listen on TCP instead of stdio")
@click.option('--host', default="127.0.0.1", show_default=True)
@click.option('--port', default=2087, show_default=True, type=int)
@click.pass_obj
def serve(config, tcp, host, port):
    """Start the Pando language server"""
    from ..lsp.server import create_server

    server = create_server(config=config)
    if tcp:
        err_console.print(f"[bold green]Pando language server[/bold green] listening on {host}:{port}")
        server.start_tcp(host, port)
    else:
        server.start_io()


@cli.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--translator', default=None, help="Path to the Pando -> Rust translator")
@click.option('--rustc', default=None, help="Rust compiler to use")
@click.option('--check/--no-check', 'run_check', default=True, show_default=True,
              help="Refuse to build when the analyzer reports errors")
@click.pass_obj
def run(config, file, translator, rustc, run_check):
    """Translate, compile and run a Pando program"""
    source_code = _read_source(file)

    if run_check:
        errors = analyze(source_code).errors
        if errors:
            err_console.print("[bold red]❌ Analysis errors:[/bold red]")
            for d in errors:
                err_console.print(f"  {d}", markup=False, highlight=False)
            sys.exit(1)

    config = config.with_overrides(**parse_file_flags(source_code))
    config = config.with_overrides(translator=translator, rustc=rustc)

    console.print(f"🚀 [bold green]Running[/bold green] {file}\n")
    try:
        result = ToolchainOrchestrator(config).run(Path(file))
    except ProcessFailedError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        if e.output:
            err_console.print(e.output.rstrip(), markup=False, highlight=False)
        sys.exit(1)
    except ToolchainError as e:
        err_console.print(f"[bold red]Error:[/bold red] {e}")
        sys.exit(1)

    if result.stdout:
        console.print(result.stdout.rstrip(), markup=False, highlight=False)
    console.print("\n✅ [bold green]Program finished[/bold green]")


if __name__ == "__main__":
    cli()

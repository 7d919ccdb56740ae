"""Account server CLI - Main commands."""
import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from accountpy.core.api import APIConfig, ErrorKind, OperationResult, describe
from accountpy.core.logging import get_logger, mask_token

app = typer.Typer(
    name="accountpy",
    help="Account server client",
    add_completion=False
)
console = Console()
logger = get_logger("accountpy.cli")


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def make_client(ctx: typer.Context):
    from accountpy import AccountClient

    options = ctx.obj or {}
    logger.debug(f"Options: base_url={options.get('base_url')!r} timeout={options.get('timeout')}")
    return AccountClient(
        options.get("base_url"),
        config=APIConfig.from_env(),
        timeout=options.get("timeout")
    )


def print_result(result: OperationResult, show_token: bool = False):
    """Print a result table, or the failure reason and exit 1."""
    if not result.succeeded:
        reason = describe(result.error)
        console.print(f"[red]{result.kind.value} failed: {result.error.name}[/red] - {reason}")
        if result.message:
            console.print(f"[dim]Server said: {result.message}[/dim]")
        raise typer.Exit(1)

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("User", result.user.name or "-")
    table.add_row("ID", str(result.user.id) if result.user.is_known else "unknown")
    if result.token:
        table.add_row("Token", result.token if show_token else mask_token(result.token))
    if result.message:
        table.add_row("Message", result.message)

    console.print(f"[green]{result.kind.value} succeeded[/green]")
    console.print(table)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None, "--base-url", "-u", envvar="ACCOUNTPY_BASE_URL", help="Account server URL"
    ),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Talk to an account server."""
    if verbose:
        from accountpy import setup_logging
        logging.basicConfig(format="%(asctime)s %(name)s %(levelname)s %(message)s")
        setup_logging(logging.DEBUG)

    ctx.obj = {"base_url": base_url, "timeout": timeout}


@app.command()
def ping(
    ctx: typer.Context,
    url: Optional[str] = typer.Argument(None, help="URL to probe (defaults to the base URL)"),
):
    """Measure server latency."""
    async def do_ping():
        async with make_client(ctx) as client:
            try:
                return await client.ping(url)
            except ValueError as e:
                console.print(f"[red]{e}[/red]")
                raise typer.Exit(1)

    latency = run_async(do_ping())
    if latency < 0:
        console.print("[red]Server did not respond[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{latency:.1f} ms[/green]")


@app.command()
def register(
    ctx: typer.Context,
    name: str = typer.Option(None, "--name", "-n", help="User name"),
    password: str = typer.Option(None, "--password", "-p", help="Password"),
):
    """Register a new user."""
    if not name:
        name = typer.prompt("User name")
    if not password:
        password = typer.prompt("Password", hide_input=True, confirmation_prompt=True)

    async def do_register():
        async with make_client(ctx) as client:
            return await client.register(name, password)

    print_result(run_async(do_register()))


@app.command()
def login(
    ctx: typer.Context,
    name: str = typer.Option(None, "--name", "-n", help="User name"),
    password: str = typer.Option(None, "--password", "-p", help="Password"),
    show_token: bool = typer.Option(False, "--show-token", help="Print the full session token"),
):
    """Log in and print the session token."""
    if not name:
        name = typer.prompt("User name")
    if not password:
        password = typer.prompt("Password", hide_input=True)

    async def do_login():
        async with make_client(ctx) as client:
            return await client.login(name, password)

    print_result(run_async(do_login()), show_token=show_token)


@app.command()
def auth(
    ctx: typer.Context,
    token: str = typer.Option(..., "--token", envvar="ACCOUNTPY_TOKEN", help="Session token from login"),
):
    """Check a session token and show its user."""
    async def do_auth():
        async with make_client(ctx) as client:
            client.set_token(token)
            return await client.authenticate()

    result = run_async(do_auth())
    if result.error is ErrorKind.TOKEN_INVALID:
        console.print("[yellow]Empty token. Run 'accountpy login' first.[/yellow]")
    print_result(result)


if __name__ == "__main__":
    app()

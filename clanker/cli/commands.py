"""CLI commands for clanker."""

import asyncio
import signal
import threading
from pathlib import Path
from typing import List, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from clanker.agent.loop import Agent, iter_reader, stdin_reader
from clanker.agent.tools.registry import build_tools
from clanker.config import Config, load_config
from clanker.errors import ConfigError, InferenceError
from clanker.logging import setup_logging
from clanker.providers.litellm_provider import LiteLLMProvider

app = typer.Typer(
    name="clanker",
    help="clanker: chat with a hosted model that can read and write files",
    no_args_is_help=True,
)
console = Console(highlight=False)


def _interrupt(signum, frame) -> None:
    raise KeyboardInterrupt


def _run_session(agent: Agent) -> None:
    """Run a chat session; Ctrl-C ends it like end of input."""
    # asyncio.run only takes over SIGINT while the default handler is set.
    # With this handler Ctrl-C stays a KeyboardInterrupt, raised inside the
    # blocking stdin read at the prompt or out of asyncio.run mid-request.
    on_main_thread = threading.current_thread() is threading.main_thread()
    previous = signal.signal(signal.SIGINT, _interrupt) if on_main_thread else None
    try:
        asyncio.run(agent.run())
    except KeyboardInterrupt:
        console.print()
        logger.info("Session interrupted")
    finally:
        if on_main_thread:
            signal.signal(signal.SIGINT, previous)


def _load(env_file: Optional[Path], **overrides) -> Config:
    try:
        return load_config(env_file, **overrides)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def chat(
    message: Optional[str] = typer.Option(None, "--message", "-m", help="Send one message and exit"),
    model: Optional[str] = typer.Option(None, "--model", help="LiteLLM model string"),
    tool: Optional[List[str]] = typer.Option(None, "--tool", "-t", help="Enable only this tool (repeatable)"),
    no_tools: bool = typer.Option(False, "--no-tools", help="Plain chat, no tools declared"),
    workspace: Optional[Path] = typer.Option(None, "--workspace", "-w", help="Directory for relative tool paths"),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Dotenv file to load"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
) -> None:
    """Chat with the model. Reads one message per line until end of input."""
    config = _load(
        env_file,
        model=model,
        workspace=str(workspace) if workspace else None,
        tools=list(tool) if tool else None,
        log_level="DEBUG" if verbose else None,
    )
    setup_logging(config.log_level)

    api_key = config.resolved_api_key
    if not api_key:
        console.print(
            "[red]Error:[/red] No API key configured. "
            "Set CLANKER_API_KEY or GEMINI_API_KEY (a .env file works too)."
        )
        raise typer.Exit(1)

    try:
        tools = build_tools(config.workspace_path, [] if no_tools else config.tools)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    provider = LiteLLMProvider(
        api_key=api_key,
        api_base=config.api_base,
        default_model=config.model,
    )
    agent = Agent(
        provider=provider,
        tools=tools,
        get_user_message=iter_reader([message]) if message else stdin_reader(),
        console=console,
        model=config.model,
        max_tokens=config.max_tokens,
        temperature=config.temperature,
    )

    try:
        _run_session(agent)
    except InferenceError as e:
        logger.error(f"Inference failed: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def status(
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Dotenv file to load"),
) -> None:
    """Show the effective configuration."""
    config = _load(env_file)

    table = Table(title="clanker Status")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Model", config.model)
    table.add_row("Workspace", str(config.workspace_path))
    table.add_row("Tools", ", ".join(config.tools) or "[dim]none[/dim]")
    table.add_row("Max Tokens", str(config.max_tokens))
    table.add_row("Temperature", str(config.temperature))
    table.add_row("Log Level", config.log_level)

    api_key = config.resolved_api_key
    table.add_row("API Key", f"...{api_key[-8:]}" if api_key else "[red]Not configured[/red]")
    table.add_row("API Base", config.api_base or "Default")

    console.print(table)


@app.command("tools")
def list_tools(
    workspace: Optional[Path] = typer.Option(None, "--workspace", "-w", help="Directory for relative tool paths"),
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Dotenv file to load"),
) -> None:
    """List the tools the model can call with the current configuration."""
    config = _load(env_file, workspace=str(workspace) if workspace else None)
    try:
        registry = build_tools(config.workspace_path, config.tools)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    table = Table(title="Available Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Description")
    table.add_column("Required", style="green")

    for item in registry:
        required = ", ".join(item.parameters.get("required", []))
        table.add_row(item.name, item.description, required)

    console.print(table)


if __name__ == "__main__":
    app()

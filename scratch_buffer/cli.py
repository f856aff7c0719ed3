"""Command-line tools for exploring the scratch buffer placement policy.

``plan`` prints the decision for one editor state.  ``simulate`` replays a
sequence of steps against an in-memory editor and prints what the buffer
table and window layout look like afterwards.
"""

from __future__ import annotations

import sys

import typer
from loguru import logger

from scratch_buffer.config import ScratchConfig, load_config
from scratch_buffer.controller import ScratchController
from scratch_buffer.errors import ScratchError
from scratch_buffer.host import InMemoryEditor, get_host
from scratch_buffer.lifecycle import is_scratch_buffer
from scratch_buffer.placement import resolve

app = typer.Typer(help="Scratch buffer placement tools.")

STEPS = ("open", "split", "modify", "enew")


def _configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


@app.command()
def plan(
    split: bool = typer.Option(False, "--split", help="Explicitly request a new split."),
    modified: bool = typer.Option(False, "--modified", help="The active buffer has unsaved changes."),
    exists: bool = typer.Option(False, "--exists", help="The scratch buffer already exists."),
    visible: bool = typer.Option(False, "--visible", help="The scratch buffer is shown in a window."),
) -> None:
    """Print the placement decision for the given editor state."""
    try:
        decision = resolve(
            split,
            modified,
            buffer=1 if exists else None,
            window=1 if visible else None,
        )
    except ScratchError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1)
    typer.echo(f"action: {decision.action.value}")
    typer.echo(f"reuse_window: {decision.reuse_window}")
    typer.echo(f"create_new: {decision.create_new}")
    typer.echo(f"split: {decision.split}")


@app.command()
def simulate(
    steps: list[str] = typer.Argument(..., help=f"Steps to run: {', '.join(STEPS)}."),
    buffer_name: str = typer.Option("", "--buffer-name", help="Scratch buffer name."),
    config: str = typer.Option("", "--config", help="Path to a scratch_config.yml file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each decision."),
) -> None:
    """Run steps against an in-memory editor and print the final layout."""
    _configure_logging(verbose)

    unknown = [step for step in steps if step not in STEPS]
    if unknown:
        typer.echo(f"Error: unknown step(s): {', '.join(unknown)}")
        raise typer.Exit(code=1)

    editor = InMemoryEditor()
    try:
        scratch = ScratchConfig()
        if config:
            node = load_config(config)
            # Steps always run in memory; the provider is only checked.
            get_host(node)
            scratch = ScratchConfig.from_node(node)
        controller = ScratchController(editor, scratch)
        if buffer_name:
            controller.configure({"buffer_name": buffer_name})
    except FileNotFoundError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1)
    except ScratchError as exc:
        typer.echo(f"Error: {exc}")
        raise typer.Exit(code=1)

    for step in steps:
        if step == "modify":
            editor.modify()
            typer.echo("modify -> active buffer marked modified")
        elif step == "enew":
            handle = editor.add_buffer("").handle
            editor.display_buffer_in_current_window(handle)
            typer.echo(f"enew -> buffer {handle} in current window")
        else:
            decision = getattr(controller, step)()
            typer.echo(f"{step} -> {decision.describe()}")

    typer.echo("buffers:")
    for state in editor.buffers.values():
        flags = []
        if state.modified:
            flags.append("modified")
        if is_scratch_buffer(editor, state.handle):
            flags.append("scratch")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        typer.echo(f"  {state.handle}: {state.name or '[No Name]'}{suffix}")
    typer.echo("windows:")
    for index, handle in enumerate(editor.windows):
        marker = " *" if index == editor.current else ""
        typer.echo(f"  {index + 1}: buffer {handle}{marker}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()

"""
Replay command: fold an action log and report the resulting state
"""

import json
from collections import Counter
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from mxwrap.config import Settings
from mxwrap.core.actions import action_type
from mxwrap.core.canonical import canonicalize, state_hash
from mxwrap.core.reducer import Reducer
from mxwrap.replay import read_action_log, replay

console = Console()


def _fail(message: str, json_output: bool, **extra) -> NoReturn:
    if json_output:
        print(json.dumps({"error": message, **extra}))
    else:
        console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(2)


def replay_command(
    log_path: str = typer.Option(..., "--log", "-l", help="Path to JSON-lines action log"),
    until: Optional[int] = typer.Option(None, "--until", "-u", min=0, help="Stop after this action index"),
    show_state: bool = typer.Option(False, "--show-state", "-s", help="Show final state"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay an action log and print the resulting state summary.

    Examples:
        mxwrap replay --log actions.jsonl
        mxwrap replay --log actions.jsonl --until 10 --show-state
        mxwrap replay --log actions.jsonl --json
    """
    try:
        actions = list(read_action_log(log_path))
        if until is not None:
            actions = actions[: until + 1]
        result = replay(actions, reducer=Reducer.from_settings(Settings.from_env()))
    except FileNotFoundError:
        _fail("Log file not found", json_output, path=log_path)
    except Exception as e:
        _fail(str(e), json_output)

    counts = Counter(action_type(a) or "<untyped>" for a in actions)
    digest = state_hash(result.state)

    if json_output:
        output = {
            "success": True,
            "actions_replayed": result.applied,
            "state_hash": digest,
            "action_counts": dict(sorted(counts.items())),
        }
        if show_state:
            output["state"] = canonicalize(result.state)
        print(json.dumps(output, indent=2, default=str))
        return

    console.print(f"[green]✓ Replayed {result.applied} actions[/green]")
    console.print(f"  State hash: [yellow]{digest}[/yellow]")

    table = Table(title="Action Counts")
    table.add_column("Action Type", style="green")
    table.add_column("Count", style="cyan", justify="right")
    for kind in sorted(counts):
        table.add_row(kind, str(counts[kind]))
    console.print(table)

    if show_state:
        console.print("\n[bold]Final State:[/bold]")
        syntax_str = json.dumps(canonicalize(result.state), indent=2, default=str)
        console.print(Syntax(syntax_str, "json", theme="monokai"))

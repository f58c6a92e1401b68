"""
Rooms command: list the rooms an action log produces
"""

import json

import typer
from rich.console import Console
from rich.table import Table

from mxwrap import query
from mxwrap.config import Settings
from mxwrap.core.reducer import Reducer
from mxwrap.replay import read_action_log, replay

console = Console()


def rooms_command(
    log_path: str = typer.Option(..., "--log", "-l", help="Path to JSON-lines action log"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List rooms with their name, joined members and timeline length.

    Examples:
        mxwrap rooms --log actions.jsonl
    """
    try:
        reducer = Reducer.from_settings(Settings.from_env())
        state = replay(read_action_log(log_path), reducer=reducer).state
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
        raise typer.Exit(2)
    except Exception as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    rows = []
    for room_id in query.list_rooms(state):
        room = query.get_room(state, room_id)
        rows.append({
            "room_id": room_id,
            "name": room.get("name"),
            "joined": len(query.get_members(state, room_id, membership="join")),
            "members": len(room.get("members", {})),
            "timeline": len(room.get("timeline", [])),
        })

    if json_output:
        print(json.dumps({"rooms": rows, "count": len(rows)}, indent=2))
        return

    if not rows:
        console.print("[yellow]No rooms in log[/yellow]")
        return

    table = Table(title=f"Rooms: {log_path}")
    table.add_column("Room ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Joined / Members", justify="right")
    table.add_column("Timeline", justify="right", style="dim")
    for row in rows:
        table.add_row(
            row["room_id"],
            row["name"] or "-",
            f"{row['joined']} / {row['members']}",
            str(row["timeline"]),
        )
    console.print(table)

"""
Tests for the mxwrap CLI.
"""

import json
import logging

import pytest
from typer.testing import CliRunner

from mxwrap import __version__
from mxwrap.api.actions import pending, success
from mxwrap.cli.main import app
from mxwrap.core.actions import EventAction, SeriesAction, action_to_dict
from mxwrap.core.canonical import state_hash
from mxwrap.core.reducer import Reducer
from mxwrap.replay import replay

runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_root_logger():
    # The app callback reconfigures root logging on every invocation
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def ev(emitted_type, **args):
    return EventAction(emitted_type=emitted_type, emitted_args=args)


ACTIONS = [
    pending("login", ["alice", "pw"], "c1"),
    success("login", {"access_token": "t"}, "c1"),
    SeriesAction(actions=(
        ev("Room", room_id="!a:hs"),
        ev("Room.name", room_id="!a:hs", name="General"),
        ev("RoomMember.membership", room_id="!a:hs", user_id="@alice:hs",
           name="Alice", membership="join", avatar_url=None),
        ev("RoomMember.membership", room_id="!a:hs", user_id="@bob:hs",
           name="Bob", membership="leave", avatar_url=None),
        ev("Room.timeline", room_id="!a:hs", id="$e1", type="m.room.message",
           content={"body": "hi"}, prev_content=None, ts=1, sender="@alice:hs",
           redacted_because=None),
    )),
    ev("Room", room_id="!b:hs"),
]


@pytest.fixture
def action_log(tmp_path):
    path = tmp_path / "actions.jsonl"
    path.write_text(
        "".join(json.dumps(action_to_dict(a)) + "\n" for a in ACTIONS),
        encoding="utf-8",
    )
    return str(path)


def test_replay_json(action_log):
    result = runner.invoke(app, ["replay", "--log", action_log, "--json"])

    assert result.exit_code == 0, result.output
    output = json.loads(result.output)
    assert output["success"] is True
    assert output["actions_replayed"] == len(ACTIONS)
    assert output["state_hash"] == state_hash(replay(ACTIONS).state)
    assert output["action_counts"] == {
        "mrw.wrapped_api.pending": 1,
        "mrw.wrapped_api.success": 1,
        "mrw.wrapped_event": 1,
        "mrw.wrapped_event.series": 1,
    }
    assert "state" not in output


def test_replay_json_until_with_state(action_log):
    result = runner.invoke(app, ["replay", "--log", action_log, "--until", "0", "--show-state", "--json"])

    assert result.exit_code == 0, result.output
    output = json.loads(result.output)
    assert output["actions_replayed"] == 1
    assert output["state"]["mrw"]["wrapped_api"]["login"]["status"] == "pending"


def test_replay_table_output(action_log):
    result = runner.invoke(app, ["replay", "--log", action_log])

    assert result.exit_code == 0, result.output
    assert "Replayed 4 actions" in result.output


def test_replay_missing_log(tmp_path):
    missing = str(tmp_path / "nope.jsonl")
    result = runner.invoke(app, ["replay", "--log", missing, "--json"])

    assert result.exit_code == 2
    assert json.loads(result.output) == {"error": "Log file not found", "path": missing}


def test_replay_broken_log(tmp_path):
    path = tmp_path / "broken.jsonl"
    path.write_text("not json\n", encoding="utf-8")

    result = runner.invoke(app, ["replay", "--log", str(path), "--json"])

    assert result.exit_code == 2
    assert "broken.jsonl:1" in json.loads(result.output)["error"]


def test_rooms_json(action_log):
    result = runner.invoke(app, ["rooms", "--log", action_log, "--json"])

    assert result.exit_code == 0, result.output
    output = json.loads(result.output)
    assert output["count"] == 2
    assert output["rooms"][0] == {
        "room_id": "!a:hs",
        "name": "General",
        "joined": 1,
        "members": 2,
        "timeline": 1,
    }
    assert output["rooms"][1]["room_id"] == "!b:hs"
    assert output["rooms"][1]["name"] is None


def test_rooms_missing_log(tmp_path):
    result = runner.invoke(app, ["rooms", "--log", str(tmp_path / "nope.jsonl")])
    assert result.exit_code == 2


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_replay_rejects_negative_until(action_log):
    result = runner.invoke(app, ["replay", "--log", action_log, "--until", "-2", "--json"])

    assert result.exit_code != 0
    assert '"actions_replayed"' not in result.output


@pytest.mark.parametrize("command", ["replay", "rooms"])
def test_commands_fold_with_configured_reducer(command, action_log, monkeypatch):
    built = []
    real_from_settings = Reducer.from_settings.__func__

    def recording_from_settings(cls, settings):
        reducer = real_from_settings(cls, settings)
        built.append(reducer)
        return reducer

    monkeypatch.setenv("MXWRAP_REJECT_STALE_RESULTS", "true")
    monkeypatch.setattr(Reducer, "from_settings", classmethod(recording_from_settings))

    result = runner.invoke(app, [command, "--log", action_log, "--json"])

    assert result.exit_code == 0, result.output
    assert len(built) == 1
    assert built[0].reject_stale_results is True

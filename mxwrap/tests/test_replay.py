"""
Tests for replaying action logs.

Critical: replay must be deterministic and equal to sequential dispatch.
"""

import json

import pytest

from mxwrap.api.actions import failure, pending, success
from mxwrap.core.actions import EventAction, SeriesAction, action_from_dict, action_to_dict
from mxwrap.core.canonical import state_hash
from mxwrap.core.errors import ActionDecodeError, UnsupportedActionNamespace
from mxwrap.core.reducer import reduce
from mxwrap.replay import read_action_log, replay
from mxwrap.store import Store


def sample_actions():
    return [
        pending("login", ["u", "p"], "c1"),
        success("login", {"access_token": "12345"}, "c1"),
        {"type": "app/NAVIGATE", "to": "/rooms"},
        SeriesAction(actions=(
            EventAction(emitted_type="Room", emitted_args={"room_id": "!r"}),
            EventAction(emitted_type="Room.name", emitted_args={"room_id": "!r", "name": "Foo"}),
        )),
        pending("join", {"room": "!x"}, "c2"),
        failure("join", {"type": "MatrixError", "message": "forbidden"}, "c2"),
    ]


def write_log(path, actions):
    with open(path, "w", encoding="utf-8") as f:
        for action in actions:
            f.write(json.dumps(action_to_dict(action)) + "\n")


def test_replay_matches_store_dispatch():
    store = Store()
    for action in sample_actions():
        store.dispatch(action)

    result = replay(sample_actions())

    assert result.applied == len(sample_actions())
    assert state_hash(result.state) == state_hash(store.state)


def test_replay_is_deterministic():
    assert state_hash(replay(sample_actions()).state) == state_hash(replay(sample_actions()).state)


def test_replay_until_is_inclusive():
    result = replay(sample_actions(), until=0)

    assert result.applied == 1
    assert result.state["mrw"]["wrapped_api"]["login"]["status"] == "pending"


def test_replay_empty_is_initial_state():
    result = replay([])
    assert result.applied == 0
    assert result.state == reduce(None, None)


def test_serialized_actions_decode_to_equal_actions():
    for action in sample_actions():
        assert action_from_dict(action_to_dict(action)) == action


def test_read_action_log(tmp_path):
    path = tmp_path / "actions.jsonl"
    write_log(path, sample_actions())
    with open(path, "a", encoding="utf-8") as f:
        f.write("\n")

    actions = list(read_action_log(str(path)))

    assert actions == sample_actions()
    assert state_hash(replay(actions).state) == state_hash(replay(sample_actions()).state)


def test_read_action_log_rejects_bad_json(tmp_path):
    path = tmp_path / "broken.jsonl"
    path.write_text('{"type": "mrw.wrapped_event"\n', encoding="utf-8")

    with pytest.raises(ActionDecodeError, match="broken.jsonl:1"):
        list(read_action_log(str(path)))


def test_malformed_mrw_action_rejected():
    with pytest.raises(ActionDecodeError):
        action_from_dict({"type": "mrw.wrapped_api.pending"})
    with pytest.raises(ActionDecodeError):
        action_from_dict(["not", "a", "mapping"])


def test_replay_propagates_unsupported_namespace():
    with pytest.raises(UnsupportedActionNamespace):
        replay([{"type": "mrw.wrapped_other"}])

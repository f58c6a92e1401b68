"""
Tests for the Store.
"""

import pytest

from mxwrap.api.actions import failure, pending, success
from mxwrap.core.actions import EventAction
from mxwrap.core.reducer import Reducer
from mxwrap.core.state import initial_state
from mxwrap.store import Store


def test_store_starts_with_initial_state():
    assert Store().state == initial_state()


def test_store_accepts_existing_state():
    seeded = Reducer()(pending("login", None, "1"), None)
    store = Store(state=seeded)
    assert store.get_state() is seeded


def test_dispatch_updates_state_and_notifies():
    store = Store()
    seen = []
    store.subscribe(lambda old, new: seen.append((old, new)))

    before = store.state
    store.dispatch(pending("login", ["u", "p"], "1"))

    assert len(seen) == 1
    assert seen[0][0] is before
    assert seen[0][1] is store.state
    assert store.state["mrw"]["wrapped_api"]["login"]["loading"] is True


def test_unchanged_state_does_not_notify():
    store = Store()
    seen = []
    store.subscribe(lambda old, new: seen.append(new))

    store.dispatch({"type": "app/OTHER"})
    store.dispatch(EventAction(emitted_type="Room.tags", emitted_args={"room_id": "!r"}))

    assert seen == []


def test_unsubscribe():
    store = Store()
    seen = []
    unsubscribe = store.subscribe(lambda old, new: seen.append(new))

    unsubscribe()
    unsubscribe()
    store.dispatch(pending("login", None, "1"))

    assert seen == []


def test_thunks_receive_dispatch():
    store = Store()

    def login_thunk(dispatch):
        dispatch(pending("login", ["u"], "1"))
        dispatch(failure("login", {"type": "Error", "message": "nope"}, "1"))
        return "done"

    assert store.dispatch(login_thunk) == "done"
    assert store.state["mrw"]["wrapped_api"]["login"]["status"] == "failure"


def test_subscribers_may_dispatch():
    store = Store()

    def chain(old, new):
        call = new["mrw"]["wrapped_api"].get("login")
        if call and call["status"] == "success" and "logout" not in new["mrw"]["wrapped_api"]:
            store.dispatch(pending("logout", None, "2"))

    store.subscribe(chain)
    store.dispatch(pending("login", None, "1"))
    store.dispatch(success("login", {}, "1"))

    assert store.state["mrw"]["wrapped_api"]["logout"]["status"] == "pending"


def test_nested_dispatch_leaves_no_subscriber_on_stale_state():
    store = Store()
    last_seen = {}

    def first(old, new):
        last_seen["first"] = new
        if "b" not in new["mrw"]["wrapped_api"]:
            store.dispatch(pending("b", None, "2"))

    def second(old, new):
        last_seen["second"] = new

    store.subscribe(first)
    store.subscribe(second)
    store.dispatch(pending("a", None, "1"))

    assert last_seen["first"] is store.state
    assert last_seen["second"] is store.state
    assert "b" in last_seen["second"]["mrw"]["wrapped_api"]


def test_store_with_custom_reducer():
    store = Store(reducer=Reducer(reject_stale_results=True))
    store.dispatch(pending("search", None, "old"))
    store.dispatch(pending("search", None, "new"))
    store.dispatch(success("search", "stale", "old"))

    assert store.state["mrw"]["wrapped_api"]["search"]["status"] == "pending"


def test_reducer_errors_propagate():
    store = Store()
    with pytest.raises(Exception):
        store.dispatch({"type": "mrw.nope"})
    # Store stays usable afterwards
    store.dispatch(pending("login", None, "1"))
    assert "login" in store.state["mrw"]["wrapped_api"]

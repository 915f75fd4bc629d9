from __future__ import annotations

"""
Unit tests for the view event manager and event payloads.
"""

from typing import Any, List

import pytest
from jinja2 import DictLoader

from jinjaview.core.view.events import EnvironmentConfigEvent, EventManager, LoaderEvent
from jinjaview.domain.constants import EVENT_ENVIRONMENT_CONFIG, EVENT_LOADER


def test_listeners_called_in_registration_order() -> None:
    events = EventManager()
    calls: List[str] = []
    events.on(EVENT_ENVIRONMENT_CONFIG, lambda e: calls.append("first"))
    events.on(EVENT_ENVIRONMENT_CONFIG, lambda e: calls.append("second"))

    events.dispatch(EnvironmentConfigEvent({}))

    assert calls == ["first", "second"]


def test_dispatch_returns_modified_event() -> None:
    events = EventManager()

    def listener(event: EnvironmentConfigEvent) -> None:
        config = event.get_config()
        config["trim_blocks"] = True
        event.set_config(config)

    events.on(EVENT_ENVIRONMENT_CONFIG, listener)
    result = events.dispatch(EnvironmentConfigEvent({"debug": False}))

    assert result.get_config() == {"debug": False, "trim_blocks": True}


def test_off_removes_listener() -> None:
    events = EventManager()
    calls: List[Any] = []
    listener = calls.append
    events.on(EVENT_LOADER, listener)
    events.off(EVENT_LOADER, listener)
    events.off(EVENT_LOADER, listener)

    events.dispatch(LoaderEvent(DictLoader({})))

    assert calls == []
    assert events.listeners(EVENT_LOADER) == []


def test_loader_event_result_defaults_to_original() -> None:
    original = DictLoader({})
    replacement = DictLoader({"a": "b"})
    event = LoaderEvent(original)

    assert event.get_result_loader() is original
    event.set_result_loader(replacement)
    assert event.get_result_loader() is replacement


def test_listener_errors_propagate() -> None:
    events = EventManager()

    def broken(event: Any) -> None:
        raise RuntimeError("boom")

    events.on(EVENT_LOADER, broken)

    with pytest.raises(RuntimeError):
        events.dispatch(LoaderEvent(DictLoader({})))


def test_event_names() -> None:
    assert EnvironmentConfigEvent({}).name == EVENT_ENVIRONMENT_CONFIG
    assert LoaderEvent(DictLoader({})).name == EVENT_LOADER

from __future__ import annotations

from typing import List

from menu_engine.adapters.textual import (
    TextualMenuAdapter,
    TextualUIHooks,
    create_prompt_mode,
)
from menu_engine.candidates import CandidateStore
from menu_engine.config import MenuConfig
from menu_engine.session import MenuSession, MenuView


def make_adapter(
    views: List[MenuView],
    *,
    statuses: List[str] | None = None,
    events: List[tuple[str, object | None]] | None = None,
    logs: List[str] | None = None,
) -> TextualMenuAdapter:
    session = MenuSession(
        CandidateStore.from_lines(["alpha", "beta", "gamma"]),
        MenuConfig(lines=2),
    )
    hooks = TextualUIHooks(
        render=views.append,
        update_status=(statuses.append if statuses is not None else lambda s: None),
        handle_event=(
            (lambda name, payload: events.append((name, payload)))
            if events is not None
            else (lambda name, payload: None)
        ),
        log=(logs.append if logs is not None else lambda line: None),
    )
    return TextualMenuAdapter(create_prompt_mode(session), hooks)


def test_adapter_renders_initial_view() -> None:
    views: List[MenuView] = []

    make_adapter(views)

    assert len(views) == 1
    assert [item.text for item in views[0].items] == ["alpha", "beta"]
    assert views[0].has_next


def test_adapter_renders_after_typing_and_updates_status() -> None:
    views: List[MenuView] = []
    statuses: List[str] = []
    adapter = make_adapter(views, statuses=statuses)

    adapter.handle_textual_key("g", character="g")

    assert views[-1].query == "g"
    assert [item.text for item in views[-1].items] == ["gamma"]
    assert statuses[-1] == "edit"


def test_adapter_relays_bus_events() -> None:
    views: List[MenuView] = []
    events: List[tuple[str, object | None]] = []
    adapter = make_adapter(views, events=events)

    adapter.handle_textual_key("down")
    adapter.handle_textual_key("enter", character="\r")

    assert ("menu.output", "beta") in events
    assert ("menu.exit", 0) in events
    assert adapter.finished
    assert adapter.exit_code == 0


def test_adapter_paste_inserts_first_line() -> None:
    views: List[MenuView] = []
    statuses: List[str] = []
    adapter = make_adapter(views, statuses=statuses)

    delta = adapter.handle_paste("be\nignored")

    assert delta.applied
    assert views[-1].query == "be"
    assert statuses[-1] == "paste"


def test_adapter_forwards_paste_requests() -> None:
    views: List[MenuView] = []
    events: List[tuple[str, object | None]] = []
    adapter = make_adapter(views, events=events)

    result = adapter.handle_textual_key("ctrl+y", character="\x19")

    assert result.status == "paste_request"
    assert ("menu.paste_request", None) in events


def test_adapter_logs_key_and_result_lines() -> None:
    views: List[MenuView] = []
    logs: List[str] = []
    adapter = make_adapter(views, logs=logs)

    adapter.handle_textual_key("escape", character="\x1b")

    assert logs[0].startswith("key ->")
    assert any(line.startswith("result <-") for line in logs)
    assert any("event ->" in line for line in logs)
    assert adapter.exit_code == 1

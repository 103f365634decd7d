import pytest

from menu_engine.keymaps import (
    ActionRef,
    Binding,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
)
from menu_engine.keymaps.defaults import (
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    PROMPT_MODE,
    load_default_keymaps,
)


def make_action(action_id: str = "edit.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "prompt",
    key: str = "ctrl+x",
    action_id: str = "edit.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        key=KeyStroke.parse(key),
        action_id=action_id,
    )


def test_keystroke_parsing_normalizes_modifiers() -> None:
    assert KeyStroke.parse("shift+ctrl+Left").token == "ctrl+shift+left"
    assert KeyStroke.parse("alt+G").token == "alt+G"
    assert KeyStroke.parse("ctrl++").token == "ctrl++"
    assert KeyStroke.parse("+").token == "+"
    with pytest.raises(ValueError):
        KeyStroke.parse("hyper+a")


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="prompt.x")

    registry.register_binding(binding)

    assert registry.lookup("prompt", "ctrl+x") == binding
    assert registry.lookup("other", "ctrl+x") is None
    assert registry.lookup("prompt", "ctrl+y") is None


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="orphan"))


def test_register_action_twice_needs_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())
    registry.register_action(make_action(), replace=True)


def test_same_key_in_same_mode_conflicts() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    original = make_binding(binding_id="prompt.x")
    registry.register_binding(original)

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="prompt.x.again"))

    assert excinfo.value.existing == original
    assert registry.lookup("prompt", "ctrl+x") == original


def test_same_key_in_other_mode_does_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="prompt.x"))
    registry.register_binding(make_binding(binding_id="other.x", mode="other"))

    assert registry.lookup("other", "ctrl+x").id == "other.x"


def test_replace_takes_over_the_key() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_action(make_action("edit.other"))
    registry.register_binding(make_binding(binding_id="prompt.x"))

    replacement = make_binding(binding_id="prompt.custom", action_id="edit.other")
    registry.register_binding(replacement, replace=True)

    assert registry.lookup("prompt", "ctrl+x") == replacement


def test_replace_same_id_moves_the_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="binding"))

    with pytest.raises(ValueError):
        registry.register_binding(make_binding(binding_id="binding", key="ctrl+o"))
    moved = make_binding(binding_id="binding", key="ctrl+o")
    registry.register_binding(moved, replace=True)

    assert registry.lookup("prompt", "ctrl+x") is None
    assert registry.lookup("prompt", "ctrl+o") == moved


def test_load_default_keymaps_registers_every_binding() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    for action in DEFAULT_ACTIONS:
        assert registry.get_action(action.id) is action
    for binding in DEFAULT_BINDINGS:
        assert registry.lookup(PROMPT_MODE, binding.token) == binding
    assert registry.lookup(PROMPT_MODE, "escape").action_id == "output.cancel"


def test_default_bindings_use_distinct_keys() -> None:
    tokens = [binding.token for binding in DEFAULT_BINDINGS]

    assert len(tokens) == len(set(tokens))


def test_enter_variants_have_letter_fallbacks() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    assert registry.lookup(PROMPT_MODE, "ctrl+x").action_id == "output.confirm_query"
    assert registry.lookup(PROMPT_MODE, "ctrl+o").action_id == (
        "output.confirm_keep_open"
    )
    assert registry.lookup(PROMPT_MODE, "ctrl+t").action_id == (
        "output.confirm_query_keep_open"
    )

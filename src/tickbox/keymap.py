"""Mapping from key events to logical actions."""

from tickbox.models import Action, CharPress, Event, Key, KeyPress

Keymap = dict[CharPress | KeyPress, Action]

BASE_BINDINGS: Keymap = {
    KeyPress(Key.UP): Action.CURSOR_UP,
    KeyPress(Key.DOWN): Action.CURSOR_DOWN,
    KeyPress(Key.SPACE): Action.TOGGLE,
    KeyPress(Key.ENTER): Action.CONFIRM,
    KeyPress(Key.ESC): Action.ABORT,
    KeyPress(Key.CTRL_C): Action.ABORT,
    CharPress("q"): Action.QUIT,
}

VIM_BINDINGS: Keymap = {
    CharPress("k"): Action.CURSOR_UP,
    CharPress("j"): Action.CURSOR_DOWN,
}

EMACS_BINDINGS: Keymap = {
    KeyPress(Key.CTRL_P): Action.CURSOR_UP,
    KeyPress(Key.CTRL_N): Action.CURSOR_DOWN,
}


def build_keymap(vim_keys: bool = True, emacs_keys: bool = True) -> Keymap:
    """Build the key table, optionally with j/k and Ctrl-P/Ctrl-N navigation."""
    keymap = dict(BASE_BINDINGS)
    if vim_keys:
        keymap.update(VIM_BINDINGS)
    if emacs_keys:
        keymap.update(EMACS_BINDINGS)
    return keymap


def resolve_action(event: Event, keymap: Keymap | None = None) -> Action | None:
    """Look up the action for a key event. Returns None if the key is unbound."""
    if keymap is None:
        keymap = build_keymap()
    if not isinstance(event, (CharPress, KeyPress)):
        return None
    return keymap.get(event)

"""Key sequences for global hotkeys, parsed from strings such as ``Ctrl+Shift+F1``."""

from __future__ import annotations

from enum import Flag, IntEnum
from typing import Iterable, Iterator


def _key_members() -> list[tuple[str, int]]:
    members = [
        ("SPACE", 0x20),
        ("ESCAPE", 0x01000000),
        ("TAB", 0x01000001),
        ("BACKTAB", 0x01000002),
        ("BACKSPACE", 0x01000003),
        ("RETURN", 0x01000004),
        ("ENTER", 0x01000005),
        ("INSERT", 0x01000006),
        ("DELETE", 0x01000007),
        ("PAUSE", 0x01000008),
        ("PRINT", 0x01000009),
        ("SYSREQ", 0x0100000A),
        ("CLEAR", 0x0100000B),
        ("HOME", 0x01000010),
        ("END", 0x01000011),
        ("LEFT", 0x01000012),
        ("UP", 0x01000013),
        ("RIGHT", 0x01000014),
        ("DOWN", 0x01000015),
        ("PAGE_UP", 0x01000016),
        ("PAGE_DOWN", 0x01000017),
        ("SHIFT", 0x01000020),
        ("CONTROL", 0x01000021),
        ("META", 0x01000022),
        ("ALT", 0x01000023),
        ("CAPS_LOCK", 0x01000024),
        ("NUM_LOCK", 0x01000025),
        ("SCROLL_LOCK", 0x01000026),
        ("MENU", 0x01000055),
        ("HELP", 0x01000058),
        ("UNKNOWN", 0x01FFFFFF),
    ]
    members += [(f"F{n}", 0x01000030 + n - 1) for n in range(1, 36)]
    members += [(f"DIGIT_{n}", ord(str(n))) for n in range(10)]
    members += [(letter, ord(letter)) for letter in "ABCDEFGHIJKLMNOPQRSTUVWXYZ"]
    return members


Key = IntEnum("Key", _key_members(), module=__name__)
Key.__doc__ = "Keyboard key codes."


class Modifier(Flag):
    """Keyboard modifier flags."""

    NONE = 0
    SHIFT = 0x02000000
    CONTROL = 0x04000000
    ALT = 0x08000000
    META = 0x10000000


_MODIFIER_KEYS = (Key.SHIFT, Key.CONTROL, Key.ALT, Key.META)

_MODIFIER_NAMES = {
    "alt": Key.ALT,
    "shift": Key.SHIFT,
    "shft": Key.SHIFT,
    "control": Key.CONTROL,
    "ctrl": Key.CONTROL,
    "win": Key.META,
    "meta": Key.META,
}

_DISPLAY_NAMES = {
    Key.SHIFT: "Shift",
    Key.CONTROL: "Ctrl",
    Key.ALT: "Alt",
    Key.META: "Meta",
    Key.SPACE: "Space",
    Key.ESCAPE: "Esc",
    Key.TAB: "Tab",
    Key.BACKTAB: "Backtab",
    Key.BACKSPACE: "Backspace",
    Key.RETURN: "Return",
    Key.ENTER: "Enter",
    Key.INSERT: "Ins",
    Key.DELETE: "Del",
    Key.PAUSE: "Pause",
    Key.PRINT: "Print",
    Key.SYSREQ: "SysReq",
    Key.CLEAR: "Clear",
    Key.HOME: "Home",
    Key.END: "End",
    Key.LEFT: "Left",
    Key.UP: "Up",
    Key.RIGHT: "Right",
    Key.DOWN: "Down",
    Key.PAGE_UP: "PgUp",
    Key.PAGE_DOWN: "PgDown",
    Key.CAPS_LOCK: "CapsLock",
    Key.NUM_LOCK: "NumLock",
    Key.SCROLL_LOCK: "ScrollLock",
    Key.MENU: "Menu",
    Key.HELP: "Help",
}
_DISPLAY_NAMES.update({Key[f"F{n}"]: f"F{n}" for n in range(1, 36)})

_NAMED_KEYS = {name.lower(): key for key, name in _DISPLAY_NAMES.items() if key not in _MODIFIER_KEYS}
_NAMED_KEYS.update(
    {
        "escape": Key.ESCAPE,
        "insert": Key.INSERT,
        "delete": Key.DELETE,
        "pageup": Key.PAGE_UP,
        "pagedown": Key.PAGE_DOWN,
        "pgdn": Key.PAGE_DOWN,
    }
)


def _as_key(code: int) -> int:
    try:
        return Key(code)
    except ValueError:
        return code


def _key_from_name(name: str) -> int:
    lowered = name.lower()
    if lowered in _NAMED_KEYS:
        return _NAMED_KEYS[lowered]
    if len(name) == 1 and name.isprintable():
        return _as_key(ord(name.upper()))
    raise ValueError(f"wrong key: {name!r}")


def _key_to_str(key: int) -> str:
    name = _DISPLAY_NAMES.get(key)  # type: ignore[call-overload]
    if name is not None:
        return name
    if key < 0x110000:
        return chr(key)
    return f"0x{key:X}"


class KeySequence:
    """An ordered set of keys: modifiers plus the keys pressed with them."""

    def __init__(self, keys: Iterable[int] = ()) -> None:
        self._keys: list[int] = []
        for key in keys:
            self.add_key(key)

    @classmethod
    def from_string(cls, text: str) -> KeySequence:
        """Parse ``+``-separated key names; raises ValueError on an unknown name."""
        sequence = cls()
        for name in text.split("+"):
            sequence.add_key_name(name)
        return sequence

    def add_key(self, key: int) -> None:
        """Add ``key`` unless it is not positive or already present."""
        if key <= 0 or key in self._keys:
            return
        self._keys.append(_as_key(key))

    def add_key_name(self, name: str) -> None:
        """Add the key called ``name``; modifier aliases such as ``ctrl`` are accepted."""
        if "+" in name or "," in name:
            raise ValueError(f"wrong key: {name!r}")
        modifier = _MODIFIER_NAMES.get(name.lower())
        self.add_key(modifier if modifier is not None else _key_from_name(name))

    def add_modifiers(self, modifiers: Modifier) -> None:
        """Add the modifier keys set in ``modifiers``, in Shift, Ctrl, Alt, Meta order."""
        for flag, key in (
            (Modifier.SHIFT, Key.SHIFT),
            (Modifier.CONTROL, Key.CONTROL),
            (Modifier.ALT, Key.ALT),
            (Modifier.META, Key.META),
        ):
            if modifiers & flag:
                self.add_key(key)

    def simple_keys(self) -> list[int]:
        """The keys that are not modifiers, in the order they were added."""
        return [key for key in self._keys if key not in _MODIFIER_KEYS]

    def modifiers(self) -> list[int]:
        """The modifier keys, in the order they were added."""
        return [key for key in self._keys if key in _MODIFIER_KEYS]

    def __len__(self) -> int:
        return len(self._keys)

    def __iter__(self) -> Iterator[int]:
        return iter(self._keys)

    def __getitem__(self, index: int) -> int:
        return self._keys[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeySequence):
            return NotImplemented
        return self._keys == other._keys

    def __str__(self) -> str:
        return "+".join(_key_to_str(key) for key in self.modifiers() + self.simple_keys())

    def __repr__(self) -> str:
        return f"KeySequence.from_string({str(self)!r})"
# rotor_and_reflector.py
from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import ConfigurationError, InvalidReflector, SettingError

debug = Debug()
debug.disable("rotor")


class RotorKind(Enum):
    REFLECTOR = "R"
    FIXED = "N"
    MOVING = "M"


@dataclass(slots=True, eq=False)
class Rotor:
    """One wheel: a named wiring plus the position it is turned to.

    The kind decides everything that differs between wheels; only a
    MOVING rotor carries notches or ever changes its own setting.
    """

    name: str
    kind: RotorKind
    permutation: Permutation
    notches: frozenset[str] = frozenset()
    setting: int = 0
    _size: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._size = self.permutation.size
        if self.kind is RotorKind.REFLECTOR and not self.permutation.derangement():
            raise InvalidReflector(f"Reflector {self.name} maps a symbol to itself")
        if self.notches and self.kind is not RotorKind.MOVING:
            raise ConfigurationError(f"Only moving rotors have notches ({self.name})")
        bad = sorted(ch for ch in self.notches if ch not in self.alphabet)
        if bad:
            raise ConfigurationError(
                f"Notch {''.join(bad)!r} of rotor {self.name} not in alphabet"
            )

    # ── constructors ---------------------------------------------
    @classmethod
    def reflector(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, RotorKind.REFLECTOR, perm)

    @classmethod
    def fixed(cls, name: str, perm: Permutation) -> "Rotor":
        return cls(name, RotorKind.FIXED, perm)

    @classmethod
    def moving(cls, name: str, perm: Permutation, notches: str) -> "Rotor":
        return cls(name, RotorKind.MOVING, perm, frozenset(notches))

    # ── classification -------------------------------------------
    @property
    def alphabet(self) -> Alphabet:
        return self.permutation.alphabet

    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    def reflecting(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    # ── position -------------------------------------------------
    def set(self, position: int | str) -> None:
        """Turn to *position*, given as an index or as an alphabet symbol."""
        if isinstance(position, str):
            position = self.alphabet.to_int(position)
        position %= self._size
        if self.kind is RotorKind.REFLECTOR and position != 0:
            raise SettingError(f"Reflector {self.name} cannot be turned")
        self.setting = position

    def window(self) -> str:
        """Symbol currently showing."""
        return self.alphabet.to_char(self.setting)

    def at_notch(self) -> bool:
        if self.kind is RotorKind.MOVING:
            return self.window() in self.notches
        return False

    def advance(self) -> None:
        if self.kind is RotorKind.MOVING:
            self.setting = (self.setting + 1) % self._size
            debug.log("rotor", f"{self.name} -> {self.window()}")

    # ── signal paths ---------------------------------------------
    def permute(self, p: int) -> int:
        """Right-to-left through the wiring at the current offset."""
        mapped = self.permutation.permute(p + self.setting)
        return (mapped - self.setting) % self._size

    def invert(self, e: int) -> int:
        """Left-to-right: the inverse of `permute` at the same offset."""
        mapped = self.permutation.invert(e + self.setting)
        return (mapped - self.setting) % self._size

    def __repr__(self) -> str:
        notch = f" notches={''.join(sorted(self.notches))}" if self.notches else ""
        return f"<Rotor {self.name} {self.kind.name} pos={self.setting}{notch}>"


# ── RotorCatalog ──────────────────────────────────────────────────
class RotorCatalog:
    """Append-only pool of every available rotor.

    Rotors are addressed by integer handles; a machine keeps handles in
    its slots and never copies the records, so one catalog can serve
    any number of successive configurations.
    """

    def __init__(self, rotors: Iterable[Rotor] = ()) -> None:
        self._rotors: list[Rotor] = []
        self._by_name: dict[str, int] = {}
        for rotor in rotors:
            self.add(rotor)

    def add(self, rotor: Rotor) -> int:
        if rotor.name in self._by_name:
            raise ConfigurationError(f"Rotor {rotor.name!r} described twice")
        handle = len(self._rotors)
        self._rotors.append(rotor)
        self._by_name[rotor.name] = handle
        return handle

    def handle(self, name: str) -> int:
        try:
            return self._by_name[name]
        except KeyError:
            raise ConfigurationError(f"No rotor named {name!r}") from None

    def names(self) -> list[str]:
        return list(self._by_name)

    def __getitem__(self, handle: int) -> Rotor:
        return self._rotors[handle]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Rotor]:
        return iter(self._rotors)

    def __len__(self) -> int:
        return len(self._rotors)

    def __repr__(self) -> str:
        return f"<RotorCatalog {' '.join(self._by_name)}>"

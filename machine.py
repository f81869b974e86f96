# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Callable, Optional

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import (
    ConfigurationError,
    MalformedPermutation,
    RotorAssignmentError,
    SettingError,
)
from rotor_and_reflector import Rotor, RotorCatalog

debug = Debug()
debug.disable("stepping", "machine")

Trace = Callable[[str], None]


class Machine:
    """A complete rotor machine.

    Slot 0 holds the reflector and slot ``num_rotors - 1`` the fast
    rotor.  Slots refer to rotors of the shared catalog by handle.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: RotorCatalog | Iterable[Rotor],
    ) -> None:
        if num_rotors <= 1:
            raise ConfigurationError(f"Need at least two rotor slots, got {num_rotors}")
        if not (0 <= pawls < num_rotors):
            raise ConfigurationError(
                f"Pawl count {pawls} must lie in 0-{num_rotors - 1}"
            )

        self.alphabet = alphabet
        self._num_rotors = num_rotors
        self._num_pawls = pawls
        self._catalog = (
            all_rotors if isinstance(all_rotors, RotorCatalog) else RotorCatalog(all_rotors)
        )
        foreign = [r.name for r in self._catalog if r.alphabet != alphabet]
        if foreign:
            raise ConfigurationError(
                f"Rotor {foreign[0]} is wired over a different alphabet"
            )
        self._slots: list[int] = []
        self._plugboard = Permutation("", alphabet)

    # ── geometry ────────────────────────────────────────────────

    @property
    def num_rotors(self) -> int:
        return self._num_rotors

    @property
    def num_pawls(self) -> int:
        return self._num_pawls

    @property
    def catalog(self) -> RotorCatalog:
        return self._catalog

    def get_rotor(self, k: int) -> Rotor:
        """Rotor in slot *k* (0 is the reflector)."""
        return self._catalog[self._slots[k]]

    def _rotors(self) -> list[Rotor]:
        return [self._catalog[h] for h in self._slots]

    def in_all_rotors(self, name: str) -> bool:
        return name in self._catalog

    # ── rotor assignment ────────────────────────────────────────

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots with the rotors *names* (names[0] is the reflector).

        Every inserted rotor starts at setting 0.  On failure the previous
        assignment is kept.
        """
        if len(names) != self._num_rotors:
            raise RotorAssignmentError(
                f"Expected {self._num_rotors} rotors, got {len(names)}"
            )
        if len(set(names)) != len(names):
            dup = next(n for n in names if names.count(n) > 1)
            raise RotorAssignmentError(f"Rotor {dup} used more than once")

        slots: list[int] = []
        for name in names:
            if name not in self._catalog:
                raise RotorAssignmentError(f"No rotor named {name!r}")
            slots.append(self._catalog.handle(name))

        rotors = [self._catalog[h] for h in slots]
        if not rotors[0].reflecting():
            raise RotorAssignmentError(f"First rotor {names[0]} isn't a reflector")
        misplaced = [r.name for r in rotors[1:] if r.reflecting()]
        if misplaced:
            raise RotorAssignmentError(
                f"Reflector {misplaced[0]} can only go in the leftmost slot"
            )
        moving = sum(r.rotates() for r in rotors)
        if moving != self._num_pawls:
            raise RotorAssignmentError(
                f"Wrong number of moving rotors: {moving} for {self._num_pawls} pawls"
            )

        for rotor in rotors:
            rotor.set(0)
        self._slots = slots
        debug.log("machine", f"slots {' '.join(names)}")

    def reset_rotors(self) -> None:
        """Empty every slot."""
        self._slots = []

    def set_rotors(self, setting: str) -> None:
        """Turn the non-reflector rotors, left to right, to *setting*."""
        self._require_rotors()
        if len(setting) != self._num_rotors - 1:
            raise SettingError(
                f"Setting {setting!r} must have {self._num_rotors - 1} characters"
            )
        bad = [ch for ch in setting if ch not in self.alphabet]
        if bad:
            raise SettingError(f"Setting character {bad[0]!r} not in alphabet")

        for k, ch in enumerate(setting, start=1):
            self.get_rotor(k).set(ch)

    def rotor_settings(self) -> str:
        """Window letters of every non-reflector rotor, left to right."""
        return "".join(r.window() for r in self._rotors()[1:])

    # ── plugboard ───────────────────────────────────────────────

    @property
    def plugboard(self) -> Permutation:
        return self._plugboard

    def set_plugboard(self, plugboard: Permutation | str) -> None:
        if isinstance(plugboard, str):
            plugboard = Permutation(plugboard, self.alphabet)
        if plugboard.alphabet != self.alphabet:
            raise ConfigurationError("Plugboard is wired over a different alphabet")
        long_cycles = [c for c in plugboard.cycles if len(c) > 2]
        if long_cycles:
            raise MalformedPermutation(
                f"Plugboard can only swap pairs, got ({long_cycles[0]})"
            )
        self._plugboard = plugboard

    # ── stepping logic  ─────────────────────────────────────────

    def _advance_rotors(self) -> None:
        """Advance rotors one key-press.

        Every decision reads the positions from before the key-press, so
        a middle rotor pushed both by its own pawl and by its left
        neighbour's pawl still moves exactly once (the double step).
        """
        rotors = self._rotors()
        fast = len(rotors) - 1

        moves = [False] * len(rotors)
        moves[fast] = True
        for i in range(1, fast):
            if rotors[i].rotates() and rotors[i + 1].at_notch():
                moves[i] = moves[i + 1] = True

        for rotor, move in zip(rotors, moves):
            if move:
                rotor.advance()
        debug.log("stepping", f"windows {self.rotor_settings()}")

    # ── encipher one symbol  ────────────────────────────────────

    def _apply_rotors(self, c: int) -> int:
        rotors = self._rotors()
        for rotor in reversed(rotors):
            c = rotor.permute(c)
        for rotor in rotors[1:]:
            c = rotor.invert(c)
        return c

    def convert(self, c: int, trace: Optional[Trace] = None) -> int:
        """Advance the machine, then encipher index *c*."""
        self._require_rotors()
        self._advance_rotors()

        windows = self.rotor_settings()
        plugged = self._plugboard.permute(c)
        rotated = self._apply_rotors(plugged)
        out = self._plugboard.permute(rotated)

        if trace is not None:
            a = self.alphabet
            trace(
                f"[{windows}] {a.to_char(self._plugboard.wrap(c))} -> "
                f"{a.to_char(plugged)} -> {a.to_char(rotated)} -> {a.to_char(out)}"
            )
        return out

    def convert_message(self, msg: str, trace: Optional[Trace] = None) -> str:
        """Encipher *msg* symbol by symbol; settings carry over between symbols."""
        a = self.alphabet
        return "".join(a.to_char(self.convert(a.to_int(ch), trace)) for ch in msg)

    # ── helpers ─────────────────────────────────────────────────

    def _require_rotors(self) -> None:
        if not self._slots:
            raise RotorAssignmentError("No rotors inserted")

    def __repr__(self) -> str:
        names = " ".join(r.name for r in self._rotors()) or "empty"
        return f"<Machine {names} [{self.rotor_settings() if self._slots else ''}] {self._plugboard}>"

# config_reader.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from alphabet_and_permutation import Alphabet, Permutation
from debug import Debug
from errors import (
    ConfigurationError,
    MalformedPermutation,
    RotorAssignmentError,
    SettingError,
)
from machine import Machine
from rotor_and_reflector import Rotor, RotorCatalog

debug = Debug()
debug.disable("config")

# ────────────────────────────────────────────────────────────────────────
#  0. Regex & trivial helpers
# ────────────────────────────────────────────────────────────────────────

_type_re = re.compile(r"^(?:(?P<refl>R)|(?P<fixed>N)|M(?P<notches>\S*))$")


def _count(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ConfigurationError(f"Number of {what} must be an integer, got {token!r}") from None


# ────────────────────────────────────────────────────────────────────────
#  1. Machine description
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class MachineConfig:
    """Everything a configuration file describes."""

    alphabet: Alphabet
    num_rotors: int
    num_pawls: int
    catalog: RotorCatalog

    def build(self) -> Machine:
        return Machine(self.alphabet, self.num_rotors, self.num_pawls, self.catalog)


def read_config(text: str) -> MachineConfig:
    """Parse configuration text.

    Layout::

        ABCDEFGHIJKLMNOPQRSTUVWXYZ
        5 3
        I MQ (AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)
        Beta N (ALBEVFCYODJWUGNMQTZSKPR) (HIX)
        B R (AY) (BR) (CU) ...

    The first non-blank line is the alphabet, then the slot and pawl
    counts, then one ``NAME TYPE CYCLES...`` entry per rotor.  Entries
    may wrap across lines.
    """
    lines = text.splitlines()
    while lines and not lines[0].strip():
        lines.pop(0)
    if not lines:
        raise ConfigurationError("configuration file truncated")

    alphabet = Alphabet(lines[0].strip())
    tokens = " ".join(lines[1:]).split()
    if len(tokens) < 2:
        raise ConfigurationError("configuration file truncated")

    num_rotors = _count(tokens[0], "rotors")
    num_pawls = _count(tokens[1], "pawls")

    catalog = RotorCatalog()
    i = 2
    while i < len(tokens):
        name = tokens[i]
        if name.startswith("(") or i + 1 >= len(tokens):
            raise ConfigurationError(f"bad rotor description at {name!r}")
        kind = tokens[i + 1]
        i += 2

        cycles: List[str] = []
        while i < len(tokens) and tokens[i].startswith("("):
            if not tokens[i].endswith(")"):
                raise MalformedPermutation(
                    f"No closing parenthesis in {tokens[i]!r} of rotor {name}"
                )
            cycles.append(tokens[i])
            i += 1

        catalog.add(make_rotor(name, kind, " ".join(cycles), alphabet))

    debug.log("config", f"{len(catalog)} rotors, {num_rotors} slots, {num_pawls} pawls")
    return MachineConfig(alphabet, num_rotors, num_pawls, catalog)


def make_rotor(name: str, kind: str, cycles: str, alphabet: Alphabet) -> Rotor:
    """One catalog entry from its type code (R, N or M<notches>)."""
    m = _type_re.match(kind)
    if not m:
        raise ConfigurationError(f"Unknown type {kind!r} for rotor {name}")

    perm = Permutation(cycles, alphabet)
    if m["refl"]:
        return Rotor.reflector(name, perm)
    if m["fixed"]:
        return Rotor.fixed(name, perm)
    return Rotor.moving(name, perm, m["notches"])


def load_config(path: str | Path) -> MachineConfig:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"could not open {path}: {exc.strerror}") from exc
    return read_config(text)


# ────────────────────────────────────────────────────────────────────────
#  2. Per-message settings
# ────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class MessageSettings:
    rotors: List[str]
    setting: str
    plugboard: str = field(default="")

    def apply(self, machine: Machine) -> None:
        """Insert, turn and plug; the plugboard is replaced even when empty."""
        machine.insert_rotors(self.rotors)
        machine.set_rotors(self.setting)
        machine.set_plugboard(self.plugboard)
        debug.log("config", f"applied {self}")


def parse_settings(line: str, machine: Machine) -> MessageSettings:
    """Split ``* B Beta III IV I AXLE (HQ) (EX)`` into its three parts.

    Leading tokens that name catalog rotors are the rotors; the next
    token is the setting; whatever follows is the plugboard.
    """
    text = line.strip()
    if not text.startswith("*"):
        raise ConfigurationError(f"Settings line must start with '*': {line!r}")
    tokens = text[1:].split()

    rotors: List[str] = []
    while tokens and len(rotors) < machine.num_rotors and machine.in_all_rotors(tokens[0]):
        name = tokens.pop(0)
        if name in rotors:
            raise RotorAssignmentError(f"Duplicate rotor name {name}")
        rotors.append(name)

    if not rotors:
        raise ConfigurationError(f"No rotors named in {line.strip()!r}")
    if len(rotors) < machine.num_rotors:
        raise RotorAssignmentError(
            f"Not enough rotors given: {len(rotors)} of {machine.num_rotors}"
        )
    if not tokens:
        raise SettingError("No rotor setting given")

    setting = tokens.pop(0)
    if len(setting) != machine.num_rotors - 1:
        raise SettingError(
            f"Wrong number of settings given: {setting!r} for {machine.num_rotors - 1} rotors"
        )
    return MessageSettings(rotors, setting, " ".join(tokens))

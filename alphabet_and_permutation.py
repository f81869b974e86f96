# alphabet_and_permutation.py
from __future__ import annotations

from collections.abc import Iterator
from debug import Debug
from errors import ConfigurationError, EnigmaError, MalformedPermutation

debug = Debug()
debug.disable("alphabet", "permutation")

# characters with structural meaning in cycle notation and settings lines
_RESERVED = frozenset("()*")


# ── Alphabet ──────────────────────────────────────────────────────
class Alphabet:
    """Ordered, duplicate-free symbol set; symbol k has index k."""

    def __init__(self, chars: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ") -> None:
        if not chars:
            raise ConfigurationError("Alphabet must contain at least one symbol")

        self.alpha_to_index: dict[str, int] = {}
        for i, ch in enumerate(chars):
            if ch.isspace() or ch in _RESERVED:
                raise ConfigurationError(f"Symbol {ch!r} cannot be used in an alphabet")
            if ch in self.alpha_to_index:
                raise ConfigurationError(f"Symbol {ch!r} appears twice in alphabet")
            self.alpha_to_index[ch] = i

        self.chars: str = chars
        debug.log("alphabet", f"{len(chars)} symbols: {chars}")

    @property
    def size(self) -> int:
        return len(self.chars)

    def contains(self, ch: str) -> bool:
        return ch in self.alpha_to_index

    # symbol → integer signal
    def to_int(self, ch: str) -> int:
        try:
            return self.alpha_to_index[ch]
        except KeyError:
            raise EnigmaError(f"Character {ch!r} is not in the alphabet") from None

    # integer signal → symbol
    def to_char(self, index: int) -> str:
        if not (0 <= index < self.size):
            raise EnigmaError(f"Index {index} out of range 0-{self.size - 1}")
        return self.chars[index]

    def __contains__(self, ch: object) -> bool:
        return ch in self.alpha_to_index

    def __iter__(self) -> Iterator[str]:
        return iter(self.chars)

    def __len__(self) -> int:
        return len(self.chars)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Alphabet) and other.chars == self.chars

    def __hash__(self) -> int:
        return hash(self.chars)

    def __repr__(self) -> str:
        return f"<Alphabet {self.chars}>"


# ── Permutation ───────────────────────────────────────────────────
class Permutation:
    """A substitution on an alphabet, written in cycle notation.

    ``Permutation("(BACD)", Alphabet("ABCD"))`` sends B→A, A→C, C→D and
    D→B.  Symbols that are in no cycle map to themselves.  The text is
    read once into a pair of index tables (image and pre-image), so both
    directions cost one list lookup.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self.alphabet = alphabet
        self._fwd: list[int] = list(range(alphabet.size))
        self._rev: list[int] = list(range(alphabet.size))
        self._cycles: list[str] = []
        self._parse(cycles)
        debug.log("permutation", f"{cycles!r} -> {self}")

    @classmethod
    def from_wiring(cls, wiring: str, alphabet: Alphabet) -> "Permutation":
        """Build from a wiring string: the image of each alphabet symbol, in order."""
        if sorted(wiring) != sorted(alphabet.chars):
            raise MalformedPermutation("wiring must be a permutation of alphabet")

        image = dict(zip(alphabet.chars, wiring))
        seen: set[str] = set()
        parts: list[str] = []
        for start in alphabet:
            cycle = ""
            ch = start
            while ch not in seen:
                seen.add(ch)
                cycle += ch
                ch = image[ch]
            if cycle:
                parts.append(f"({cycle})")
        return cls(" ".join(parts), alphabet)

    # ── parsing --------------------------------------------------
    def _parse(self, text: str) -> None:
        seen: set[str] = set()
        current: str | None = None      # open cycle, None between cycles

        for pos, ch in enumerate(text):
            if ch == "(":
                if current is not None:
                    raise MalformedPermutation(f"Nested '(' at position {pos} in {text!r}")
                current = ""
            elif ch == ")":
                if current is None:
                    raise MalformedPermutation(f"Unmatched ')' at position {pos} in {text!r}")
                if not current:
                    raise MalformedPermutation(f"Empty cycle at position {pos} in {text!r}")
                self._add_cycle(current)
                current = None
            elif ch.isspace():
                continue
            elif ch not in self.alphabet:
                raise MalformedPermutation(f"Character {ch!r} in {text!r} is not in the alphabet")
            elif current is None:
                raise MalformedPermutation(f"Character {ch!r} in {text!r} is outside any cycle")
            elif ch in seen:
                raise MalformedPermutation(f"Character {ch!r} repeated in {text!r}")
            else:
                seen.add(ch)
                current += ch

        if current is not None:
            raise MalformedPermutation(f"Unclosed '(' in {text!r}")

    def _add_cycle(self, cycle: str) -> None:
        idx = [self.alphabet.to_int(ch) for ch in cycle]
        for src, dst in zip(idx, idx[1:] + idx[:1]):
            self._fwd[src] = dst
            self._rev[dst] = src
        self._cycles.append(cycle)

    # ── index level ----------------------------------------------
    @property
    def size(self) -> int:
        return self.alphabet.size

    def wrap(self, p: int) -> int:
        # Python's % already yields a non-negative result for a positive modulus
        return p % self.size

    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    # ── symbol level ---------------------------------------------
    def permute_char(self, p: str) -> str:
        return self.alphabet.to_char(self._fwd[self.alphabet.to_int(p)])

    def invert_char(self, c: str) -> str:
        return self.alphabet.to_char(self._rev[self.alphabet.to_int(c)])

    # ── structure ------------------------------------------------
    def derangement(self) -> bool:
        """True iff no symbol maps to itself."""
        return all(img != i for i, img in enumerate(self._fwd))

    @property
    def cycles(self) -> tuple[str, ...]:
        return tuple(self._cycles)

    def __str__(self) -> str:
        return " ".join(f"({c})" for c in self._cycles)

    def __repr__(self) -> str:
        return f"<Permutation {self}>"

# suites.py
from typing import Dict, List, Tuple

from alphabet_and_permutation import Alphabet, Permutation

Alpha26 = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Legacy wheels: (name, type code, wiring as the image of A, B, C, ...)
LEGACY_WHEELS: List[Tuple[str, str, str]] = [
    ("I",    "MQ",  "EKMFLGDQVZNTOWYHXUSPAIBRCJ"),
    ("II",   "ME",  "AJDKSIRUXBLHWTMCQGZNPYFVOE"),
    ("III",  "MV",  "BDFHJLCPRTXVZNYEIWGAKMUSQO"),
    ("IV",   "MJ",  "ESOVPZJAYQUIRHXLNFTGKDCMWB"),
    ("V",    "MZ",  "VZBRGITYUPSDNHLXAWMJQOFECK"),
    ("VI",   "MZM", "JPGVOUMFYQBENHZRDKASXLICTW"),
    ("VII",  "MZM", "NZJHGRCXMYSWBOUFAIVLPEKQDT"),
    ("Beta", "N",   "LEYJVCNIXWPBQMDRTAKZGFUHOS"),
    ("B",    "R",   "YRUHQSLDPXNGOKMIEBFZCWVJAT"),
    ("C",    "R",   "FVPJIAOYEDRZXWGCTKUQSBNMHL"),
]


def render_config(alphabet: str, slots: int, pawls: int, wheels: List[Tuple[str, str, str]]) -> str:
    """Configuration text for wheels given by wiring string."""
    alpha = Alphabet(alphabet)
    lines = [alphabet, f"{slots} {pawls}"]
    for name, kind, wiring in wheels:
        lines.append(f"{name:<5} {kind:<4} {Permutation.from_wiring(wiring, alpha)}")
    return "\n".join(lines) + "\n"


# five slots, three pawls
LEGACY_CONFIG = render_config(Alpha26, 5, 3, LEGACY_WHEELS)

SUITES: Dict[str, Dict[str, str]] = {
    "legacy": {"name": "Legacy", "alphabet": Alpha26, "config": LEGACY_CONFIG},
}

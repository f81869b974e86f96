# errors.py
from __future__ import annotations


class EnigmaError(ValueError):
    """Any problem with the cipher configuration or its input."""


class MalformedPermutation(EnigmaError):
    """Bad cycle notation: stray symbol, repeat, or unbalanced brackets."""


class InvalidReflector(EnigmaError):
    """Reflector wiring that maps some symbol to itself."""


class RotorAssignmentError(EnigmaError):
    """Rotor names that cannot fill the machine's slots."""


class SettingError(EnigmaError):
    """Initial rotor positions of the wrong length or outside the alphabet."""


class ConfigurationError(EnigmaError):
    """Machine description that cannot be turned into a machine."""

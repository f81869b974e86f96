import pytest

from alphabet_and_permutation import Alphabet
from config_reader import read_config
from machine import Machine
from suites import LEGACY_CONFIG

UPPER_STRING = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


@pytest.fixture
def upper():
    return Alphabet(UPPER_STRING)


@pytest.fixture
def legacy():
    """Freshly parsed historical catalog (rotor settings never leak between tests)."""
    return read_config(LEGACY_CONFIG)


@pytest.fixture
def enigma_i(legacy):
    """Three-rotor Enigma I: reflector plus three moving rotors."""
    return Machine(legacy.alphabet, 4, 3, legacy.catalog)

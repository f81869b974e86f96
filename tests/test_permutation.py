import pytest

from alphabet_and_permutation import Alphabet, Permutation
from errors import ConfigurationError, EnigmaError, MalformedPermutation

UPPER_STRING = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def check_perm(perm, from_alpha, to_alpha):
    """perm maps from_alpha[i] to to_alpha[i], at symbol and index level."""
    assert perm.size == len(from_alpha)
    for c, e in zip(from_alpha, to_alpha):
        assert perm.permute_char(c) == e, f"wrong translation of {c!r}"
        assert perm.invert_char(e) == c, f"wrong inverse of {e!r}"
        ci, ei = UPPER_STRING.index(c), UPPER_STRING.index(e)
        assert perm.permute(ci) == ei, f"wrong translation of {ci}"
        assert perm.invert(ei) == ci, f"wrong inverse of {ei}"


# ── Alphabet ──────────────────────────────────────────────────────

def test_alphabet_lookup():
    a = Alphabet("ABCD")
    assert a.size == 4
    assert not a.contains("E")
    assert a.contains("B")
    assert a.to_int("B") == 1
    assert a.to_char(1) == "B"


def test_alphabet_default_is_upper_case():
    assert Alphabet().chars == UPPER_STRING


@pytest.mark.parametrize("chars", ["", "ABCA", "AB C", "AB(", "A*B"])
def test_alphabet_rejects_bad_symbols(chars):
    with pytest.raises(ConfigurationError):
        Alphabet(chars)


def test_alphabet_missing_symbol_is_an_error():
    a = Alphabet("ABCD")
    with pytest.raises(EnigmaError):
        a.to_int("E")
    with pytest.raises(EnigmaError):
        a.to_char(4)


# ── Permutation ───────────────────────────────────────────────────

def test_identity_from_empty_text(upper):
    check_perm(Permutation("", upper), UPPER_STRING, UPPER_STRING)


def test_invert_char():
    perm = Permutation("(BACD)", Alphabet("ABCD"))
    assert perm.invert_char("A") == "B"
    assert perm.invert_char("C") == "A"
    assert perm.invert_char("B") == "D"


def test_permute_char():
    perm = Permutation("(BACD)", Alphabet("ABCD"))
    assert perm.permute_char("A") == "C"
    assert perm.permute_char("C") == "D"
    assert perm.permute_char("D") == "B"


def test_full_alphabet_mapping(upper):
    perm = Permutation("(AGHE) (BFJIDCK) (PL) (NZYXTQS) (RMV) (U)", upper)
    check_perm(perm, UPPER_STRING, "GFKCAJHEDIBPVZOLSMNQURWTXY")


def test_cycles_are_kept_in_order(upper):
    perm = Permutation("(DCBA) (LZTRJ) (IEOXYKPV) (NGHWQSMU) (F)", upper)
    assert perm.cycles == ("DCBA", "LZTRJ", "IEOXYKPV", "NGHWQSMU", "F")
    assert str(perm) == "(DCBA) (LZTRJ) (IEOXYKPV) (NGHWQSMU) (F)"
    assert perm.permute_char("F") == "F"


def test_cycles_need_no_separating_space(upper):
    perm = Permutation("(AB)(CD)", upper)
    assert perm.permute_char("B") == "A"
    assert perm.permute_char("D") == "C"


def test_index_wraps_modulo_size(upper):
    perm = Permutation("(AGHE) (BFJIDCK)", upper)
    assert perm.permute(-26) == perm.permute(0) == 6
    assert perm.permute(-1) == perm.permute(25)
    assert perm.invert(26 + 6) == 0
    assert perm.wrap(-3) == 23


@pytest.mark.parametrize(
    "text",
    [
        "(BCD), (AG)",              # comma is not in the alphabet
        "(ZYXWVUT) (TLMNO) (ABT)",  # T repeated
        "(AB",
        "AB)",
        "A (BC)",
        "((AB))",
        "(AB) ()",
        "(ab)",
    ],
)
def test_malformed_cycles(upper, text):
    with pytest.raises(MalformedPermutation):
        Permutation(text, upper)


@pytest.mark.parametrize(
    "text",
    ["", "(AB)", "(AGHE) (BFJIDCK) (PL) (NZYXTQS) (RMV) (U)", "(ZYXWVUTSRQPONMLKJIHGFEDCBA)"],
)
def test_invert_undoes_permute(upper, text):
    perm = Permutation(text, upper)
    for x in range(upper.size):
        assert perm.invert(perm.permute(x)) == x
        assert perm.permute(perm.invert(x)) == x


def test_derangement():
    abcd = Alphabet("ABCD")
    assert Permutation("(AB) (CD)", abcd).derangement()
    assert Permutation("(BACD)", abcd).derangement()
    assert not Permutation("(ABC)", abcd).derangement()
    assert not Permutation("(AB) (C) (D)", abcd).derangement()
    assert not Permutation("", abcd).derangement()


def test_from_wiring_matches_cycle_notation(upper):
    perm = Permutation.from_wiring("EKMFLGDQVZNTOWYHXUSPAIBRCJ", upper)
    assert str(perm) == "(AELTPHQXRU) (BKNW) (CMOY) (DFG) (IV) (JZ) (S)"


def test_from_wiring_rejects_non_permutation(upper):
    with pytest.raises(MalformedPermutation):
        Permutation.from_wiring("AACDEFGHIJKLMNOPQRSTUVWXYZ", upper)

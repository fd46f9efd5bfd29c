import pytest

from ruler import comparators as cmp
from ruler.types import (
    ErrorKind,
    InvalidPatternError,
    TypeMismatchError,
    TypeNotSupportedError,
)


SAMPLE_VALUES = ["xxx", 1, 2.5, True, False, None, [1, "a"], {"a": {"b": 1}}]


@pytest.mark.parametrize("value", SAMPLE_VALUES)
def test_eq_reflexive_and_neq_irreflexive(value):
    assert cmp.eq(value, value) == (True, None)
    assert cmp.neq(value, value) == (False, None)


def test_eq_never_matches_across_kinds():
    assert cmp.eq(1, True) == (False, None)
    assert cmp.eq("1", 1) == (False, None)
    assert cmp.eq(None, "") == (False, None)
    assert cmp.eq([1], (1,)) == (True, None)


def test_eq_treats_int_and_float_as_one_number_kind():
    assert cmp.eq(3, 3.0) == (True, None)
    assert cmp.neq(2, 1) == (True, None)


def test_eq_compares_nested_structures_by_kind():
    assert cmp.eq({"a": [1, 2]}, {"a": [1, 2]}) == (True, None)
    assert cmp.eq({"a": [1, True]}, {"a": [1, 1]}) == (False, None)


def test_ordering_on_strings_is_lexicographic():
    assert cmp.gt("abc", "abd") == (False, None)
    assert cmp.gt("abd", "abc") == (True, None)
    assert cmp.lt("abc", "abd") == (True, None)
    assert cmp.gte("abc", "abc") == (True, None)
    assert cmp.lte("b", "a") == (False, None)


def test_ordering_on_numbers():
    assert cmp.gt(3, 2) == (True, None)
    assert cmp.gt(2, 2) == (False, None)
    assert cmp.gte(3, 3) == (True, None)
    assert cmp.gte(1, 2) == (False, None)
    assert cmp.lt(1, 2) == (True, None)
    assert cmp.lt(4, 4) == (False, None)
    assert cmp.lte(4, 4.0) == (True, None)
    assert cmp.lte(5, 4) == (False, None)


@pytest.mark.parametrize("op", [cmp.gt, cmp.gte, cmp.lt, cmp.lte])
def test_ordering_kind_mismatch(op):
    matched, err = op("10", 5)
    assert matched is False
    assert isinstance(err, TypeMismatchError)

    matched, err = op(10, "5")
    assert matched is False
    assert err.kind == ErrorKind.TYPE_MISMATCH


@pytest.mark.parametrize("op", [cmp.gt, cmp.gte, cmp.lt, cmp.lte])
@pytest.mark.parametrize("actual", [True, [1, 2], {"a": 1}, None])
def test_ordering_unsupported_actual(op, actual):
    matched, err = op(actual, 1)
    assert matched is False
    assert isinstance(err, TypeNotSupportedError)


def test_exists_and_nexists():
    assert cmp.exists("xxx", None) == (True, None)
    assert cmp.exists(None, None) == (False, None)
    assert cmp.exists(0, None) == (True, None)
    assert cmp.nexists(None, None) == (True, None)
    assert cmp.nexists("xxx", None) == (False, None)


def test_regex():
    assert cmp.regex("18612045500", r"^1[34578]\d{9}$") == (True, None)
    assert cmp.regex("13823292292", "^400[0-9]{7}") == (False, None)
    assert cmp.regex("13823292292", "/^400[0-9]{7}/") == (False, None)
    # unanchored search
    assert cmp.regex("order-400", "400") == (True, None)
    # end of text means end of text, and \d is ASCII only
    assert cmp.regex("18612045500\n", r"^1[34578]\d{9}$") == (False, None)
    assert cmp.regex("186\uff11\uff12\uff10\uff14\uff15\uff15\uff10\uff10", r"^1[34578]\d{9}$") == (False, None)


def test_nregex():
    assert cmp.nregex("5001234567", "/^400[0-9]{7}/") == (True, None)
    assert cmp.nregex("4001234567", "^400[0-9]{7}") == (False, None)


def test_regex_type_errors():
    matched, err = cmp.regex(123, "^1")
    assert (matched, type(err)) == (False, TypeNotSupportedError)

    matched, err = cmp.regex("123", 1)
    assert (matched, type(err)) == (False, TypeMismatchError)


def test_regex_compile_failure_is_reported():
    matched, err = cmp.regex("abc", "([a-")
    assert matched is False
    assert isinstance(err, InvalidPatternError)

    # the flag flips but the error stays attached
    matched, err = cmp.nregex("abc", "([a-")
    assert matched is True
    assert err.kind == ErrorKind.INVALID_PATTERN


def test_contains_substring_and_list_elements():
    assert cmp.contains("hello world", "lo w") == (True, None)
    assert cmp.contains("hello", "xyz") == (False, None)
    assert cmp.contains(["a", "b"], "b") == (True, None)
    assert cmp.contains(["a", "b"], "c") == (False, None)
    assert cmp.contains([1, 2.5, 3], 2.5) == (True, None)
    assert cmp.contains([1, 2, 3], 4) == (False, None)


def test_contains_wrong_element_kind():
    # found despite a wrong-kind element earlier in the list
    assert cmp.contains([1, "a"], "a") == (True, None)

    matched, err = cmp.contains([1, "a"], "b")
    assert matched is False
    assert isinstance(err, TypeMismatchError)

    matched, err = cmp.contains(["1", True], 1)
    assert matched is False
    assert isinstance(err, TypeMismatchError)


@pytest.mark.parametrize(
    "actual, expected",
    [
        ("abc", 1),
        (5, "5"),
        (["a"], True),
        ({"a": 1}, "a"),
        (None, "a"),
    ],
)
def test_contains_unsupported(actual, expected):
    matched, err = cmp.contains(actual, expected)
    assert matched is False
    assert isinstance(err, TypeNotSupportedError)


def test_ncontains():
    assert cmp.ncontains("hello", "xyz") == (True, None)
    assert cmp.ncontains("hello", "ell") == (False, None)
    assert cmp.ncontains(["a", "b"], "c") == (True, None)
    assert cmp.ncontains(["a", "b"], "a") == (False, None)
    assert cmp.ncontains([1, 2], 3) == (True, None)
    assert cmp.ncontains([1, 2], 2) == (False, None)


def test_ncontains_is_not_a_negation_wrapper():
    # unsupported combinations fail rather than flipping contains()
    matched, err = cmp.ncontains(5, "5")
    assert matched is False
    assert isinstance(err, TypeNotSupportedError)

    matched, err = cmp.ncontains(["a", 1], "b")
    assert matched is True
    assert isinstance(err, TypeMismatchError)


def test_oneof_and_noneof_with_list():
    assert cmp.oneof("b", ["a", "b"]) == (True, None)
    assert cmp.oneof("c", ["a", "b"]) == (False, None)
    assert cmp.oneof(1, [1.0, 2.0]) == (True, None)
    assert cmp.oneof(True, [1, 2]) == (False, None)
    assert cmp.noneof("c", ["a", "b"]) == (True, None)
    assert cmp.noneof("a", ["a", "b"]) == (False, None)


def test_oneof_with_set():
    assert cmp.oneof("a", {"a", "b"}) == (True, None)
    assert cmp.oneof(1, frozenset({True})) == (False, None)
    assert cmp.oneof([1], {"a"}) == (False, None)
    assert cmp.noneof("z", {"a", "b"}) == (True, None)


def test_oneof_with_mapping_is_a_type_mismatch():
    matched, err = cmp.oneof("a", {"a": True})
    assert matched is False
    assert isinstance(err, TypeMismatchError)

    matched, err = cmp.noneof("a", {"a": True})
    assert matched is False
    assert isinstance(err, TypeMismatchError)


def test_oneof_unsupported_expected():
    matched, err = cmp.oneof("a", "abc")
    assert matched is False
    assert isinstance(err, TypeNotSupportedError)


def test_prefix_and_suffix():
    assert cmp.startwith("abcdef", "abc") == (True, None)
    assert cmp.startwith("xabc", "abc") == (False, None)
    assert cmp.nstartwith("xabc", "abc") == (True, None)
    assert cmp.nstartwith("abcdef", "abc") == (False, None)
    assert cmp.endwith("report.pdf", ".pdf") == (True, None)
    assert cmp.endwith("report.pdf", ".doc") == (False, None)
    assert cmp.nendwith("report.pdf", ".doc") == (True, None)
    assert cmp.nendwith("report.pdf", "pdf") == (False, None)


@pytest.mark.parametrize("op", [cmp.startwith, cmp.nstartwith, cmp.endwith, cmp.nendwith])
@pytest.mark.parametrize("actual, expected", [(123, "1"), ("123", 1), (None, "a")])
def test_prefix_and_suffix_need_strings(op, actual, expected):
    matched, err = op(actual, expected)
    assert matched is False
    assert isinstance(err, TypeMismatchError)

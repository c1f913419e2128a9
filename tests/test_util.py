import pytest

from accessrules.util import (
    array_2d_equals,
    array_equals,
    array_remove_duplicates,
    array_to_string,
    escape_assertion,
    get_eval_value,
    has_eval,
    join_slice,
    params_to_string,
    remove_comments,
    remove_duplicate_element,
    replace_eval,
    replace_eval_with_map,
    set_equals,
    set_subtract,
)


@pytest.mark.parametrize(
    "s, expected",
    [
        ("r.attr.value == p.attr", "r_attr.value == p_attr"),
        ("r.attp.value || p.attr", "r_attp.value || p_attr"),
        ("r.attp.value &&p.attr", "r_attp.value &&p_attr"),
        ("r.attp.value >p.attr", "r_attp.value >p_attr"),
        ("r.attp.value <p.attr", "r_attp.value <p_attr"),
        ("r.attp.value +p.attr", "r_attp.value +p_attr"),
        ("r.attp.value -p.attr", "r_attp.value -p_attr"),
        ("r.attp.value *p.attr", "r_attp.value *p_attr"),
        ("r.attp.value /p.attr", "r_attp.value /p_attr"),
        ("!r.attp.value /p.attr", "!r_attp.value /p_attr"),
        ("g(r.sub, p.sub) == p.attr", "g(r_sub, p_sub) == p_attr"),
        ("g(r.sub,p.sub) == p.attr", "g(r_sub,p_sub) == p_attr"),
        ("(r.attp.value || p.attr)p.u", "(r_attp.value || p_attr)p_u"),
    ],
)
def test_escape_assertion(s, expected):
    assert escape_assertion(s) == expected


def test_escape_assertion_numbered_prefix():
    assert escape_assertion("r2.sub == p2.sub") == "r2_sub == p2_sub"


@pytest.mark.parametrize(
    "s, expected",
    [
        ("r.act == p.act # comments", "r.act == p.act"),
        ("r.act == p.act#comments", "r.act == p.act"),
        ("r.act == p.act###", "r.act == p.act"),
        ("### comments", ""),
        ("r.act == p.act", "r.act == p.act"),
    ],
)
def test_remove_comments(s, expected):
    assert remove_comments(s) == expected


def test_remove_comments_without_hash_keeps_whitespace():
    assert remove_comments("  a  ") == "  a  "


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (["a", "b", "c"], ["a", "b", "c"], True),
        (["a", "b", "c"], ["a", "b"], False),
        (["a", "b", "c"], ["a", "c", "b"], False),
        (["a", "b", "c"], [], False),
    ],
)
def test_array_equals(a, b, expected):
    assert array_equals(a, b) is expected


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ([["a", "b", "c"], ["1", "2", "3"]], [["a", "b", "c"], ["1", "2", "3"]], True),
        ([["a", "b", "c"], ["1", "2", "3"]], [["a", "b", "c"]], False),
        ([["a", "b", "c"], ["1", "2", "3"]], [["a", "b", "c"], ["1", "2"]], False),
        ([["a", "b", "c"], ["1", "2", "3"]], [["1", "2", "3"], ["a", "b", "c"]], False),
        ([["a", "b", "c"], ["1", "2", "3"]], [], False),
    ],
)
def test_array_2d_equals(a, b, expected):
    assert array_2d_equals(a, b) is expected


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (["a", "b", "c"], ["a", "b", "c"], True),
        (["a", "b", "c"], ["a", "b"], False),
        (["a", "b", "c"], ["a", "c", "b"], True),
        (["a", "b", "c"], [], False),
    ],
)
def test_set_equals(a, b, expected):
    assert set_equals(a, b) is expected


def test_set_equals_does_not_reorder_inputs():
    a = ["c", "a", "b"]
    set_equals(a, ["a", "b", "c"])
    assert a == ["c", "a", "b"]


@pytest.mark.parametrize(
    "s, expected",
    [
        ("eval() && a && b && c", True),
        ("eval) && a && b && c", False),
        ("eval)( && a && b && c", False),
        ("eval(c * (a + b)) && a && b && c", True),
        ("xeval() && a && b && c", False),
    ],
)
def test_has_eval(s, expected):
    assert has_eval(s) is expected


@pytest.mark.parametrize(
    "s, rule, expected",
    [
        ("eval() && a && b && c", "a", "(a) && a && b && c"),
        ("eval() && a && b && c", "(a)", "((a)) && a && b && c"),
    ],
)
def test_replace_eval(s, rule, expected):
    assert replace_eval(s, rule) == expected


@pytest.mark.parametrize(
    "s, expected",
    [
        ("eval(a) && a && b && c", ["a"]),
        ("a && eval(a) && b && c", ["a"]),
        ("eval(a) && eval(b) && a && b && c", ["a", "b"]),
        ("a && eval(a) && eval(b) && b && c", ["a", "b"]),
        ("a && b", []),
    ],
)
def test_get_eval_value(s, expected):
    assert get_eval_value(s) == expected


@pytest.mark.parametrize(
    "s, sets, expected",
    [
        ("eval(rule1)", {"rule1": "a == b"}, "a == b"),
        ("eval(rule1) && c && d", {"rule1": "a == b"}, "a == b && c && d"),
        ("eval(rule1)", None, "eval(rule1)"),
        ("eval(rule1) && c && d", None, "eval(rule1) && c && d"),
        ("eval(rule1) || eval(rule2)", {"rule1": "a == b", "rule2": "a == c"}, "a == b || a == c"),
        (
            "eval(rule1) || eval(rule2) && c && d",
            {"rule1": "a == b", "rule2": "a == c"},
            "a == b || a == c && c && d",
        ),
        ("eval(rule1) || eval(rule2)", {"rule1": "a == b"}, "a == b || eval(rule2)"),
        (
            "eval(rule1) || eval(rule2) && c && d",
            {"rule1": "a == b"},
            "a == b || eval(rule2) && c && d",
        ),
        ("eval(rule1) || eval(rule2)", {"rule2": "a == b"}, "eval(rule1) || a == b"),
        (
            "eval(rule1) || eval(rule2) && c && d",
            {"rule2": "a == b"},
            "eval(rule1) || a == b && c && d",
        ),
        ("eval(rule1) || eval(rule2)", None, "eval(rule1) || eval(rule2)"),
        (
            "eval(rule1) || eval(rule2) && c && d",
            None,
            "eval(rule1) || eval(rule2) && c && d",
        ),
    ],
)
def test_replace_eval_with_map(s, sets, expected):
    assert replace_eval_with_map(s, sets) == expected


def test_array_remove_duplicates_keeps_first_order():
    assert array_remove_duplicates(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]


def test_remove_duplicate_element_keeps_first_order():
    assert remove_duplicate_element(["x", "y", "x", "z", "y"]) == ["x", "y", "z"]


def test_remove_duplicate_element_empty():
    assert remove_duplicate_element([]) == []


def test_array_to_string():
    assert array_to_string(["alice", "data1", "read"]) == "alice, data1, read"


def test_params_to_string():
    assert params_to_string("alice", "data1", "read") == "alice, data1, read"
    assert params_to_string() == ""


def test_join_slice():
    assert join_slice("a", "b", "c") == ["a", "b", "c"]
    assert join_slice("a") == ["a"]


def test_set_subtract():
    assert set_subtract(["a", "b", "c", "b"], ["b"]) == ["a", "c"]
    assert set_subtract(["a"], ["a"]) == []
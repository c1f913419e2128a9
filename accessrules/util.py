"""String and list helpers used when parsing models and matcher expressions."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

_EVAL_RE = re.compile(r"\beval\((?P<rule>[^)]*)\)", re.ASCII)
_ESCAPE_RE = re.compile(r"(\|| |=|\)|\(|&|<|>|,|\+|-|!|\*|/)((r|p)[0-9]*)\.")


def escape_assertion(s: str) -> str:
    """Replace the dot after request/policy prefixes (``r.``, ``p2.``) with an underscore."""
    if s.startswith(("r", "p")):
        s = s.replace(".", "_", 1)
    return _ESCAPE_RE.sub(lambda m: m.group(0).replace(".", "_", 1), s)


def remove_comments(s: str) -> str:
    """Drop everything from the first ``#`` on, trimming the remainder."""
    head, sep, _ = s.partition("#")
    if not sep:
        return s
    return head.strip()


def array_equals(a: Sequence[str], b: Sequence[str]) -> bool:
    """Return whether two sequences hold the same strings in the same order."""
    return list(a) == list(b)


def array_2d_equals(a: Sequence[Sequence[str]], b: Sequence[Sequence[str]]) -> bool:
    """Return whether two sequences of rows are identical row by row."""
    return len(a) == len(b) and all(array_equals(x, y) for x, y in zip(a, b))


def array_remove_duplicates(s: Iterable[str]) -> list[str]:
    """Return the items of ``s`` without repeats, keeping first occurrences in order."""
    return list(dict.fromkeys(s))


def array_to_string(s: Iterable[str]) -> str:
    """Join strings with ``", "`` for display."""
    return ", ".join(s)


def params_to_string(*args: str) -> str:
    """Join the given strings with ``", "`` for display."""
    return ", ".join(args)


def set_equals(a: Sequence[str], b: Sequence[str]) -> bool:
    """Return whether two sequences hold the same strings, ignoring order."""
    return len(a) == len(b) and sorted(a) == sorted(b)


def join_slice(a: str, *args: str) -> list[str]:
    """Return a new list made of ``a`` followed by ``args``."""
    return [a, *args]


def set_subtract(a: Iterable[str], b: Iterable[str]) -> list[str]:
    """Return the items of ``a`` that are not in ``b``, in their original order."""
    excluded = set(b)
    return [x for x in a if x not in excluded]


def has_eval(s: str) -> bool:
    """Return whether the matcher calls ``eval(...)``."""
    return _EVAL_RE.search(s) is not None


def replace_eval(s: str, rule: str) -> str:
    """Replace every ``eval(...)`` call with ``(rule)``."""
    replacement = f"({rule})"
    return _EVAL_RE.sub(lambda _m: replacement, s)


def replace_eval_with_map(src: str, sets: Mapping[str, str] | None) -> str:
    """Replace each ``eval(name)`` with ``sets[name]``; unknown names are left as they are."""
    table = sets or {}

    def _substitute(match: re.Match[str]) -> str:
        return table.get(match.group("rule"), match.group(0))

    return _EVAL_RE.sub(_substitute, src)


def get_eval_value(s: str) -> list[str]:
    """Return the arguments of every ``eval(...)`` call, in order."""
    return [m.group("rule") for m in _EVAL_RE.finditer(s)]


def remove_duplicate_element(s: Iterable[str]) -> list[str]:
    """Return the items of ``s`` without repeats, keeping first occurrences in order."""
    seen: set[str] = set()
    result: list[str] = []
    for item in s:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
"""Matching functions available to matcher expressions, and their argument-checking wrappers."""

from __future__ import annotations

import ipaddress
import re
from collections.abc import Callable
from typing import Any, Optional, Protocol

_KEY_MATCH2_RE = re.compile(r":[^/]+")
_KEY_MATCH3_RE = re.compile(r"\{[^/]+\}")
_KEY_MATCH4_RE = re.compile(r"\{([^/]+)\}")

_IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


class OperatorArgumentError(ValueError):
    """Raised when a matcher function is called with the wrong number or type of arguments."""


class _RoleManager(Protocol):
    def has_link(self, name1: str, name2: str, *domain: str) -> bool: ...


def _validate_args(name: str, expected: int, args: tuple[Any, ...]) -> None:
    if len(args) != expected:
        raise OperatorArgumentError(
            f"{name}: Expected {expected} arguments, but got {len(args)}"
        )
    if not all(isinstance(arg, str) for arg in args):
        raise OperatorArgumentError(f"{name}: Argument must be a string")


def _anchored(pattern: str) -> str:
    return "^" + pattern + r"\Z"


def key_match(key1: str, key2: str) -> bool:
    """Return whether ``key1`` matches ``key2``, where a ``*`` in ``key2`` matches any suffix."""
    i = key2.find("*")
    if i == -1:
        return key1 == key2
    if len(key1) > i:
        return key1[:i] == key2[:i]
    return key1 == key2[:i]


def key_match_func(*args: Any) -> bool:
    """Checked wrapper for :func:`key_match`."""
    _validate_args("keyMatch", 2, args)
    return key_match(args[0], args[1])


def key_get(key1: str, key2: str) -> str:
    """Return the part of ``key1`` matched by the ``*`` in ``key2``, or ``""``."""
    i = key2.find("*")
    if i == -1:
        return ""
    if len(key1) > i and key1[:i] == key2[:i]:
        return key1[i:]
    return ""


def key_get_func(*args: Any) -> str:
    """Checked wrapper for :func:`key_get`."""
    _validate_args("keyGet", 2, args)
    return key_get(args[0], args[1])


def key_match2(key1: str, key2: str) -> bool:
    """Match RESTful paths where ``key2`` may hold ``*`` and ``:name`` segments."""
    key2 = key2.replace("/*", "/.*")
    key2 = _KEY_MATCH2_RE.sub(lambda _m: "[^/]+", key2)
    return regex_match(key1, _anchored(key2))


def key_match2_func(*args: Any) -> bool:
    """Checked wrapper for :func:`key_match2`."""
    _validate_args("keyMatch2", 2, args)
    return key_match2(args[0], args[1])


def key_get2(key1: str, key2: str, path_var: str) -> str:
    """Return the value of the ``:path_var`` segment of ``key2`` in ``key1``, or ``""``."""
    key2 = key2.replace("/*", "/.*")
    keys = _KEY_MATCH2_RE.findall(key2)
    key2 = _KEY_MATCH2_RE.sub(lambda _m: "([^/]+)", key2)
    match = re.search(_anchored(key2), key1)
    if match is None:
        return ""
    for position, key in enumerate(keys, start=1):
        if path_var == key[1:]:
            return match.group(position)
    return ""


def key_get2_func(*args: Any) -> str:
    """Checked wrapper for :func:`key_get2`."""
    _validate_args("keyGet2", 3, args)
    return key_get2(args[0], args[1], args[2])


def key_match3(key1: str, key2: str) -> bool:
    """Match RESTful paths where ``key2`` may hold ``*`` and ``{name}`` segments."""
    key2 = key2.replace("/*", "/.*")
    key2 = _KEY_MATCH3_RE.sub(lambda _m: "[^/]+", key2)
    return regex_match(key1, _anchored(key2))


def key_match3_func(*args: Any) -> bool:
    """Checked wrapper for :func:`key_match3`."""
    _validate_args("keyMatch3", 2, args)
    return key_match3(args[0], args[1])


def key_match4(key1: str, key2: str) -> bool:
    """Like :func:`key_match3`, but repeated ``{name}`` segments must hold equal values."""
    key2 = key2.replace("/*", "/.*")
    tokens: list[str] = []

    def _capture(match: re.Match[str]) -> str:
        tokens.append(match.group(1))
        return "([^/]+)"

    key2 = _KEY_MATCH4_RE.sub(_capture, key2)
    match = re.search(_anchored(key2), key1)
    if match is None:
        return False
    values = match.groups()
    if len(tokens) != len(values):
        raise ValueError("KeyMatch4: number of tokens is not equal to number of values")

    seen: dict[str, str] = {}
    for token, value in zip(tokens, values):
        if seen.setdefault(token, value) != value:
            return False
    return True


def key_match4_func(*args: Any) -> bool:
    """Checked wrapper for :func:`key_match4`."""
    _validate_args("keyMatch4", 2, args)
    return key_match4(args[0], args[1])


def key_match5(key1: str, key2: str) -> bool:
    """Return whether ``key1`` without its query string equals ``key2``."""
    path, sep, _ = key1.partition("?")
    if not sep:
        return key1 == key2
    return path == key2


def key_match5_func(*args: Any) -> bool:
    """Checked wrapper for :func:`key_match5`."""
    _validate_args("keyMatch5", 2, args)
    return key_match5(args[0], args[1])


def regex_match(key1: str, key2: str) -> bool:
    """Return whether the regular expression ``key2`` matches somewhere in ``key1``."""
    return re.search(key2, key1) is not None


def regex_match_func(*args: Any) -> bool:
    """Checked wrapper for :func:`regex_match`."""
    _validate_args("regexMatch", 2, args)
    return regex_match(args[0], args[1])


def _parse_ip(text: str) -> Optional[_IPAddress]:
    try:
        addr = ipaddress.ip_address(text)
    except ValueError:
        return None
    if isinstance(addr, ipaddress.IPv6Address):
        if addr.scope_id:
            return None
        if addr.ipv4_mapped is not None:
            return addr.ipv4_mapped
    return addr


def ip_match(ip1: str, ip2: str) -> bool:
    """Return whether address ``ip1`` equals address ``ip2`` or lies in the CIDR block ``ip2``."""
    addr1 = _parse_ip(ip1)
    if addr1 is None:
        raise ValueError(
            "invalid argument: ip1 in IPMatch() function is not an IP address."
        )

    if "/" in ip2:
        try:
            network = ipaddress.ip_network(ip2, strict=False)
        except ValueError:
            network = None
        if network is not None:
            return network.version == addr1.version and addr1 in network

    addr2 = _parse_ip(ip2)
    if addr2 is None:
        raise ValueError(
            "invalid argument: ip2 in IPMatch() function is neither an IP address nor a CIDR."
        )
    return addr1 == addr2


def ip_match_func(*args: Any) -> bool:
    """Checked wrapper for :func:`ip_match`."""
    _validate_args("ipMatch", 2, args)
    return ip_match(args[0], args[1])


def _glob_class_char(pattern: str, pos: int) -> tuple[str, int]:
    if pos >= len(pattern) or pattern[pos] in "-]":
        raise ValueError("syntax error in pattern")
    if pattern[pos] == "\\":
        pos += 1
        if pos >= len(pattern):
            raise ValueError("syntax error in pattern")
    return pattern[pos], pos + 1


def _glob_class(pattern: str, pos: int) -> tuple[str, int]:
    negate = pos < len(pattern) and pattern[pos] == "^"
    if negate:
        pos += 1
    items: list[str] = []
    count = 0
    while True:
        if pos < len(pattern) and pattern[pos] == "]" and count > 0:
            pos += 1
            break
        lo, pos = _glob_class_char(pattern, pos)
        hi = lo
        if pos < len(pattern) and pattern[pos] == "-":
            hi, pos = _glob_class_char(pattern, pos + 1)
        count += 1
        if lo <= hi:
            items.append(re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}")
    body = "".join(items)
    if negate:
        return (f"[^{body}]" if body else "."), pos
    return (f"[{body}]" if body else "(?!)"), pos


def _glob_to_regex(pattern: str) -> str:
    parts: list[str] = []
    pos = 0
    while pos < len(pattern):
        char = pattern[pos]
        if char == "*":
            parts.append("[^/]*")
            pos += 1
        elif char == "?":
            parts.append("[^/]")
            pos += 1
        elif char == "\\":
            if pos + 1 >= len(pattern):
                raise ValueError("syntax error in pattern")
            parts.append(re.escape(pattern[pos + 1]))
            pos += 2
        elif char == "[":
            piece, pos = _glob_class(pattern, pos + 1)
            parts.append(piece)
        else:
            parts.append(re.escape(char))
            pos += 1
    return "".join(parts)


def glob_match(key1: str, key2: str) -> bool:
    """Return whether ``key1`` matches the shell-style glob ``key2``; ``*`` stops at ``/``.

    Raises ``ValueError`` when ``key2`` is malformed.
    """
    return re.fullmatch(_glob_to_regex(key2), key1, re.DOTALL) is not None


def glob_match_func(*args: Any) -> bool:
    """Checked wrapper for :func:`glob_match`."""
    _validate_args("globMatch", 2, args)
    return glob_match(args[0], args[1])


def generate_g_function(rm: Optional[_RoleManager]) -> Callable[..., bool]:
    """Build the memoised ``g(name1, name2[, domain])`` function backed by a role manager.

    Without a role manager, ``g`` is plain equality of the two names.
    """
    memo: dict[tuple[str, ...], bool] = {}

    def g(*args: str) -> bool:
        key = tuple(args)
        if key in memo:
            return memo[key]
        name1, name2 = args[0], args[1]
        if rm is None:
            result = name1 == name2
        elif len(args) == 2:
            result = bool(rm.has_link(name1, name2))
        else:
            result = bool(rm.has_link(name1, name2, args[2]))
        memo[key] = result
        return result

    return g
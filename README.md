# accessrules

Building blocks for evaluating access-control policies: path and pattern
matchers for resource keys, IP and glob matching, a memoising factory for the
role-inheritance function `g`, and string helpers for preparing matcher
expressions.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Matching operators

`accessrules.builtin_operators` holds functions that decide whether a
requested key matches a pattern taken from a policy rule.

```python
from accessrules.builtin_operators import (
    key_match, key_match2, key_match3, key_match4, key_match5,
    key_get, key_get2, regex_match, ip_match, glob_match,
)

key_match("/foo/bar", "/foo/*")                    # True
key_match2("/resource1", "/:resource")             # True
key_match3("/resource1", "/{resource}")            # True
key_match4("/parent/123/child/123", "/parent/{id}/child/{id}")  # True
key_match4("/parent/123/child/456", "/parent/{id}/child/{id}")  # False
key_match5("/foo/bar?status=1&type=2", "/foo/bar") # True

key_get("/foo/bar", "/foo/*")                      # "bar"
key_get2("/myid/using/myresid", "/:id/using/:resId", "resId")  # "myresid"

regex_match("/topic/edit/123", "/topic/edit/[0-9]+")  # True
ip_match("192.168.2.123", "192.168.2.0/24")            # True
glob_match("/foo/bar", "/foo/*")                       # True
```

What each one does:

- `key_match`: a `*` in the pattern matches any suffix.
- `key_match2`: `/*` matches any rest of the path, `:name` matches one
  path segment.
- `key_match3`: as `key_match2`, but segments are written `{name}`.
- `key_match4`: as `key_match3`, and a name used more than once must hold
  the same value each time.
- `key_match5`: compares the key with its query string (`?...`) removed.
- `key_get` / `key_get2`: return the part matched by `*`, or the value of a
  named `:name` segment; `""` when there is no match.
- `regex_match`: the pattern is a regular expression searched for anywhere
  in the key.
- `ip_match`: the pattern is an address or a CIDR block. A string that is
  not an address raises `ValueError`.
- `glob_match`: shell-style glob where `*` and `?` do not cross `/`. A
  malformed pattern raises `ValueError`.

Each operator also has a `*_func` variant (`key_match_func`, `key_get_func`,
`key_match2_func`, `key_get2_func`, `key_match3_func`, `key_match4_func`,
`key_match5_func`, `regex_match_func`, `ip_match_func`, `glob_match_func`)
that takes positional arguments as an expression evaluator would supply them.
It checks the argument count and that every argument is a string, raising
`OperatorArgumentError` (a `ValueError`) otherwise:

```python
from accessrules.builtin_operators import key_match_func, OperatorArgumentError

key_match_func("/foo/bar", "/foo/*")   # True
try:
    key_match_func("/foo")
except OperatorArgumentError as err:
    print(err)  # keyMatch: Expected 2 arguments, but got 1
```

`generate_g_function(rm)` builds the `g(name1, name2[, domain])` function
for a role manager: any object with a `has_link(name1, name2, *domain)`
method. Results are memoised per argument tuple, so later changes in the
role manager are not seen by a function already built. With `rm=None` the
function simply tests the two names for equality.

## Expression helpers

`accessrules.util` prepares matcher text and compares rule lists:

```python
from accessrules.util import (
    escape_assertion, remove_comments, has_eval, get_eval_value,
    replace_eval, replace_eval_with_map, set_equals,
)

escape_assertion("g(r.sub, p.sub) == p.attr")   # "g(r_sub, p_sub) == p_attr"
remove_comments("r.act == p.act # comment")     # "r.act == p.act"
has_eval("eval(rule1) && a")                    # True
get_eval_value("eval(a) && eval(b)")            # ["a", "b"]
replace_eval("eval() && a", "x")                # "(x) && a"
replace_eval_with_map("eval(rule1) || c", {"rule1": "a == b"})  # "a == b || c"
set_equals(["a", "b", "c"], ["c", "a", "b"])    # True
```

Further helpers: `array_equals`, `array_2d_equals`, `array_remove_duplicates`
and `remove_duplicate_element` (both return a new list without repeats),
`array_to_string`, `params_to_string`, `join_slice` and `set_subtract`.

## What this package does not do

It provides the pieces a policy engine is built from, not the engine. There
is no enforcer, no model or policy file loading, no policy storage, and no
role manager: `generate_g_function` expects the caller to supply one.
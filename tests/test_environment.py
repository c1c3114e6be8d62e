from __future__ import annotations

import pytest

from pylox import Environment, LoxRuntimeError
from pylox.tokens import Token, TokenType


def ident(name: str, line: int = 1) -> Token:
    return Token(TokenType.IDENTIFIER, name, None, line)


def test_get_at_zero_after_define():
    env = Environment(Environment())
    env.define("x", 1.0)
    assert env.get_at(0, "x") == 1.0


def test_define_overwrites_in_same_environment():
    env = Environment()
    env.define("x", 1.0)
    env.define("x", "two")
    assert env.get(ident("x")) == "two"


def test_nearest_binding_wins_across_three_levels():
    root = Environment()
    middle = Environment(root)
    leaf = Environment(middle)
    leaf.define("x", "leaf")
    middle.define("x", "middle")
    root.define("x", "root")

    assert leaf.get(ident("x")) == "leaf"
    assert middle.get(ident("x")) == "middle"
    assert Environment(middle).get(ident("x")) == "middle"


def test_assign_updates_nearest_defining_environment_only():
    root = Environment()
    middle = Environment(root)
    leaf = Environment(middle)
    root.define("x", 1.0)
    middle.define("x", 2.0)

    leaf.assign(ident("x"), 3.0)

    assert middle.values["x"] == 3.0
    assert root.values["x"] == 1.0
    assert "x" not in leaf.values


def test_get_and_assign_undefined_raise_runtime_error():
    env = Environment(Environment())
    with pytest.raises(LoxRuntimeError, match=r"Undefined variable 'missing'\.") as excinfo:
        env.get(ident("missing", line=7))
    assert excinfo.value.token.line == 7

    with pytest.raises(LoxRuntimeError, match=r"Undefined variable 'missing'\."):
        env.assign(ident("missing"), 1.0)
    assert "missing" not in env.values


def test_nil_binding_is_still_defined():
    env = Environment()
    env.define("x", None)
    assert env.get(ident("x")) is None
    env.assign(ident("x"), 5.0)
    assert env.get(ident("x")) == 5.0


def test_ancestor_and_direct_access():
    root = Environment()
    middle = Environment(root)
    leaf = Environment(middle)

    assert leaf.ancestor(0) is leaf
    assert leaf.ancestor(1) is middle
    assert leaf.ancestor(2) is root

    root.define("x", "root")
    leaf.define("x", "leaf")
    assert leaf.get_at(2, "x") == "root"

    leaf.assign_at(2, "x", "changed")
    assert root.values["x"] == "changed"
    assert leaf.values["x"] == "leaf"


def test_ancestor_past_chain_end_is_a_programming_error():
    env = Environment(Environment())
    with pytest.raises(IndexError):
        env.ancestor(5)


def test_siblings_share_an_enclosing_environment():
    parent = Environment()
    parent.define("shared", 0.0)
    left = Environment(parent)
    right = Environment(parent)

    left.assign(ident("shared"), 1.0)

    assert right.get(ident("shared")) == 1.0

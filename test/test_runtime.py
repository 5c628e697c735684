"""
Tests for runtime values and environments
"""

import pytest
from frozendict import frozendict

from error_handling import TypeMismatch, UnboundVariable, UnsupportedOperation
from runtime import (
  make_bool,
  make_int,
  make_string,
  make_closure,
  make_env,
  kind_of,
  extract_bool,
  extract_int,
  extract_string,
  extract_closure,
  values_equal,
  bind,
  bind_many,
  lookup,
  show_value,
)
from terms import make_var_term


def sample_closure():
  return make_closure(["x"], make_var_term("x"), make_env())


class TestValues:
  """Test value construction and typed extraction"""

  def test_constructors_tag_values(self):
    assert kind_of(make_bool(True)) == 'bool'
    assert kind_of(make_int(3)) == 'int'
    assert kind_of(make_string("a")) == 'string'
    assert kind_of(sample_closure()) == 'closure'

  def test_values_are_immutable(self):
    value = make_int(1)
    assert isinstance(value, frozendict)
    with pytest.raises(TypeError):
      value['content'] = 2

  def test_extract_returns_payload(self):
    assert extract_bool(make_bool(False)) is False
    assert extract_int(make_int(-4)) == -4
    assert extract_string(make_string("hi")) == "hi"
    assert extract_closure(sample_closure())['parameters'] == ("x",)

  @pytest.mark.parametrize("extract, value, expected, actual", [
      (extract_bool, make_int(1), 'bool', 'int'),
      (extract_int, make_string("1"), 'int', 'string'),
      (extract_string, make_bool(True), 'string', 'bool'),
      (extract_closure, make_int(1), 'closure', 'int'),
      (extract_int, sample_closure(), 'int', 'closure'),
  ])
  def test_extract_wrong_kind(self, extract, value, expected, actual):
    with pytest.raises(TypeMismatch) as info:
      extract(value)
    assert info.value.expected == expected
    assert info.value.actual == actual

  def test_type_mismatch_message_names_both_kinds(self):
    with pytest.raises(TypeMismatch) as info:
      extract_closure(make_int(1), "call")
    assert str(info.value) == "expected a function received an int in call"

  def test_int_does_not_pass_as_bool(self):
    with pytest.raises(TypeMismatch):
      extract_bool(make_int(1))


class TestEquality:
  """Test values_equal"""

  @pytest.mark.parametrize("value", [
      make_bool(True), make_bool(False), make_int(0), make_int(-7), make_string(""), make_string("abc"),
  ])
  def test_reflexive(self, value):
    assert values_equal(value, value)

  @pytest.mark.parametrize("a, b", [
      (make_int(1), make_int(2)),
      (make_string("a"), make_string("b")),
      (make_bool(True), make_bool(False)),
  ])
  def test_symmetric(self, a, b):
    assert values_equal(a, b) == values_equal(b, a) == False

  @pytest.mark.parametrize("a, b", [
      (make_int(1), make_string("1")),
      (make_bool(True), make_int(1)),
      (make_string("true"), make_bool(True)),
  ])
  def test_mismatched_kinds_raise(self, a, b):
    with pytest.raises(UnsupportedOperation):
      values_equal(a, b)
    with pytest.raises(UnsupportedOperation):
      values_equal(b, a)

  def test_closures_have_no_equality(self):
    closure = sample_closure()
    with pytest.raises(UnsupportedOperation) as info:
      values_equal(closure, closure)
    assert info.value.lhs_kind == info.value.rhs_kind == 'closure'


class TestEnvironment:
  """Test environment binding and lookup"""

  def test_lookup_bound_name(self):
    env = bind(make_env(), "x", make_int(1))
    assert lookup(env, "x") == make_int(1)

  def test_lookup_unbound_name(self):
    with pytest.raises(UnboundVariable) as info:
      lookup(make_env(), "missing")
    assert info.value.name == "missing"

  def test_bind_leaves_original_untouched(self):
    outer = bind(make_env(), "x", make_int(1))
    inner = bind(outer, "x", make_int(2))
    assert lookup(outer, "x") == make_int(1)
    assert lookup(inner, "x") == make_int(2)

  def test_bind_keeps_other_names(self):
    env = bind(bind(make_env(), "a", make_int(1)), "b", make_int(2))
    assert lookup(env, "a") == make_int(1)
    assert lookup(env, "b") == make_int(2)

  @pytest.mark.parametrize("count", [1, 2, 3, 10])
  def test_newest_binding_wins(self, count):
    env = make_env({"x": make_string("initial")})
    for i in range(count):
      env = bind(env, "x", make_int(i))
      assert lookup(env, "x") == make_int(i)

  def test_newest_binding_wins_with_other_names_interleaved(self):
    env = make_env()
    for i in range(5):
      env = bind(env, "x", make_int(i))
      env = bind(env, f"y{i}", make_int(-i))
    assert lookup(env, "x") == make_int(4)
    assert lookup(env, "y0") == make_int(0)

  def test_bind_many_later_duplicate_wins(self):
    env = bind_many(make_env(), ["a", "a"], [make_int(1), make_int(2)])
    assert lookup(env, "a") == make_int(2)

  def test_closure_snapshot_is_unaffected_by_later_bindings(self):
    env = bind(make_env(), "x", make_int(1))
    closure = make_closure([], make_var_term("x"), env)
    bind(env, "x", make_int(2))
    assert lookup(extract_closure(closure)['env'], "x") == make_int(1)


class TestShowValue:
  """Test value rendering"""

  def test_show_primitives(self):
    assert show_value(make_bool(True)) == "true"
    assert show_value(make_int(42)) == "42"
    assert show_value(make_string("hi")) == '"hi"'

  def test_show_closure(self):
    closure = make_closure(["a", "b"], make_var_term("a"), make_env())
    assert show_value(closure) == "<fn(a, b)>"

"""
Tests for syntax tree constructors
"""

import pytest

from terms import (
  BINARY_OPERATORS,
  make_binary_term,
  make_function_term,
  make_int_term,
  make_let_term,
  make_loc,
  make_program,
  make_var_term,
  parameter_names,
  term_kind,
  term_location,
)


class TestTerms:
  """Terms follow the parser's JSON AST shape"""

  def test_function_parameters_are_named_vars(self):
    fn = make_function_term(["a", "b"], make_var_term("a"))
    assert fn['parameters'][0]['text'] == "a"
    assert parameter_names(fn) == ["a", "b"]

  def test_let_name_is_a_var(self):
    let = make_let_term("x", make_int_term(1), make_var_term("x"))
    assert let['name']['text'] == "x"
    assert term_kind(let) == "Let"

  def test_default_location(self):
    assert term_location(make_int_term(1)) == make_loc()

  def test_explicit_location(self):
    loc = make_loc(1, 4, "a.rinha")
    assert term_location(make_var_term("abc", loc)) == {'start': 1, 'end': 4, 'filename': "a.rinha"}

  def test_unknown_operator_rejected(self):
    with pytest.raises(ValueError):
      make_binary_term("Xor", make_int_term(1), make_int_term(2))

  def test_operator_names(self):
    assert len(BINARY_OPERATORS) == 14
    assert "Concat" in BINARY_OPERATORS

  def test_program_location_uses_name(self):
    program = make_program(make_int_term(1), name="one.rinha")
    assert program['location']['filename'] == "one.rinha"

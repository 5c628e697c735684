"""
Utilities module for the Rinha evaluator
Operator factories and integer helpers shared by the standard library
"""

from typing import Any, Callable, Optional
from frozendict import frozendict

from runtime import (
  make_value,
  extract_bool,
  extract_int,
  extract_string,
)


BinaryOp = Callable[[frozendict, frozendict], frozendict]


# ==================== ERROR CONTEXT BUILDERS ====================

def operand_context(op_name: str, side: str) -> str:
  """
  Describe an operand position for error messages

  Examples:
    operand_context("Add", "left") -> "left operand of Add"
  """
  return f"{side} operand of {op_name}"


# ==================== INTEGER HELPERS ====================

def truncating_div(lhs: int, rhs: int) -> int:
  """
  Integer division rounding toward zero

  Examples:
    truncating_div(7, 2) -> 3
    truncating_div(-7, 2) -> -3
  """
  quotient = abs(lhs) // abs(rhs)
  return -quotient if (lhs < 0) != (rhs < 0) else quotient


def truncating_rem(lhs: int, rhs: int) -> int:
  """
  Remainder matching truncating_div, so the sign follows the dividend

  Examples:
    truncating_rem(7, 2) -> 1
    truncating_rem(-7, 2) -> -1
  """
  return lhs - rhs * truncating_div(lhs, rhs)


# ==================== BINARY OPERATION FACTORIES ====================

def _binary_op(
  extract: Callable[[frozendict, Optional[str]], Any],
  op: Callable[[Any, Any], Any],
  op_name: str,
  result_kind: str
) -> BinaryOp:
  def operation(x: frozendict, y: frozendict) -> frozendict:
    lhs = extract(x, operand_context(op_name, "left"))
    rhs = extract(y, operand_context(op_name, "right"))
    return make_value(op(lhs, rhs), result_kind)

  operation.__name__ = f"rinha_{op_name.lower()}"
  return operation


def binary_arithmetic_op(op: Callable[[int, int], int], op_name: str) -> BinaryOp:
  """
  Factory for Int x Int -> Int operations

  Args:
    op: Python operator function (e.g., operator.add)
    op_name: Operator name for error messages

  Examples:
    rinha_add = binary_arithmetic_op(operator.add, "Add")
    rinha_add(make_int(1), make_int(2)) -> Int 3
  """
  return _binary_op(extract_int, op, op_name, 'int')


def binary_comparison_op(op: Callable[[int, int], bool], op_name: str) -> BinaryOp:
  """
  Factory for Int x Int -> Bool orderings

  Examples:
    rinha_lt = binary_comparison_op(operator.lt, "Lt")
  """
  return _binary_op(extract_int, op, op_name, 'bool')


def binary_logical_op(op: Callable[[bool, bool], bool], op_name: str) -> BinaryOp:
  """
  Factory for Bool x Bool -> Bool connectives

  Both operands arrive already evaluated, so the connective never
  short-circuits.
  """
  return _binary_op(extract_bool, op, op_name, 'bool')


def binary_string_op(op: Callable[[str, str], str], op_name: str) -> BinaryOp:
  """Factory for String x String -> String operations"""
  return _binary_op(extract_string, op, op_name, 'string')

"""
Rinha Standard Library
Binary operator semantics and the print primitive
Pure functions over immutable values; print is the only side effect
"""

from typing import Callable, Dict, List
import operator
from frozendict import frozendict

from error_handling import DivisionByZero
from runtime import (
  make_bool,
  make_int,
  extract_int,
  extract_string,
  values_equal,
)
from utilities import (
  binary_arithmetic_op,
  binary_comparison_op,
  binary_logical_op,
  binary_string_op,
  operand_context,
  truncating_div,
  truncating_rem,
)


# ============================================================================
# PRINT
# ============================================================================

def rinha_print(value: frozendict, output: Callable[[str], None]) -> frozendict:
  """Emit a string value to the output channel and return it unchanged"""
  output(extract_string(value, "print"))
  return value


# ============================================================================
# STRING FUNCTIONS
# ============================================================================

rinha_concat = binary_string_op(operator.add, "Concat")


# ============================================================================
# ARITHMETIC FUNCTIONS
# ============================================================================

# No overflow handling: results are unbounded Python ints
rinha_add = binary_arithmetic_op(operator.add, "Add")
rinha_sub = binary_arithmetic_op(operator.sub, "Sub")
rinha_mul = binary_arithmetic_op(operator.mul, "Mul")


def rinha_div(x: frozendict, y: frozendict) -> frozendict:
  """Division, truncating toward zero"""
  lhs = extract_int(x, operand_context("Div", "left"))
  rhs = extract_int(y, operand_context("Div", "right"))
  if rhs == 0:
    raise DivisionByZero("Div")
  return make_int(truncating_div(lhs, rhs))


def rinha_rem(x: frozendict, y: frozendict) -> frozendict:
  """Remainder; the sign follows the dividend"""
  lhs = extract_int(x, operand_context("Rem", "left"))
  rhs = extract_int(y, operand_context("Rem", "right"))
  if rhs == 0:
    raise DivisionByZero("Rem")
  return make_int(truncating_rem(lhs, rhs))


# ============================================================================
# COMPARISON FUNCTIONS
# ============================================================================

def rinha_eq(x: frozendict, y: frozendict) -> frozendict:
  """Equality comparison"""
  return make_bool(values_equal(x, y))


def rinha_neq(x: frozendict, y: frozendict) -> frozendict:
  """Not equal comparison"""
  return make_bool(not values_equal(x, y))


rinha_lt = binary_comparison_op(operator.lt, "Lt")
rinha_gt = binary_comparison_op(operator.gt, "Gt")
rinha_lte = binary_comparison_op(operator.le, "Lte")
rinha_gte = binary_comparison_op(operator.ge, "Gte")


# ============================================================================
# LOGICAL FUNCTIONS
# ============================================================================

rinha_and = binary_logical_op(operator.and_, "And")
rinha_or = binary_logical_op(operator.or_, "Or")


# ============================================================================
# OPERATOR REGISTRY
# ============================================================================

BINARY_OPERATORS: Dict[str, Callable[[frozendict, frozendict], frozendict]] = {
    "Concat": rinha_concat,
    "Add": rinha_add,
    "Sub": rinha_sub,
    "Mul": rinha_mul,
    "Div": rinha_div,
    "Rem": rinha_rem,
    "Eq": rinha_eq,
    "Neq": rinha_neq,
    "Lt": rinha_lt,
    "Gt": rinha_gt,
    "Lte": rinha_lte,
    "Gte": rinha_gte,
    "And": rinha_and,
    "Or": rinha_or,
}


def get_binary_operator(name: str) -> Callable[[frozendict, frozendict], frozendict]:
  """Get the implementation of a binary operator by name"""
  if name in BINARY_OPERATORS:
    return BINARY_OPERATORS[name]
  else:
    raise ValueError(f"Unknown binary operator: {name}")


def list_binary_operators() -> List[str]:
  return list(BINARY_OPERATORS.keys())

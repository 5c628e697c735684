"""
Rinha runtime values and environments
Values and environments are immutable frozendicts; binding a name always
produces a new environment and never touches the old one
"""

from typing import Any, Dict, Iterable, Optional, Tuple
from frozendict import frozendict

from error_handling import (
  TypeMismatch,
  UnboundVariable,
  UnsupportedOperation,
)


# ============================================================================
# VALUES
# ============================================================================

def make_value(content: Any, kind: str) -> frozendict:
  """Create an immutable runtime value"""
  return frozendict(kind=kind, content=content)


def make_bool(content: bool) -> frozendict:
  return make_value(bool(content), 'bool')


def make_int(content: int) -> frozendict:
  return make_value(int(content), 'int')


def make_string(content: str) -> frozendict:
  return make_value(str(content), 'string')


def make_closure(parameters: Iterable[str], body: Dict, env: frozendict) -> frozendict:
  """Create a function value closing over its defining environment"""
  return make_value(frozendict(
      parameters=tuple(parameters),
      body=body,
      env=env
  ), 'closure')


def kind_of(value: frozendict) -> str:
  return value['kind']


# ============================================================================
# TYPED EXTRACTION
# ============================================================================

def _extract(value: frozendict, expected: str, context: Optional[str]) -> Any:
  if value['kind'] != expected:
    raise TypeMismatch(expected, value['kind'], context)
  return value['content']


def extract_bool(value: frozendict, context: Optional[str] = None) -> bool:
  return _extract(value, 'bool', context)


def extract_int(value: frozendict, context: Optional[str] = None) -> int:
  return _extract(value, 'int', context)


def extract_string(value: frozendict, context: Optional[str] = None) -> str:
  return _extract(value, 'string', context)


def extract_closure(value: frozendict, context: Optional[str] = None) -> frozendict:
  return _extract(value, 'closure', context)


# ============================================================================
# EQUALITY
# ============================================================================

EQUATABLE_KINDS = ('bool', 'int', 'string')


def values_equal(lhs: frozendict, rhs: frozendict) -> bool:
  """
  Structural equality for same-kind bools, ints and strings.

  Any other combination, two closures included, has no defined equality
  and raises UnsupportedOperation instead of answering False.
  """
  if lhs['kind'] == rhs['kind'] and lhs['kind'] in EQUATABLE_KINDS:
    return lhs['content'] == rhs['content']
  raise UnsupportedOperation(lhs['kind'], rhs['kind'])


# ============================================================================
# ENVIRONMENT OPERATIONS
# ============================================================================

def make_env(bindings: Optional[Dict[str, frozendict]] = None) -> frozendict:
  """Create an immutable environment"""
  return frozendict(bindings or {})


def bind(env: frozendict, name: str, value: frozendict) -> frozendict:
  """Return new environment with name bound to value"""
  # the new binding sits on the right of the merge so it replaces any older one
  return env | {name: value}


def bind_many(env: frozendict, names: Iterable[str], values: Iterable[frozendict]) -> frozendict:
  """Bind names to values pairwise, in order"""
  for name, value in zip(names, values):
    env = bind(env, name, value)
  return env


def lookup(env: frozendict, name: str) -> frozendict:
  """Look up a value in the environment"""
  try:
    return env[name]
  except KeyError:
    raise UnboundVariable(name) from None


# ============================================================================
# RENDERING
# ============================================================================

def show_value(value: frozendict) -> str:
  """Convert value to a readable representation for diagnostics"""
  kind = value['kind']
  content = value['content']
  if kind == 'bool':
    return "true" if content else "false"
  elif kind == 'int':
    return str(content)
  elif kind == 'string':
    return f'"{content}"'
  elif kind == 'closure':
    return f"<fn({', '.join(content['parameters'])})>"
  return f"<{kind}>"


def closure_parts(value: frozendict) -> Tuple[Tuple[str, ...], Dict, frozendict]:
  """Unpack a function value into (parameters, body, captured env)"""
  closure = extract_closure(value, "call")
  return closure['parameters'], closure['body'], closure['env']

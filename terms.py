"""
Rinha syntax tree constructors
Terms are plain dictionaries in the JSON AST shape emitted by the parser,
so a decoded parser output and a tree built here are interchangeable
"""

from typing import Any, Dict, List, Optional


# ============================================================================
# OPERATORS
# ============================================================================

BINARY_OPERATORS = (
    "Concat",  # +
    "Add",     # +
    "Sub",     # -
    "Mul",     # *
    "Div",     # /
    "Rem",     # %
    "Eq",      # ==
    "Neq",     # !=
    "Lt",      # <
    "Gt",      # >
    "Lte",     # <=
    "Gte",     # >=
    "And",     # &&
    "Or",      # ||
)

TERM_KINDS = (
    "Bool", "Int", "String", "Var", "Function",
    "Call", "Binary", "Let", "If", "Print",
)


# ============================================================================
# LOCATIONS
# ============================================================================

def make_loc(start: int = 0, end: int = 0, filename: str = "<memory>") -> Dict:
  """Create a source location"""
  return {
      'start': start,
      'end': end,
      'filename': filename
  }


def _loc(location: Optional[Dict]) -> Dict:
  return location if location is not None else make_loc()


def make_var(text: str, location: Optional[Dict] = None) -> Dict:
  """Create a bare name, as used by Let and Function parameters"""
  return {
      'text': text,
      'location': _loc(location)
  }


# ============================================================================
# TERMS
# ============================================================================

def make_bool_term(value: bool, location: Optional[Dict] = None) -> Dict:
  return {'kind': 'Bool', 'value': bool(value), 'location': _loc(location)}


def make_int_term(value: int, location: Optional[Dict] = None) -> Dict:
  return {'kind': 'Int', 'value': int(value), 'location': _loc(location)}


def make_string_term(value: str, location: Optional[Dict] = None) -> Dict:
  return {'kind': 'String', 'value': str(value), 'location': _loc(location)}


def make_var_term(text: str, location: Optional[Dict] = None) -> Dict:
  """Variable reference, x"""
  return {'kind': 'Var', 'text': text, 'location': _loc(location)}


def make_function_term(parameters: List[str], body: Dict, location: Optional[Dict] = None) -> Dict:
  """Function expression, fn (x, y) => body"""
  return {
      'kind': 'Function',
      'parameters': [make_var(name) for name in parameters],
      'value': body,
      'location': _loc(location)
  }


def make_call_term(callee: Dict, arguments: List[Dict], location: Optional[Dict] = None) -> Dict:
  """Function call, callee(arg, 1, "b")"""
  return {
      'kind': 'Call',
      'callee': callee,
      'arguments': list(arguments),
      'location': _loc(location)
  }


def make_binary_term(op: str, lhs: Dict, rhs: Dict, location: Optional[Dict] = None) -> Dict:
  """Binary operation, lhs op rhs"""
  if op not in BINARY_OPERATORS:
    raise ValueError(f"Unknown binary operator: {op}")
  return {
      'kind': 'Binary',
      'lhs': lhs,
      'op': op,
      'rhs': rhs,
      'location': _loc(location)
  }


def make_let_term(name: str, value: Dict, next_term: Dict, location: Optional[Dict] = None) -> Dict:
  """Let expression, let name = value; next"""
  return {
      'kind': 'Let',
      'name': make_var(name),
      'value': value,
      'next': next_term,
      'location': _loc(location)
  }


def make_if_term(condition: Dict, then: Dict, otherwise: Dict, location: Optional[Dict] = None) -> Dict:
  """If expression, if (condition) { then } else { otherwise }"""
  return {
      'kind': 'If',
      'condition': condition,
      'then': then,
      'otherwise': otherwise,
      'location': _loc(location)
  }


def make_print_term(value: Dict, location: Optional[Dict] = None) -> Dict:
  """Print expression, print(value)"""
  return {'kind': 'Print', 'value': value, 'location': _loc(location)}


def make_program(expression: Dict, name: str = "<memory>", location: Optional[Dict] = None) -> Dict:
  """Create a program wrapper around a root expression"""
  return {
      'name': name,
      'expression': expression,
      'location': location if location is not None else make_loc(filename=name)
  }


# ============================================================================
# ACCESSORS
# ============================================================================

def term_kind(term: Dict) -> str:
  return term['kind']


def term_location(term: Any) -> Optional[Dict]:
  """Location of a term, or None for anything that doesn't carry one"""
  if isinstance(term, dict):
    return term.get('location')
  return None


def parameter_names(function_term: Dict) -> List[str]:
  """Extract the ordered parameter names of a Function term"""
  return [param['text'] for param in function_term['parameters']]

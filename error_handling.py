"""
Runtime error handling for the Rinha evaluator
Exception classes carry structured fields; reports are plain dictionaries
built and formatted by pure functions
"""

from typing import Any, Dict, Optional, Tuple


KIND_NAMES = {
    'bool': "a bool",
    'int': "an int",
    'string': "a string",
    'closure': "a function",
}


def describe_kind(kind: str) -> str:
  """Article-qualified name of a value kind, e.g. 'an int'"""
  return KIND_NAMES.get(kind, f"a {kind}")


# ============================================================================
# EXCEPTION CLASSES
# ============================================================================

class RinhaRuntimeError(Exception):
  """Base class of every error raised while evaluating a term"""

  def __init__(self, message: str, location: Optional[Dict] = None):
    self.message = message
    self.location = location
    super().__init__(message)

  def details(self) -> Dict[str, Any]:
    return {}

  def to_dict(self) -> Dict[str, Any]:
    return {
        'kind': type(self).__name__,
        'message': self.message,
        'location': self.location,
        'details': self.details()
    }


class UnboundVariable(RinhaRuntimeError):
  def __init__(self, name: str, location: Optional[Dict] = None):
    self.name = name
    super().__init__(f"unknown variable {name}", location)

  def details(self) -> Dict[str, Any]:
    return {'name': self.name}


class TypeMismatch(RinhaRuntimeError):
  """An operation required one value kind and received another"""

  def __init__(self, expected: str, actual: str, context: Optional[str] = None,
               location: Optional[Dict] = None):
    self.expected = expected
    self.actual = actual
    self.context = context
    message = f"expected {describe_kind(expected)} received {describe_kind(actual)}"
    if context:
      message += f" in {context}"
    super().__init__(message, location)

  def details(self) -> Dict[str, Any]:
    return {'expected': self.expected, 'actual': self.actual, 'context': self.context}


class UnsupportedOperation(RinhaRuntimeError):
  """Equality between kinds that have no defined equality"""

  def __init__(self, lhs_kind: str, rhs_kind: str, location: Optional[Dict] = None):
    self.lhs_kind = lhs_kind
    self.rhs_kind = rhs_kind
    super().__init__(
        f"equality between {lhs_kind} and {rhs_kind} is not supported", location)

  def details(self) -> Dict[str, Any]:
    return {'lhs_kind': self.lhs_kind, 'rhs_kind': self.rhs_kind}


class MissingArgument(RinhaRuntimeError):
  def __init__(self, parameter: str, location: Optional[Dict] = None):
    self.parameter = parameter
    super().__init__(f"missing argument for parameter {parameter}", location)

  def details(self) -> Dict[str, Any]:
    return {'parameter': self.parameter}


class DivisionByZero(RinhaRuntimeError):
  def __init__(self, op: str, location: Optional[Dict] = None):
    self.op = op
    verb = "division" if op == "Div" else "remainder"
    super().__init__(f"{verb} by zero", location)

  def details(self) -> Dict[str, Any]:
    return {'op': self.op}


class StackExhausted(RinhaRuntimeError):
  """Call nesting ran out of stack; not a type error but a resource limit"""

  def __init__(self, depth: int, location: Optional[Dict] = None):
    self.depth = depth
    super().__init__(f"stack exhausted after {depth} nested calls", location)

  def details(self) -> Dict[str, Any]:
    return {'depth': self.depth}


# ============================================================================
# ERROR REPORTS (Immutable Dictionaries)
# ============================================================================

def make_runtime_error_report(error: RinhaRuntimeError, program_name: str = "<memory>") -> Dict:
  """Create an immutable report for an error raised by a program"""
  error_dict = error.to_dict()
  location = error_dict['location'] or {}
  return {
      'program': program_name,
      'kind': error_dict['kind'],
      'message': error_dict['message'],
      'filename': location.get('filename', program_name),
      'start': location.get('start'),
      'end': location.get('end'),
      'details': error_dict['details']
  }


def offset_to_line_col(source_text: str, offset: int) -> Tuple[int, int]:
  """Convert a character offset into a 1-based (line, column) pair"""
  offset = max(0, min(offset, len(source_text)))
  line = source_text.count('\n', 0, offset) + 1
  line_start = source_text.rfind('\n', 0, offset) + 1
  return line, offset - line_start + 1


def get_context_lines(source_text: str, line_num: int, col_num: int,
                      width: int = 1, context_lines: int = 2) -> str:
  """Get context lines around the error, marking the failing span"""
  lines = source_text.split('\n')
  start_line = max(0, line_num - context_lines - 1)
  end_line = min(len(lines), line_num + context_lines)

  context_parts = []
  for i in range(start_line, end_line):
    line_prefix = f"{i+1:4d}: "
    context_parts.append(f"{line_prefix}{lines[i]}")
    if i == line_num - 1:
      marker = '^' * max(1, min(width, len(lines[i]) - col_num + 1))
      context_parts.append(f"{'':6}{' ' * (col_num - 1)}{marker}")

  return '\n'.join(context_parts)


def format_runtime_error(report: Dict, source_text: Optional[str] = None) -> str:
  """Format an error report as text"""
  error_msg = f"Runtime error in {report['program']}: {report['kind']}\n"
  error_msg += f"  {report['message']}\n"

  if report['start'] is not None:
    error_msg += f"  At: {report['filename']}:{report['start']}-{report['end']}\n"

    if source_text is not None:
      line, col = offset_to_line_col(source_text, report['start'])
      width = (report['end'] or report['start']) - report['start']
      error_msg += get_context_lines(source_text, line, col, width) + "\n"

  return error_msg

"""
Rinha Interpreter - Pure Functional Style
A tree-walking evaluator over the JSON syntax tree
Values and environments are immutable; printing is the only side effect
"""

from typing import Callable, Dict, List, Optional
import sys
from frozendict import frozendict

from error_handling import (
  RinhaRuntimeError,
  MissingArgument,
  StackExhausted,
)
from runtime import (
  make_bool,
  make_int,
  make_string,
  make_closure,
  make_env,
  extract_bool,
  closure_parts,
  bind,
  bind_many,
  lookup,
  show_value,
)
from stdlib import get_binary_operator, rinha_print
from terms import parameter_names, term_kind, term_location


# ============================================================================
# EXECUTION CONTEXT
# ============================================================================

def default_output(line: str) -> None:
  """Write a printed string and its newline to stdout"""
  print(line)


def make_execution_context(
  output: Optional[Callable[[str], None]] = None,
  debug: bool = False,
  max_depth: Optional[int] = None
) -> Dict:
  """Create an execution context holding the output sink and limits"""
  return {
      'output': output or default_output,
      'debug': debug,
      'max_depth': max_depth,
      'depth': 0,
      'deepest': 0
  }


def trace(context: Dict, message: str) -> None:
  """Debug trace, kept on stderr so it never mixes with program output"""
  if context['debug']:
    print(f"{'  ' * context['depth']}{message}", file=sys.stderr)


def enter_call(context: Dict) -> None:
  depth = context['depth'] + 1
  max_depth = context['max_depth']
  if max_depth is not None and depth > max_depth:
    raise StackExhausted(max_depth)
  context['depth'] = depth
  context['deepest'] = max(context['deepest'], depth)


def leave_call(context: Dict) -> None:
  context['depth'] -= 1


# ============================================================================
# EVALUATION FUNCTIONS
# ============================================================================

def eval_term(env: frozendict, term: Dict, context: Optional[Dict] = None) -> frozendict:
  """
  Evaluate a term against an environment and return its value.
  Errors raised below are stamped with the innermost failing term's location.
  """
  if context is None:
    context = make_execution_context()

  node_kind = term_kind(term)
  trace(context, f"Evaluating: {node_kind}")

  try:
    if node_kind == "Bool":
      return eval_bool(term, env, context)
    elif node_kind == "Int":
      return eval_int(term, env, context)
    elif node_kind == "String":
      return eval_string(term, env, context)
    elif node_kind == "Var":
      return eval_var(term, env, context)
    elif node_kind == "Function":
      return eval_function(term, env, context)
    elif node_kind == "Call":
      return eval_call(term, env, context)
    elif node_kind == "Binary":
      return eval_binary(term, env, context)
    elif node_kind == "Let":
      return eval_let(term, env, context)
    elif node_kind == "If":
      return eval_if(term, env, context)
    elif node_kind == "Print":
      return eval_print(term, env, context)
    else:
      raise ValueError(f"Unknown term kind: {node_kind}")
  except RinhaRuntimeError as e:
    if e.location is None:
      e.location = term_location(term)
    raise


def eval_bool(term: Dict, env: frozendict, context: Dict) -> frozendict:
  return make_bool(term['value'])


def eval_int(term: Dict, env: frozendict, context: Dict) -> frozendict:
  return make_int(term['value'])


def eval_string(term: Dict, env: frozendict, context: Dict) -> frozendict:
  return make_string(term['value'])


def eval_var(term: Dict, env: frozendict, context: Dict) -> frozendict:
  """Evaluate variable by looking it up in the environment"""
  return lookup(env, term['text'])


def eval_function(term: Dict, env: frozendict, context: Dict) -> frozendict:
  """Evaluate function expression into a closure over the current environment"""
  return make_closure(parameter_names(term), term['value'], env)


def eval_call(term: Dict, env: frozendict, context: Dict) -> frozendict:
  """Evaluate function application"""
  callee = eval_term(env, term['callee'], context)
  parameters, body, closure_env = closure_parts(callee)

  # Arguments see the caller's environment, left to right
  args = [eval_term(env, arg, context) for arg in term['arguments']]

  if len(args) < len(parameters):
    raise MissingArgument(parameters[len(args)])
  # zip drops surplus arguments
  call_env = bind_many(closure_env, parameters, args)

  if context['debug']:
    trace(context, f"Calling {show_value(callee)} with ({', '.join(show_value(a) for a in args)})")

  enter_call(context)
  try:
    return eval_term(call_env, body, context)
  finally:
    leave_call(context)


def eval_binary(term: Dict, env: frozendict, context: Dict) -> frozendict:
  """Evaluate binary operation; both operands are always evaluated"""
  op_func = get_binary_operator(term['op'])
  lhs = eval_term(env, term['lhs'], context)
  rhs = eval_term(env, term['rhs'], context)
  return op_func(lhs, rhs)


def eval_let(term: Dict, env: frozendict, context: Dict) -> frozendict:
  """Evaluate let binding; the name is not in scope for its own value"""
  value = eval_term(env, term['value'], context)
  return eval_term(bind(env, term['name']['text'], value), term['next'], context)


def eval_if(term: Dict, env: frozendict, context: Dict) -> frozendict:
  """Evaluate the condition, then exactly one branch"""
  condition = eval_term(env, term['condition'], context)
  if extract_bool(condition, "if condition"):
    return eval_term(env, term['then'], context)
  else:
    return eval_term(env, term['otherwise'], context)


def eval_print(term: Dict, env: frozendict, context: Dict) -> frozendict:
  """Evaluate print expression; its value is the printed string"""
  value = eval_term(env, term['value'], context)
  return rinha_print(value, context['output'])


def evaluate(env: frozendict, term: Dict, context: Optional[Dict] = None) -> frozendict:
  """
  Evaluate a root term, raising RinhaRuntimeError on failure.
  Host stack exhaustion is reported as StackExhausted.
  """
  if context is None:
    context = make_execution_context()
  try:
    return eval_term(env, term, context)
  except RecursionError:
    raise StackExhausted(context['deepest'], term_location(term)) from None


# ============================================================================
# PROGRAM EVALUATION
# ============================================================================

def make_program_result(name: str, value: Optional[frozendict],
                        error: Optional[RinhaRuntimeError], output: List[str]) -> Dict:
  """Create an immutable program result"""
  return {
      'program': name,
      'ok': error is None,
      'value': value,
      'error': error,
      'output': list(output)
  }


def eval_program(program: Dict, env: Optional[frozendict] = None,
                 context: Optional[Dict] = None) -> Dict:
  """
  Evaluate a program and return a result dictionary.
  Printed lines are captured in the result and still forwarded to the
  context's output sink; runtime errors are returned, not raised.
  """
  if context is None:
    context = make_execution_context()

  lines: List[str] = []
  sink = context['output']

  def capture(line: str) -> None:
    lines.append(line)
    sink(line)

  run_context = {**context, 'output': capture}
  trace(run_context, f"Running program {program['name']}")

  try:
    value = evaluate(env if env is not None else make_env(), program['expression'], run_context)
  except RinhaRuntimeError as e:
    return make_program_result(program['name'], None, e, lines)

  return make_program_result(program['name'], value, None, lines)


# ============================================================================
# FACTORY FUNCTIONS
# ============================================================================

def create_interpreter(debug: bool = False,
                       output: Optional[Callable[[str], None]] = None,
                       max_depth: Optional[int] = None) -> Callable[[Dict], Dict]:
  """Factory function returning an interpreter bound to one configuration"""
  def interpret(program: Dict) -> Dict:
    # A fresh context per run: nothing carries over between programs
    context = make_execution_context(output=output, debug=debug, max_depth=max_depth)
    return eval_program(program, context=context)

  return interpret


def create_debug_interpreter(output: Optional[Callable[[str], None]] = None) -> Callable[[Dict], Dict]:
  """Factory function returning a tracing interpreter"""
  return create_interpreter(debug=True, output=output)

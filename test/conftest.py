"""
Test configuration for the Rinha evaluator tests
"""

import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from interpreter import make_execution_context
from runtime import make_env


@pytest.fixture
def printed():
  """Collects every line written by print expressions"""
  return []


@pytest.fixture
def context(printed):
  """Execution context whose output goes to the `printed` list"""
  return make_execution_context(output=printed.append)


@pytest.fixture
def empty_env():
  return make_env()

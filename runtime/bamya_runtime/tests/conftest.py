"""
Pytest configuration and fixtures for bamya_runtime tests.
"""

import os
import sys

import pytest

# Add grandparent directory to path for imports (to find bamya_runtime package)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from bamya_runtime.environment import Environment
from bamya_runtime.evaluator import Evaluator
from bamya_runtime.runtime import BamyaRuntime, parse


@pytest.fixture
def env():
    """Fresh top-level environment."""
    return Environment()


@pytest.fixture
def runtime():
    """Runtime session whose `log` output is collected in runtime.logged."""
    logged = []
    rt = BamyaRuntime(output=logged.append)
    rt.logged = logged
    return rt


@pytest.fixture
def run():
    """
    Parse and evaluate source in a fresh environment.

    Fails the test if the source does not parse cleanly.
    """
    def _run(source):
        program, errors = parse(source)
        assert errors == [], f"unexpected parse errors: {errors}"
        return Evaluator(output=lambda text: None).evaluate(program, Environment())
    return _run

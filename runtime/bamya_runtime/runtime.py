"""
Bamya Runtime Interface

The two calls embedders need:

    program, errors = parse(source)
    result = evaluate(program, env)

plus BamyaRuntime, a session object that keeps one Environment across
successive execute() calls.

Example:
    >>> runtime = BamyaRuntime()
    >>> runtime.execute('let add = fn(a, b) { a + b };')
    >>> runtime.execute('add(2, 3)').inspect()
    '5'
"""

import logging
from typing import Dict, List, Optional, Tuple

from .ast_nodes import Program
from .builtins import OutputSink
from .environment import Environment
from .errors import E_NAME_ERROR, E_PARSE_ERROR, BamyaError
from .evaluator import Evaluator
from .lexer import Lexer
from .objects import BamyaObject
from .parser import Parser

logger = logging.getLogger(__name__)


def parse(source: str) -> Tuple[Program, List[str]]:
    """
    Parse Bamya source

    Returns:
        (program, errors). When errors is non-empty the program holds only
        the statements that parsed cleanly and should not be evaluated.
    """
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    logger.debug("parsed %d statement(s), %d error(s)", len(program.statements), len(parser.errors))
    return program, parser.errors


def evaluate(program: Program, env: Environment,
             evaluator: Optional[Evaluator] = None) -> Optional[BamyaObject]:
    """Evaluate a parsed program; bindings persist in env"""
    if evaluator is None:
        evaluator = Evaluator()
    return evaluator.evaluate(program, env)


class BamyaRuntime:
    """Main Bamya runtime interface"""

    def __init__(self, output: Optional[OutputSink] = None):
        self.evaluator = Evaluator(output=output)
        self.env = Environment()

    def execute(self, source: str) -> Optional[BamyaObject]:
        """Parse and evaluate source in this session's environment"""
        program, errors = parse(source)
        if errors:
            raise BamyaError(E_PARSE_ERROR, f"{len(errors)} parse error(s): {errors[0]}", errors)
        return self.evaluator.evaluate(program, self.env)

    def set_var(self, name: str, value: BamyaObject):
        """Set variable in environment"""
        self.env.set(name, value)

    def get_var(self, name: str) -> BamyaObject:
        """Get variable from environment"""
        value = self.env.get(name)
        if value is None:
            raise BamyaError(E_NAME_ERROR, f"Undefined variable: {name}")
        return value

    def get_env(self) -> Dict[str, BamyaObject]:
        """Get the session's top-level bindings"""
        return dict(self.env.store)

    def clear_env(self):
        """Start over with an empty environment"""
        logger.debug("clearing %d binding(s)", len(self.env.store))
        self.env = Environment()


def execute_bamya(source: str) -> Optional[BamyaObject]:
    """
    Execute Bamya source in a fresh session (convenience function)

    Example:
        >>> execute_bamya('5 + 2 * 10').inspect()
        '25'
    """
    return BamyaRuntime().execute(source)


__all__ = ['parse', 'evaluate', 'BamyaRuntime', 'execute_bamya']

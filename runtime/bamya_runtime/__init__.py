"""
Bamya Runtime - Tree-Walking Interpreter

This package provides the complete Bamya pipeline:

**Front End:**
- Lexer: source text to tokens
- Parser: Pratt parser, tokens to AST (errors collected, never raised)
- AST: node types with canonical round-trip rendering

**Back End:**
- Evaluator: recursive AST interpreter
- Objects: runtime values and hash keys
- Environment: chained scopes for closures
- Builtins: len, first, last, rest, push, log

Version: 1.0.0
"""

__version__ = '1.0.0'

# ============================================================================
# Front End
# ============================================================================

from .tokens import Token, TokenType, KEYWORDS, lookup_ident
from .lexer import Lexer
from .ast_nodes import (
    Node, Statement, Expression, Program,
    LetStatement, ReturnStatement, ExpressionStatement, BlockStatement,
    Identifier, IntegerLiteral, StringLiteral, BooleanLiteral,
    ArrayLiteral, HashLiteral, FunctionLiteral,
    PrefixExpression, InfixExpression, IfExpression,
    CallExpression, IndexExpression,
)
from .parser import Parser, Precedence

# ============================================================================
# Back End
# ============================================================================

from .objects import (
    ObjectType, HashKey, HashPair, BamyaObject,
    Integer, Boolean, String, Null, Array, Hash,
    Function, Builtin, ReturnValue, Error,
    TRUE, FALSE, NULL,
)
from .environment import Environment, new_enclosed_environment
from .builtins import BUILTINS, make_builtins
from .evaluator import Evaluator, is_truthy

# ============================================================================
# Runtime Interface
# ============================================================================

from .errors import BamyaError, E_PARSE_ERROR, E_RUNTIME_ERROR, E_NAME_ERROR
from .runtime import parse, evaluate, BamyaRuntime, execute_bamya

# ============================================================================
# Exports
# ============================================================================

__all__ = [
    # Version
    '__version__',

    # Front End
    'Token', 'TokenType', 'KEYWORDS', 'lookup_ident',
    'Lexer', 'Parser', 'Precedence',
    'Node', 'Statement', 'Expression', 'Program',
    'LetStatement', 'ReturnStatement', 'ExpressionStatement', 'BlockStatement',
    'Identifier', 'IntegerLiteral', 'StringLiteral', 'BooleanLiteral',
    'ArrayLiteral', 'HashLiteral', 'FunctionLiteral',
    'PrefixExpression', 'InfixExpression', 'IfExpression',
    'CallExpression', 'IndexExpression',

    # Back End
    'ObjectType', 'HashKey', 'HashPair', 'BamyaObject',
    'Integer', 'Boolean', 'String', 'Null', 'Array', 'Hash',
    'Function', 'Builtin', 'ReturnValue', 'Error',
    'TRUE', 'FALSE', 'NULL',
    'Environment', 'new_enclosed_environment',
    'BUILTINS', 'make_builtins',
    'Evaluator', 'is_truthy',

    # Runtime Interface
    'BamyaError', 'E_PARSE_ERROR', 'E_RUNTIME_ERROR', 'E_NAME_ERROR',
    'parse', 'evaluate', 'BamyaRuntime', 'execute_bamya',
]

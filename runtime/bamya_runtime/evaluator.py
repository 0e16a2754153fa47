"""
Bamya Evaluator

Recursive tree-walking interpreter. Dispatch goes through a table keyed by
AST node class.

Runtime failures are Error objects returned as values. Every sub-evaluation
is checked with is_error() right away and an Error is handed back unchanged,
which is the only way evaluation is cut short. `return` works the same way
through ReturnValue: blocks pass it up still wrapped, and only the program
and function application unwrap it.
"""

from typing import Callable, Dict, List, Optional

from .ast_nodes import (
    ArrayLiteral, BlockStatement, BooleanLiteral, CallExpression, Expression,
    ExpressionStatement, FunctionLiteral, HashLiteral, Identifier, IfExpression,
    IndexExpression, InfixExpression, IntegerLiteral, LetStatement, Node,
    PrefixExpression, Program, ReturnStatement, StringLiteral,
)
from .builtins import OutputSink, make_builtins
from .environment import Environment, new_enclosed_environment
from .errors import E_RUNTIME_ERROR, BamyaError
from .objects import (
    FALSE, HASHABLE_TYPES, NULL, TRUE, Array, BamyaObject, Builtin, Function,
    Hash, HashPair, Integer, ObjectType, ReturnValue, String, is_error,
    native_bool_to_boolean, new_error,
)

_INT64_RANGE = 2 ** 64
_INT64_OFFSET = 2 ** 63


def wrap_int64(value: int) -> int:
    """Wrap an integer into the signed 64-bit range"""
    return (value + _INT64_OFFSET) % _INT64_RANGE - _INT64_OFFSET


def is_truthy(obj: BamyaObject) -> bool:
    """NULL and FALSE are falsy; everything else, including 0, is truthy"""
    return not (obj is NULL or obj is FALSE)


class Evaluator:
    """Evaluate Bamya AST"""

    def __init__(self, builtins: Optional[Dict[str, Builtin]] = None,
                 output: Optional[OutputSink] = None):
        self.builtins = builtins if builtins is not None else make_builtins(output)
        self._handlers: Dict[type, Callable[[Node, Environment], Optional[BamyaObject]]] = {
            Program: self._eval_program,
            BlockStatement: self._eval_block_statement,
            ExpressionStatement: self._eval_expression_statement,
            LetStatement: self._eval_let_statement,
            ReturnStatement: self._eval_return_statement,
            IntegerLiteral: self._eval_integer_literal,
            StringLiteral: self._eval_string_literal,
            BooleanLiteral: self._eval_boolean_literal,
            PrefixExpression: self._eval_prefix_expression,
            InfixExpression: self._eval_infix_expression,
            IfExpression: self._eval_if_expression,
            Identifier: self._eval_identifier,
            FunctionLiteral: self._eval_function_literal,
            CallExpression: self._eval_call_expression,
            ArrayLiteral: self._eval_array_literal,
            IndexExpression: self._eval_index_expression,
            HashLiteral: self._eval_hash_literal,
        }

    def evaluate(self, node: Node, env: Environment) -> Optional[BamyaObject]:
        """Evaluate AST node in env"""
        handler = self._handlers.get(type(node))
        if handler is None:
            raise BamyaError(E_RUNTIME_ERROR, f"Unknown AST node type: {type(node).__name__}")
        return handler(node, env)

    def _eval_value(self, node: Node, env: Environment) -> BamyaObject:
        """Evaluate node where a value is required; nothing counts as NULL"""
        result = self.evaluate(node, env)
        return NULL if result is None else result

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def _eval_program(self, program: Program, env: Environment) -> Optional[BamyaObject]:
        result = None
        for stmt in program.statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if is_error(result):
                return result
        return result

    def _eval_block_statement(self, block: BlockStatement, env: Environment) -> Optional[BamyaObject]:
        result = None
        for stmt in block.statements:
            result = self.evaluate(stmt, env)
            if result is not None and result.type() in (ObjectType.RETURN_VALUE, ObjectType.ERROR):
                return result
        return result

    def _eval_expression_statement(self, node: ExpressionStatement, env: Environment):
        return self.evaluate(node.expression, env)

    def _eval_let_statement(self, node: LetStatement, env: Environment) -> Optional[BamyaObject]:
        value = self._eval_value(node.value, env)
        if is_error(value):
            return value
        env.set(node.name.value, value)
        return None

    def _eval_return_statement(self, node: ReturnStatement, env: Environment) -> BamyaObject:
        value = self._eval_value(node.return_value, env)
        if is_error(value):
            return value
        return ReturnValue(value)

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def _eval_integer_literal(self, node: IntegerLiteral, env: Environment) -> BamyaObject:
        return Integer(node.value)

    def _eval_string_literal(self, node: StringLiteral, env: Environment) -> BamyaObject:
        return String(node.value)

    def _eval_boolean_literal(self, node: BooleanLiteral, env: Environment) -> BamyaObject:
        return native_bool_to_boolean(node.value)

    def _eval_function_literal(self, node: FunctionLiteral, env: Environment) -> BamyaObject:
        return Function(node.parameters, node.body, env)

    def _eval_array_literal(self, node: ArrayLiteral, env: Environment) -> BamyaObject:
        elements = self._eval_expressions(node.elements, env)
        if len(elements) == 1 and is_error(elements[0]):
            return elements[0]
        return Array(elements)

    def _eval_hash_literal(self, node: HashLiteral, env: Environment) -> BamyaObject:
        pairs = {}
        for key_node, value_node in node.pairs:
            key = self._eval_value(key_node, env)
            if is_error(key):
                return key
            if not isinstance(key, HASHABLE_TYPES):
                return new_error(f"unusable as hash key: {key.type()}")

            value = self._eval_value(value_node, env)
            if is_error(value):
                return value

            pairs[key.hash_key()] = HashPair(key, value)

        return Hash(pairs)

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def _eval_prefix_expression(self, node: PrefixExpression, env: Environment) -> BamyaObject:
        right = self._eval_value(node.right, env)
        if is_error(right):
            return right

        if node.operator == '!':
            return FALSE if is_truthy(right) else TRUE
        if node.operator == '-':
            if right.type() != ObjectType.INTEGER:
                return new_error(f"unknown operator: -{right.type()}")
            return Integer(wrap_int64(-right.value))
        return new_error(f"unknown operator: {node.operator}{right.type()}")

    def _eval_infix_expression(self, node: InfixExpression, env: Environment) -> BamyaObject:
        left = self._eval_value(node.left, env)
        if is_error(left):
            return left

        right = self._eval_value(node.right, env)
        if is_error(right):
            return right

        return self._eval_infix_op(node.operator, left, right)

    def _eval_infix_op(self, op: str, left: BamyaObject, right: BamyaObject) -> BamyaObject:
        """Evaluate binary operation"""
        if left.type() != right.type():
            return new_error(f"type mismatch: {left.type()} {op} {right.type()}")

        if left.type() == ObjectType.INTEGER:
            return self._eval_integer_infix(op, left, right)

        if left.type() == ObjectType.STRING:
            if op != '+':
                return new_error(f"unknown operator: {left.type()} {op} {right.type()}")
            return String(left.value + right.value)

        if op == '==':
            return native_bool_to_boolean(left is right)
        if op == '!=':
            return native_bool_to_boolean(left is not right)

        return new_error(f"unknown operator: {left.type()} {op} {right.type()}")

    def _eval_integer_infix(self, op: str, left: Integer, right: Integer) -> BamyaObject:
        a, b = left.value, right.value

        if op == '+':
            return Integer(wrap_int64(a + b))
        elif op == '-':
            return Integer(wrap_int64(a - b))
        elif op == '*':
            return Integer(wrap_int64(a * b))
        elif op == '/':
            if b == 0:
                return new_error("division by zero")
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient
            return Integer(wrap_int64(quotient))
        elif op == '<':
            return native_bool_to_boolean(a < b)
        elif op == '>':
            return native_bool_to_boolean(a > b)
        elif op == '==':
            return native_bool_to_boolean(a == b)
        elif op == '!=':
            return native_bool_to_boolean(a != b)
        return new_error(f"unknown operator: {left.type()} {op} {right.type()}")

    def _eval_if_expression(self, node: IfExpression, env: Environment) -> Optional[BamyaObject]:
        condition = self._eval_value(node.condition, env)
        if is_error(condition):
            return condition

        if is_truthy(condition):
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    # ------------------------------------------------------------------
    # Names, calls and indexing
    # ------------------------------------------------------------------

    def _eval_identifier(self, node: Identifier, env: Environment) -> BamyaObject:
        value = env.get(node.value)
        if value is not None:
            return value

        builtin = self.builtins.get(node.value)
        if builtin is not None:
            return builtin

        return new_error(f"identifier not found: {node.value}")

    def _eval_expressions(self, expressions: List[Expression], env: Environment) -> List[BamyaObject]:
        """Evaluate left to right; on error return just [error]"""
        results = []
        for expression in expressions:
            evaluated = self._eval_value(expression, env)
            if is_error(evaluated):
                return [evaluated]
            results.append(evaluated)
        return results

    def _eval_call_expression(self, node: CallExpression, env: Environment) -> Optional[BamyaObject]:
        function = self._eval_value(node.function, env)
        if is_error(function):
            return function

        args = self._eval_expressions(node.arguments, env)
        if len(args) == 1 and is_error(args[0]):
            return args[0]

        return self.apply_function(function, args)

    def apply_function(self, function: BamyaObject, args: List[BamyaObject]) -> Optional[BamyaObject]:
        """Call a Function or Builtin with evaluated arguments"""
        if isinstance(function, Function):
            call_env = new_enclosed_environment(function.env)
            # Extra arguments are dropped; missing ones stay unbound
            for param, arg in zip(function.parameters, args):
                call_env.set(param.value, arg)

            evaluated = self.evaluate(function.body, call_env)
            if isinstance(evaluated, ReturnValue):
                return evaluated.value
            return evaluated

        if isinstance(function, Builtin):
            return function.fn(*args)

        return new_error(f"not a function: {function.type()}")

    def _eval_index_expression(self, node: IndexExpression, env: Environment) -> BamyaObject:
        left = self._eval_value(node.left, env)
        if is_error(left):
            return left

        index = self._eval_value(node.index, env)
        if is_error(index):
            return index

        if left.type() == ObjectType.ARRAY and index.type() == ObjectType.INTEGER:
            idx = index.value
            if idx < 0 or idx >= len(left.elements):
                return NULL
            return left.elements[idx]

        if left.type() == ObjectType.HASH:
            if not isinstance(index, HASHABLE_TYPES):
                return new_error(f"unusable as hash key: {index.type()}")
            pair = left.pairs.get(index.hash_key())
            return pair.value if pair is not None else NULL

        return new_error(f"index operator not supported: {left.type()}")


__all__ = ['Evaluator', 'is_truthy', 'wrap_int64']

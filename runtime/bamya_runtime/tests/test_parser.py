"""
Test suite for the Bamya parser
Verifies statement dispatch, operator precedence and error collection
"""

import pytest

from bamya_runtime.ast_nodes import (
    ArrayLiteral, BooleanLiteral, CallExpression, ExpressionStatement,
    FunctionLiteral, HashLiteral, Identifier, IfExpression, IndexExpression,
    InfixExpression, IntegerLiteral, LetStatement, PrefixExpression,
    ReturnStatement, StringLiteral,
)
from bamya_runtime.lexer import Lexer
from bamya_runtime.parser import Parser


def parse_ok(source):
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    assert parser.errors == []
    return program


def parse_errors(source):
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


def single_expression(source):
    program = parse_ok(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


def assert_literal(expr, expected):
    if isinstance(expected, bool):
        assert isinstance(expr, BooleanLiteral)
        assert expr.value is expected
        assert expr.token_literal() == ('true' if expected else 'false')
    elif isinstance(expected, int):
        assert isinstance(expr, IntegerLiteral)
        assert expr.value == expected
        assert expr.token_literal() == str(expected)
    else:
        assert isinstance(expr, Identifier)
        assert expr.value == expected


class TestStatements:
    """Test let, return and expression statements"""

    @pytest.mark.parametrize("source,name,value", [
        ('let x = 5;', 'x', 5),
        ('let y = true;', 'y', True),
        ('let foobar = y;', 'foobar', 'y'),
        ('let z = 1', 'z', 1),
    ])
    def test_let_statements(self, source, name, value):
        program = parse_ok(source)
        assert len(program.statements) == 1
        stmt = program.statements[0]
        assert isinstance(stmt, LetStatement)
        assert stmt.token_literal() == 'let'
        assert stmt.name.value == name
        assert_literal(stmt.value, value)

    @pytest.mark.parametrize("source,value", [
        ('return 5;', 5),
        ('return true;', True),
        ('return foobar;', 'foobar'),
    ])
    def test_return_statements(self, source, value):
        stmt = parse_ok(source).statements[0]
        assert isinstance(stmt, ReturnStatement)
        assert stmt.token_literal() == 'return'
        assert_literal(stmt.return_value, value)

    def test_multiple_statements_without_semicolons(self):
        program = parse_ok('let a = 1 let b = 2 a')
        assert [type(s) for s in program.statements] == [LetStatement, LetStatement, ExpressionStatement]


class TestExpressions:
    """Test individual expression forms"""

    def test_identifier(self):
        assert_literal(single_expression('foobar;'), 'foobar')

    def test_integer_literal(self):
        assert_literal(single_expression('5;'), 5)

    def test_string_literal(self):
        expr = single_expression('"hello world";')
        assert isinstance(expr, StringLiteral)
        assert expr.value == 'hello world'

    @pytest.mark.parametrize("source,operator,value", [
        ('!5;', '!', 5),
        ('-15;', '-', 15),
        ('!foobar;', '!', 'foobar'),
        ('-foobar;', '-', 'foobar'),
        ('!true;', '!', True),
        ('!false;', '!', False),
    ])
    def test_prefix_expressions(self, source, operator, value):
        expr = single_expression(source)
        assert isinstance(expr, PrefixExpression)
        assert expr.operator == operator
        assert_literal(expr.right, value)

    @pytest.mark.parametrize("operator", ['+', '-', '*', '/', '>', '<', '==', '!='])
    def test_infix_expressions(self, operator):
        expr = single_expression(f'5 {operator} 5;')
        assert isinstance(expr, InfixExpression)
        assert expr.operator == operator
        assert_literal(expr.left, 5)
        assert_literal(expr.right, 5)

    def test_boolean_infix(self):
        expr = single_expression('true != false')
        assert_literal(expr.left, True)
        assert_literal(expr.right, False)

    def test_if_expression(self):
        expr = single_expression('if (x < y) { x }')
        assert isinstance(expr, IfExpression)
        assert str(expr.condition) == '(x < y)'
        assert len(expr.consequence.statements) == 1
        assert_literal(expr.consequence.statements[0].expression, 'x')
        assert expr.alternative is None

    def test_if_else_expression(self):
        expr = single_expression('if (x < y) { x } else { y }')
        assert isinstance(expr, IfExpression)
        assert_literal(expr.alternative.statements[0].expression, 'y')

    def test_function_literal(self):
        expr = single_expression('fn(x, y) { x + y; }')
        assert isinstance(expr, FunctionLiteral)
        assert [p.value for p in expr.parameters] == ['x', 'y']
        assert len(expr.body.statements) == 1
        assert str(expr.body.statements[0]) == '(x + y)'

    @pytest.mark.parametrize("source,params", [
        ('fn() {};', []),
        ('fn(x) {};', ['x']),
        ('fn(x, y, z) {};', ['x', 'y', 'z']),
    ])
    def test_function_parameters(self, source, params):
        expr = single_expression(source)
        assert [p.value for p in expr.parameters] == params

    def test_call_expression(self):
        expr = single_expression('add(1, 2 * 3, 4 + 5);')
        assert isinstance(expr, CallExpression)
        assert_literal(expr.function, 'add')
        assert [str(a) for a in expr.arguments] == ['1', '(2 * 3)', '(4 + 5)']

    def test_empty_call(self):
        expr = single_expression('noop()')
        assert isinstance(expr, CallExpression)
        assert expr.arguments == []

    def test_array_literal(self):
        expr = single_expression('[1, 2 * 2, 3 + 3]')
        assert isinstance(expr, ArrayLiteral)
        assert [str(e) for e in expr.elements] == ['1', '(2 * 2)', '(3 + 3)']

    def test_empty_array_literal(self):
        expr = single_expression('[]')
        assert isinstance(expr, ArrayLiteral)
        assert expr.elements == []

    def test_index_expression(self):
        expr = single_expression('myArray[1 + 1]')
        assert isinstance(expr, IndexExpression)
        assert_literal(expr.left, 'myArray')
        assert str(expr.index) == '(1 + 1)'

    def test_hash_literal_string_keys(self):
        expr = single_expression('{"one": 1, "two": 2, "three": 3}')
        assert isinstance(expr, HashLiteral)
        assert [(k.value, v.value) for k, v in expr.pairs] == [('one', 1), ('two', 2), ('three', 3)]

    def test_hash_literal_mixed_keys(self):
        expr = single_expression('{1: "a", true: "b", x: 0 + 1}')
        assert [str(k) for k, _ in expr.pairs] == ['1', 'true', 'x']
        assert str(expr.pairs[2][1]) == '(0 + 1)'

    def test_empty_hash_literal(self):
        expr = single_expression('{}')
        assert isinstance(expr, HashLiteral)
        assert expr.pairs == []


class TestPrecedence:
    """Test operator precedence via canonical rendering"""

    @pytest.mark.parametrize("source,expected", [
        ('-1 + 2 + 3', '(((-1) + 2) + 3)'),
        ('-a * b', '((-a) * b)'),
        ('!-a', '(!(-a))'),
        ('a + b + c', '((a + b) + c)'),
        ('a + b - c', '((a + b) - c)'),
        ('a * b * c', '((a * b) * c)'),
        ('a * b / c', '((a * b) / c)'),
        ('a + b / c', '(a + (b / c))'),
        ('a + b * c + d / e - f', '(((a + (b * c)) + (d / e)) - f)'),
        ('3 + 4; -5 * 5', '(3 + 4); ((-5) * 5)'),
        ('5 > 4 == 3 < 4', '((5 > 4) == (3 < 4))'),
        ('5 < 4 != 3 > 4', '((5 < 4) != (3 > 4))'),
        ('3 + 4 * 5 == 3 * 1 + 4 * 5', '((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))'),
        ('true', 'true'),
        ('false', 'false'),
        ('3 > 5 == false', '((3 > 5) == false)'),
        ('3 < 5 == true', '((3 < 5) == true)'),
        ('1 + (2 + 3) + 4', '((1 + (2 + 3)) + 4)'),
        ('(5 + 5) * 2', '((5 + 5) * 2)'),
        ('2 / (5 + 5)', '(2 / (5 + 5))'),
        ('(5 + 5) * 2 * (5 + 5)', '(((5 + 5) * 2) * (5 + 5))'),
        ('-(5 + 5)', '(-(5 + 5))'),
        ('!(true == true)', '(!(true == true))'),
        ('a + add(b * c) + d', '((a + add((b * c))) + d)'),
        ('add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))', 'add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))'),
        ('add(a + b + c * d / f + g)', 'add((((a + b) + ((c * d) / f)) + g))'),
        ('a * [1, 2, 3, 4][b * c] * d', '((a * ([1, 2, 3, 4][(b * c)])) * d)'),
        ('add(a * b[2], b[1], 2 * [1, 2][1])', 'add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))'),
    ])
    def test_operator_precedence(self, source, expected):
        assert str(parse_ok(source)) == expected


class TestErrors:
    """Test error collection"""

    def test_let_missing_identifier(self):
        _, errors = parse_errors('let = 5;')
        assert errors[0] == 'expected next token to be IDENT, got = instead'

    def test_let_missing_assign(self):
        _, errors = parse_errors('let x 5;')
        assert errors[0] == 'expected next token to be =, got INT instead'

    def test_no_prefix_parse_function(self):
        _, errors = parse_errors(')')
        assert errors == ['no prefix parse function for )']

    def test_errors_accumulate_across_statements(self):
        _, errors = parse_errors('let = 10; let 838383;')
        assert errors[0] == 'expected next token to be IDENT, got = instead'
        assert 'expected next token to be IDENT, got INT instead' in errors
        assert len(errors) >= 3

    def test_missing_closing_paren(self):
        _, errors = parse_errors('(1 + 2')
        assert errors == ['expected next token to be ), got EOF instead']

    def test_missing_closing_bracket(self):
        _, errors = parse_errors('a[1')
        assert errors == ['expected next token to be ], got EOF instead']

    def test_hash_missing_colon(self):
        _, errors = parse_errors('{"a" 1}')
        assert errors[0] == 'expected next token to be :, got INT instead'

    def test_function_parameters_must_be_identifiers(self):
        _, errors = parse_errors('fn(1) { 1 }')
        assert errors[0] == 'expected next token to be IDENT, got INT instead'

    def test_unclosed_block(self):
        _, errors = parse_errors('if (x) { x')
        assert errors == ['expected next token to be }, got EOF instead']

    def test_integer_out_of_range(self):
        _, errors = parse_errors('9223372036854775808')
        assert errors == ['could not parse 9223372036854775808 as integer']

    def test_largest_integer_parses(self):
        assert_literal(single_expression('9223372036854775807'), 9223372036854775807)

    def test_illegal_token_halts_parsing(self):
        program, errors = parse_errors('let a = 1; @ let b = 2;')
        assert errors == ['illegal token: @']
        assert len(program.statements) == 1
        assert program.statements[0].name.value == 'a'

    def test_illegal_token_first(self):
        program, errors = parse_errors('#')
        assert errors == ['illegal token: #']
        assert program.statements == []

    def test_failed_statement_is_dropped(self):
        program, errors = parse_errors('let x 5; let y = 2;')
        assert errors
        assert any(isinstance(s, LetStatement) and s.name.value == 'y' for s in program.statements)
        assert not any(isinstance(s, LetStatement) and s.name.value == 'x' for s in program.statements)

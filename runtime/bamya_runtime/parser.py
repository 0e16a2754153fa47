"""
Bamya Parser

Pratt (operator-precedence) parser. Each token type owns at most one prefix
handler and one infix handler; binding power comes from PRECEDENCES.

Syntax problems never raise. They are appended to Parser.errors and the
statement being parsed is dropped, so one pass reports as much as it can.
"""

import logging
from enum import IntEnum
from typing import Callable, Dict, List, Optional

from .ast_nodes import (
    ArrayLiteral, BlockStatement, BooleanLiteral, CallExpression, Expression,
    ExpressionStatement, FunctionLiteral, HashLiteral, Identifier, IfExpression,
    IndexExpression, InfixExpression, IntegerLiteral, LetStatement,
    PrefixExpression, Program, ReturnStatement, Statement, StringLiteral,
)
from .lexer import Lexer
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)

INT64_MAX = 2 ** 63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # fn(x)
    INDEX = 8        # arr[i]


PRECEDENCES = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.INDEX,
}

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


class Parser:
    """Parse a Bamya token stream into a Program"""

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.errors: List[str] = []

        self.prefix_parse_fns: Dict[str, PrefixParseFn] = {}
        self.infix_parse_fns: Dict[str, InfixParseFn] = {}

        self.register_prefix(TokenType.IDENT, self._parse_identifier)
        self.register_prefix(TokenType.INT, self._parse_integer_literal)
        self.register_prefix(TokenType.STRING, self._parse_string_literal)
        self.register_prefix(TokenType.BANG, self._parse_prefix_expression)
        self.register_prefix(TokenType.MINUS, self._parse_prefix_expression)
        self.register_prefix(TokenType.TRUE, self._parse_boolean)
        self.register_prefix(TokenType.FALSE, self._parse_boolean)
        self.register_prefix(TokenType.LPAREN, self._parse_grouped_expression)
        self.register_prefix(TokenType.IF, self._parse_if_expression)
        self.register_prefix(TokenType.FUNCTION, self._parse_function_literal)
        self.register_prefix(TokenType.LBRACKET, self._parse_array_literal)
        self.register_prefix(TokenType.LBRACE, self._parse_hash_literal)

        for op in (TokenType.PLUS, TokenType.MINUS, TokenType.SLASH, TokenType.ASTERISK,
                   TokenType.EQ, TokenType.NOT_EQ, TokenType.LT, TokenType.GT):
            self.register_infix(op, self._parse_infix_expression)
        self.register_infix(TokenType.LPAREN, self._parse_call_expression)
        self.register_infix(TokenType.LBRACKET, self._parse_index_expression)

        # Read two tokens so cur_token and peek_token are both set
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    def register_prefix(self, token_type: str, fn: PrefixParseFn):
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type: str, fn: InfixParseFn):
        self.infix_parse_fns[token_type] = fn

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------

    def parse_program(self) -> Program:
        """Parse all statements until EOF or an illegal token"""
        program = Program()

        while not self._cur_token_is(TokenType.EOF):
            if self._cur_token_is(TokenType.ILLEGAL):
                self.errors.append(f"illegal token: {self.cur_token.literal}")
                break

            stmt = self._parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self._next_token()

        if self.errors:
            logger.debug("parse finished with %d error(s)", len(self.errors))
        return program

    def _parse_statement(self) -> Optional[Statement]:
        if self.cur_token.type == TokenType.LET:
            return self._parse_let_statement()
        if self.cur_token.type == TokenType.RETURN:
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> Optional[LetStatement]:
        token = self.cur_token

        if not self._expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self._expect_peek(TokenType.ASSIGN):
            return None

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()

        return LetStatement(token, name, value)

    def _parse_return_statement(self) -> Optional[ReturnStatement]:
        token = self.cur_token

        self._next_token()
        value = self._parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()

        return ReturnStatement(token, value)

    def _parse_expression_statement(self) -> Optional[ExpressionStatement]:
        token = self.cur_token

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()

        return ExpressionStatement(token, expression)

    def _parse_block_statement(self) -> BlockStatement:
        block = BlockStatement(self.cur_token)
        self._next_token()

        while not self._cur_token_is(TokenType.RBRACE) and not self._cur_token_is(TokenType.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self._next_token()

        if not self._cur_token_is(TokenType.RBRACE):
            self.errors.append(
                f"expected next token to be {TokenType.RBRACE}, got {TokenType.EOF} instead")

        return block

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self, precedence: int) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.errors.append(f"no prefix parse function for {self.cur_token.type}")
            return None

        left = prefix()

        while (left is not None
               and not self._peek_token_is(TokenType.SEMICOLON)
               and precedence < self._peek_precedence()):
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self._next_token()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def _parse_integer_literal(self) -> Optional[Expression]:
        literal = self.cur_token.literal
        value = int(literal)
        if value > INT64_MAX:
            self.errors.append(f"could not parse {literal} as integer")
            return None
        return IntegerLiteral(self.cur_token, value)

    def _parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def _parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self._cur_token_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Optional[Expression]:
        token = self.cur_token

        self._next_token()
        right = self._parse_expression(Precedence.PREFIX)
        if right is None:
            return None

        return PrefixExpression(token, token.literal, right)

    def _parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        precedence = self._cur_precedence()

        self._next_token()
        right = self._parse_expression(precedence)
        if right is None:
            return None

        return InfixExpression(token, left, token.literal, right)

    def _parse_grouped_expression(self) -> Optional[Expression]:
        self._next_token()

        expression = self._parse_expression(Precedence.LOWEST)
        if expression is None or not self._expect_peek(TokenType.RPAREN):
            return None

        return expression

    def _parse_if_expression(self) -> Optional[Expression]:
        token = self.cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None

        self._next_token()
        condition = self._parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self._expect_peek(TokenType.RPAREN):
            return None
        if not self._expect_peek(TokenType.LBRACE):
            return None

        consequence = self._parse_block_statement()
        alternative = None

        if self._peek_token_is(TokenType.ELSE):
            self._next_token()
            if not self._expect_peek(TokenType.LBRACE):
                return None
            alternative = self._parse_block_statement()

        return IfExpression(token, condition, consequence, alternative)

    def _parse_function_literal(self) -> Optional[Expression]:
        token = self.cur_token

        if not self._expect_peek(TokenType.LPAREN):
            return None

        parameters = self._parse_function_parameters()
        if parameters is None:
            return None

        if not self._expect_peek(TokenType.LBRACE):
            return None

        return FunctionLiteral(token, parameters, self._parse_block_statement())

    def _parse_function_parameters(self) -> Optional[List[Identifier]]:
        identifiers: List[Identifier] = []

        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return identifiers

        if not self._expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self._expect_peek(TokenType.RPAREN):
            return None

        return identifiers

    def _parse_call_expression(self, function: Expression) -> Optional[Expression]:
        token = self.cur_token
        arguments = self._parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def _parse_array_literal(self) -> Optional[Expression]:
        token = self.cur_token
        elements = self._parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(token, elements)

    def _parse_index_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token

        self._next_token()
        index = self._parse_expression(Precedence.LOWEST)
        if index is None or not self._expect_peek(TokenType.RBRACKET):
            return None

        return IndexExpression(token, left, index)

    def _parse_expression_list(self, end: str) -> Optional[List[Expression]]:
        """Parse comma separated expressions up to and including `end`"""
        items: List[Expression] = []

        if self._peek_token_is(end):
            self._next_token()
            return items

        self._next_token()
        item = self._parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)

        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            item = self._parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self._expect_peek(end):
            return None

        return items

    def _parse_hash_literal(self) -> Optional[Expression]:
        hash_literal = HashLiteral(self.cur_token)

        while not self._peek_token_is(TokenType.RBRACE):
            self._next_token()
            key = self._parse_expression(Precedence.LOWEST)
            if key is None:
                return None

            if not self._expect_peek(TokenType.COLON):
                return None

            self._next_token()
            value = self._parse_expression(Precedence.LOWEST)
            if value is None:
                return None

            hash_literal.pairs.append((key, value))

            if not self._peek_token_is(TokenType.RBRACE) and not self._expect_peek(TokenType.COMMA):
                return None

        if not self._expect_peek(TokenType.RBRACE):
            return None

        return hash_literal

    # ------------------------------------------------------------------
    # Parser utilities
    # ------------------------------------------------------------------

    def _next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def _cur_token_is(self, token_type: str) -> bool:
        return self.cur_token.type == token_type

    def _peek_token_is(self, token_type: str) -> bool:
        return self.peek_token.type == token_type

    def _expect_peek(self, token_type: str) -> bool:
        """Advance if the peek token matches, otherwise record an error"""
        if self._peek_token_is(token_type):
            self._next_token()
            return True
        self.errors.append(
            f"expected next token to be {token_type}, got {self.peek_token.type} instead")
        return False

    def _peek_precedence(self) -> int:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> int:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)


__all__ = ['Parser', 'Precedence', 'PRECEDENCES']

"""
Bamya AST Nodes

Every node keeps the token it was parsed from and renders back to canonical
source text with str(). The rendering fully parenthesizes operators and
separates statements so that parsing it again gives the same rendering.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .tokens import Token


# ============================================================================
# Base Nodes
# ============================================================================

@dataclass
class Node:
    """Base AST node"""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


@dataclass
class Statement(Node):
    """Base statement node"""
    pass


@dataclass
class Expression(Node):
    """Base expression node"""
    pass


def render_statements(statements: List[Statement]) -> str:
    """Join statements so the text re-parses into the same statements"""
    out = []
    for i, stmt in enumerate(statements):
        text = str(stmt)
        out.append(text)
        if i < len(statements) - 1:
            out.append(' ' if text.endswith(';') else '; ')
    return ''.join(out)


# ============================================================================
# Statements
# ============================================================================

@dataclass
class Program:
    """Root node: ordered statements of one parse"""
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ''

    def __str__(self) -> str:
        return render_statements(self.statements)


@dataclass
class Identifier(Expression):
    """Variable reference"""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class LetStatement(Statement):
    """Variable binding"""
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    """Return from the enclosing function or program"""
    return_value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


@dataclass
class ExpressionStatement(Statement):
    """Expression in statement position"""
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    """Block of statements"""
    statements: List[Statement] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + render_statements(self.statements) + ' }'


# ============================================================================
# Literals
# ============================================================================

@dataclass
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass
class HashLiteral(Expression):
    """Hash literal; pairs keep source order"""
    pairs: List[Tuple[Expression, Expression]] = field(default_factory=list)

    def __str__(self) -> str:
        return '{' + ', '.join(f"{k}: {v}" for k, v in self.pairs) + '}'


@dataclass
class FunctionLiteral(Expression):
    parameters: List[Identifier]
    body: BlockStatement

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


# ============================================================================
# Operators
# ============================================================================

@dataclass
class PrefixExpression(Expression):
    """Unary operation"""
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    """Binary operation"""
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass
class CallExpression(Expression):
    """Function call"""
    function: Expression
    arguments: List[Expression] = field(default_factory=list)

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass
class IndexExpression(Expression):
    """Subscript of an array or hash"""
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


__all__ = [
    'Node', 'Statement', 'Expression', 'Program',
    'LetStatement', 'ReturnStatement', 'ExpressionStatement', 'BlockStatement',
    'Identifier', 'IntegerLiteral', 'StringLiteral', 'BooleanLiteral',
    'ArrayLiteral', 'HashLiteral', 'FunctionLiteral',
    'PrefixExpression', 'InfixExpression', 'IfExpression',
    'CallExpression', 'IndexExpression',
    'render_statements',
]

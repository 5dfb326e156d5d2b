"""
The set of parse-nodes for Brainrot programs.
The parser builds these top-down and nothing changes them afterward.
Each node remembers its principal token, which `token_literal` reports.
Printing any node gives its canonical, fully-parenthesized rendering,
which is how the tests check that precedence came out right.
"""
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from .lexer import Token

class Node:
	token: Token
	def token_literal(self) -> str: return self.token.literal
	def __str__(self): return Render().visit(self)

class Statement(Node): pass

class Expression(Node): pass

class Program(Node):
	def __init__(self, statements: list[Statement]):
		self.statements = statements
	def token_literal(self): return self.statements[0].token_literal() if self.statements else ""

###############################################################################

class Identifier(Expression):
	def __init__(self, token: Token, name: str):
		self.token, self.name = token, name
	def __repr__(self): return "<Identifier %s>" % self.name

class IntegerLiteral(Expression):
	def __init__(self, token: Token, value: int):
		self.token, self.value = token, value

class BooleanLiteral(Expression):
	def __init__(self, token: Token, value: bool):
		self.token, self.value = token, value

class StringLiteral(Expression):
	def __init__(self, token: Token, value: str):
		self.token, self.value = token, value

class ArrayLiteral(Expression):
	def __init__(self, token: Token, elements: Sequence[Expression]):
		self.token, self.elements = token, elements

class HashLiteral(Expression):
	# Pairs stay in source order; the evaluator decides what a repeated key means.
	def __init__(self, token: Token, pairs: Sequence[tuple[Expression, Expression]]):
		self.token, self.pairs = token, pairs

class PrefixExpression(Expression):
	def __init__(self, token: Token, operator: str, operand: Expression):
		self.token, self.operator, self.operand = token, operator, operand

class InfixExpression(Expression):
	# The token is the operator, not the left operand.
	def __init__(self, token: Token, lhs: Expression, operator: str, rhs: Expression):
		self.token, self.lhs, self.operator, self.rhs = token, lhs, operator, rhs

class Block(Statement):
	def __init__(self, token: Token, statements: list[Statement]):
		self.token, self.statements = token, statements

class IfExpression(Expression):
	def __init__(self, token: Token, condition: Expression, consequence: Block, alternative: Optional[Block]):
		self.token = token
		self.condition = condition
		self.consequence = consequence
		self.alternative = alternative

class FunctionLiteral(Expression):
	def __init__(self, token: Token, params: Sequence[Identifier], body: Block):
		self.token, self.params, self.body = token, params, body

class CallExpression(Expression):
	def __init__(self, token: Token, callee: Expression, args: Sequence[Expression]):
		self.token, self.callee, self.args = token, callee, args

class IndexExpression(Expression):
	def __init__(self, token: Token, collection: Expression, index: Expression):
		self.token, self.collection, self.index = token, collection, index

###############################################################################

class Binding(Statement):
	def __init__(self, token: Token, name: Identifier, value: Expression):
		self.token, self.name, self.value = token, name, value

class Return(Statement):
	def __init__(self, token: Token, value: Optional[Expression]):
		self.token, self.value = token, value

class ExpressionStatement(Statement):
	def __init__(self, token: Token, expression: Expression):
		self.token, self.expression = token, expression

###############################################################################

class Render(Visitor):
	""" Return the canonical string representation of a parse-node. """
	def _all(self, nodes, glue: str) -> str:
		return glue.join(self.visit(n) for n in nodes)

	def visit_Program(self, program: Program): return self._all(program.statements, "")
	def visit_Block(self, block: Block): return self._all(block.statements, "")
	def visit_ExpressionStatement(self, stmt: ExpressionStatement): return self.visit(stmt.expression)

	def visit_Binding(self, stmt: Binding):
		return "%s %s = %s;" % (stmt.token_literal(), self.visit(stmt.name), self.visit(stmt.value))

	def visit_Return(self, stmt: Return):
		if stmt.value is None: return stmt.token_literal() + ";"
		return "%s %s;" % (stmt.token_literal(), self.visit(stmt.value))

	def visit_Identifier(self, expr: Identifier): return expr.name
	def visit_IntegerLiteral(self, expr: IntegerLiteral): return expr.token_literal()
	def visit_BooleanLiteral(self, expr: BooleanLiteral): return expr.token_literal()
	def visit_StringLiteral(self, expr: StringLiteral): return expr.value
	def visit_ArrayLiteral(self, expr: ArrayLiteral): return "[%s]" % self._all(expr.elements, ", ")

	def visit_HashLiteral(self, expr: HashLiteral):
		return "{%s}" % ", ".join("%s:%s" % (self.visit(k), self.visit(v)) for k, v in expr.pairs)

	def visit_PrefixExpression(self, expr: PrefixExpression):
		return "(%s%s)" % (expr.operator, self.visit(expr.operand))

	def visit_InfixExpression(self, expr: InfixExpression):
		return "(%s %s %s)" % (self.visit(expr.lhs), expr.operator, self.visit(expr.rhs))

	def visit_IfExpression(self, expr: IfExpression):
		text = "%s%s %s" % (expr.token_literal(), self.visit(expr.condition), self.visit(expr.consequence))
		if expr.alternative is not None:
			text += " sus " + self.visit(expr.alternative)
		return text

	def visit_FunctionLiteral(self, expr: FunctionLiteral):
		return "%s(%s) %s" % (expr.token_literal(), self._all(expr.params, ", "), self.visit(expr.body))

	def visit_CallExpression(self, expr: CallExpression):
		return "%s(%s)" % (self.visit(expr.callee), self._all(expr.args, ", "))

	def visit_IndexExpression(self, expr: IndexExpression):
		return "(%s[%s])" % (self.visit(expr.collection), self.visit(expr.index))

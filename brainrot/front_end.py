"""
Recursive descent for statements, precedence-climbing for expressions.

Every token kind that can begin an expression has a prefix rule.
Kinds that can continue one (binary operators, call, index) also have
an infix rule and a binding power. `parse_expression` runs the prefix rule,
then keeps folding infix rules into the left operand for as long as the
next token binds tighter than the caller asked for.

A failed rule records a diagnostic and returns None. The statement it was in
is abandoned, the parser skips to the next statement boundary, and parsing
carries on. Callers must check `errors` even when a program comes back.
"""
from typing import NamedTuple, Optional, Callable
from . import syntax
from .lexer import (
	Lexer, Token,
	EOF, IDENT, INT, STRING,
	ASSIGN, PLUS, MINUS, BANG, ASTERISK, SLASH, LT, GT, EQ, NOT_EQ,
	COMMA, SEMICOLON, COLON, LPAREN, RPAREN, LBRACE, RBRACE, LBRACKET, RBRACKET,
	YEET, SLAY, FR, SUS, VIBE, BASED, CAP,
)

LOWEST, EQUALS, LESSGREATER, SUM, PRODUCT, PREFIX, CALL, INDEX = range(1, 9)

PRECEDENCE = {
	EQ: EQUALS,
	NOT_EQ: EQUALS,
	LT: LESSGREATER,
	GT: LESSGREATER,
	PLUS: SUM,
	MINUS: SUM,
	ASTERISK: PRODUCT,
	SLASH: PRODUCT,
	LPAREN: CALL,
	LBRACKET: INDEX,
}

INT64_MAX = 2**63 - 1

class Diagnostic(NamedTuple):
	message: str
	token: Token

class Parser:
	cur: Token
	peek: Token

	def __init__(self, lexer: Lexer):
		self._lexer = lexer
		self.diagnostics: list[Diagnostic] = []
		self._prefix: dict[str, Callable[[], Optional[syntax.Expression]]] = {
			IDENT: self._parse_identifier,
			INT: self._parse_integer,
			STRING: self._parse_string,
			BASED: self._parse_boolean,
			CAP: self._parse_boolean,
			BANG: self._parse_prefix,
			MINUS: self._parse_prefix,
			LPAREN: self._parse_group,
			FR: self._parse_if,
			VIBE: self._parse_function,
			LBRACKET: self._parse_array,
			LBRACE: self._parse_hash,
		}
		binary = self._parse_infix
		self._infix: dict[str, Callable[[syntax.Expression], Optional[syntax.Expression]]] = {
			PLUS: binary, MINUS: binary, ASTERISK: binary, SLASH: binary,
			EQ: binary, NOT_EQ: binary, LT: binary, GT: binary,
			LPAREN: self._parse_call,
			LBRACKET: self._parse_index,
		}
		self.cur = self.peek = lexer.next_token()
		self._advance()

	@property
	def errors(self) -> list[str]:
		return [d.message for d in self.diagnostics]

	def _advance(self):
		self.cur, self.peek = self.peek, self._lexer.next_token()

	def _cur_is(self, kind:str) -> bool: return self.cur.kind == kind
	def _peek_is(self, kind:str) -> bool: return self.peek.kind == kind

	def _complain(self, message:str, token:Token):
		self.diagnostics.append(Diagnostic(message, token))

	def _expect_peek(self, kind:str) -> bool:
		""" Step onto the next token if it is the kind required; otherwise complain and stay put. """
		if self._peek_is(kind):
			self._advance()
			return True
		self._complain("expected next token to be %s, got %s instead" % (kind, self.peek.kind), self.peek)
		return False

	def _peek_precedence(self) -> int:
		return PRECEDENCE.get(self.peek.kind, LOWEST)

	###########################################################################

	def parse_program(self) -> syntax.Program:
		statements = []
		while not self._cur_is(EOF):
			stmt = self._statement_or_recover()
			if stmt is not None:
				statements.append(stmt)
			elif self._cur_is(RBRACE):
				# A stray closing brace has no block to end.
				self._advance()
		return syntax.Program(statements)

	def _statement_or_recover(self) -> Optional[syntax.Statement]:
		"""
		On success, leaves the parser at the first token after the statement.
		On failure, skips past the next semicolon, but stops short of a closing
		brace or the end of input, which belong to whoever is waiting for them.
		"""
		stmt = self._parse_statement()
		if stmt is not None:
			self._advance()
			return stmt
		while not self._cur_is(EOF) and not self._cur_is(RBRACE):
			semicolon = self._cur_is(SEMICOLON)
			self._advance()
			if semicolon: break
		return None

	def _parse_statement(self) -> Optional[syntax.Statement]:
		if self._cur_is(YEET): return self._parse_binding()
		if self._cur_is(SLAY): return self._parse_return()
		return self._parse_expression_statement()

	def _parse_binding(self) -> Optional[syntax.Binding]:
		token = self.cur
		if not self._expect_peek(IDENT): return None
		name = syntax.Identifier(self.cur, self.cur.literal)
		if not self._expect_peek(ASSIGN): return None
		self._advance()
		value = self.parse_expression(LOWEST)
		if value is None: return None
		if self._peek_is(SEMICOLON): self._advance()
		return syntax.Binding(token, name, value)

	def _parse_return(self) -> Optional[syntax.Return]:
		token = self.cur
		if self._peek_is(SEMICOLON):
			self._advance()
			return syntax.Return(token, None)
		if self._peek_is(RBRACE) or self._peek_is(EOF):
			return syntax.Return(token, None)
		self._advance()
		value = self.parse_expression(LOWEST)
		if value is None: return None
		if self._peek_is(SEMICOLON): self._advance()
		return syntax.Return(token, value)

	def _parse_expression_statement(self) -> Optional[syntax.ExpressionStatement]:
		token = self.cur
		expression = self.parse_expression(LOWEST)
		if expression is None: return None
		if self._peek_is(SEMICOLON): self._advance()
		return syntax.ExpressionStatement(token, expression)

	def _parse_block(self) -> syntax.Block:
		""" Starts on the opening brace; finishes on the closing brace (or end of input). """
		token = self.cur
		self._advance()
		statements = []
		while not self._cur_is(RBRACE) and not self._cur_is(EOF):
			stmt = self._statement_or_recover()
			if stmt is not None: statements.append(stmt)
		return syntax.Block(token, statements)

	###########################################################################

	def parse_expression(self, precedence:int) -> Optional[syntax.Expression]:
		try: prefix = self._prefix[self.cur.kind]
		except KeyError:
			self._complain("no prefix parse function for %s found" % self.cur.kind, self.cur)
			return None
		left = prefix()
		while left is not None and not self._peek_is(SEMICOLON) and precedence < self._peek_precedence():
			infix = self._infix[self.peek.kind]
			self._advance()
			left = infix(left)
		return left

	def _parse_identifier(self):
		return syntax.Identifier(self.cur, self.cur.literal)

	def _parse_integer(self):
		value = int(self.cur.literal)
		if value > INT64_MAX:
			self._complain("could not parse %s as integer" % self.cur.literal, self.cur)
			return None
		return syntax.IntegerLiteral(self.cur, value)

	def _parse_string(self):
		return syntax.StringLiteral(self.cur, self.cur.literal)

	def _parse_boolean(self):
		return syntax.BooleanLiteral(self.cur, self._cur_is(BASED))

	def _parse_prefix(self):
		token = self.cur
		self._advance()
		operand = self.parse_expression(PREFIX)
		if operand is None: return None
		return syntax.PrefixExpression(token, token.literal, operand)

	def _parse_infix(self, lhs:syntax.Expression):
		token = self.cur
		precedence = PRECEDENCE[token.kind]
		self._advance()
		rhs = self.parse_expression(precedence)
		if rhs is None: return None
		return syntax.InfixExpression(token, lhs, token.literal, rhs)

	def _parse_group(self):
		self._advance()
		inside = self.parse_expression(LOWEST)
		if inside is None or not self._expect_peek(RPAREN): return None
		return inside

	def _parse_if(self):
		token = self.cur
		if not self._expect_peek(LPAREN): return None
		self._advance()
		condition = self.parse_expression(LOWEST)
		if condition is None: return None
		if not self._expect_peek(RPAREN): return None
		if not self._expect_peek(LBRACE): return None
		consequence = self._parse_block()
		alternative = None
		if self._peek_is(SUS):
			self._advance()
			if not self._expect_peek(LBRACE): return None
			alternative = self._parse_block()
		return syntax.IfExpression(token, condition, consequence, alternative)

	def _parse_function(self):
		token = self.cur
		if not self._expect_peek(LPAREN): return None
		params = self._parse_parameters()
		if params is None: return None
		if not self._expect_peek(LBRACE): return None
		return syntax.FunctionLiteral(token, params, self._parse_block())

	def _parse_parameters(self) -> Optional[list[syntax.Identifier]]:
		params = []
		if self._peek_is(RPAREN):
			self._advance()
			return params
		if not self._expect_peek(IDENT): return None
		params.append(syntax.Identifier(self.cur, self.cur.literal))
		while self._peek_is(COMMA):
			self._advance()
			if not self._expect_peek(IDENT): return None
			params.append(syntax.Identifier(self.cur, self.cur.literal))
		if not self._expect_peek(RPAREN): return None
		return params

	def _parse_expression_list(self, end:str) -> Optional[list[syntax.Expression]]:
		items = []
		if self._peek_is(end):
			self._advance()
			return items
		self._advance()
		item = self.parse_expression(LOWEST)
		if item is None: return None
		items.append(item)
		while self._peek_is(COMMA):
			self._advance()
			self._advance()
			item = self.parse_expression(LOWEST)
			if item is None: return None
			items.append(item)
		if not self._expect_peek(end): return None
		return items

	def _parse_array(self):
		token = self.cur
		elements = self._parse_expression_list(RBRACKET)
		if elements is None: return None
		return syntax.ArrayLiteral(token, elements)

	def _parse_hash(self):
		token = self.cur
		pairs = []
		while not self._peek_is(RBRACE):
			self._advance()
			key = self.parse_expression(LOWEST)
			if key is None or not self._expect_peek(COLON): return None
			self._advance()
			value = self.parse_expression(LOWEST)
			if value is None: return None
			pairs.append((key, value))
			if not self._peek_is(RBRACE) and not self._expect_peek(COMMA): return None
		self._advance()
		return syntax.HashLiteral(token, pairs)

	def _parse_call(self, callee:syntax.Expression):
		token = self.cur
		args = self._parse_expression_list(RPAREN)
		if args is None: return None
		return syntax.CallExpression(token, callee, args)

	def _parse_index(self, collection:syntax.Expression):
		token = self.cur
		self._advance()
		index = self.parse_expression(LOWEST)
		if index is None or not self._expect_peek(RBRACKET): return None
		return syntax.IndexExpression(token, collection, index)


def parse_text(text:str) -> tuple[syntax.Program, list[str]]:
	""" The whole front end in one call: the (possibly partial) program, and what went wrong. """
	parser = Parser(Lexer(text))
	program = parser.parse_program()
	return program, parser.errors

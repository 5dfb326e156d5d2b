import unittest

from brainrot import syntax, lexer
from brainrot.lexer import Lexer
from brainrot.front_end import Parser, parse_text

def _parse(text):
	parser = Parser(Lexer(text))
	return parser.parse_program(), parser

class ParserTestCase(unittest.TestCase):

	def parse_cleanly(self, text) -> syntax.Program:
		program, parser = _parse(text)
		self.assertEqual([], parser.errors, text)
		return program

	def only_expression(self, text) -> syntax.Expression:
		program = self.parse_cleanly(text)
		self.assertEqual(1, len(program.statements), text)
		stmt = program.statements[0]
		self.assertIsInstance(stmt, syntax.ExpressionStatement)
		return stmt.expression

	def assertLiteral(self, expr, expected):
		if isinstance(expected, bool):
			self.assertIsInstance(expr, syntax.BooleanLiteral)
			self.assertIs(expected, expr.value)
		elif isinstance(expected, int):
			self.assertIsInstance(expr, syntax.IntegerLiteral)
			self.assertEqual(expected, expr.value)
			self.assertEqual(str(expected), expr.token_literal())
		else:
			self.assertIsInstance(expr, syntax.Identifier)
			self.assertEqual(expected, expr.name)

	def assertInfix(self, expr, lhs, operator, rhs):
		self.assertIsInstance(expr, syntax.InfixExpression)
		self.assertLiteral(expr.lhs, lhs)
		self.assertEqual(operator, expr.operator)
		self.assertLiteral(expr.rhs, rhs)

class StatementTests(ParserTestCase):

	def test_bindings(self):
		for text, name, value in [
			("yeet x = 5;", "x", 5),
			("yeet y = based;", "y", True),
			("yeet foobar = y;", "foobar", "y"),
			("yeet z = 117", "z", 117),
		]:
			with self.subTest(text):
				program = self.parse_cleanly(text)
				self.assertEqual(1, len(program.statements))
				stmt = program.statements[0]
				self.assertIsInstance(stmt, syntax.Binding)
				self.assertEqual("yeet", stmt.token_literal())
				self.assertEqual(name, stmt.name.name)
				self.assertLiteral(stmt.value, value)

	def test_returns(self):
		for text, value in [("slay 5;", 5), ("slay cap;", False), ("slay foobar", "foobar")]:
			with self.subTest(text):
				stmt = self.parse_cleanly(text).statements[0]
				self.assertIsInstance(stmt, syntax.Return)
				self.assertEqual("slay", stmt.token_literal())
				self.assertLiteral(stmt.value, value)

	def test_bare_return(self):
		for text in ["slay;", "slay", "vibe() { slay }"]:
			with self.subTest(text):
				self.parse_cleanly(text)
		stmt = self.parse_cleanly("slay;").statements[0]
		self.assertIsNone(stmt.value)

	def test_three_statements(self):
		program = self.parse_cleanly("yeet x = 5;\nslay 10;\nfoobar")
		self.assertEqual(
			[syntax.Binding, syntax.Return, syntax.ExpressionStatement],
			[type(s) for s in program.statements],
		)

	def test_empty_program(self):
		self.assertEqual([], self.parse_cleanly("").statements)
		self.assertEqual([], self.parse_cleanly("  \n ").statements)

class ExpressionTests(ParserTestCase):

	def test_identifier(self):
		self.assertLiteral(self.only_expression("foobar;"), "foobar")

	def test_integer(self):
		self.assertLiteral(self.only_expression("117;"), 117)

	def test_string(self):
		expr = self.only_expression('"hello world";')
		self.assertIsInstance(expr, syntax.StringLiteral)
		self.assertEqual("hello world", expr.value)

	def test_booleans(self):
		self.assertLiteral(self.only_expression("based"), True)
		self.assertLiteral(self.only_expression("cap;"), False)

	def test_prefix(self):
		for text, operator, operand in [("!5;", "!", 5), ("-15;", "-", 15), ("!based", "!", True), ("-a", "-", "a")]:
			with self.subTest(text):
				expr = self.only_expression(text)
				self.assertIsInstance(expr, syntax.PrefixExpression)
				self.assertEqual(operator, expr.operator)
				self.assertLiteral(expr.operand, operand)

	def test_infix(self):
		for operator in ["+", "-", "*", "/", ">", "<", "==", "!="]:
			with self.subTest(operator):
				self.assertInfix(self.only_expression("5 %s 6;" % operator), 5, operator, 6)
		self.assertInfix(self.only_expression("based == cap"), True, "==", False)

	def test_precedence(self):
		for text, expected in [
			("-a * b", "((-a) * b)"),
			("!-a", "(!(-a))"),
			("a + b + c", "((a + b) + c)"),
			("a + b - c", "((a + b) - c)"),
			("a * b * c", "((a * b) * c)"),
			("a * b / c", "((a * b) / c)"),
			("a + b / c", "(a + (b / c))"),
			("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
			("3 + 4; -5 * 5", "(3 + 4)((-5) * 5)"),
			("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
			("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
			("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
			("based", "based"),
			("3 > 5 == cap", "((3 > 5) == cap)"),
			("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
			("(5 + 5) * 2", "((5 + 5) * 2)"),
			("2 / (5 + 5)", "(2 / (5 + 5))"),
			("-(5 + 5)", "(-(5 + 5))"),
			("!(based == based)", "(!(based == based))"),
			("a + add(b * c) + d", "((a + add((b * c))) + d)"),
			("add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))", "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))"),
			("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
			("a * [1, 2, 3, 4][b * c] * d", "((a * ([1, 2, 3, 4][(b * c)])) * d)"),
			("add(a * b[2], b[1], 2 * [1, 2][1])", "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))"),
		]:
			with self.subTest(text):
				self.assertEqual(expected, str(self.parse_cleanly(text)))

	def test_if(self):
		expr = self.only_expression("fr (x < y) { x }")
		self.assertIsInstance(expr, syntax.IfExpression)
		self.assertInfix(expr.condition, "x", "<", "y")
		self.assertEqual(1, len(expr.consequence.statements))
		self.assertLiteral(expr.consequence.statements[0].expression, "x")
		self.assertIsNone(expr.alternative)

	def test_if_else(self):
		expr = self.only_expression("fr (x < y) { x } sus { y }")
		self.assertLiteral(expr.alternative.statements[0].expression, "y")

	def test_function_literal(self):
		expr = self.only_expression("vibe(x, y) { x + y; }")
		self.assertIsInstance(expr, syntax.FunctionLiteral)
		self.assertEqual(["x", "y"], [p.name for p in expr.params])
		self.assertEqual(1, len(expr.body.statements))
		self.assertInfix(expr.body.statements[0].expression, "x", "+", "y")

	def test_function_parameters(self):
		for text, expected in [
			("vibe() {};", []),
			("vibe(x) {};", ["x"]),
			("vibe(x, y, z) {};", ["x", "y", "z"]),
		]:
			with self.subTest(text):
				self.assertEqual(expected, [p.name for p in self.only_expression(text).params])

	def test_call(self):
		expr = self.only_expression("add(1, 2 * 3, 4 + 5);")
		self.assertIsInstance(expr, syntax.CallExpression)
		self.assertLiteral(expr.callee, "add")
		self.assertEqual(3, len(expr.args))
		self.assertLiteral(expr.args[0], 1)
		self.assertInfix(expr.args[1], 2, "*", 3)
		self.assertInfix(expr.args[2], 4, "+", 5)

	def test_immediate_call(self):
		expr = self.only_expression("vibe(x) { x; }(5)")
		self.assertIsInstance(expr, syntax.CallExpression)
		self.assertIsInstance(expr.callee, syntax.FunctionLiteral)

	def test_arrays(self):
		expr = self.only_expression("[1, 2 * 2, 3 + 3]")
		self.assertIsInstance(expr, syntax.ArrayLiteral)
		self.assertEqual(3, len(expr.elements))
		self.assertInfix(expr.elements[1], 2, "*", 2)
		self.assertEqual([], self.only_expression("[]").elements)

	def test_index(self):
		expr = self.only_expression("myArray[1 + 1]")
		self.assertIsInstance(expr, syntax.IndexExpression)
		self.assertLiteral(expr.collection, "myArray")
		self.assertInfix(expr.index, 1, "+", 1)

	def test_hash_literals(self):
		expr = self.only_expression('{"one": 1, "two": 2, "three": 3}')
		self.assertIsInstance(expr, syntax.HashLiteral)
		self.assertEqual(["one", "two", "three"], [k.value for k, v in expr.pairs])
		self.assertEqual([1, 2, 3], [v.value for k, v in expr.pairs])

	def test_empty_hash(self):
		self.assertEqual([], self.only_expression("{}").pairs)

	def test_hash_with_expressions(self):
		expr = self.only_expression('{"one": 0 + 1, "two": 10 - 8, "three": 15 / 5}')
		self.assertInfix(expr.pairs[0][1], 0, "+", 1)
		self.assertInfix(expr.pairs[1][1], 10, "-", 8)
		self.assertInfix(expr.pairs[2][1], 15, "/", 5)

	def test_mixed_keys(self):
		expr = self.only_expression('{based: 1, 2: "two", vibe(x) { x }: 3}')
		self.assertEqual(
			[syntax.BooleanLiteral, syntax.IntegerLiteral, syntax.FunctionLiteral],
			[type(k) for k, v in expr.pairs],
		)

class DiagnosticTests(unittest.TestCase):

	def test_several_problems_in_one_run(self):
		program, parser = _parse("yeet = 5; yeet x 5; yeet 838383;")
		self.assertEqual([
			"expected next token to be IDENT, got = instead",
			"expected next token to be =, got INT instead",
			"expected next token to be IDENT, got INT instead",
		], parser.errors)
		self.assertEqual([], program.statements)

	def test_missing_prefix_rule(self):
		_, errors = parse_text("yeet y = 2 + ;")
		self.assertEqual(["no prefix parse function for ; found"], errors)

	def test_recovers_at_the_next_statement(self):
		program, errors = parse_text("yeet a = ); yeet b = 2; b")
		self.assertEqual(["no prefix parse function for ) found"], errors)
		self.assertEqual("yeet b = 2;b", str(program))

	def test_recovers_inside_a_block(self):
		program, errors = parse_text("fr (x) { 1 + } 7")
		self.assertEqual(["no prefix parse function for } found"], errors)
		self.assertEqual("frx 7", str(program))

	def test_stray_closing_brace(self):
		program, errors = parse_text("} 5")
		self.assertEqual(["no prefix parse function for } found"], errors)
		self.assertEqual("5", str(program))

	def test_unclosed_group(self):
		_, errors = parse_text("(1 + 2")
		self.assertEqual(["expected next token to be ), got EOF instead"], errors)

	def test_if_needs_parentheses(self):
		_, errors = parse_text("fr x { 1 }")
		self.assertEqual("expected next token to be (, got IDENT instead", errors[0])

	def test_illegal_token(self):
		_, errors = parse_text("5 @ 5")
		self.assertIn("no prefix parse function for ILLEGAL found", errors)

	def test_integer_too_large(self):
		_, errors = parse_text("99999999999999999999")
		self.assertEqual(["could not parse 99999999999999999999 as integer"], errors)

	def test_diagnostics_know_where(self):
		parser = Parser(Lexer("yeet x = 1;\nyeet = 2;"))
		parser.parse_program()
		self.assertEqual(1, len(parser.diagnostics))
		self.assertEqual(lexer.ASSIGN, parser.diagnostics[0].token.kind)
		self.assertEqual(17, parser.diagnostics[0].token.offset)

	def test_unfinished_hash(self):
		for text in ["{", "{1", "{1:", "{1:2"]:
			with self.subTest(text):
				_, errors = parse_text(text)
				self.assertTrue(errors)

if __name__ == '__main__':
	unittest.main()

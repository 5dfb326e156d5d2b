"""
Read a line, evaluate it, print the outcome, and go around again.

One environment lives for the whole session, so a name bound on one line
is there on the next. Anything `spill`ed goes to the same stream as the
results, and an Error is always shown, even from a line ending in a binding.
In token mode the lines are only scanned, and each token is echoed back;
that is handy for poking at the lexer.
"""
import contextlib
from typing import TextIO
from . import syntax
from .lexer import Lexer
from .front_end import Parser
from .environment import Environment
from .evaluator import evaluate
from .runtime import is_error

PROMPT = ">> "

def start(stdin:TextIO, stdout:TextIO, *, tokens:bool=False):
	env = Environment()
	try:
		while True:
			stdout.write(PROMPT)
			stdout.flush()
			line = stdin.readline()
			if not line:
				return
			if tokens:
				echo_tokens(line, stdout)
			else:
				run_line(line, env, stdout)
	except KeyboardInterrupt:
		stdout.write("\n")

def echo_tokens(line:str, stdout:TextIO):
	for token in Lexer(line):
		print("%r" % (token,), file=stdout)

def run_line(line:str, env:Environment, stdout:TextIO):
	parser = Parser(Lexer(line))
	program = parser.parse_program()
	if parser.errors:
		print("Whoa, that line is not it. Parser errors:", file=stdout)
		for message in parser.errors:
			print("\t" + message, file=stdout)
		return
	with contextlib.redirect_stdout(stdout):
		# `spill` prints to sys.stdout.
		result = evaluate(program, env)
	if is_error(result) or (program.statements and not isinstance(program.statements[-1], syntax.Binding)):
		print(result.inspect(), file=stdout)

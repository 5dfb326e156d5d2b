"""
This is an interpreter for the Brainrot programming language.

For example:

    brainrot program.rot

will run program.rot if possible, or else try to explain why not.

    brainrot

will start an interactive session.

    brainrot -h

will explain all the arguments.
"""
import sys, argparse, getpass
from pathlib import Path

GREETING = "No cap %s! This is the Brainrot programming language!"
SUBTITLE = "It's giving runtime. (hit that Ctrl+C once it gets cringe though)"

parser = argparse.ArgumentParser(
	prog="brainrot",
	description="Interpreter for the Brainrot programming language.",
	epilog=__doc__,
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument("program", nargs="?", help="try examples/closures.rot for example. Omit for an interactive session.")
parser.add_argument('-c', "--check", action="store_true", help="Parse the program but do not actually run it.")
parser.add_argument('-t', "--tokens", action="store_true", help="Interactive session only echoes the tokens of each line.")
parser.add_argument('-v', "--verbose", action="count", help="Chatter about progress on stderr.")

def run(args) -> int:
	from .diagnostics import Report, TooManyIssues
	report = Report(verbose=args.verbose)
	if args.program is None:
		return interact(args)
	try:
		return run_file(Path.cwd() / args.program, report, check=args.check)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, fam.", file=sys.stderr)
		return 1

def interact(args) -> int:
	from . import repl
	print(GREETING % getpass.getuser())
	print(SUBTITLE)
	repl.start(sys.stdin, sys.stdout, tokens=args.tokens)
	return 0

def run_file(path:Path, report, *, check=False) -> int:
	from .front_end import Parser
	from .lexer import Lexer
	from .environment import Environment
	from .evaluator import evaluate
	from .runtime import NULL, is_error
	report.info("Reading", path)
	try: text = path.read_text(encoding="utf-8")
	except FileNotFoundError:
		report.no_such_file(path)
		report.complain_to_console()
		return 1
	except (OSError, UnicodeDecodeError):
		report.broken_file(path)
		report.complain_to_console()
		return 1
	report.info("Parsing", path)
	front = Parser(Lexer(text))
	program = front.parse_program()
	if front.diagnostics:
		report.parse_errors(text, str(path), front.diagnostics)
		report.complain_to_console()
		return 1
	if check:
		print("Looks plausible to me.", file=sys.stderr)
		return 0
	report.info("Evaluating %d statement(s)" % len(program.statements))
	result = evaluate(program, Environment())
	if is_error(result):
		report.runtime_error(result)
		report.complain_to_console()
		return 1
	if result is not NULL:
		print(result.inspect())
	return 0

def main(argv=None):
	sys.exit(run(parser.parse_args(argv)))

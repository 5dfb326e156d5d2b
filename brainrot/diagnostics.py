import sys, random
from pathlib import Path
from typing import Sequence
from boozetools.support.failureprone import SourceText, illustration

from .front_end import Diagnostic
from .runtime import Error

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Ngl, ", "", ""]

	minced_oaths = [
		'Bruh', 'Big Yikes', 'Oof', 'Sheesh', 'Not Gonna Lie', 'Down Bad',
		'Caught In 4K', 'Major L', 'Ratio', 'It Is What It Is', 'No Shot',
		'Skill Issue', 'Zero Rizz', 'Womp Womp', 'Touch Grass',
	]

	resignations = [
		'I cannot continue.',
		'This program is not the vibe.',
		'I have no idea what the right answer is.',
		'It is giving broken.',
		'I need an adult!',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects the issues found along the way, and complains about them on request. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=10):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> list["Pic"]: return list(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the front-end is likely to call:
	def parse_errors(self, text:str, path:str, diagnostics:Sequence[Diagnostic]):
		source = SourceText(text, filename=path)
		for d in diagnostics:
			intro = "Parsing got confused: %s." % d.message
			if text:
				# End-of-input has no character of its own; point at the last one instead.
				offset = min(d.token.offset, len(text) - 1)
				problem = [Annotation(source, path, offset, len(d.token.literal))]
			else:
				problem = []
			self.issue(Pic(intro, problem))

	# Methods about files:
	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called "+str(path), []))

	def broken_file(self, path:Path):
		self.issue(Pic("Something went pear-shaped while trying to read "+str(path), []))

	# Methods the evaluator's outcome might call:
	def runtime_error(self, error:Error):
		intro = "The program evaluated to an error."
		self.issue(Pic(intro, [], [error.inspect()]))

class Annotation:
	path: str
	offset: int
	width: int
	caption: str
	def __init__(self, source:SourceText, path:str, offset:int, width:int, caption:str=""):
		self.source = source
		self.path = path
		self.offset = offset
		self.width = max(width, 1)
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.offset)
		single_line = self.source.line_of_text(row)
		return illustration(single_line, col, self.width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro, ""]
		path = None
		for ann in self._anns:
			if ann.path != path:
				path = ann.path
				lines.append(str(path))
			lines.append(ann.illustrate())
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()

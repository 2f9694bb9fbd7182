import sys
from pathlib import Path
from typing import Optional, Sequence
from boozetools.support.failureprone import SourceText, illustration

from .errors import Problem

class TooManyIssues(Exception):
	pass

class Report:
	"""
	Collects complaints about one source text and says them to the console.
	Also the channel for progress chatter, which only appears when verbose.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues:Optional[int]=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues
		self._source = SourceText("")
		self._path = None

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self): return list(self._issues)

	def set_source(self, text:str, path:Optional[Path]=None):
		self._path = path
		if path is None: self._source = SourceText(text)
		else: self._source = SourceText(text, filename=str(path))

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if self._max_issues and len(self._issues) >= self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def problems(self, problems:Sequence[Problem]):
		""" Make an entry for each problem, illustrated where it has a location. """
		for p in problems:
			span = p.span()
			anns = [Annotation(self._source, span)] if span is not None else []
			self.issue(Pic(p.message(), anns))

	# Methods the command-line is likely to call:

	def no_such_file(self, path:Path):
		self.issue(Pic("I see no file called %s" % path, []))

	def broken_file(self, path:Path):
		self.issue(Pic("Something went pear-shaped while trying to read %s" % path, []))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._path, self._issues)

class Annotation:
	def __init__(self, source:SourceText, span:slice, caption:str=""):
		self.source = source
		self.slice = span
		self.caption = caption
	def illustrate(self):
		row, col = self.source.find_row_col(self.slice.start)
		single_line = self.source.line_of_text(row)
		width = max(1, min(self.slice.stop, self.slice.start + len(single_line) - col) - self.slice.start)
		return illustration(single_line, col, width, prefix='% 6d |' % row, caption=self.caption)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=()):
		self._intro, self._anns, self._footer = intro, anns, footer
	@property
	def description(self): return self._intro
	def as_text(self):
		lines = [self._intro]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(path, issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print("%d problem(s) in %s" % (len(issues), path or "the input"), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()

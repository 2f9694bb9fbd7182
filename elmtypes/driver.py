"""
Orchestrates one whole source text: front-end first, then every declaration.

The one asymmetry is deliberate: a syntactically broken file yields its
syntax errors and nothing else, because there is no declaration list to
accumulate over. Past the front-end, every problem in the file is reported.
"""
from pathlib import Path
from typing import Optional

from . import front_end, resolution
from .diagnostics import Report
from .errors import render
from .result import Ok, Err, Result, bind

def resolve_text(text:str) -> Result:
	""" As `parse`, but failure carries the problem objects rather than text. """
	return bind(front_end.parse_text(text), resolution.resolve_file)

def parse(source_text:str) -> Result:
	""" Ok(tuple of ValidType) or Err(newline-joined report) """
	outcome = resolve_text(source_text)
	if isinstance(outcome, Ok): return outcome
	return Err(render(outcome.error))

def parse_file(path:Path) -> Result:
	with open(path, "r", encoding="utf-8") as fh:
		return parse(fh.read())

def check_file(path:Path, report:Report) -> Optional[tuple]:
	"""
	For the command-line: complaints go to the report, with illustrations.
	Answers the tuple of ValidType, or None if there was any trouble.
	"""
	report.info("Reading", path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			text = fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
		return None
	except OSError:
		report.broken_file(path)
		return None
	report.set_source(text, path)
	outcome = resolve_text(text)
	if isinstance(outcome, Ok):
		report.info("Resolved %d type declaration(s)." % len(outcome.value))
		return outcome.value
	report.problems(outcome.error)
	return None

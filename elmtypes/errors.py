"""
The kinds of problem this tool can find.

Each one knows how to say itself in one line, and may point at the
syntax node to blame so that diagnostics can illustrate it.
Only FrontendSyntaxError is fatal; the rest get accumulated.
"""
from typing import Optional
from .ontology import Phrase

class Problem:
	where: Optional[Phrase]
	def message(self) -> str:
		raise NotImplementedError(type(self))
	def span(self) -> Optional[slice]:
		return self.where.span if self.where is not None else None
	def __repr__(self): return "<%s: %s>" % (type(self).__name__, self.message())
	def __eq__(self, other):
		return type(self) is type(other) and self.message() == other.message()
	def __hash__(self): return hash((type(self), self.message()))

class FrontendSyntaxError(Problem):
	def __init__(self, text:str, offset:Optional[int]=None, row:int=0, col:int=0):
		self.text, self.offset, self.row, self.col = text, offset, row, col
		self.where = None
	def message(self):
		if self.row: return "Syntax error at line %d, column %d: %s" % (self.row, self.col, self.text)
		return "Syntax error: %s" % self.text
	def span(self):
		if self.offset is None: return None
		return slice(self.offset, self.offset+1)

class UnsupportedConstruct(Problem):
	def __init__(self, description:str, where:Optional[Phrase]=None):
		self.description, self.where = description, where
	def message(self):
		return "Unsupported construct: %s is not supported." % self.description

class InvalidArity(Problem):
	def __init__(self, construct:str, expected:int, count:int, where:Optional[Phrase]=None):
		self.construct, self.expected, self.count, self.where = construct, expected, count, where
	def message(self):
		plural = '' if self.expected == 1 else 's'
		pattern = "Invalid arity: %s takes %d type argument%s, but got %d."
		return pattern % (self.construct, self.expected, plural, self.count)

class NoConstructors(Problem):
	def __init__(self, name:str, where:Optional[Phrase]=None):
		self.name, self.where = name, where
	def message(self):
		return "Custom type %s has no constructors." % self.name

class AmbiguousName(Problem):
	"""
	A reference to one of the built-in container names,
	in a module that also defines a type by that name.
	"""
	def __init__(self, name:str, module:str, where:Optional[Phrase]=None):
		self.name, self.module, self.where = name, module, where
	def message(self):
		pattern = "Ambiguous type name: %s could mean the built-in %s or the %s defined in module %s."
		return pattern % (self.name, self.name, self.name, self.module)

def render(problems) -> str:
	return "\n".join(p.message() for p in problems)

"""
These most-fundamental classes of the syntax tree are separate from the rest
so that the error kinds and the diagnostics can refer to them without pulling
in the whole tree.

Positions are plain character offsets into the source text. Nodes built by
hand (as in the tests) have no position at all, and that is fine: the only
thing positions are good for is illustrating a complaint.
"""
from typing import Optional

class Phrase:
	span: Optional[slice] = None  # The front-end fills this in.

	def located(self, start:int, stop:int) -> "Phrase":
		self.span = slice(start, stop)
		return self

class Nom(Phrase):
	""" Representing the occurrence of a name anywhere. """
	def __init__(self, text:str):
		assert isinstance(text, str)
		self.text = text
	def __repr__(self): return "<Name %r>" % self.text
	def key(self): return self.text

class TypeExpression(Phrase):
	""" Anything that may appear where a type annotation is expected. """

class Declaration(Phrase):
	""" One top-level thing in a module. """
	nom: Nom

	def kind(self) -> str:
		raise NotImplementedError(type(self))

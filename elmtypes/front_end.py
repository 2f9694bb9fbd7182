"""
The front-end: from Elm source text to the generic declaration-level tree.

Elm's layout rule makes top-level declarations easy to find: each one starts
in the leftmost column. So the plan is to blank out the comments, cut the text
into top-level chunks, and parse each chunk from the start-symbol that suits
its first word. Value and function definitions are recognized by their head
alone; their bodies are none of our business.

Syntax errors are collected chunk by chunk, but they never mix with anything
downstream: a file with any syntax error yields only syntax errors.

Finally, every type reference gets told which module it comes from,
as well as this front-end can figure it out from the imports.
"""
import re
from pathlib import Path
from typing import Optional

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedInput, UnexpectedToken, UnexpectedCharacters, VisitError
from boozetools.support.foundation import Visitor

from . import syntax
from .errors import FrontendSyntaxError
from .ontology import Nom
from .result import Ok, Result, fail

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")

_parser = Lark(
	_GRAMMAR_PATH.read_text(),
	start=["module_header", "import_decl", "type_decl", "port_decl", "infix_decl", "signature"],
	parser="lalr",
	propagate_positions=True,
	maybe_placeholders=True,
)

# What every Elm module sees without asking:
DEFAULT_IMPORTS = {
	"Int": "Basics", "Float": "Basics", "Bool": "Basics", "Order": "Basics", "Never": "Basics",
	"List": "List", "Maybe": "Maybe", "Result": "Result",
	"String": "String", "Char": "Char",
	"Program": "Platform", "Cmd": "Platform.Cmd", "Sub": "Platform.Sub",
}
DEFAULT_ALIASES = {"Cmd": "Platform.Cmd", "Sub": "Platform.Sub"}

class _Complaint(Exception):
	""" args are the offset and the text of a syntax complaint """

##########################
#
#  Comments and chunks
#

def _blank_comments(text:str) -> str:
	"""
	Replace every comment with spaces, keeping the newlines, so that
	offsets into the result are also offsets into the original.
	String and character literals are stepped over, so that a `--`
	inside one of them does not begin a comment.
	"""
	out = list(text)
	def blank(start, stop):
		for k in range(start, stop):
			if out[k] != "\n": out[k] = " "
	i, n = 0, len(text)
	while i < n:
		if text.startswith("{-", i):
			stop = _end_of_block_comment(text, i)
			blank(i, stop)
			i = stop
		elif text.startswith("--", i):
			stop = text.find("\n", i)
			if stop < 0: stop = n
			blank(i, stop)
			i = stop
		elif text.startswith('"""', i):
			stop = text.find('"""', i+3)
			if stop < 0: raise _Complaint(i, "This multi-line string never ends.")
			i = stop + 3
		elif text[i] in "\"'":
			i = _end_of_quote(text, i)
		else:
			i += 1
	return "".join(out)

def _end_of_block_comment(text:str, start:int) -> int:
	# Elm's block comments nest.
	depth, i = 0, start
	while i < len(text):
		if text.startswith("{-", i):
			depth += 1
			i += 2
		elif text.startswith("-}", i):
			depth -= 1
			i += 2
			if not depth: return i
		else:
			i += 1
	raise _Complaint(start, "This comment never ends.")

def _end_of_quote(text:str, start:int) -> int:
	quote, i = text[start], start+1
	while i < len(text) and text[i] != "\n":
		if text[i] == "\\": i += 2
		elif text[i] == quote: return i+1
		else: i += 1
	raise _Complaint(start, "This literal never ends.")

_TOP_LEVEL = re.compile(r"^\S", re.MULTILINE)

def _chunks(text:str):
	""" Yield (offset, text) for each top-level chunk. """
	starts = [m.start() for m in _TOP_LEVEL.finditer(text)]
	for start, stop in zip(starts, starts[1:]+[len(text)]):
		yield start, text[start:stop]

def syntax_error(text:str, offset:int, complaint:str) -> FrontendSyntaxError:
	row = text.count("\n", 0, offset) + 1
	col = offset - (text.rfind("\n", 0, offset) + 1) + 1
	return FrontendSyntaxError(complaint, offset, row, col)

##########################
#
#  From parse-trees to syntax nodes
#

@v_args(inline=True, meta=True)
class _Builder(Transformer):
	""" Builds syntax nodes; knows where the chunk sits in the file. """

	def __init__(self, base:int):
		super().__init__()
		self._base = base

	def _nom(self, token) -> Nom:
		return Nom(str(token)).located(self._base+token.start_pos, self._base+token.end_pos)

	def _at(self, meta, node):
		if not meta.empty: node.located(self._base+meta.start_pos, self._base+meta.end_pos)
		return node

	# Type annotations

	def type_ref(self, meta, token):
		qualifier, _, name = str(token).rpartition(".")
		stop = self._base + token.end_pos
		nom = Nom(name).located(stop-len(name), stop)
		return self._at(meta, syntax.TypeRef(nom, qualifier or None))

	def typed(self, meta, ref, *arguments): return self._at(meta, syntax.TypedAnno(ref, arguments))
	def generic(self, meta, token): return self._at(meta, syntax.GenericAnno(self._nom(token)))
	def unit(self, meta): return self._at(meta, syntax.UnitAnno())
	def tupled(self, meta, *elements): return self._at(meta, syntax.TupledAnno(elements))
	def record(self, meta, *fields): return self._at(meta, syntax.RecordAnno(fields))
	def generic_record(self, meta, base, *fields):
		return self._at(meta, syntax.GenericRecordAnno(self._nom(base), fields))
	def field(self, meta, token, annotation):
		return self._at(meta, syntax.RecordField(self._nom(token), annotation))
	def function_anno(self, meta, lhs, rhs): return self._at(meta, syntax.FunctionAnno(lhs, rhs))

	# Declarations

	def generics(self, meta, *tokens): return [self._nom(t) for t in tokens]
	def constructors(self, meta, *items): return list(items)

	def constructor(self, meta, token, *arguments):
		if "." in token:
			raise _Complaint(self._base+token.start_pos, "A constructor name cannot be qualified.")
		return self._at(meta, syntax.ValueConstructor(self._nom(token), arguments))

	def type_alias(self, meta, token, generics, annotation):
		return self._at(meta, syntax.TypeAliasDecl(self._nom(token), generics, annotation))

	def custom_type(self, meta, token, generics, constructors):
		return self._at(meta, syntax.CustomTypeDecl(self._nom(token), generics, constructors))

	def port_decl(self, meta, token, annotation):
		return self._at(meta, syntax.PortDecl(self._nom(token), annotation))

	def infix_decl(self, meta, direction, precedence, operator, function):
		nom = Nom("(%s)" % operator).located(self._base+operator.start_pos-1, self._base+operator.end_pos+1)
		return self._at(meta, syntax.InfixDecl(str(direction), int(precedence), nom, self._nom(function)))

	def signature(self, meta, token, annotation):
		return self._nom(token), annotation

	# Module structure

	def plain_module(self, meta, token, exposing):
		return self._at(meta, syntax.ModuleHeader("module", self._nom(token), exposing))
	def port_module(self, meta, token, exposing):
		return self._at(meta, syntax.ModuleHeader("port module", self._nom(token), exposing))
	def effect_module(self, meta, token, *rest):
		return self._at(meta, syntax.ModuleHeader("effect module", self._nom(token), rest[-1]))
	def effect_binding(self, meta, key, value): return None

	def import_decl(self, meta, token, alias, exposing):
		alias = self._nom(alias) if alias is not None else None
		return self._at(meta, syntax.ImportDecl(self._nom(token), alias, exposing))

	def expose_all(self, meta): return self._at(meta, syntax.Exposing(True))
	def expose_some(self, meta, *items): return self._at(meta, syntax.Exposing(False, items))
	def expose_value(self, meta, token): return self._at(meta, syntax.ExposedItem(self._nom(token)))
	def expose_type(self, meta, token): return self._at(meta, syntax.ExposedItem(self._nom(token)))
	def expose_open_type(self, meta, token): return self._at(meta, syntax.ExposedItem(self._nom(token), True))
	def expose_operator(self, meta, token):
		return self._at(meta, syntax.ExposedItem(Nom("(%s)" % token)))

##########################
#
#  Reading a whole file
#

_HEADER = re.compile(r"(?:(?:port|effect)\s+)?module\b")
_KEYWORD = re.compile(r"(import|type|port|infix)\b")
_VALUE = re.compile(r"([a-z][A-Za-z0-9_]*)\s*(:?)")

_START_FOR = {"type": "type_decl", "port": "port_decl", "infix": "infix_decl"}

_FRIENDLY = {
	"UPPER_NAME": "a capitalized name",
	"LOWER": "a lowercase name",
	"OPERATOR": "an operator",
	"INT": "a number",
	"INFIX_DIRECTION": "left, right, or non",
	"$END": "the end of the declaration",
}

def _describe(terminal:str) -> str:
	if terminal in _FRIENDLY: return _FRIENDLY[terminal]
	try: pattern = _parser.get_terminal(terminal).pattern
	except KeyError: return terminal
	return "'%s'" % pattern.value if pattern.type == "str" else terminal

class _Reader:
	"""
	Accumulates the parts of one file, chunk by chunk.
	Also accumulates syntax complaints, so that one run reports them all.
	"""
	def __init__(self, text:str):
		self._text = text
		self.header = None
		self.imports = []
		self.declarations = []
		self.problems = []
		self._pending = None  # A type-signature waiting for its definition
		self._seen_any = False

	def complain(self, offset:int, complaint:str):
		self.problems.append(syntax_error(self._text, offset, complaint))

	def take(self, base:int, chunk:str):
		keyword, value = _KEYWORD.match(chunk), _VALUE.match(chunk)
		if _HEADER.match(chunk):
			if self._seen_any: self.complain(base, "The module header must come first.")
			else: self.header = self._parse("module_header", base, chunk)
		elif keyword and keyword.group(1) == "import":
			if self.declarations or self._pending:
				self.complain(base, "Imports must come before all declarations.")
			else:
				node = self._parse("import_decl", base, chunk)
				if node is not None: self.imports.append(node)
		elif keyword:
			self._declare(self._parse(_START_FOR[keyword.group(1)], base, chunk), base)
		elif value:
			self._value(value, base, chunk)
		else:
			self.complain(base, "I expected a declaration to begin here.")
		self._seen_any = True

	def _value(self, m, base:int, chunk:str):
		name, colon = m.groups()
		if colon:
			parsed = self._parse("signature", base, chunk)
			self._declare(None, base)
			if parsed is not None:
				self._pending = (base, *parsed)
		elif "=" not in chunk:
			self.complain(base+len(chunk.rstrip()), "A definition needs an = sign.")
		else:
			nom = Nom(name).located(base, base+len(name))
			signature = None
			if self._pending and self._pending[1].text == name:
				base, _, signature = self._pending
				self._pending = None
			decl = syntax.FunctionDecl(nom, signature).located(base, nom.span.stop)
			self._declare(decl, base)

	def _declare(self, decl, base:int):
		if self._pending is not None:
			offset, nom, _ = self._pending
			self.complain(offset, "The type signature for %s lacks a definition right after it." % nom.text)
			self._pending = None
		if decl is not None:
			self.declarations.append(decl)

	def _parse(self, start:str, base:int, chunk:str):
		try:
			tree = _parser.parse(chunk, start=start)
			return _Builder(base).transform(tree)
		except UnexpectedInput as ex:
			self.problems.append(self._explain(ex, base, chunk))
		except VisitError as ex:
			if not isinstance(ex.orig_exc, _Complaint): raise
			self.complain(*ex.orig_exc.args)

	def _explain(self, ex:UnexpectedInput, base:int, chunk:str) -> FrontendSyntaxError:
		pos = getattr(ex, "pos_in_stream", None)
		if pos is None or pos < 0: pos = len(chunk.rstrip())
		if isinstance(ex, UnexpectedToken) and ex.token.type != "$END":
			what = "I did not expect '%s' here." % ex.token
		elif isinstance(ex, UnexpectedCharacters):
			what = "I did not expect the character '%s' here." % ex.char
		else:
			what = "This declaration ends too soon."
		expected = getattr(ex, "allowed", None) or getattr(ex, "expected", None)
		if expected:
			what += " Expected %s." % ", or ".join(sorted(map(_describe, expected)))
		return syntax_error(self._text, base+pos, what)

	def finish(self) -> Optional[syntax.File]:
		self._declare(None, len(self._text))
		if not self.problems:
			return syntax.File(self.header, self.imports, self.declarations)

##########################
#
#  Which module does each type name come from?
#

class _Qualifier(Visitor):
	"""
	Fills in TypeRef.module. Precedence, weakest first: the default imports,
	then names exposed by explicit imports, then types this module declares.
	Anything not found stays None.

	An `exposing (..)` import contributes no names, since only that other
	module's source could say what it declares. So a bare `List` next to
	`import Stack exposing (..)` still means the built-in.
	"""
	def __init__(self, file:syntax.File):
		self._home = file.module_name()
		self._aliases = dict(DEFAULT_ALIASES)
		self._scope = dict(DEFAULT_IMPORTS)
		for imp in file.imports:
			self._aliases[imp.local_name()] = imp.module_name()
			if imp.exposing is not None:
				for name in imp.exposing.type_names():
					self._scope[name] = imp.module_name()
		for decl in file.type_declarations():
			self._scope[decl.nom.text] = self._home

	def visit_File(self, file:syntax.File):
		for decl in file.declarations: self.visit(decl)

	def visit_TypeAliasDecl(self, decl:syntax.TypeAliasDecl): self.visit(decl.annotation)
	def visit_CustomTypeDecl(self, decl:syntax.CustomTypeDecl):
		for ctor in decl.constructors:
			for arg in ctor.arguments: self.visit(arg)
	def visit_FunctionDecl(self, decl:syntax.FunctionDecl):
		if decl.signature is not None: self.visit(decl.signature)
	def visit_PortDecl(self, decl:syntax.PortDecl): self.visit(decl.annotation)
	def visit_InfixDecl(self, decl:syntax.InfixDecl): pass

	def visit_TypedAnno(self, it:syntax.TypedAnno):
		self.visit(it.ref)
		for arg in it.arguments: self.visit(arg)
	def visit_TypeRef(self, ref:syntax.TypeRef):
		if ref.qualifier: ref.module = self._aliases.get(ref.qualifier, ref.qualifier)
		else: ref.module = self._scope.get(ref.name)
	def visit_GenericAnno(self, it): pass
	def visit_UnitAnno(self, it): pass
	def visit_TupledAnno(self, it:syntax.TupledAnno):
		for e in it.elements: self.visit(e)
	def visit_RecordAnno(self, it:syntax.RecordAnno):
		for f in it.fields: self.visit(f.annotation)
	def visit_GenericRecordAnno(self, it:syntax.GenericRecordAnno):
		for f in it.fields: self.visit(f.annotation)
	def visit_FunctionAnno(self, it:syntax.FunctionAnno):
		self.visit(it.lhs)
		self.visit(it.rhs)

def parse_text(text:str) -> Result:
	""" Ok(syntax.File), or else Err(tuple of FrontendSyntaxError) """
	try: blanked = _blank_comments(text)
	except _Complaint as ex: return fail(syntax_error(text, *ex.args))
	reader = _Reader(text)
	for base, chunk in _chunks(blanked):
		reader.take(base, chunk)
	file = reader.finish()
	if file is None: return fail(*reader.problems)
	_Qualifier(file).visit(file)
	return Ok(file)

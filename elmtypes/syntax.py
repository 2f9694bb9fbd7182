"""
The set of parse-nodes in simple form: the generic declaration-level tree.
The front-end builds these bottom-up as it transforms each parse.
These constructors add only a little organization.
Class-level type annotations mark the fields the front-end fills in after construction.
"""
from typing import Optional, Sequence
from .ontology import Phrase, Nom, TypeExpression, Declaration

class TypeRef(Phrase):
	"""
	Occurrence of a type name, as written: maybe qualified, like `Dict.Dict`.
	The front-end's name-resolution figures out which module it comes from.
	"""
	module: Optional[str]  # None means nobody could say.

	def __init__(self, nom:Nom, qualifier:Optional[str]=None, module:Optional[str]=None):
		self.nom, self.qualifier, self.module = nom, qualifier, module

	@property
	def name(self) -> str: return self.nom.text

	def __repr__(self):
		if self.qualifier: return "<ref:%s.%s>" % (self.qualifier, self.nom.text)
		return "<ref:%s>" % self.nom.text

# Type annotations:

class GenericAnno(TypeExpression):
	""" Reference to a type-variable, like the `a` in `List a` """
	def __init__(self, nom:Nom): self.nom = nom
	def __repr__(self): return "<var %s>" % self.nom.text

class TypedAnno(TypeExpression):
	def __init__(self, ref:TypeRef, arguments:Sequence[TypeExpression]=()):
		assert isinstance(ref, TypeRef)
		self.ref, self.arguments = ref, tuple(arguments)
	def __repr__(self):
		return "%s%s" % (self.ref, list(self.arguments)) if self.arguments else repr(self.ref)

class UnitAnno(TypeExpression):
	def __repr__(self): return "()"

class TupledAnno(TypeExpression):
	def __init__(self, elements:Sequence[TypeExpression]):
		self.elements = tuple(elements)

class RecordField(Phrase):
	def __init__(self, nom:Nom, annotation:TypeExpression):
		self.nom, self.annotation = nom, annotation
	def __repr__(self): return "<%s:%r>" % (self.nom.text, self.annotation)

class RecordAnno(TypeExpression):
	def __init__(self, fields:Sequence[RecordField]):
		assert all(isinstance(f, RecordField) for f in fields)
		self.fields = tuple(fields)

class GenericRecordAnno(TypeExpression):
	""" The extensible kind: { a | name : String } """
	def __init__(self, base:Nom, fields:Sequence[RecordField]):
		self.base, self.fields = base, tuple(fields)

class FunctionAnno(TypeExpression):
	def __init__(self, lhs:TypeExpression, rhs:TypeExpression):
		self.lhs, self.rhs = lhs, rhs

# Declarations:

def _names(noms) -> tuple[str, ...]:
	return tuple(n.text for n in noms or ())

class TypeAliasDecl(Declaration):
	def __init__(self, nom:Nom, generics:Sequence[Nom], annotation:TypeExpression):
		self.nom, self.generics, self.annotation = nom, tuple(generics or ()), annotation
	def kind(self): return "type alias"
	def generic_names(self): return _names(self.generics)

class ValueConstructor(Phrase):
	def __init__(self, nom:Nom, arguments:Sequence[TypeExpression]=()):
		self.nom, self.arguments = nom, tuple(arguments)
	def __repr__(self): return "<%s%s>" % (self.nom.text, list(self.arguments))

class CustomTypeDecl(Declaration):
	def __init__(self, nom:Nom, generics:Sequence[Nom], constructors:Sequence[ValueConstructor]):
		self.nom, self.generics, self.constructors = nom, tuple(generics or ()), tuple(constructors)
	def kind(self): return "custom type"
	def generic_names(self): return _names(self.generics)

class FunctionDecl(Declaration):
	""" A value or function definition. Only the head was examined. """
	def __init__(self, nom:Nom, signature:Optional[TypeExpression]=None):
		self.nom, self.signature = nom, signature
	def kind(self): return "function"

class PortDecl(Declaration):
	def __init__(self, nom:Nom, annotation:TypeExpression):
		self.nom, self.annotation = nom, annotation
	def kind(self): return "port"

class InfixDecl(Declaration):
	def __init__(self, direction:str, precedence:int, nom:Nom, function:Nom):
		self.direction, self.precedence = direction, precedence
		self.nom, self.function = nom, function
	def kind(self): return "infix"

# Module structure:

class Exposing(Phrase):
	"""
	What a module-header or import lists after `exposing`.
	`everything` means the (..) form, in which case `items` is empty.
	"""
	def __init__(self, everything:bool, items:Sequence["ExposedItem"]=()):
		self.everything, self.items = everything, tuple(items)

	def type_names(self) -> list[str]:
		return [i.nom.text for i in self.items if i.is_type()]

class ExposedItem(Phrase):
	def __init__(self, nom:Nom, with_constructors:bool=False):
		self.nom, self.with_constructors = nom, with_constructors
	def is_type(self): return self.nom.text[:1].isupper()

class ModuleHeader(Phrase):
	def __init__(self, flavor:str, nom:Nom, exposing:Exposing):
		self.flavor, self.nom, self.exposing = flavor, nom, exposing

class ImportDecl(Phrase):
	def __init__(self, nom:Nom, alias:Optional[Nom], exposing:Optional[Exposing]):
		self.nom, self.alias, self.exposing = nom, alias, exposing
	def module_name(self): return self.nom.text
	def local_name(self): return (self.alias or self.nom).text

DEFAULT_MODULE_NAME = "Main"

class File:
	""" Everything the front-end found in one source text. """
	def __init__(self, header:Optional[ModuleHeader], imports:Sequence[ImportDecl], declarations:Sequence[Declaration]):
		self.header = header
		self.imports = tuple(imports)
		self.declarations = tuple(declarations)

	def module_name(self) -> str:
		return self.header.nom.text if self.header else DEFAULT_MODULE_NAME

	def type_declarations(self):
		return [d for d in self.declarations if isinstance(d, (TypeAliasDecl, CustomTypeDecl))]

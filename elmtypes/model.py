"""
The restricted type model: what comes out the far end.

Deliberately a small, closed vocabulary. Downstream generators can rely on
every node being one of the classes here, and on sequences being in source
order. Everything is an immutable value; equality is structural and also
respects the variant, so ListDef(x) != MaybeDef(x).

`str()` of any node gives back something that reads like the Elm it came from.
"""
from dataclasses import dataclass
from typing import Union

# Base types:

@dataclass(frozen=True)
class TString:
	def __str__(self): return "String"

@dataclass(frozen=True)
class TInt:
	def __str__(self): return "Int"

@dataclass(frozen=True)
class TFloat:
	def __str__(self): return "Float"

@dataclass(frozen=True)
class TOther:
	""" Any other named type, including a type-variable. """
	name: str
	def __str__(self): return self.name

BaseType = Union[TString, TInt, TFloat, TOther]

PRIMITIVES = {"String": TString(), "Int": TInt(), "Float": TFloat()}

def base_type(name:str) -> BaseType:
	return PRIMITIVES.get(name) or TOther(name)

# Type definitions, i.e. the things a `Typed` annotation may hold:

class TypeDef:
	def arguments(self) -> tuple:
		raise NotImplementedError(type(self))
	def head(self) -> str:
		raise NotImplementedError(type(self))
	def __str__(self):
		return " ".join([self.head(), *map(_as_argument, self.arguments())])

@dataclass(frozen=True)
class Type(TypeDef):
	name: BaseType
	type_arguments: tuple = ()
	def arguments(self): return self.type_arguments
	def head(self): return str(self.name)

@dataclass(frozen=True)
class ListDef(TypeDef):
	element: "TypeAnnotation"
	def arguments(self): return (self.element,)
	def head(self): return "List"

@dataclass(frozen=True)
class MaybeDef(TypeDef):
	element: "TypeAnnotation"
	def arguments(self): return (self.element,)
	def head(self): return "Maybe"

@dataclass(frozen=True)
class DictDef(TypeDef):
	key: "TypeAnnotation"
	value: "TypeAnnotation"
	def arguments(self): return (self.key, self.value)
	def head(self): return "Dict"

@dataclass(frozen=True)
class ResultDef(TypeDef):
	error: "TypeAnnotation"
	ok: "TypeAnnotation"
	def arguments(self): return (self.error, self.ok)
	def head(self): return "Result"

# Type annotations:

@dataclass(frozen=True)
class Field:
	name: str
	annotation: "TypeAnnotation"
	def __str__(self): return "%s : %s" % (self.name, self.annotation)

@dataclass(frozen=True)
class Record:
	fields: tuple[Field, ...]
	def __str__(self):
		if not self.fields: return "{}"
		return "{ %s }" % ", ".join(map(str, self.fields))

@dataclass(frozen=True)
class Typed:
	type_def: TypeDef
	def __str__(self): return str(self.type_def)

@dataclass(frozen=True)
class Tuple:
	elements: tuple["TypeAnnotation", ...]
	def __str__(self):
		if not self.elements: return "()"
		return "( %s )" % ", ".join(map(str, self.elements))

TypeAnnotation = Union[Record, Typed, Tuple]

def _as_argument(anno:TypeAnnotation) -> str:
	""" Type applications in argument position need parentheses. """
	if isinstance(anno, Typed) and anno.type_def.arguments():
		return "(%s)" % anno
	return str(anno)

# Top-level results:

@dataclass(frozen=True)
class Constructor:
	name: str
	arguments: tuple[TypeAnnotation, ...] = ()
	def __str__(self):
		return " ".join([self.name, *map(_as_argument, self.arguments)])

def _heading(keyword, name, generics):
	return " ".join([keyword, name, *generics])

@dataclass(frozen=True)
class TypeAlias:
	name: str
	generics: tuple[str, ...]
	annotation: TypeAnnotation
	def __str__(self):
		return "%s = %s" % (_heading("type alias", self.name, self.generics), self.annotation)

@dataclass(frozen=True)
class CustomType:
	"""
	The first/rest split is how the model says "at least one constructor".
	The classifier refuses to build one from an empty list.
	"""
	name: str
	generics: tuple[str, ...]
	first_constructor: Constructor
	remaining_constructors: tuple[Constructor, ...] = ()

	def constructors(self) -> tuple[Constructor, ...]:
		return (self.first_constructor, *self.remaining_constructors)

	def __str__(self):
		body = " | ".join(map(str, self.constructors()))
		return "%s = %s" % (_heading("type", self.name, self.generics), body)

ValidType = Union[TypeAlias, CustomType]

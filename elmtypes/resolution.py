"""
Resolution proper: from the generic declaration tree to the restricted model.

Each visitor method answers a Result. Nothing here keeps state between calls,
so siblings may be resolved in any order; `traverse` keeps the output in
input order and merges the complaints from every sibling that had any.
"""
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax, model
from .errors import UnsupportedConstruct, InvalidArity, NoConstructors, AmbiguousName
from .result import Ok, Result, fail, fmap, bind, traverse

# Built-in containers, by name: (arity, model constructor).
# Each one's home module has the same name as the type.
CONTAINERS = {
	"List": (1, model.ListDef),
	"Maybe": (1, model.MaybeDef),
	"Dict": (2, model.DictDef),
	"Result": (2, model.ResultDef),
}

PRIMITIVE_HOMES = {"String": "String", "Int": "Basics", "Float": "Basics"}

class AnnotationResolver(Visitor):
	"""
	Converts one type-annotation node, recursively.
	`home` is the name of the module being resolved: a reference to a
	container name that the front-end traced back to this very module
	could mean either thing, and that is an error.
	"""
	def __init__(self, home:Optional[str]=None):
		self._home = home

	def visit_RecordAnno(self, it:syntax.RecordAnno) -> Result:
		return fmap(model.Record, resolve_fields(self, it.fields))

	def visit_TypedAnno(self, it:syntax.TypedAnno) -> Result:
		arguments = resolve_arguments(self, it.arguments)
		return bind(arguments, lambda args: self._classify(it, args))

	def visit_TupledAnno(self, it:syntax.TupledAnno) -> Result:
		return fmap(model.Tuple, resolve_arguments(self, it.elements))

	def visit_GenericAnno(self, it:syntax.GenericAnno) -> Result:
		return Ok(model.Typed(model.Type(model.TOther(it.nom.text))))

	def visit_UnitAnno(self, it:syntax.UnitAnno) -> Result:
		return fail(UnsupportedConstruct("the unit type ()", it))

	def visit_GenericRecordAnno(self, it:syntax.GenericRecordAnno) -> Result:
		return fail(UnsupportedConstruct("an open record { %s | ... }" % it.base.text, it))

	def visit_FunctionAnno(self, it:syntax.FunctionAnno) -> Result:
		return fail(UnsupportedConstruct("a function type", it))

	def _classify(self, it:syntax.TypedAnno, args:tuple) -> Result:
		ref = it.ref
		if ref.name in CONTAINERS:
			if ref.module is None or ref.module == ref.name:
				arity, make = CONTAINERS[ref.name]
				if len(args) != arity:
					return fail(InvalidArity(ref.name, arity, len(args), it))
				return Ok(model.Typed(make(*args)))
			if ref.module == self._home:
				return fail(AmbiguousName(ref.name, self._home, it))
		return Ok(model.Typed(model.Type(_base_type(ref), args)))

def _base_type(ref:syntax.TypeRef) -> model.BaseType:
	if ref.module is None or ref.module == PRIMITIVE_HOMES.get(ref.name):
		return model.base_type(ref.name)
	return model.TOther(ref.name)

def resolve_arguments(resolver:AnnotationResolver, arguments:Sequence[syntax.TypeExpression]) -> Result:
	return traverse(resolver.visit, arguments)

def resolve_fields(resolver:AnnotationResolver, fields:Sequence[syntax.RecordField]) -> Result:
	def field(f:syntax.RecordField):
		return fmap(lambda anno: model.Field(f.nom.text, anno), resolver.visit(f.annotation))
	return traverse(field, fields)

def resolve_constructor(resolver:AnnotationResolver, ctor:syntax.ValueConstructor) -> Result:
	arguments = resolve_arguments(resolver, ctor.arguments)
	return fmap(lambda args: model.Constructor(ctor.nom.text, args), arguments)

class DeclarationClassifier(Visitor):
	""" One top-level declaration in, one Result out. """
	def __init__(self, home:Optional[str]=None):
		self._annotations = AnnotationResolver(home)

	def visit_TypeAliasDecl(self, decl:syntax.TypeAliasDecl) -> Result:
		def alias(anno): return model.TypeAlias(decl.nom.text, decl.generic_names(), anno)
		return fmap(alias, self._annotations.visit(decl.annotation))

	def visit_CustomTypeDecl(self, decl:syntax.CustomTypeDecl) -> Result:
		constructors = traverse(lambda c: resolve_constructor(self._annotations, c), decl.constructors)
		return bind(constructors, lambda ctors: _custom_type(decl, ctors))

	def visit_FunctionDecl(self, decl:syntax.FunctionDecl) -> Result: return _unsupported(decl)
	def visit_PortDecl(self, decl:syntax.PortDecl) -> Result: return _unsupported(decl)
	def visit_InfixDecl(self, decl:syntax.InfixDecl) -> Result: return _unsupported(decl)

def _custom_type(decl:syntax.CustomTypeDecl, ctors:tuple) -> Result:
	# An empty list is not a failure as far as `traverse` knows, so check here.
	if not ctors: return fail(NoConstructors(decl.nom.text, decl))
	return Ok(model.CustomType(decl.nom.text, decl.generic_names(), ctors[0], ctors[1:]))

def _unsupported(decl:syntax.Declaration) -> Result:
	return fail(UnsupportedConstruct("the %s declaration %s" % (decl.kind(), decl.nom.text), decl))

def resolve_file(file:syntax.File) -> Result:
	""" Ok(tuple of ValidType, in file order), or Err(every problem in the file) """
	classifier = DeclarationClassifier(file.module_name())
	return traverse(classifier.visit, file.declarations)

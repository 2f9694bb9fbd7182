"""
Plain-data rendition of the model, ready for json.dumps.

Each node becomes a dict with a "kind" key naming its variant.
This is the shape a code-generator in some other process would read.
"""
from boozetools.support.foundation import Visitor
from . import model

class Exporter(Visitor):
	def visit_TypeAlias(self, it:model.TypeAlias):
		return {"kind": "TypeAlias", "name": it.name, "generics": list(it.generics), "annotation": self.visit(it.annotation)}

	def visit_CustomType(self, it:model.CustomType):
		return {
			"kind": "CustomType",
			"name": it.name,
			"generics": list(it.generics),
			"constructors": [self.visit(c) for c in it.constructors()],
		}

	def visit_Constructor(self, it:model.Constructor):
		return {"name": it.name, "arguments": [self.visit(a) for a in it.arguments]}

	def visit_Record(self, it:model.Record):
		fields = [{"name": f.name, "annotation": self.visit(f.annotation)} for f in it.fields]
		return {"kind": "Record", "fields": fields}

	def visit_Tuple(self, it:model.Tuple):
		return {"kind": "Tuple", "elements": [self.visit(e) for e in it.elements]}

	def visit_Typed(self, it:model.Typed): return self.visit(it.type_def)

	def visit_Type(self, it:model.Type):
		return {"kind": "Type", "name": self.visit(it.name), "arguments": [self.visit(a) for a in it.type_arguments]}

	def visit_ListDef(self, it:model.ListDef): return {"kind": "List", "element": self.visit(it.element)}
	def visit_MaybeDef(self, it:model.MaybeDef): return {"kind": "Maybe", "element": self.visit(it.element)}
	def visit_DictDef(self, it:model.DictDef):
		return {"kind": "Dict", "key": self.visit(it.key), "value": self.visit(it.value)}
	def visit_ResultDef(self, it:model.ResultDef):
		return {"kind": "Result", "error": self.visit(it.error), "ok": self.visit(it.ok)}

	def visit_TString(self, it): return "String"
	def visit_TInt(self, it): return "Int"
	def visit_TFloat(self, it): return "Float"
	def visit_TOther(self, it:model.TOther): return {"other": it.name}

def export(valid_types) -> list:
	exporter = Exporter()
	return [exporter.visit(vt) for vt in valid_types]

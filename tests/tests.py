from pathlib import Path
import unittest

from elmtypes import model
from elmtypes.driver import parse, parse_file, resolve_text
from elmtypes.errors import FrontendSyntaxError, UnsupportedConstruct, InvalidArity, AmbiguousName
from elmtypes.result import Ok, Err

base_folder = Path(__file__).parent
zoo_ok = base_folder/"zoo/ok"
zoo_fail = base_folder/"zoo/fail"

STRING = model.Typed(model.Type(model.TString()))
INT = model.Typed(model.Type(model.TInt()))
FLOAT = model.Typed(model.Type(model.TFloat()))

def other(name, *args): return model.Typed(model.Type(model.TOther(name), args))

def _good(text) -> tuple:
	outcome = parse(text)
	assert isinstance(outcome, Ok), outcome.error
	return outcome.value

def _report(text) -> list[str]:
	outcome = parse(text)
	assert isinstance(outcome, Err), outcome
	assert isinstance(outcome.error, str)
	return outcome.error.split("\n")

class Scenarios(unittest.TestCase):
	""" The canonical little examples. """

	def test_alias_of_string(self):
		self.assertEqual((model.TypeAlias("Id", (), STRING),), _good("type alias Id = String"))

	def test_generic_box(self):
		expect = model.TypeAlias("Box", ("a",), model.Record((model.Field("value", other("a")),)))
		self.assertEqual((expect,), _good("type alias Box a = { value: a }"))

	def test_maybe(self):
		expect = model.CustomType(
			"Maybe", ("a",),
			model.Constructor("Just", (other("a"),)),
			(model.Constructor("Nothing", ()),),
		)
		self.assertEqual((expect,), _good("type Maybe a = Just a | Nothing"))

	def test_wrong_arity(self):
		(line,) = _report("type alias Bad = List Int String")
		self.assertIn("List", line)
		self.assertIn("got 2", line)

	def test_unit(self):
		(line,) = _report("type alias U = ()")
		self.assertIn("unit", line)
		self.assertTrue(line.startswith("Unsupported construct"))

class Properties(unittest.TestCase):

	def test_accumulation_is_complete(self):
		for n in range(1, 6):
			with self.subTest(n=n):
				text = "\n".join("type alias R%d = { good : Int, bad : () }" % i for i in range(n))
				lines = _report(text)
				self.assertEqual(n, len(lines))
				for line in lines: self.assertIn("unit", line)

	def test_order_is_preserved(self):
		text = "type alias R = { c : Int, a : String, b : Float }\ntype T = T Float String Int"
		record, custom = _good(text)
		self.assertEqual(["c", "a", "b"], [f.name for f in record.annotation.fields])
		self.assertEqual((FLOAT, STRING, INT), custom.first_constructor.arguments)

	def test_length_matches_declarations(self):
		text = "type alias A = Int\ntype B = B\ntype alias C = ( Int, Int )\ntype D a = D a | E"
		self.assertEqual(4, len(_good(text)))

	def test_open_import_leaves_built_ins_alone(self):
		text = "import Stack exposing (..)\ntype alias T = { items : List Int }"
		(alias,) = _good(text)
		self.assertEqual(model.Typed(model.ListDef(INT)), alias.annotation.fields[0].annotation)

	def test_syntax_errors_stand_alone(self):
		outcome = resolve_text("type alias U = ()\ntype alias = Int\ntype alias V = ()")
		(problem,) = outcome.error
		self.assertIsInstance(problem, FrontendSyntaxError)

class ZooOfOk(unittest.TestCase):

	def test_api(self):
		valid = parse_file(zoo_ok/"Api.elm").value
		self.assertEqual(["Id", "Box", "User", "Remote", "Shape"], [vt.name for vt in valid])
		ident, box, user, remote, shape = valid
		self.assertEqual(model.TypeAlias("Id", (), STRING), ident)
		fields = {f.name: f.annotation for f in user.annotation.fields}
		self.assertEqual(other("Id"), fields["id"])
		self.assertEqual(model.Typed(model.ListDef(STRING)), fields["tags"])
		self.assertEqual(model.Typed(model.MaybeDef(STRING)), fields["nickname"])
		self.assertEqual(model.Typed(model.DictDef(STRING, model.Typed(model.ListDef(INT)))), fields["settings"])
		self.assertEqual(model.Tuple((FLOAT, FLOAT)), fields["position"])
		self.assertEqual(("e", "a"), remote.generics)
		self.assertEqual(["Loading", "Failed", "Done"], [c.name for c in remote.constructors()])
		labelled = shape.remaining_constructors[-1]
		self.assertEqual((STRING, model.Typed(model.ResultDef(STRING, other("Shape")))), labelled.arguments)

	def test_api_reads_back_as_elm(self):
		valid = parse_file(zoo_ok/"Api.elm").value
		self.assertEqual("type alias Box a = { value : a }", str(valid[1]))
		self.assertEqual("type Remote e a = Loading | Failed e | Done a", str(valid[3]))
		expect = "type Shape = Circle { radius : Float } | Polygon (List ( Float, Float )) | Labelled String (Result String Shape)"
		self.assertEqual(expect, str(valid[4]))

	def test_qualified(self):
		index, custom = parse_file(zoo_ok/"Qualified.elm").value
		maybe_int = model.Typed(model.MaybeDef(INT))
		self.assertEqual(model.Typed(model.DictDef(STRING, maybe_int)), index.annotation)
		fields = {f.name: f.annotation for f in custom.annotation.fields}
		self.assertEqual(other("List", INT), fields["items"])
		self.assertEqual(other("List", INT), fields["stacked"])
		self.assertEqual(other("Stack", FLOAT), fields["stack"])

class ZooOfFail(unittest.TestCase):
	""" Tests that assert about failure modes. """

	def problems(self, basename):
		outcome = resolve_text((zoo_fail/(basename+".elm")).read_text())
		self.assertIsInstance(outcome, Err)
		return outcome.error

	def test_everything_wrong(self):
		problems = self.problems("everything_wrong")
		kinds = [type(p) for p in problems]
		expect = [UnsupportedConstruct]*5 + [InvalidArity]*2 + [UnsupportedConstruct]*2
		self.assertEqual(expect, kinds)
		self.assertEqual(("Maybe", 2), (problems[5].construct, problems[5].count))
		self.assertEqual(("Dict", 1), (problems[6].construct, problems[6].count))
		self.assertIn("function declaration add", problems[7].message())
		self.assertIn("function declaration greeting", problems[8].message())
		self.assertEqual(9, len(parse_file(zoo_fail/"everything_wrong.elm").error.split("\n")))

	def test_syntax_error(self):
		problems = self.problems("syntax_error")
		self.assertEqual([FrontendSyntaxError]*2, [type(p) for p in problems])

	def test_ambiguous(self):
		(problem,) = self.problems("ambiguous")
		self.assertIsInstance(problem, AmbiguousName)
		self.assertIn("Shadow", problem.message())

	def test_ports(self):
		messages = [p.message() for p in self.problems("ports")]
		self.assertEqual(3, len(messages))
		self.assertIn("port declaration send", messages[0])
		self.assertIn("port declaration receive", messages[1])
		self.assertIn("infix declaration (|+)", messages[2])

if __name__ == '__main__':
	unittest.main()

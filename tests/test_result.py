import unittest

from elmtypes.result import Ok, Err, fail, fmap, bind, combine, traverse

class AccumulatorTests(unittest.TestCase):

	def test_all_good(self):
		self.assertEqual(Ok((1, 2, 3)), combine([Ok(1), Ok(2), Ok(3)]))

	def test_empty_sequence_is_a_success(self):
		self.assertEqual(Ok(()), combine([]))

	def test_every_failure_is_kept_in_order(self):
		outcome = combine([fail("a"), Ok(2), fail("b", "c"), Ok(4), fail("d")])
		self.assertEqual(Err(("a", "b", "c", "d")), outcome)

	def test_no_early_termination(self):
		seen = []
		def probe(x):
			seen.append(x)
			return fail(x) if x % 2 else Ok(x)
		outcome = traverse(probe, range(6))
		self.assertEqual([0, 1, 2, 3, 4, 5], seen)
		self.assertEqual((1, 3, 5), outcome.error)

	def test_fmap(self):
		self.assertEqual(Ok(4), fmap(lambda x: x * 2, Ok(2)))
		self.assertEqual(fail("x"), fmap(lambda x: x * 2, fail("x")))

	def test_bind_short_circuits(self):
		def explode(x): raise AssertionError("must not be called")
		self.assertEqual(fail("first"), bind(fail("first"), explode))
		self.assertEqual(fail("second"), bind(Ok(1), lambda x: fail("second")))
		self.assertEqual(Ok(2), bind(Ok(1), lambda x: Ok(x + 1)))

	def test_err_needs_a_problem(self):
		with self.assertRaises(AssertionError):
			fail()

if __name__ == '__main__':
	unittest.main()

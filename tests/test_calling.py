import io, unittest
from unittest import mock

import typify
from typify import ABSENT
from typify.calling import CallMatcher
from typify.diagnostics import (
	CallError, ArgumentTypeMismatch, TooFewArguments, TooManyArguments, ReturnTypeMismatch,
	SignatureSyntaxError, UnknownTypeError,
)

def identity(x): return x
def double_impl(v): return v + v
def count(*args): return len(args)

class Examples(unittest.TestCase):

	def assertReturns(self, f, cases):
		"""
		Each case is arguments followed by the expected result,
		or else by the exception class the call should raise.
		"""
		for *args, expect in cases:
			with self.subTest(f=f.__name__, args=args):
				if isinstance(expect, type) and issubclass(expect, Exception):
					with self.assertRaises(expect):
						f(*args)
				else:
					self.assertEqual(expect, f(*args))

	def test_factorial(self):
		@typify.typify("number -> number")
		def factorial(n):
			return 1 if n == 0 else n * factorial(n-1)
		self.assertReturns(factorial, [
			[3, 6],
			["foo", ArgumentTypeMismatch],
			[1, 2, TooManyArguments],
		])

	def test_doubles(self):
		double1 = typify.typify("* -> number", double_impl)
		self.assertReturns(double1, [
			[1, 2],
			["foo", ReturnTypeMismatch],
		])
		double2 = typify.typify("number -> number", double_impl)
		self.assertReturns(double2, [
			[1, 2],
			["foo", ArgumentTypeMismatch],
		])
		double3 = typify.typify("number|string -> number|string", double_impl)
		self.assertReturns(double3, [
			[1, 2],
			["foo", "foofoo"],
			[True, ArgumentTypeMismatch],
		])
		double4 = typify.typify("a : number|string => a -> a", double_impl)
		self.assertReturns(double4, [
			[1, 2],
			["foo", "foofoo"],
			[True, ArgumentTypeMismatch],
		])

	def test_choose(self):
		@typify.typify("boolean -> number? -> number? -> number")
		def choose(test, t=ABSENT, f=ABSENT):
			return (t if t else 1) if test else (f if f else 0)
		self.assertReturns(choose, [
			[True, 2, 1, 2],
			[True, 2, None, ArgumentTypeMismatch],
			[True, ABSENT, 3, 1],
			[True, 2, ABSENT, 2],
			[True, 2, 2],
			[True, 1],
			[False, 0],
			[TooFewArguments],
			[True, 1, 2, 3, TooManyArguments],
		])

class Context(unittest.TestCase):

	def test_polytypes_dont_need_braces(self):
		f = typify.typify("a : array * => a -> a", identity)
		self.assertEqual(["foo"], f(["foo"]))

	def test_optional_types_dont_need_braces(self):
		f = typify.typify("a : number? => a -> a", identity)
		self.assertIs(ABSENT, f(ABSENT))

	def test_alternative_types_need_braces(self):
		f = typify.typify("a : number|string => a -> a", identity)
		self.assertEqual(1, f(1))
		self.assertEqual("foo", f("foo"))

		g = typify.typify("a : (number|string) => a -> a", lambda x: "const")
		self.assertEqual("const", g(1))
		self.assertEqual("const", g("foo"))

		h = typify.typify("a : number|string => a -> a", lambda x: "const")
		with self.assertRaises(ReturnTypeMismatch):
			h(1)

	def test_binding_spans_parameters(self):
		f = typify.typify("a : number|string => a -> a -> a", lambda x, y: x)
		self.assertEqual(1, f(1, 2))
		with self.assertRaises(ArgumentTypeMismatch) as cm:
			f(1, "two")
		self.assertEqual(1, cm.exception.position)
		self.assertIn("bound to number", str(cm.exception))

	def test_several_groups(self):
		f = typify.typify("a : number|string, b : array a => a -> b -> b", lambda x, xs: xs + [x])
		self.assertEqual([1, 2], f(2, [1]))
		self.assertEqual(["x"], f("x", []))
		with self.assertRaises(ArgumentTypeMismatch):
			f(2, ["x"])

class RestParameters(unittest.TestCase):

	def test_accepts_any_parameters(self):
		f = typify.typify("... -> number", count)
		for i in range(20):
			self.assertEqual(i, f(*range(i)))
		self.assertEqual(3, f("x", None, [1]))

	def test_accepts_parameters_of_specified_type(self):
		f = typify.typify("number... -> number", count)
		for i in range(20):
			self.assertEqual(i, f(*range(i)))
		with self.assertRaises(ArgumentTypeMismatch) as cm:
			f(1, 2, "three")
		self.assertEqual(2, cm.exception.position)

	def test_accepts_context_variable_as_rest_type(self):
		f = typify.typify("a : number|string => a... -> number", count)
		numbers, strings = [], []
		for i in range(20):
			self.assertEqual(i, f(*numbers))
			self.assertEqual(i, f(*strings))
			numbers.append(i)
			strings.append(str(i))
		# Each call binds afresh, but one call cannot switch branches.
		with self.assertRaises(ArgumentTypeMismatch):
			f(1, "two")

	def test_rest_after_fixed_parameters(self):
		f = typify.typify("string -> number... -> string", lambda s, *ns: s * len(ns))
		self.assertEqual("", f("x"))
		self.assertEqual("xx", f("x", 1, 2))
		with self.assertRaises(TooFewArguments):
			f()

class Counting(unittest.TestCase):

	def test_too_few(self):
		f = typify.typify("number -> number -> number", lambda a, b: a + b)
		with self.assertRaises(TooFewArguments) as cm:
			f(1)
		self.assertEqual(1, cm.exception.given)
		self.assertEqual(2, cm.exception.needed)

	def test_too_many(self):
		f = typify.typify("number -> number", identity)
		with self.assertRaises(TooManyArguments) as cm:
			f(1, 2)
		self.assertEqual(1, cm.exception.allowed)

	def test_nullary(self):
		f = typify.typify("-> number", lambda: 7)
		self.assertEqual(7, f())
		with self.assertRaises(TooManyArguments):
			f(1)

	def test_types_are_checked_before_counting(self):
		f = typify.typify("number -> number", identity)
		with self.assertRaises(ArgumentTypeMismatch) as cm:
			f("foo", 1)
		self.assertEqual(0, cm.exception.position)

	def test_call_errors_are_type_errors(self):
		f = typify.typify("number -> number", identity)
		for args in [("x",), (), (1, 2)]:
			with self.subTest(args=args):
				with self.assertRaises(TypeError):
					f(*args)
				with self.assertRaises(CallError):
					f(*args)

class Adapter(unittest.TestCase):

	def test_function_never_runs_on_bad_arguments(self):
		calls = []
		def record_call(x):
			calls.append(x)
			return "not a number"
		f = typify.typify("number -> number", record_call)
		with self.assertRaises(ArgumentTypeMismatch):
			f("x")
		self.assertEqual([], calls)
		with self.assertRaises(ReturnTypeMismatch):
			f(1)
		self.assertEqual([1], calls)

	def test_keyword_arguments(self):
		@typify.typify("number -> string -> string")
		def label(n, text):
			return "%s %d" % (text, n)
		self.assertEqual("item 3", label(3, text="item"))
		self.assertEqual("item 3", label(text="item", n=3))
		with self.assertRaises(ArgumentTypeMismatch):
			label(3, text=4)

	def test_keyword_arguments_without_a_position(self):
		def scale(n, **options):
			return n * options.get("factor", 1)
		f = typify.typify("number -> number", scale)
		self.assertEqual(6, f(3, factor=2))
		self.assertEqual("xx", typify.typify("* -> *", scale)("x", factor=2))
		with self.assertRaises(ArgumentTypeMismatch):
			f("3", factor=2)

	def test_callable_without_a_signature(self):
		f = typify.typify("number -> number", lambda n, scale=1: n * scale)
		with mock.patch("inspect.signature", side_effect=ValueError("no signature found")):
			self.assertEqual(6, f(3, scale=2))
			with self.assertRaises(ArgumentTypeMismatch):
				f("3", scale=2)

	def test_wraps(self):
		@typify.typify("number -> number")
		def increment(n):
			""" Add one. """
			return n + 1
		self.assertEqual("increment", increment.__name__)
		self.assertEqual(" Add one. ", increment.__doc__)
		self.assertEqual("number -> number", increment.signature)

	def test_message_names_the_function(self):
		@typify.typify("number -> number")
		def increment(n): return n + 1
		with self.assertRaises(ArgumentTypeMismatch) as cm:
			increment("one")
		self.assertIn("increment", str(cm.exception))
		self.assertIn("argument 1 should be number", str(cm.exception))
		self.assertEqual("one", cm.exception.value)

	def test_needs_an_arrow(self):
		with self.assertRaises(SignatureSyntaxError):
			typify.typify("number", identity)

	def test_needs_a_callable(self):
		with self.assertRaises(TypeError):
			typify.typify("number -> number", 12)

	def test_names_resolve_at_first_call(self):
		typ = typify.create()
		f = typ("gadget -> gadget", identity)
		typ.type("gadget", lambda x: x == "gadget")
		self.assertEqual("gadget", f("gadget"))
		g = typ("gizmo -> gizmo", identity)
		with self.assertRaises(UnknownTypeError):
			g("gizmo")

	def test_call_matcher_directly(self):
		cm = CallMatcher(typify.default.registry, "a : number|string => a -> a", name="direct")
		env = cm.check_call(["x"])
		self.assertEqual("y", cm.check_return(env, "y"))
		with self.assertRaises(ReturnTypeMismatch):
			cm.check_return(env, 1)

class Verbosity(unittest.TestCase):

	def test_quiet_by_default(self):
		typ = typify.create()
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			self.assertFalse(typ.check("number", "x"))
			with self.assertRaises(ArgumentTypeMismatch):
				typ("number -> number", identity)("x")
		self.assertEqual("", err.getvalue())

	def test_verbose(self):
		typ = typify.create(verbose=1)
		with mock.patch("sys.stderr", new_callable=io.StringIO) as err:
			self.assertFalse(typ.check("number", "x"))
			with self.assertRaises(ArgumentTypeMismatch):
				typ("number -> number", identity)("x")
		self.assertIn("does not fit number", err.getvalue())
		self.assertIn("ArgumentTypeMismatch", err.getvalue())

if __name__ == '__main__':
	unittest.main()

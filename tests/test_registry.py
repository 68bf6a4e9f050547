import unittest

import typify
from typify.registry import Registry, Record, Alias
from typify.primitive import Primitive, Container
from typify.diagnostics import (
	UnknownTypeError, DuplicateTypeError, InvalidTypeName, NotAContainer, SignatureSyntaxError,
)

def _yes(x): return True

class SeparateInstances(unittest.TestCase):
	""" Registries made by create() don't share types. """

	def test_dont_share_types(self):
		typ1 = typify.create()
		typ2 = typify.create()
		typ1.type("true", _yes)
		typ2.type("t", _yes)

		self.assertTrue(typ1.check("true", 1))
		self.assertTrue(typ2.check("t", 1))

		with self.assertRaises(UnknownTypeError): typ1.check("t", 1)
		with self.assertRaises(UnknownTypeError): typ2.check("true", 1)
		with self.assertRaises(UnknownTypeError): typify.check("t", 1)
		with self.assertRaises(UnknownTypeError): typify.check("true", 1)

	def test_unknown_type_is_a_lookup_error(self):
		with self.assertRaises(LookupError):
			typify.create().check("nosuch", 1)

	def test_unknown_name_raises_even_when_another_branch_fits(self):
		with self.assertRaises(UnknownTypeError):
			typify.create().check("number|nosuch", 1)

	def test_create_from_an_instance(self):
		typ1 = typify.create()
		typ1.type("thing", _yes)
		typ2 = typ1.create()
		self.assertNotIn("thing", typ2.registry)

class Definitions(unittest.TestCase):

	def setUp(self):
		self.registry = Registry(place="a test")

	def test_kinds_of_definition(self):
		self.registry.type("anything", _yes)
		self.registry.container("bag", lambda x: isinstance(x, set))
		self.registry.record("point", {"x": "number", "y": "number"})
		self.registry.alias("points", "array point")
		self.assertIsInstance(self.registry.resolve("anything"), Primitive)
		self.assertIsInstance(self.registry.resolve("bag"), Container)
		self.assertIsInstance(self.registry.resolve("point"), Record)
		self.assertIsInstance(self.registry.resolve("points"), Alias)
		self.assertIsInstance(self.registry.resolve("number"), Primitive)

	def test_defined_twice(self):
		self.registry.type("thing", _yes)
		with self.assertRaises(DuplicateTypeError):
			self.registry.alias("thing", "number")

	def test_cannot_shadow_a_built_in(self):
		with self.assertRaises(DuplicateTypeError):
			self.registry.type("number", _yes)

	def test_bad_names(self):
		for name in ["", "1abc", "a b", "a-b", None]:
			with self.subTest(name=name):
				with self.assertRaises(InvalidTypeName):
					self.registry.type(name, _yes)

	def test_predicate_must_be_callable(self):
		with self.assertRaises(TypeError):
			self.registry.type("thing", "not callable")

	def test_record_fields_are_parsed_eagerly(self):
		with self.assertRaises(SignatureSyntaxError):
			self.registry.record("broken", {"x": "number |"})
		self.assertNotIn("broken", self.registry)

	def test_alias_body_is_parsed_lazily(self):
		self.registry.alias("broken", "number |")
		self.assertIn("broken", self.registry)
		with self.assertRaises(SignatureSyntaxError):
			self.registry.resolve("broken").body()

	def test_alias_may_name_a_later_definition(self):
		typ = typify.Typify(self.registry)
		typ.alias("later", "thing|null")
		typ.type("thing", lambda x: x == "thing")
		self.assertTrue(typ.check("later", "thing"))
		self.assertTrue(typ.check("later", None))
		self.assertFalse(typ.check("later", 1))

	def test_only_containers_take_element_types(self):
		with self.assertRaises(NotAContainer):
			self.registry.verify(typify.parse_signature("number number"))
		self.registry.verify(typify.parse_signature("map array number"))

	def test_verify_skips_context_variables(self):
		self.registry.verify(typify.parse_signature("a : number|string => a -> array a"))

if __name__ == '__main__':
	unittest.main()

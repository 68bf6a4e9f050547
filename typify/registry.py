"""
Named type definitions, kept per registry so that separate registries never interfere.

A registry's names live in a child of the primitive namespace.
Records are parsed when defined. Alias bodies wait until a match first needs them,
which is what lets an alias mention itself (or a name defined later).
"""
import re
from collections.abc import Mapping
from boozetools.support.symtab import NameSpace, NoSuchSymbol
from boozetools.support.foundation import Visitor
from .ontology import Definition
from .primitive import Primitive, Container, root_namespace
from . import syntax
from .front_end import parse_signature
from .diagnostics import UnknownTypeError, DuplicateTypeError, InvalidTypeName, NotAContainer

_valid_name = re.compile(r"[A-Za-z]\w*")

class Record(Definition):
	""" Structural type: a value with (at least) these fields, each of the given type. """
	def __init__(self, name:str, fields:dict[str, syntax.TypeExpression], closed:bool):
		super().__init__(name)
		self.fields = fields
		self.closed = closed

class Alias(Definition):
	def __init__(self, name:str, text:str):
		super().__init__(name)
		self.text = text
		self._body = None
	def body(self) -> syntax.TypeExpression:
		if self._body is None:
			self._body = parse_signature(self.text)
		return self._body

class Registry:
	def __init__(self, place="the default registry"):
		self.namespace = NameSpace(place=place, parent=root_namespace)

	def __repr__(self): return "<Registry: %s>" % self.namespace.place

	def __contains__(self, name): return name in self.namespace

	def _install(self, definition:Definition):
		name = definition.name
		if not (isinstance(name, str) and _valid_name.fullmatch(name)):
			raise InvalidTypeName(name)
		# Shadowing a built-in counts as a duplicate, same as redefining a local.
		if name in self.namespace:
			raise DuplicateTypeError(name, self.namespace.place)
		self.namespace[name] = definition
		return definition

	def type(self, name:str, predicate):
		""" Register a new primitive type: values that satisfy the predicate. """
		if not callable(predicate): raise TypeError("The predicate for %r must be callable." % name)
		return self._install(Primitive(name, predicate))

	def container(self, name:str, predicate, members=iter):
		""" Like `type`, but it can also take an element type, as in `bag number`. """
		return self._install(Container(name, predicate, members))

	def instance(self, name:str, cls):
		""" Register a type which means `isinstance(value, cls)`. """
		return self.type(name, lambda x: isinstance(x, cls))

	def record(self, name:str, fields:Mapping, closed:bool=False):
		"""
		Register a structural type. Fields map field names to type expressions.
		A closed record also rejects mappings carrying keys it does not mention.
		"""
		parsed = {key: parse_signature(text) for key, text in fields.items()}
		return self._install(Record(name, parsed, closed))

	def alias(self, name:str, text:str):
		if not isinstance(text, str):
			raise TypeError("An alias body must be a string, not %s" % type(text).__name__)
		return self._install(Alias(name, text))

	def resolve(self, name:str) -> Definition:
		try: return self.namespace[name]
		except NoSuchSymbol: raise UnknownTypeError(name, self.namespace.place) from None

	def verify(self, expr:syntax.TypeExpression):
		""" Make sure every name in the expression means something here. """
		WordResolver(self).visit(expr)

class WordResolver(Visitor):
	"""
	Walk the tree looking for undefined words. Raise on the first.
	Alias bodies are not entered: they may legitimately mention names defined later.
	"""
	def __init__(self, registry:Registry):
		self.registry = registry

	def visit_Name(self, expr:syntax.Name): self.registry.resolve(expr.text)

	def visit_Application(self, expr:syntax.Application):
		if not isinstance(self.registry.resolve(expr.head.text), Container):
			raise NotAContainer(expr.head.text)
		self.visit(expr.argument)

	def visit_Union(self, expr):
		for m in expr.members: self.visit(m)
	visit_Intersection = visit_Union

	def visit_Optional(self, expr:syntax.Optional): self.visit(expr.inner)
	def visit_Rest(self, expr:syntax.Rest): self.visit(expr.inner)

	def visit_Arrow(self, expr:syntax.Arrow):
		for p in expr.params: self.visit(p)
		self.visit(expr.result)

	def visit_Quantified(self, expr:syntax.Quantified):
		for b in expr.constraint: self.visit(b)
		self.visit(expr.body)

	def visit_TypeExpression(self, expr): pass

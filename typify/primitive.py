"""
Build the primitive namespace: the predicates every registry starts with.
Nothing ever adds to this namespace after import.
Registries hang their own definitions off of a child space.
"""
import re, math, datetime
from collections.abc import Mapping
from numbers import Real, Integral
from boozetools.support.symtab import NameSpace
from .ontology import Definition, ABSENT

class Primitive(Definition):
	""" A name for whatever values satisfy some predicate. """
	def __init__(self, name:str, predicate):
		super().__init__(name)
		self.predicate = predicate

class Container(Primitive):
	"""
	A primitive which can also be applied to an element type, as in `array number`.
	The `members` function yields whichever parts of a value the element type constrains.
	"""
	def __init__(self, name:str, predicate, members):
		super().__init__(name, predicate)
		self.members = members

root_namespace = NameSpace(place="the built-in types")

def _built_in(name:str, predicate):
	root_namespace[name] = Primitive(name, predicate)

def _built_in_container(name:str, predicate, members):
	root_namespace[name] = Container(name, predicate, members)

def is_number(x): return isinstance(x, Real) and not isinstance(x, bool)
def is_integer(x): return isinstance(x, Integral) and not isinstance(x, bool)

def is_object(x):
	if x is None or x is ABSENT: return False
	return isinstance(x, Mapping) or hasattr(x, "__dict__") or hasattr(type(x), "__slots__")

_built_in("number", is_number)
_built_in("integer", is_integer)
_built_in("nat", lambda x: is_integer(x) and x >= 0)
_built_in("positive", lambda x: is_number(x) and x > 0)
_built_in("nonnegative", lambda x: is_number(x) and x >= 0)
_built_in("finite", lambda x: is_number(x) and math.isfinite(x))
_built_in("string", lambda x: isinstance(x, str))
_built_in("boolean", lambda x: isinstance(x, bool))
_built_in("function", callable)
_built_in("object", is_object)
_built_in("null", lambda x: x is None)
_built_in("regexp", lambda x: isinstance(x, re.Pattern))
_built_in("date", lambda x: isinstance(x, datetime.date))
_built_in("absent", lambda x: x is ABSENT)

_built_in_container("array", lambda x: isinstance(x, (list, tuple)), iter)
_built_in_container("tuple", lambda x: isinstance(x, tuple), iter)
_built_in_container("map", lambda x: isinstance(x, Mapping), lambda x: x.values())

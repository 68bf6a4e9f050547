"""
These most-fundamental classes are separate from the rest to avoid
circular imports: the syntax tree, the registry, and the matcher
all need to agree on them, but none of them should own them.
"""

class TypeExpression:
	""" Base class of every node the signature parser produces. """
	def __str__(self):
		from .syntax import Render
		return Render().visit(self)
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self)

class Definition:
	"""
	Anything a name may stand for in a registry:
	a primitive predicate, a record, or an alias.
	"""
	name: str
	def __init__(self, name:str): self.name = name
	def __repr__(self): return "{%s:%s}" % (self.name, type(self).__name__)


class _Absent:
	"""
	The one value meaning "nothing was supplied here".
	It is deliberately distinct from None: an optional parameter
	accepts ABSENT, but accepts None only if its type does.
	"""
	_instance = None
	def __new__(cls):
		if cls._instance is None:
			cls._instance = super().__new__(cls)
		return cls._instance
	def __repr__(self): return "ABSENT"
	def __bool__(self): return False
	def __reduce__(self): return "ABSENT"

ABSENT = _Absent()

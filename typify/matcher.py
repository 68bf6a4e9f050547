"""
Decide whether a value fits a type expression.

A match either fails (None) or succeeds with an Environment,
which says what each context variable has been bound to so far.
Environments are never mutated: a new binding makes a new Environment,
so a failed alternative cannot leave stray bindings behind.
"""
from collections.abc import Mapping
from boozetools.support.foundation import Visitor
from .ontology import ABSENT
from .primitive import Primitive, Container
from .registry import Registry, Record, Alias
from . import syntax
from .diagnostics import NotAContainer, CircularAliasError, Report, QUIET

class Environment:
	""" Bindings of context variables to the particular branch of their constraint each one matched. """
	def __init__(self, bindings:dict=None):
		self._bindings = bindings or {}

	def holds(self, variable:syntax.Variable) -> bool: return variable in self._bindings
	def fetch(self, variable:syntax.Variable) -> syntax.TypeExpression: return self._bindings[variable]

	def assign(self, variable:syntax.Variable, branch:syntax.TypeExpression) -> "Environment":
		assert variable not in self._bindings, variable
		bindings = dict(self._bindings)
		bindings[variable] = branch
		return Environment(bindings)

	def scoped(self, variables) -> "Environment":
		""" The same bindings, less those of the given variables: a fresh scope for them. """
		return Environment({v: b for v, b in self._bindings.items() if v not in variables})

	def unscoped(self, outer:"Environment", variables) -> "Environment":
		""" Leaving a scope: the given variables go back to whatever the outer environment said. """
		bindings = {v: b for v, b in self._bindings.items() if v not in variables}
		bindings.update((v, outer.fetch(v)) for v in variables if outer.holds(v))
		return Environment(bindings)

	def __len__(self): return len(self._bindings)
	def __repr__(self):
		return "{%s}" % ", ".join("%s: %s" % (v.key(), b) for v, b in self._bindings.items())

def _field(value, key):
	if isinstance(value, Mapping):
		return value.get(key, ABSENT)
	return getattr(value, key, ABSENT)

class Matcher(Visitor):
	"""
	One matcher per check or per call: it keeps track of which aliases
	it is in the middle of unfolding, and for which values.
	"""
	def __init__(self, registry:Registry, report:Report=QUIET):
		self.registry = registry
		self.report = report
		self._unfolding = set()

	def match(self, expr:syntax.TypeExpression, value, env:Environment=None):
		""" Return an environment extending `env` if the value fits; otherwise None. """
		return self.visit(expr, value, Environment() if env is None else env)

	def visit_Anything(self, expr, value, env):
		if value is not ABSENT: return env

	def visit_Literal(self, expr:syntax.Literal, value, env):
		if isinstance(value, bool) or value is ABSENT: return None
		if type(value) is type(expr.value) or (isinstance(value, (int, float)) and isinstance(expr.value, (int, float))):
			if value == expr.value: return env

	def visit_Name(self, expr:syntax.Name, value, env):
		return self.visit(self.registry.resolve(expr.text), value, env)

	def visit_Primitive(self, entry:Primitive, value, env):
		if entry.predicate(value): return env

	def _unfold(self, entry, value, env, how):
		# Coming back to the same definition for the same value means no progress is possible.
		key = entry.name, id(value)
		if key in self._unfolding:
			raise CircularAliasError(entry.name)
		self._unfolding.add(key)
		try: return how(entry, value, env)
		finally: self._unfolding.discard(key)

	def visit_Record(self, entry:Record, value, env):
		if value is None or value is ABSENT: return None
		if entry.closed and isinstance(value, Mapping) and not set(value.keys()) <= set(entry.fields):
			return None
		return self._unfold(entry, value, env, self._fields)

	def _fields(self, entry:Record, value, env):
		for key, field_type in entry.fields.items():
			env = self.visit(field_type, _field(value, key), env)
			if env is None:
				self.report.trace("Field %r of %s does not fit record %r" % (key, type(value).__name__, entry.name))
				return None
		return env

	def visit_Alias(self, entry:Alias, value, env):
		return self._unfold(entry, value, env, lambda e, v, en: self.visit(e.body(), v, en))

	def visit_Application(self, expr:syntax.Application, value, env):
		head = self.registry.resolve(expr.head.text)
		if not isinstance(head, Container):
			raise NotAContainer(expr.head.text)
		if not head.predicate(value): return None
		for member in head.members(value):
			env = self.visit(expr.argument, member, env)
			if env is None: return None
		return env

	def visit_Variable(self, expr:syntax.Variable, value, env):
		if env.holds(expr):
			return self.visit(env.fetch(expr), value, env)
		for branch in expr.branches:
			result = self.visit(branch, value, env)
			if result is not None:
				self.report.trace("Context variable %r binds to %s" % (expr.key(), branch))
				return result.assign(expr, branch)

	def visit_Union(self, expr:syntax.Union, value, env):
		for member in expr.members:
			result = self.visit(member, value, env)
			if result is not None: return result

	def visit_Intersection(self, expr:syntax.Intersection, value, env):
		for member in expr.members:
			env = self.visit(member, value, env)
			if env is None: return None
		return env

	def visit_Optional(self, expr:syntax.Optional, value, env):
		if value is ABSENT: return env
		return self.visit(expr.inner, value, env)

	def visit_Rest(self, expr:syntax.Rest, value, env):
		return self.visit(expr.inner, value, env)

	def visit_Arrow(self, expr:syntax.Arrow, value, env):
		# There is no peeking inside a function value to see its signature.
		if callable(value): return env

	def visit_Quantified(self, expr:syntax.Quantified, value, env):
		# Every time a quantified type is entered, its variables start out unbound.
		result = self.visit(expr.body, value, env.scoped(expr.variables))
		if result is not None:
			return result.unscoped(env, expr.variables)

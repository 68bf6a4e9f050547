"""
The set of parse-nodes for type expressions.
The parser calls these constructors with subordinate semantic-values in a bottom-up tree transduction.
Whether a bare name means a primitive, a record, or an alias is not the parser's business:
the registry decides that when a value is actually matched.
"""
from typing import Sequence
from boozetools.support.foundation import Visitor
from .ontology import TypeExpression

class Name(TypeExpression):
	""" Reference to a primitive, record, or alias: resolved at match time. """
	def __init__(self, text:str, slice:slice=None):
		assert isinstance(text, str)
		self.text = text
		self.slice = slice
	def key(self): return self.text

class Literal(TypeExpression):
	""" The type inhabited by exactly one value, e.g. `1` or `'up'`. """
	def __init__(self, value, slice:slice=None):
		self.value = value
		self.slice = slice

class Anything(TypeExpression):
	""" Written `*`. Everything but ABSENT. """

class Variable(TypeExpression):
	"""
	A context variable. Its branches are the alternatives of its declared constraint.
	Each occurrence in one signature is the very same object, so the
	binding environment can key on identity.
	"""
	def __init__(self, name:Name, branches:Sequence[TypeExpression]):
		self.name = name
		self.branches = tuple(branches)
	def key(self): return self.name.text

class Union(TypeExpression):
	def __init__(self, members:Sequence[TypeExpression]):
		assert len(members) > 1
		self.members = tuple(members)

class Intersection(TypeExpression):
	def __init__(self, members:Sequence[TypeExpression]):
		assert len(members) > 1
		self.members = tuple(members)

class Optional(TypeExpression):
	def __init__(self, inner:TypeExpression): self.inner = inner

class Rest(TypeExpression):
	def __init__(self, inner:TypeExpression): self.inner = inner

class Application(TypeExpression):
	""" Juxtaposition: a container type applied to the type of its members. """
	def __init__(self, head:Name, argument:TypeExpression):
		assert isinstance(head, Name)
		self.head, self.argument = head, argument

class Arrow(TypeExpression):
	def __init__(self, params:Sequence[TypeExpression], result:TypeExpression):
		self.params = tuple(params)
		self.result = result
	def rest(self):
		""" The rest-parameter's element type, or None. """
		if self.params and isinstance(self.params[-1], Rest):
			return self.params[-1].inner
	def fixed(self) -> tuple[TypeExpression, ...]:
		""" The parameters which consume exactly one argument each. """
		return self.params[:-1] if self.rest() is not None else self.params

class Quantified(TypeExpression):
	def __init__(self, variables:Sequence[Variable], constraint:Sequence[TypeExpression], body:TypeExpression):
		self.variables = tuple(variables)
		self.constraint = tuple(constraint)
		self.body = body

#######################################################################

# Binding strength, loosest first, for putting back only the parentheses that matter.
ARROW, APPLY, UNION, CONJ, POSTFIX, ATOM = range(6)

class Render(Visitor):
	""" Return the canonical text of a type expression. """
	def visit(self, expr, context=ARROW):
		text, strength = super().visit(expr)
		return text if strength >= context else "(%s)" % text

	def visit_Name(self, expr:Name): return expr.text, ATOM
	def visit_Variable(self, expr:Variable): return expr.name.text, ATOM
	def visit_Literal(self, expr:Literal): return repr(expr.value), ATOM
	def visit_Anything(self, expr:Anything): return "*", ATOM

	def visit_Union(self, expr:Union):
		return "|".join(self.visit(m, CONJ) for m in expr.members), UNION

	def visit_Intersection(self, expr:Intersection):
		return "&".join(self.visit(m, POSTFIX) for m in expr.members), CONJ

	def visit_Optional(self, expr:Optional): return self.visit(expr.inner, POSTFIX)+"?", POSTFIX
	def visit_Rest(self, expr:Rest): return self.visit(expr.inner, POSTFIX)+"...", POSTFIX

	def visit_Application(self, expr:Application):
		return "%s %s" % (expr.head.text, self.visit(expr.argument, APPLY)), APPLY

	def visit_Arrow(self, expr:Arrow):
		parts = [self.visit(p, APPLY) for p in expr.params]
		parts.append(self.visit(expr.result, APPLY))
		if not expr.params: return "-> " + parts[0], ARROW
		return " -> ".join(parts), ARROW

	def visit_Quantified(self, expr:Quantified):
		groups = []
		while isinstance(expr, Quantified):
			groups.append(self._declaration(expr))
			expr = expr.body
		return "%s => %s" % (", ".join(groups), self.visit(expr)), ARROW

	def _declaration(self, expr:Quantified):
		names = ", ".join(v.name.text for v in expr.variables)
		# A lone union branch keeps its parentheses: they are what make it one branch.
		single = len(expr.constraint) == 1 and not isinstance(expr.constraint[0], Union)
		constraint = "|".join(self.visit(b, APPLY if single else CONJ) for b in expr.constraint)
		return "%s : %s" % (names, constraint)

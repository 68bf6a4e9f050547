"""
Turn signature text into a syntax tree, or explain politely why not.
"""
import sys, functools, threading
from collections import Counter
from pathlib import Path

from boozetools.macroparse.runtime import TypicalApplication, make_tables
from boozetools.scanning.engine import IterableScanner
from boozetools.support.foundation import Visitor
from . import syntax
from .diagnostics import SignatureSyntaxError

_tables = make_tables(Path(__file__).parent/"signature.md")

class SignatureParser(TypicalApplication):

	def scan_ignore(self, yy: IterableScanner): pass

	@staticmethod
	def scan_punctuation(yy: IterableScanner):
		yy.token(sys.intern(yy.match()), yy.slice())

	@staticmethod
	def scan_word(yy: IterableScanner): yy.token("name", syntax.Name(sys.intern(yy.match()), yy.slice()))

	@staticmethod
	def scan_integer(yy: IterableScanner): yy.token("literal", syntax.Literal(int(yy.match()), yy.slice()))

	@staticmethod
	def scan_real(yy: IterableScanner): yy.token("literal", syntax.Literal(float(yy.match()), yy.slice()))

	@staticmethod
	def scan_string(yy: IterableScanner): yy.token("literal", syntax.Literal(yy.match()[1:-1], yy.slice()))

	@staticmethod
	def parse_first(item): return [item]
	@staticmethod
	def parse_more(some, another):
		some.append(another)
		return some

	@staticmethod
	def default_parse(ctor, *args):
		return getattr(syntax, ctor)(*args)

	@staticmethod
	def parse_anything(): return syntax.Anything()
	@staticmethod
	def parse_rest_of_anything(): return syntax.Rest(syntax.Anything())
	@staticmethod
	def parse_nullary(result): return syntax.Arrow((), result)

	@staticmethod
	def parse_union(alternatives):
		if len(alternatives) == 1: return alternatives[0]
		return syntax.Union(alternatives)

	@staticmethod
	def parse_intersect(conj, postfix):
		if isinstance(conj, syntax.Intersection):
			return syntax.Intersection(conj.members + (postfix,))
		return syntax.Intersection([conj, postfix])

	@staticmethod
	def parse_context(names, branches): return names, branches

	def parse_quantify(self, groups, body):
		seen = {}
		for names, branches in groups:
			for name in names:
				if name.text in seen:
					self.complain(name.slice, "Context variable %r is declared twice" % name.text)
				seen[name.text] = name
		scope = {}
		abstraction = Abstraction(scope, self.complain)
		nested = []
		for names, branches in groups:
			# Each group may mention variables of the groups before it.
			branches = tuple(abstraction.visit(b) for b in branches)
			variables = [syntax.Variable(name, branches) for name in names]
			scope.update((v.key(), v) for v in variables)
			nested.append((variables, branches))
		body = abstraction.visit(body)
		for key, name in seen.items():
			if not abstraction.uses[key]:
				self.complain(name.slice, "Context variable %r is never used" % key)
		for variables, branches in reversed(nested):
			body = syntax.Quantified(variables, branches, body)
		return body

	def complain(self, span, message):
		raise SignatureSyntaxError(message, self.source.content, span)

	def unexpected_token(self, kind, semantic, pds):
		expected = " ".join(self.expected_tokens(pds))
		found = self.source.content[self.yy.slice()] or kind
		self.complain(self.yy.slice(), "Unexpected %r; expected one of: %s" % (found, expected))

	def unexpected_eof(self, pds):
		end = len(self.source.content)
		expected = " ".join(self.expected_tokens(pds))
		self.complain(slice(end, end), "Signature ends too soon; expected one of: %s" % expected)

	def on_stuck(self, yy: IterableScanner):
		self.complain(slice(yy.left, yy.left+1), "Unexpected character %r" % self.source.content[yy.left])

	def exception_parsing(self, ex: Exception, constructor_id:int, args):
		raise ex from None

	def log_error(self, *parts):
		# Every error path above raises instead of logging.
		pass

class Abstraction(Visitor):
	"""
	Replace each mention of a declared context variable by the one shared
	Variable object, and count the mentions. Everything else is rebuilt as-is.
	"""
	def __init__(self, scope:dict, complain):
		self.scope = scope
		self.complain = complain
		self.uses = Counter()

	def visit_Name(self, expr:syntax.Name):
		if expr.text in self.scope:
			self.uses[expr.text] += 1
			return self.scope[expr.text]
		return expr

	def visit_TypeExpression(self, expr): return expr

	def visit_Union(self, expr:syntax.Union):
		return syntax.Union([self.visit(m) for m in expr.members])
	def visit_Intersection(self, expr:syntax.Intersection):
		return syntax.Intersection([self.visit(m) for m in expr.members])
	def visit_Optional(self, expr:syntax.Optional): return syntax.Optional(self.visit(expr.inner))
	def visit_Rest(self, expr:syntax.Rest): return syntax.Rest(self.visit(expr.inner))

	def visit_Application(self, expr:syntax.Application):
		if expr.head.text in self.scope:
			self.complain(expr.head.slice, "Context variable %r cannot take an element type" % expr.head.text)
		return syntax.Application(expr.head, self.visit(expr.argument))

	def visit_Arrow(self, expr:syntax.Arrow):
		return syntax.Arrow([self.visit(p) for p in expr.params], self.visit(expr.result))

	def visit_Quantified(self, expr:syntax.Quantified):
		# An inner declaration already claimed its own names; outer ones may still appear in its body.
		return syntax.Quantified(expr.variables, expr.constraint, self.visit(expr.body))

class RestPlacement(Visitor):
	""" A rest marker belongs only on the last parameter of an arrow. """
	def __init__(self, text:str):
		self.text = text

	def visit_Rest(self, expr:syntax.Rest, allowed=False):
		if not allowed:
			raise SignatureSyntaxError("A rest marker '...' may only go on the last parameter", self.text)
		self.visit(expr.inner)

	def visit_Arrow(self, expr:syntax.Arrow, allowed=False):
		last = len(expr.params) - 1
		for i, p in enumerate(expr.params):
			self.visit(p, i == last)
		self.visit(expr.result)

	def visit_Quantified(self, expr:syntax.Quantified, allowed=False):
		for b in expr.constraint: self.visit(b)
		self.visit(expr.body)

	def visit_Union(self, expr, allowed=False):
		for m in expr.members: self.visit(m)
	visit_Intersection = visit_Union

	def visit_Optional(self, expr:syntax.Optional, allowed=False): self.visit(expr.inner)
	def visit_Application(self, expr:syntax.Application, allowed=False): self.visit(expr.argument)
	def visit_TypeExpression(self, expr, allowed=False): pass

_parser = SignatureParser(_tables)
_lock = threading.Lock()

@functools.lru_cache(maxsize=512)
def parse_signature(text:str) -> syntax.TypeExpression:
	"""
	Parse and validate one signature. Raises SignatureSyntaxError.
	The tree is immutable in practice, so identical texts share one.
	"""
	if not isinstance(text, str):
		raise TypeError("A signature must be a string, not %s" % type(text).__name__)
	with _lock:
		expr = _parser.parse(text)
	RestPlacement(text).visit(expr)
	return expr

"""
Check a whole call against an arrow signature: the arguments on the way in,
and the return value on the way out, with one environment spanning both.
"""
from typing import Sequence
from .ontology import ABSENT
from . import syntax
from .front_end import parse_signature
from .registry import Registry
from .matcher import Matcher, Environment
from .diagnostics import (
	Report, QUIET, SignatureSyntaxError,
	ArgumentTypeMismatch, TooFewArguments, TooManyArguments, ReturnTypeMismatch,
)

def arrow_of(expr:syntax.TypeExpression):
	while isinstance(expr, syntax.Quantified):
		expr = expr.body
	if isinstance(expr, syntax.Arrow):
		return expr

class CallMatcher:
	"""
	Holds a parsed signature for one function.
	Each call gets a fresh Matcher and a fresh Environment, so this object
	is safe to share between threads once the registry stops changing.
	"""
	def __init__(self, registry:Registry, signature:str, *, name:str="<function>", report:Report=QUIET):
		self.registry = registry
		self.signature = signature
		self.name = name
		self.report = report
		self.expr = parse_signature(signature)
		self.arrow = arrow_of(self.expr)
		if self.arrow is None:
			raise SignatureSyntaxError("This is not a function signature; it has no '->'", signature)
		self.fixed = self.arrow.fixed()
		self.rest = self.arrow.rest()
		self._verified = False

	def _verify(self):
		# Deferred to the first call: the names might be defined after the function is.
		if not self._verified:
			self.registry.verify(self.expr)
			self._verified = True

	def _expected(self, param, env:Environment) -> str:
		if isinstance(param, syntax.Variable) and env.holds(param):
			return "%s (bound to %s)" % (param, env.fetch(param))
		return str(param)

	def check_call(self, args:Sequence) -> Environment:
		""" Raise a CallError if the arguments do not fit; otherwise return the bindings. """
		self._verify()
		matcher = Matcher(self.registry, self.report)
		env = Environment()
		for position, param in enumerate(self.fixed):
			supplied = position < len(args)
			value = args[position] if supplied else ABSENT
			result = matcher.match(param, value, env)
			if result is None:
				if supplied:
					error = ArgumentTypeMismatch(self.name, self.signature, position, self._expected(param, env), value)
				else:
					error = TooFewArguments(self.name, self.signature, len(args), position+1)
				raise self.report.complain(error)
			env = result
		if self.rest is None and len(args) > len(self.fixed):
			raise self.report.complain(TooManyArguments(self.name, self.signature, len(args), len(self.fixed)))
		if self.rest is not None:
			for position in range(len(self.fixed), len(args)):
				value = args[position]
				result = matcher.match(self.rest, value, env)
				if result is None:
					error = ArgumentTypeMismatch(self.name, self.signature, position, self._expected(self.rest, env), value)
					raise self.report.complain(error)
				env = result
		self.report.trace(self.name, "called with bindings", env)
		return env

	def check_return(self, env:Environment, value):
		""" Raise ReturnTypeMismatch unless the value fits the result type under the call's bindings. """
		result = Matcher(self.registry, self.report).match(self.arrow.result, value, env)
		if result is None:
			raise self.report.complain(ReturnTypeMismatch(self.name, self.signature, self._expected(self.arrow.result, env), value))
		return value

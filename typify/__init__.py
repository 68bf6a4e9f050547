"""
Runtime type checking for Python callables, driven by compact textual signatures.

    @typify("a : number|string => a -> a")
    def double(x): return x + x

The module-level functions act on one default registry.
Call `create()` for a registry (and facade) of your own.
"""
from .ontology import ABSENT
from .diagnostics import (
	Report, describe, TypifyError, SignatureSyntaxError, UnknownTypeError, DuplicateTypeError,
	InvalidTypeName, NotAContainer, CircularAliasError,
	CallError, ArgumentTypeMismatch, TooFewArguments, TooManyArguments, ReturnTypeMismatch,
)
from .front_end import parse_signature
from .registry import Registry
from .matcher import Matcher
from .checked import wrap

_MISSING = object()

class Typify:
	""" One registry, plus the means to check values and calls against it. """
	def __init__(self, registry:Registry=None, *, verbose:int=0):
		self.registry = registry or Registry(place="a registry made by create()")
		self.report = Report(verbose=verbose)

	def __call__(self, signature:str, fn=None):
		""" Wrap `fn` in a signature check; without `fn`, return a decorator that does. """
		if fn is None:
			return lambda fn: wrap(self.registry, signature, fn, self.report)
		return wrap(self.registry, signature, fn, self.report)

	def check(self, text:str, value=_MISSING):
		"""
		Does the value fit the type? Unknown names raise UnknownTypeError rather than answering False.
		Without a value, return a predicate.
		"""
		expr = parse_signature(text)
		self.registry.verify(expr)
		if value is _MISSING:
			return lambda value: self._fits(text, expr, value)
		return self._fits(text, expr, value)

	def _fits(self, text, expr, value) -> bool:
		fits = Matcher(self.registry, self.report).match(expr, value) is not None
		if not fits: self.report.info("%s does not fit %s" % (describe(value), text))
		return fits

	def type(self, name:str, predicate): return self.registry.type(name, predicate)
	def container(self, name:str, predicate, members=iter): return self.registry.container(name, predicate, members)
	def instance(self, name:str, cls): return self.registry.instance(name, cls)
	def record(self, name:str, fields, closed:bool=False): return self.registry.record(name, fields, closed)
	def alias(self, name:str, text:str): return self.registry.alias(name, text)

	def create(self, *, verbose:int=0) -> "Typify":
		return create(verbose=verbose)

def create(*, verbose:int=0) -> Typify:
	""" A fresh, independent registry behind a fresh facade. """
	return Typify(verbose=verbose)

default = Typify(Registry())

typify = default.__call__
check = default.check
type = default.type
container = default.container
instance = default.instance
record = default.record
alias = default.alias

"""
Everything that can go wrong, and the means to say so politely.

Signature problems are found when a signature is parsed or registered.
Call problems are found each time a checked function is called, and
surface as exceptions: nothing here is ever downgraded to a warning.
"""
import sys, reprlib
from typing import Any
from boozetools.parsing.interface import ParseError
from boozetools.support.failureprone import SourceText

_describe = reprlib.Repr()
_describe.maxstring = 40
_describe.maxother = 40

def describe(value:Any) -> str:
	""" A short, printable rendition of some arbitrary value. """
	return "%s %s" % (type(value).__name__, _describe.repr(value))

class TypifyError(Exception):
	""" Base of everything this package raises on purpose. """

class SignatureSyntaxError(TypifyError, ParseError):
	""" The text of a signature does not follow the grammar (or its few extra rules). """
	def __init__(self, message:str, text:str=None, span:slice=None):
		super().__init__(message, text, span)
		self.message, self.text, self.span = message, text, span
	def __str__(self):
		if self.text is None:
			return self.message
		if self.span is None:
			return "%s in signature %r" % (self.message, self.text)
		return SourceText(self.text).complaint(self.span, self.message)

class UnknownTypeError(TypifyError, LookupError):
	def __init__(self, name:str, place:str):
		super().__init__(name, place)
		self.name, self.place = name, place
	def __str__(self): return "No type called %r is known to %s." % (self.name, self.place)

class DuplicateTypeError(TypifyError, KeyError):
	def __init__(self, name:str, place:str):
		super().__init__(name, place)
		self.name, self.place = name, place
	def __str__(self): return "The name %r is already defined in %s." % (self.name, self.place)

class InvalidTypeName(TypifyError, ValueError):
	pass

class NotAContainer(TypifyError, TypeError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def __str__(self): return "%r does not take an element type; it is not a container." % self.name

class CircularAliasError(TypifyError, RecursionError):
	def __init__(self, name:str):
		super().__init__(name)
		self.name = name
	def __str__(self):
		return "Type %r came back around to the same value without looking inside it." % self.name

#######################################################################

class CallError(TypifyError, TypeError):
	""" Base of the failures a checked function raises at call time. """
	def __init__(self, function:str, signature:str, message:str):
		super().__init__(function, signature, message)
		self.function, self.signature, self.message = function, signature, message
	def __str__(self):
		return "%s (signature %s): %s" % (self.function, self.signature, self.message)

class ArgumentTypeMismatch(CallError):
	def __init__(self, function, signature, position:int, expected:str, value):
		message = "argument %d should be %s, but got %s" % (position+1, expected, describe(value))
		super().__init__(function, signature, message)
		self.position, self.expected, self.value = position, expected, value

class TooFewArguments(CallError):
	def __init__(self, function, signature, given:int, needed:int):
		message = "needs at least %d argument(s), but got %d" % (needed, given)
		super().__init__(function, signature, message)
		self.given, self.needed = given, needed

class TooManyArguments(CallError):
	def __init__(self, function, signature, given:int, allowed:int):
		message = "takes at most %d argument(s), but got %d" % (allowed, given)
		super().__init__(function, signature, message)
		self.given, self.allowed = given, allowed

class ReturnTypeMismatch(CallError):
	def __init__(self, function, signature, expected:str, value):
		message = "should return %s, but returned %s" % (expected, describe(value))
		super().__init__(function, signature, message)
		self.expected, self.value = expected, value

#######################################################################

class Report:
	"""
	Commentary on the checking process, for a human with a terminal.
	Quiet unless verbose: the exceptions above already carry the verdict.
	"""
	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.

	@property
	def verbose(self) -> int: return self._verbose

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def trace(self, *args):
		""" For the chattiest setting only. """
		if self._verbose > 1:
			print(*args, file=sys.stderr)

	def complain(self, error:TypifyError) -> TypifyError:
		""" Mention the problem if verbose, then hand it back for raising. """
		self.info(type(error).__name__+":", error)
		return error

QUIET = Report()

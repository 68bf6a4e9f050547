"""
The adapter that puts a CallMatcher in front of an ordinary callable.
"""
import functools, inspect
from .registry import Registry
from .calling import CallMatcher
from .diagnostics import Report, QUIET

def _positional(fn, args, kwargs):
	"""
	Keyword arguments are checked in the position where the function would receive them.
	Whatever lands in keyword-only parameters or in **kwargs has no position, so it goes unchecked.
	So do all keyword arguments to a callable that has no visible signature.
	"""
	if not kwargs: return args
	try: sig = inspect.signature(fn)
	except (TypeError, ValueError): return args
	return sig.bind(*args, **kwargs).args

def wrap(registry:Registry, signature:str, fn, report:Report=QUIET):
	"""
	Return a callable which behaves like `fn` except that it raises a CallError
	when the arguments or the result do not fit the signature.
	The function never runs if the arguments do not fit.
	"""
	if not callable(fn):
		raise TypeError("Cannot check something which is not callable: %r" % (fn,))
	name = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
	call_matcher = CallMatcher(registry, signature, name=name, report=report)

	@functools.wraps(fn)
	def checked(*args, **kwargs):
		env = call_matcher.check_call(_positional(fn, args, kwargs))
		return call_matcher.check_return(env, fn(*args, **kwargs))

	checked.signature = signature
	return checked

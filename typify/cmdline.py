"""
This checks Python values against typify signatures from the command line.

{0}

For example:

    typify "number|string" 12

exits with status 0 because 12 is a number, and

    typify "number -> number -> number" 1 "'two'"

exits with status 1, explaining that the second argument is not a number.
A bad signature exits with status 2. Values are Python literals.

    typify -h

will explain all the arguments.
"""
import sys, ast, argparse

parser = argparse.ArgumentParser(
	prog="typify",
	description="Check Python literal values against a typify signature.",
)
parser.add_argument("signature", help="try 'a : number|string => a -> a' for example.")
parser.add_argument("values", nargs="*", help="Python literals, as for ast.literal_eval.")
parser.add_argument('-p', "--parse", action="store_true", help="Print the signature as parsed, then stop.")
parser.add_argument('-a', "--alias", action="append", default=[], metavar="NAME=EXPR", help="Define an alias first. May be repeated.")
parser.add_argument('-v', "--verbose", action="count", help="Explain more. May be repeated.")

def run(args):
	from . import create, TypifyError, CallError
	from .front_end import parse_signature
	from .calling import CallMatcher, arrow_of
	typ = create(verbose=args.verbose)
	try:
		for definition in args.alias:
			name, eq, text = definition.partition("=")
			if not eq:
				print("An alias needs the form NAME=EXPR, not %r" % definition, file=sys.stderr)
				return 2
			typ.alias(name.strip(), text.strip())
		expr = parse_signature(args.signature)
		if args.parse:
			print(expr)
			return 0
		try: values = [ast.literal_eval(v) for v in args.values]
		except (ValueError, SyntaxError) as ex:
			print("Cannot read a value:", ex, file=sys.stderr)
			return 2
		if len(values) == 1 and arrow_of(expr) is None:
			if typ.check(args.signature, values[0]):
				return 0
			print("No: %r does not fit %s" % (values[0], expr), file=sys.stderr)
			return 1
		CallMatcher(typ.registry, args.signature, name="command line", report=typ.report).check_call(values)
		typ.report.info("Arguments fit", expr)
		return 0
	except CallError as ex:
		print(ex, file=sys.stderr)
		return 1
	except TypifyError as ex:
		print(ex, file=sys.stderr)
		return 2

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))

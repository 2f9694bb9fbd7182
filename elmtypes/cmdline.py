"""
This normalizes the type declarations of an Elm module.

{0}

For example:

    elmtypes src/Api.elm

will print every type alias and custom type in src/Api.elm in normal form,
or else explain every reason why not.

    elmtypes -h

will explain all the arguments.
"""
import sys, json, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="elmtypes",
	description="Normalize and validate the type declarations of an Elm module.",
)
parser.add_argument("source", help="path to an Elm source file")
parser.add_argument('-v', "--verbose", action="count", help="Mention progress on the way.")
parser.add_argument('-j', "--json", action="store_true", help="Print the result as JSON instead of Elm-like text.")
parser.add_argument('-m', "--max-issues", type=int, default=None, help="Give up after this many problems.")

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .driver import check_file
	report = Report(verbose=args.verbose, max_issues=args.max_issues)
	try:
		valid_types = check_file(Path.cwd() / args.source, report)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after %d problems." % args.max_issues, file=sys.stderr)
		return 1
	if valid_types is None:
		assert report.sick()
		report.complain_to_console()
		return 1
	if args.json:
		from .export import export
		print(json.dumps(export(valid_types), indent=2))
	else:
		for vt in valid_types: print(vt)
	return 0

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))

"""
This is a driver for the lazybones call-by-need evaluator.

{0}

There is no parser, so the programs come from a small built-in collection.
For example:

    lazybones factorial --arg 6

will force the factorial program on 6 and print the result.

    lazybones --list

will show what else is on offer, and

    lazybones -h

will explain all the arguments.
"""
import sys, argparse, inspect

parser = argparse.ArgumentParser(
	prog="lazybones",
	description="Force a canned program with the lazybones call-by-need evaluator.",
)
parser.add_argument("program", nargs="?", help="try factorial, for example.")
parser.add_argument('-l', "--list", action="store_true", help="List the available programs and stop.")
parser.add_argument('-a', "--arg", type=int, help="Integer argument, for programs that take one.")
parser.add_argument('-v', "--verbose", action="count", help="Chatter on stderr. Twice to trace every step.")
parser.add_argument('-d', "--debug", action="store_true", help="Give up after a modest number of steps, in case the program never finishes.")
parser.add_argument("--step-limit", type=int, help="Give up after this many steps.")

def run(args):
	from .diagnostics import Report, EvaluationError
	from .context import Context
	from .examples import PROGRAMS
	from .scheduler import Scheduler, DEBUG_STEP_LIMIT
	if args.list:
		for name, fn in PROGRAMS.items():
			print("%-20s %s"%(name, (fn.__doc__ or "").strip()))
		return
	if args.program is None:
		print(__doc__.strip().format(parser.format_usage()))
		return
	try: build = PROGRAMS[args.program]
	except KeyError:
		print("There's no program called %r. Try --list."%args.program, file=sys.stderr)
		return 1
	if args.arg is None: program = build()
	elif inspect.signature(build).parameters: program = build(args.arg)
	else:
		print("%s takes no argument."%args.program, file=sys.stderr)
		return 1

	report = Report(verbose=args.verbose)
	step_limit = args.step_limit
	if step_limit is None and args.debug: step_limit = DEBUG_STEP_LIMIT
	scheduler = Scheduler(step_limit=step_limit, report=report)
	report.info("Forcing", program)
	try: result = scheduler.force(Context.empty(), program)
	except EvaluationError as ex:
		report.complain(ex, program)
		return 1
	print(result)
	if report.sick(): return 1

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))

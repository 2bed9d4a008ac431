"""
A small call-by-need evaluator for an untyped calculus with pairs, integers,
closures, a few primitives, and case-expressions.

Build an expression, then `force(Context.empty(), expr)`.
"""
from .diagnostics import (
	EvaluationError, TypeAssertion, UnboundSymbol, InvalidPattern,
	MalformedCase, ArityMismatch, UnknownPrimitive, Report,
)
from .context import Context
from .expressions import (
	Expression, Op, Nil, Pair, Fst, Snd, Int, Sym, Chan, Prim, Fun, Closure, App, Case,
	is_value, is_whnf, is_normal_form, same, clone, example, of_type,
)
from .patterns import matches
from .reducer import evaluate, eval_step
from .scheduler import Scheduler, WorkItem, force, DEBUG_STEP_LIMIT

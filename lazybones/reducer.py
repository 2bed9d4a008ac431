"""
The reduction semantics: one step at a time, never blocking.

`eval_step` takes one step of reduction, which need not arrive at a value.
Where a step needs some sub-expression evaluated, it calls `evaluate`,
which hands back either the value (if that is already known) or else a
channel standing in for the value, having left behind a work item on the
scheduler to carry the computation forward. A step that finds some needed
part still pending just rebuilds itself around the partial results,
and the scheduler will try it again on a later pass.
"""
import math
from typing import Sequence
from .context import Context
from .expressions import (
	Expression, Op, Nil, Pair, Fst, Snd, Projection, Int, Sym, Chan, Prim, Fun, Closure, App, Case,
	is_value, is_whnf, same, clone,
)
from .patterns import matches
from .diagnostics import ArityMismatch, MalformedCase, UnknownPrimitive

def evaluate(scheduler:"Scheduler", ctx:Context, e:Expression) -> Expression:
	"""
	Returns immediately: a value if e already is one,
	or a channel which will eventually receive the value.
	"""
	if is_value(e): return e
	if isinstance(e, Chan): return e.resolved if e.is_resolved() else e
	chan = Chan(ctx, e)

	def thunk() -> bool:
		pending = chan.pending
		result = eval_step(scheduler, chan.ctx, pending)
		if result is not pending: pending.remember(result)
		return chan.offer(result)

	scheduler.spawn(thunk, chan)
	return chan

def eval_step(scheduler:"Scheduler", ctx:Context, e:Expression) -> Expression:
	assert isinstance(ctx, Context), type(ctx)
	try: fn = STEP[type(e)]
	except KeyError: raise NotImplementedError(type(e), e)
	return fn(e, ctx, scheduler)

###############################################################################

def _step_nil(expr:Nil, ctx, scheduler): return expr
def _step_pair(expr:Pair, ctx, scheduler): return expr
def _step_int(expr:Int, ctx, scheduler): return expr
def _step_prim(expr:Prim, ctx, scheduler): return expr
def _step_closure(expr:Closure, ctx, scheduler): return expr

def _step_sym(expr:Sym, ctx:Context, scheduler):
	# Copy, so that no two uses of a binding share a node.
	return clone(ctx.lookup(expr.name))

def _step_fun(expr:Fun, ctx:Context, scheduler):
	return Closure(ctx, expr.params, expr.body, expr.fixpoint)

def _step_chan(expr:Chan, ctx, scheduler):
	return expr.resolved if expr.is_resolved() else expr

def _project(expr:Projection, ctx:Context, scheduler):
	operand = evaluate(scheduler, ctx, expr.operand)
	if isinstance(operand, Pair): return expr.pick(operand)
	return type(expr)(operand)

def _step_fst(expr:Fst, ctx:Context, scheduler): return _project(expr, ctx, scheduler)
def _step_snd(expr:Snd, ctx:Context, scheduler): return _project(expr, ctx, scheduler)

def _step_app(expr:App, ctx:Context, scheduler):
	callee = evaluate(scheduler, ctx, expr.callee)
	args = tuple(evaluate(scheduler, ctx, a) for a in expr.args)
	if isinstance(callee, Prim):
		return _apply_primitive(expr, callee, args)
	if isinstance(callee, Closure):
		return _apply_closure(expr, callee, args, scheduler)
	return App(callee, args)

def _step_case(expr:Case, ctx:Context, scheduler):
	scrutinee = evaluate(scheduler, ctx, expr.scrutinee)
	if not is_whnf(scrutinee): return Case(scrutinee, expr.branches)
	branches = expr.branches
	last = len(branches) - 1
	for i in range(0, len(branches), 2):
		if i == last:
			return evaluate(scheduler, ctx, branches[i])
		if matches(branches[i], scrutinee):
			return evaluate(scheduler, ctx, branches[i+1])
	raise MalformedCase(expr)

###############################################################################

def _apply_closure(expr:App, closure:Closure, args:Sequence[Expression], scheduler):
	if len(args) > len(closure.params):
		raise ArityMismatch(expr, "takes %d, given %d"%(len(closure.params), len(args)))
	bindings = {}
	if closure.fixpoint is not None:
		bindings[closure.fixpoint] = closure
	# Under-application leaves the remaining parameters unbound.
	bindings.update((param.name, arg) for param, arg in zip(closure.params, args))
	return evaluate(scheduler, closure.ctx.extend(bindings), closure.body)

def _apply_primitive(expr:App, prim:Prim, args:Sequence[Expression]):
	try: arity, fn = PRIMITIVES[prim.op]
	except KeyError: raise UnknownPrimitive(prim)
	if arity is not None and len(args) != arity:
		raise ArityMismatch(expr, "%s takes %d, given %d"%(prim, arity, len(args)))
	return fn(prim, args)

def _arithmetic(fn):
	def apply(prim:Prim, args:Sequence[Expression]):
		# Not yet: some argument is still on its way.
		if not all(isinstance(a, Int) for a in args): return App(prim, args)
		return Int(fn([a.value for a in args]))
	return apply

def _equality(prim:Prim, args:Sequence[Expression]):
	if not all(map(is_value, args)): return App(prim, args)
	return Int(1) if same(args[0], args[1]) else Nil()

PRIMITIVES = {
	Op.ADD: (None, _arithmetic(sum)),
	Op.MUL: (None, _arithmetic(math.prod)),
	Op.SUB: (2, _arithmetic(lambda xs: xs[0] - xs[1])),
	Op.NEG: (1, _arithmetic(lambda xs: -xs[0])),
	Op.EQ: (2, _equality),
}

STEP = {}
for _k, _v in list(globals().items()):
	if _k.startswith("_step_"):
		_t = _v.__annotations__["expr"]
		assert isinstance(_t, type), (_k, _t)
		STEP[_t] = _v

# Every concrete kind of expression gets a step.
assert set(STEP) == {Nil, Pair, Fst, Snd, Int, Sym, Chan, Prim, Fun, Closure, App, Case}, set(STEP)

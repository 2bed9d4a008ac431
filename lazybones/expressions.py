"""
The expression data model: one class per kind of term.

Each kind checks the shape of its fields at construction time and complains
with a TypeAssertion if something is amiss. After that, fields do not change,
with two exceptions: the per-node result cache (`cached`), which the evaluator
fills in as a courtesy to anyone watching, and the state of a channel, which
is after all a future and must eventually learn its value.

No kind of expression knows how to evaluate itself. That is the reducer's job.
"""
import enum
from typing import Callable, Optional, Sequence
from boozetools.support.foundation import Visitor
from .context import Context
from .diagnostics import TypeAssertion

class Op(enum.Enum):
	ADD = "ADD"
	MUL = "MUL"
	SUB = "SUB"
	NEG = "NEG"
	EQ = "EQ"

WATCHER = Callable[["Expression", "Expression"], None]

class Expression:
	"""
	Abstract base for the closed family of expression kinds.
	Python's == is structural equality for expressions.
	Since the cache slot mutates, expressions are deliberately unhashable.
	"""
	cached: Optional["Expression"]
	_watchers: list[WATCHER]

	def __init__(self):
		self.cached = None
		self._watchers = []

	def children(self) -> tuple["Expression", ...]:
		""" Structural sub-expressions in display order, for anything that wants to walk the tree. """
		return ()

	def structure(self) -> tuple:
		""" The fields which participate in structural equality. """
		raise NotImplementedError(type(self))

	def is_cached(self) -> bool: return self.cached is not None

	def remember(self, value:"Expression"):
		self.cached = value
		for watcher in self._watchers: watcher(self, value)

	def watch(self, callback:WATCHER):
		""" Be told whenever the evaluator caches a result on this particular node. """
		self._watchers.append(callback)

	def __eq__(self, other):
		if not isinstance(other, Expression): return NotImplemented
		return same(self, other)

	__hash__ = None

	def __str__(self): return RENDER.visit(self)
	def __repr__(self): return "<%s %s>"%(type(self).__name__, self)

def of_type(kind, it):
	""" Assert that `it` is of the given kind (a class, or a tuple of them). Returns `it` for convenience. """
	if not isinstance(it, kind) or (kind is int and isinstance(it, bool)):
		names = kind.__name__ if isinstance(kind, type) else "/".join(k.__name__ for k in kind)
		raise TypeAssertion(it, "expected %s, found %s"%(names, type(it).__name__))
	return it

def _each(kind, items:Sequence) -> tuple:
	of_type((list, tuple), items)
	return tuple(of_type(kind, x) for x in items)

###############################################################################

class Nil(Expression):
	def structure(self): return ()

class Pair(Expression):
	def __init__(self, first:Expression, second:Expression):
		self.first = of_type(Expression, first)
		self.second = of_type(Expression, second)
		super().__init__()
	def children(self): return self.first, self.second
	def structure(self): return self.first, self.second

class Projection(Expression):
	""" Fst and Snd differ only in which side of the pair they want. """
	index: int
	def __init__(self, operand:Expression):
		self.operand = of_type(Expression, operand)
		super().__init__()
	def children(self): return self.operand,
	def structure(self): return self.operand,
	def pick(self, pair:Pair) -> Expression:
		raise NotImplementedError(type(self))

class Fst(Projection):
	index = 1
	def pick(self, pair:Pair): return pair.first

class Snd(Projection):
	index = 2
	def pick(self, pair:Pair): return pair.second

class Int(Expression):
	def __init__(self, value:int):
		self.value = of_type(int, value)
		super().__init__()
	def structure(self): return self.value,

class Sym(Expression):
	def __init__(self, name:str):
		self.name = of_type(str, name)
		super().__init__()
	def structure(self): return self.name,

class Prim(Expression):
	def __init__(self, op:Op):
		self.op = of_type(Op, op)
		super().__init__()
	def structure(self): return self.op,

class Fun(Expression):
	""" A lambda-form. The fixpoint name, if any, lets the body refer to the function itself. """
	def __init__(self, params:Sequence[Sym], body:Expression, fixpoint:Optional[str]=None):
		self.params = _each(Sym, params)
		self.body = of_type(Expression, body)
		self.fixpoint = fixpoint if fixpoint is None else of_type(str, fixpoint)
		super().__init__()
	def children(self): return self.body,
	def structure(self): return self.params, self.body, self.fixpoint

class Closure(Expression):
	""" A Fun together with the context it was evaluated in. """
	def __init__(self, ctx:Context, params:Sequence[Sym], body:Expression, fixpoint:Optional[str]=None):
		self.ctx = of_type(Context, ctx)
		self.params = _each(Sym, params)
		self.body = of_type(Expression, body)
		self.fixpoint = fixpoint if fixpoint is None else of_type(str, fixpoint)
		super().__init__()
	def children(self): return self.body,
	def structure(self): return self.ctx, self.params, self.body, self.fixpoint

class App(Expression):
	def __init__(self, callee:Expression, args:Sequence[Expression]):
		self.callee = of_type(Expression, callee)
		self.args = _each(Expression, args)
		super().__init__()
	def children(self): return (self.callee,) + self.args
	def structure(self): return self.callee, self.args

class Case(Expression):
	"""
	Branches alternate pattern, body, pattern, body...
	An odd number of branches means the last one is an unconditional default.
	"""
	def __init__(self, scrutinee:Expression, branches:Sequence[Expression]):
		self.scrutinee = of_type(Expression, scrutinee)
		self.branches = _each(Expression, branches)
		super().__init__()
	def has_default(self): return len(self.branches) % 2 == 1
	def children(self): return (self.scrutinee,) + self.branches
	def structure(self): return self.scrutinee, self.branches

class Chan(Expression):
	"""
	A future: it stands in for whatever `pending` eventually evaluates to in `ctx`.
	Until then, `pending` tracks the latest residual expression.
	Once resolved, a channel is a transparent alias for its value.
	"""
	resolved: Optional[Expression]
	def __init__(self, ctx:Context, pending:Expression):
		self.ctx = of_type(Context, ctx)
		self.pending = of_type(Expression, pending)
		self.resolved = None
		super().__init__()

	def is_resolved(self): return self.resolved is not None

	def offer(self, result:Expression) -> bool:
		"""
		Take the result of one step of evaluation. A value resolves the channel;
		anything else becomes the new pending expression.
		Answers whether the channel is now resolved.
		"""
		if is_value(result):
			self.resolve(result)
			return True
		self.pending = of_type(Expression, result)
		return False

	def resolve(self, value:Expression):
		if self.resolved is not None: raise TypeAssertion(self, "channel resolved twice")
		if not is_value(value): raise TypeAssertion(value, "channels resolve only to values")
		self.resolved = value

	def children(self): return self.pending,
	def structure(self): return self.ctx, self.pending, self.resolved

###############################################################################

VALUE_KINDS = (Int, Nil, Pair, Prim, Closure)

def is_value(e:Expression) -> bool:
	return isinstance(e, VALUE_KINDS)

# In this calculus, the sub-parts of a value are never forced further,
# so weak-head-normal form and normal form both coincide with being a value.
is_whnf = is_normal_form = is_value

def same(a:Expression, b:Expression) -> bool:
	""" Structural equality: the same object, or the same kind with every field the same. """
	if a is b: return True
	if type(a) is not type(b): return False
	return all(map(_same_field, a.structure(), b.structure()))

def _same_field(x, y) -> bool:
	if isinstance(x, Expression):
		return isinstance(y, Expression) and same(x, y)
	if isinstance(x, tuple):
		return isinstance(y, tuple) and len(x) == len(y) and all(map(_same_field, x, y))
	return x == y

def example(expected:Expression, actual:Expression) -> Expression:
	""" Assert an example has the expected value. Returns the actual value so it can be chained. """
	if not same(expected, actual):
		raise AssertionError("Example failed: expected %s but found %s"%(expected, actual))
	return actual

###############################################################################

class Cloner(Visitor):
	"""
	Deep structural copy, minus the cache and the watchers.
	Contexts are persistent and channels are futures with identity,
	so both of those get shared rather than copied.
	"""
	def _each(self, items): return tuple(self.visit(x) for x in items)

	@staticmethod
	def visit_Nil(e:Nil): return Nil()
	def visit_Pair(self, e:Pair): return Pair(self.visit(e.first), self.visit(e.second))
	def visit_Fst(self, e:Fst): return Fst(self.visit(e.operand))
	def visit_Snd(self, e:Snd): return Snd(self.visit(e.operand))
	@staticmethod
	def visit_Int(e:Int): return Int(e.value)
	@staticmethod
	def visit_Sym(e:Sym): return Sym(e.name)
	@staticmethod
	def visit_Prim(e:Prim): return Prim(e.op)
	@staticmethod
	def visit_Chan(e:Chan): return e
	def visit_Fun(self, e:Fun): return Fun(self._each(e.params), self.visit(e.body), e.fixpoint)
	def visit_Closure(self, e:Closure): return Closure(e.ctx, self._each(e.params), self.visit(e.body), e.fixpoint)
	def visit_App(self, e:App): return App(self.visit(e.callee), self._each(e.args))
	def visit_Case(self, e:Case): return Case(self.visit(e.scrutinee), self._each(e.branches))

CLONER = Cloner()

def clone(e:Expression) -> Expression:
	return CLONER.visit(e)

class Render(Visitor):
	""" The canonical display form. """
	@staticmethod
	def _params(params): return ",".join(p.name for p in params)

	@staticmethod
	def visit_Nil(e:Nil): return "nil"
	def visit_Pair(self, e:Pair): return "(%s, %s)"%(self.visit(e.first), self.visit(e.second))
	def visit_Fst(self, e:Fst): return "%s.1"%self.visit(e.operand)
	def visit_Snd(self, e:Snd): return "%s.2"%self.visit(e.operand)
	@staticmethod
	def visit_Int(e:Int): return str(e.value)
	@staticmethod
	def visit_Sym(e:Sym): return e.name
	@staticmethod
	def visit_Prim(e:Prim): return e.op.name

	def visit_Chan(self, e:Chan):
		if e.resolved is not None: return self.visit(e.resolved)
		return "(ch %s)"%self.visit(e.pending)

	def visit_Fun(self, e:Fun):
		text = "fn(%s)"%self._params(e.params)
		return text if e.fixpoint is None else "let %s = %s"%(e.fixpoint, text)

	def visit_Closure(self, e:Closure): return "<G, fn(%s)>"%self._params(e.params)

	def visit_App(self, e:App):
		return "apply %s(%s)"%(self.visit(e.callee), ", ".join(map(self.visit, e.args)))

	def visit_Case(self, e:Case):
		arms = []
		for i in range(0, len(e.branches) - 1, 2):
			arms.append("%s -> %s"%(self.visit(e.branches[i]), self.visit(e.branches[i+1])))
		if e.has_default():
			arms.append("else -> %s"%self.visit(e.branches[-1]))
		return "case %s of %s"%(self.visit(e.scrutinee), " | ".join(arms))

RENDER = Render()

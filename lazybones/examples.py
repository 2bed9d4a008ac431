"""
A few canned programs, built directly as expression trees since there is no parser.
The command line runs these by name, and the tests lean on them too.
"""
from .expressions import Expression, Op, Nil, Pair, Fst, Int, Sym, Prim, Fun, App, Case

def _prim(op:Op, *args:Expression) -> App:
	return App(Prim(op), args)

def factorial(n:int=5) -> Expression:
	""" Self-recursion through a fixpoint name. """
	n_ = Sym("n")
	body = Case(n_, [
		Int(0), Int(1),
		_prim(Op.MUL, n_, App(Sym("fact"), [_prim(Op.SUB, n_, Int(1))])),
	])
	return App(Fun([Sym("n")], body, "fact"), [Int(n)])

def sum_to(n:int=10) -> Expression:
	""" 1 + 2 + ... + n """
	n_ = Sym("n")
	body = Case(n_, [
		Int(0), Int(0),
		_prim(Op.ADD, n_, App(Sym("sum"), [_prim(Op.SUB, n_, Int(1))])),
	])
	return App(Fun([Sym("n")], body, "sum"), [Int(n)])

def nested_arithmetic() -> Expression:
	""" 2*3 + -4 + (10-3) """
	return _prim(Op.ADD,
		_prim(Op.MUL, Int(2), Int(3)),
		_prim(Op.NEG, Int(4)),
		_prim(Op.SUB, Int(10), Int(3)),
	)

def is_zero(n:int=0) -> Expression:
	return Case(Int(n), [Int(0), Int(1), Nil()])

def same_sum(n:int=3) -> Expression:
	""" Equality is structural, and waits for both sides. """
	return _prim(Op.EQ, _prim(Op.ADD, Int(n), Int(1)), _prim(Op.ADD, Int(1), Int(n)))

def first_of_pair() -> Expression:
	""" Projections reach through a function result. """
	identity = Fun([Sym("p")], Sym("p"))
	return Fst(App(identity, [Pair(Int(1), Int(2))]))

def pair_pattern() -> Expression:
	scrutinee = Pair(Int(1), Nil())
	return Case(scrutinee, [
		Pair(Int(0), Sym("_")), Int(10),
		Pair(Int(1), Nil()), Int(20),
		Int(30),
	])

def twice(n:int=3) -> Expression:
	""" Functions are values: apply a doubling function twice. """
	f, x, y = Sym("f"), Sym("x"), Sym("y")
	double = Fun([y], _prim(Op.ADD, y, y))
	twice_ = Fun([f, x], App(f, [App(f, [x])]))
	return App(twice_, [double, Int(n)])

def under_applied() -> Expression:
	""" The unused parameter never gets bound, which is fine as long as nobody asks. """
	return App(Fun([Sym("x"), Sym("y")], Sym("x")), [Int(7)])

PROGRAMS = {
	fn.__name__: fn
	for fn in [
		factorial, sum_to, nested_arithmetic, is_zero, same_sum,
		first_of_pair, pair_pattern, twice, under_applied,
	]
}

import unittest

from lazybones.context import Context
from lazybones.diagnostics import TypeAssertion
from lazybones.expressions import (
	Op, Nil, Pair, Fst, Snd, Int, Sym, Chan, Prim, Fun, Closure, App, Case,
	is_value, is_whnf, is_normal_form, same, clone, example, of_type,
)

class ConstructionTests(unittest.TestCase):
	""" Each kind checks the shape of its fields. """

	def test_fun_params_must_be_symbols(self):
		with self.assertRaises(TypeAssertion):
			Fun([Sym("x"), Int(1)], Sym("x"))
		with self.assertRaises(TypeAssertion):
			Fun(["x"], Sym("x"))

	def test_closure_params_must_be_symbols(self):
		with self.assertRaises(TypeAssertion):
			Closure(Context.empty(), [Nil()], Nil())

	def test_bad_fields(self):
		for build in [
			lambda: Int("3"),
			lambda: Int(True),
			lambda: Sym(7),
			lambda: Prim("ADD"),
			lambda: Pair(Int(1), 2),
			lambda: App(Prim(Op.ADD), Int(1)),
			lambda: Case(Int(1), [Int(1), "one"]),
			lambda: Fun([Sym("x")], Sym("x"), fixpoint=Sym("f")),
			lambda: Closure({}, [], Nil()),
			lambda: Chan(Context.empty(), 5),
		]:
			with self.subTest(build=build):
				with self.assertRaises(TypeAssertion):
					build()

	def test_of_type_hands_back_its_argument(self):
		it = Int(3)
		self.assertIs(it, of_type(Int, it))
		self.assertIs(it, of_type((Nil, Int), it))
		with self.assertRaises(TypeAssertion) as cm:
			of_type(Sym, it)
		self.assertIs(it, cm.exception.culprit)

class DisplayTests(unittest.TestCase):
	def test_display_forms(self):
		ctx = Context.empty()
		x, y = Sym("x"), Sym("y")
		for expected, expr in [
			("nil", Nil()),
			("(1, nil)", Pair(Int(1), Nil())),
			("(1, 2).1", Fst(Pair(Int(1), Int(2)))),
			("p.2", Snd(Sym("p"))),
			("-4", Int(-4)),
			("x", x),
			("ADD", Prim(Op.ADD)),
			("fn(x,y)", Fun([x, y], x)),
			("let f = fn(x)", Fun([x], x, "f")),
			("<G, fn(x,y)>", Closure(ctx, [x, y], x)),
			("apply ADD(2, 3)", App(Prim(Op.ADD), [Int(2), Int(3)])),
			("case 7 of 0 -> 99 | else -> -1", Case(Int(7), [Int(0), Int(99), Int(-1)])),
			("case 0 of 0 -> 99 | x -> -1", Case(Int(0), [Int(0), Int(99), x, Int(-1)])),
			("(ch x)", Chan(ctx, x)),
		]:
			with self.subTest(expected):
				self.assertEqual(expected, str(expr))

	def test_resolved_channel_displays_its_value(self):
		chan = Chan(Context.empty(), Sym("x"))
		chan.resolve(Int(3))
		self.assertEqual("3", str(chan))

class StructureTests(unittest.TestCase):
	def test_children(self):
		a, b = Int(1), Int(2)
		callee = Prim(Op.ADD)
		self.assertEqual((), Nil().children())
		self.assertEqual((a, b), Pair(a, b).children())
		app = App(callee, [a, b])
		self.assertEqual(3, len(app.children()))
		self.assertIs(callee, app.children()[0])
		case = Case(a, [a, b, b])
		self.assertEqual(4, len(case.children()))
		fun = Fun([Sym("x")], a)
		self.assertEqual((a,), fun.children())

	def test_equality_is_structural(self):
		self.assertEqual(Pair(Int(1), Int(2)), Pair(Int(1), Int(2)))
		self.assertNotEqual(Pair(Int(1), Int(2)), Pair(Int(2), Int(1)))
		self.assertNotEqual(Int(1), Nil())
		self.assertNotEqual(Fst(Sym("p")), Snd(Sym("p")))
		self.assertEqual(Fun([Sym("x")], Sym("x"), "f"), Fun([Sym("x")], Sym("x"), "f"))
		self.assertNotEqual(Fun([Sym("x")], Sym("x"), "f"), Fun([Sym("x")], Sym("x")))
		self.assertTrue(same(Prim(Op.EQ), Prim(Op.EQ)))
		self.assertFalse(Int(1) == 1)

	def test_closures_compare_their_contexts(self):
		one = Context.empty().extend({"a": Int(1)})
		also_one = Context.empty().extend({"a": Int(1)})
		two = Context.empty().extend({"a": Int(2)})
		body = Sym("a")
		self.assertEqual(Closure(one, [], body), Closure(also_one, [], body))
		self.assertNotEqual(Closure(one, [], body), Closure(two, [], body))

	def test_cache_does_not_affect_equality(self):
		a, b = App(Prim(Op.ADD), [Int(1)]), App(Prim(Op.ADD), [Int(1)])
		a.remember(Int(1))
		self.assertEqual(a, b)

	def test_expressions_are_unhashable(self):
		with self.assertRaises(TypeError):
			hash(Int(1))

	def test_value_kinds(self):
		ctx = Context.empty()
		for e in [Int(0), Nil(), Pair(Nil(), Nil()), Prim(Op.NEG), Closure(ctx, [], Nil())]:
			with self.subTest(e=e):
				self.assertTrue(is_value(e))
				self.assertTrue(is_whnf(e))
				self.assertTrue(is_normal_form(e))
		for e in [Sym("x"), Fst(Nil()), Snd(Nil()), Fun([], Nil()), App(Nil(), []), Case(Nil(), []), Chan(ctx, Nil())]:
			with self.subTest(e=e):
				self.assertFalse(is_value(e))

	def test_example(self):
		actual = Int(5)
		self.assertIs(actual, example(Int(5), actual))
		with self.assertRaises(AssertionError):
			example(Int(5), Int(6))

class CloneTests(unittest.TestCase):
	def test_clone_is_a_structural_copy(self):
		ctx = Context.empty()
		for e in [
			Nil(), Int(3), Sym("q"), Prim(Op.MUL),
			Pair(Int(1), Pair(Nil(), Sym("z"))),
			Fst(Sym("p")), Snd(Sym("p")),
			Fun([Sym("x")], App(Sym("f"), [Sym("x")]), "f"),
			Closure(ctx, [Sym("x")], Sym("x")),
			Case(Sym("x"), [Int(0), Int(1), Nil()]),
		]:
			with self.subTest(e=e):
				copy = clone(e)
				self.assertEqual(e, copy)
				self.assertIsNot(e, copy)

	def test_clone_shares_context_and_drops_cache(self):
		ctx = Context.empty().extend({"a": Int(1)})
		closure = Closure(ctx, [], Sym("a"))
		closure.remember(Int(1))
		closure.watch(lambda *_: self.fail("Watchers are not copied"))
		copy = clone(closure)
		self.assertIs(ctx, copy.ctx)
		self.assertFalse(copy.is_cached())
		copy.remember(Int(2))

	def test_channels_are_shared_not_copied(self):
		chan = Chan(Context.empty(), Sym("x"))
		pair = Pair(chan, Nil())
		self.assertIs(chan, clone(pair).first)

class CacheTests(unittest.TestCase):
	def test_remember_notifies_watchers(self):
		seen = []
		e = App(Prim(Op.ADD), [Int(1), Int(2)])
		self.assertFalse(e.is_cached())
		e.watch(lambda node, value: seen.append((node, value)))
		e.remember(Int(3))
		self.assertTrue(e.is_cached())
		self.assertEqual(Int(3), e.cached)
		self.assertEqual([(e, Int(3))], seen)

class ChannelTests(unittest.TestCase):
	def test_offer(self):
		chan = Chan(Context.empty(), Sym("x"))
		residual = App(Prim(Op.ADD), [Sym("y")])
		self.assertFalse(chan.offer(residual))
		self.assertIs(residual, chan.pending)
		self.assertFalse(chan.is_resolved())
		self.assertTrue(chan.offer(Int(4)))
		self.assertTrue(chan.is_resolved())
		self.assertEqual(Int(4), chan.resolved)

	def test_resolves_at_most_once(self):
		chan = Chan(Context.empty(), Sym("x"))
		chan.resolve(Int(1))
		with self.assertRaises(TypeAssertion):
			chan.resolve(Int(2))

	def test_resolves_only_to_values(self):
		chan = Chan(Context.empty(), Sym("x"))
		with self.assertRaises(TypeAssertion):
			chan.resolve(Sym("y"))

if __name__ == '__main__':
	unittest.main()

"""
Structural matching of case-patterns against an already-evaluated condition.

The matcher never evaluates anything. The reducer brings the condition to
weak-head-normal form first. Parts of a pair need not be evaluated, and a part
which is not yet a value only matches a wildcard.
"""
from boozetools.support.foundation import Visitor
from .expressions import Expression, Nil, Int, Prim, Pair, Sym, Chan
from .diagnostics import InvalidPattern

def _settled(e:Expression) -> Expression:
	# A resolved channel is just an alias for its value.
	while isinstance(e, Chan) and e.is_resolved(): e = e.resolved
	return e

class Matcher(Visitor):
	@staticmethod
	def visit_Nil(pattern:Nil, cond:Expression):
		return isinstance(cond, Nil)

	@staticmethod
	def visit_Int(pattern:Int, cond:Expression):
		return isinstance(cond, Int) and pattern.value == cond.value

	@staticmethod
	def visit_Prim(pattern:Prim, cond:Expression):
		return isinstance(cond, Prim) and pattern.op is cond.op

	def visit_Pair(self, pattern:Pair, cond:Expression):
		return (
			isinstance(cond, Pair)
			and self.match(pattern.first, cond.first)
			and self.match(pattern.second, cond.second)
		)

	@staticmethod
	def visit_Sym(pattern:Sym, cond:Expression):
		# Symbols match anything, and bind nothing.
		return True

	def match(self, pattern:Expression, cond:Expression) -> bool:
		if type(pattern) not in VALID_PATTERNS: raise InvalidPattern(pattern)
		return self.visit(pattern, _settled(cond))

VALID_PATTERNS = frozenset([Nil, Int, Prim, Pair, Sym])

MATCHER = Matcher()

def matches(pattern:Expression, cond:Expression) -> bool:
	""" Does the evaluated condition fit the pattern? """
	return MATCHER.match(pattern, cond)

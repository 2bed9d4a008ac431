"""
Everything that can go wrong during evaluation, and the means to complain about it.

Errors are fatal to the evaluation in progress. Nothing in the evaluator catches them;
they travel out to whoever called `evaluate` or `force`, who may hand them to a Report.
"""
import sys, random
from boozetools.support.failureprone import illustration

class EvaluationError(Exception):
	""" Base class: Carries the expression (or name) that caused the trouble. """
	gloss = "Evaluation went wrong"
	def __init__(self, culprit, *details):
		super().__init__(culprit, *details)
		self.culprit = culprit
		self.details = details

	def __str__(self):
		text = "%s: %s"%(self.gloss, self.culprit)
		if self.details:
			text += " (%s)"%", ".join(map(str, self.details))
		return text

class TypeAssertion(EvaluationError):
	gloss = "Expected a different kind of thing"

class UnboundSymbol(EvaluationError):
	gloss = "Nothing is bound to this symbol"

class InvalidPattern(EvaluationError):
	gloss = "This cannot serve as a pattern"

class MalformedCase(EvaluationError):
	gloss = "Nothing matched and there is no else-branch"

class ArityMismatch(EvaluationError):
	gloss = "Wrong number of arguments"

class UnknownPrimitive(EvaluationError):
	gloss = "No such primitive operation"


def _outburst():
	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', 'Drat',
		'Fiddlesticks', 'Good Grief', 'Great Scott', 'Nuts', 'Rats',
	]
	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
	]
	return "%s! %s"%(random.choice(minced_oaths), random.choice(resignations))

class Report:
	"""
	The console side of diagnostics. Quiet unless asked:
	verbose=1 gives informational chatter, and verbose=2 adds a line per scheduler pass.
	"""
	def __init__(self, *, verbose:int=0, stream=None):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._stream = stream
		self.complaints = []

	def ok(self): return not self.complaints
	def sick(self): return bool(self.complaints)

	def _print(self, *args):
		print(*args, file=self._stream or sys.stderr)

	def info(self, *args):
		if self._verbose:
			self._print(*args)

	def trace_step(self, expr, step:int):
		if self._verbose > 1:
			self._print("% 6d | %s"%(step, expr))

	def finished(self, expr, steps:int):
		self.info("Reached %s after %d step(s)."%(expr, steps))

	def gave_up(self, expr, steps:int):
		""" The step limit is the one failure that does not raise. """
		self.complaints.append(expr)
		self._print("Gave up after %d step(s); the expression is still %s"%(steps, expr))

	def complain(self, error:EvaluationError, whole=None):
		""" Emit an evaluation error, pointing at the culprit within the whole program if possible. """
		self.complaints.append(error)
		self._print("*"*60)
		self._print(_outburst())
		self._print(str(error))
		if whole is not None:
			text, culprit = str(whole), str(error.culprit)
			col = text.find(culprit)
			if col >= 0 and culprit:
				self._print(illustration(text, col, len(culprit), prefix='      |', caption=error.gloss))
		(self._stream or sys.stderr).flush()

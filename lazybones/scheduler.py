"""
This is the cooperative work-queue that drives lazy evaluation to completion.
There are no threads here: "spawning" a reduction means leaving a work item
in the queue, and every pass of the force loop gives each item one turn.

Each Scheduler is an independent evaluation session.
"""
from typing import Callable, Optional
from .context import Context
from .expressions import Expression, Chan, is_normal_form
from .reducer import eval_step
from .diagnostics import Report

DEBUG_STEP_LIMIT = 100

OBSERVER = Callable[[Expression, int], None]

class WorkItem:
	""" One deferred reduction: a thunk, and the channel it feeds. """
	def __init__(self, thunk:Callable[[], bool], chan:Chan, born:int):
		assert callable(thunk)
		self.thunk = thunk
		self.chan = chan
		self.born = born
		self.runs = []

	def proceed(self, pass_nr:int) -> bool:
		""" Take a turn. Answers whether this item is finished. """
		self.runs.append(pass_nr)
		return self.thunk()

	def __repr__(self): return "<WorkItem %s>"%self.chan

class Scheduler:
	"""
	Owns three queues:
		active: the items that get a turn during the current pass.
		next: the active items which are not finished yet.
		spawned: items created during the current pass. They wait for the next one.
	"""
	active: list[WorkItem]
	next: list[WorkItem]
	spawned: list[WorkItem]

	def __init__(self, *, step_limit:Optional[int]=None, report:Optional[Report]=None):
		self.active = []
		self.next = []
		self.spawned = []
		self.passes = 0
		self.step_limit = step_limit
		self._report = report

	def spawn(self, thunk:Callable[[], bool], chan:Chan) -> WorkItem:
		item = WorkItem(thunk, chan, self.passes)
		self.spawned.append(item)
		return item

	def pending(self) -> int:
		return len(self.active) + len(self.spawned)

	def run_pass(self):
		for item in self.active:
			if not item.proceed(self.passes):
				self.next.append(item)
		self.active = self.next + self.spawned
		self.next = []
		self.spawned = []

	def abandon(self):
		""" Drop all pending work on the floor. """
		self.active.clear()
		self.next.clear()
		self.spawned.clear()

	def force(self, ctx:Context, e:Expression, on_step:Optional[OBSERVER]=None) -> Expression:
		"""
		Step e (and the work queue along with it) until e is a value.
		If a step limit is set and runs out first, gives up and returns whatever e has become.
		"""
		step = 0
		while not is_normal_form(e):
			if self.step_limit is not None and step >= self.step_limit:
				if self._report is not None: self._report.gave_up(e, step)
				self.abandon()
				return e
			self.run_pass()
			e = eval_step(self, ctx, e)
			if on_step is not None: on_step(e, step)
			if self._report is not None: self._report.trace_step(e, step)
			step += 1
			self.passes += 1
		if self._report is not None: self._report.finished(e, step)
		return e

def force(ctx:Context, e:Expression, on_step:Optional[OBSERVER]=None, *, step_limit:Optional[int]=None, report:Optional[Report]=None) -> Expression:
	""" Force e in a fresh session. """
	return Scheduler(step_limit=step_limit, report=report).force(ctx, e, on_step)

"""
Contexts map free symbol names to the expressions bound to them.

A context never changes once built. Extending one makes a new layer
which points back at the old one, so every closure and every pending
evaluation can share its natal context without fear that a nested
scope will scribble on it.
"""
from typing import Iterable, Mapping, Optional, Union
from .diagnostics import TypeAssertion, UnboundSymbol

BINDINGS = Union[Mapping[str, "Expression"], Iterable[tuple[str, "Expression"]]]

class Context:
	_bindings: dict
	_parent: Optional["Context"]

	def __init__(self, bindings:dict, parent:Optional["Context"]):
		self._bindings = bindings
		self._parent = parent

	@staticmethod
	def empty() -> "Context":
		""" The root context, with nothing bound. """
		return Context({}, None)

	def lookup(self, name:str):
		frame = self
		while frame is not None:
			try: return frame._bindings[name]
			except KeyError: frame = frame._parent
		raise UnboundSymbol(name)

	def extend(self, bindings:BINDINGS) -> "Context":
		layer = dict(bindings)
		for name in layer:
			if not isinstance(name, str): raise TypeAssertion(name, "symbol names are strings")
		if not layer: return self
		return Context(layer, self)

	def __contains__(self, name:str):
		try: self.lookup(name)
		except UnboundSymbol: return False
		else: return True

	def as_dict(self) -> dict:
		""" The bindings visible from here, with inner layers hiding outer ones. """
		layers = []
		frame = self
		while frame is not None:
			layers.append(frame._bindings)
			frame = frame._parent
		visible = {}
		for layer in reversed(layers): visible.update(layer)
		return visible

	def names(self): return sorted(self.as_dict())
	def __len__(self): return len(self.as_dict())

	def __eq__(self, other):
		if self is other: return True
		if not isinstance(other, Context): return NotImplemented
		return self.as_dict() == other.as_dict()

	__hash__ = None

	def __repr__(self):
		return "<Context: %s>"%", ".join("%s=%s"%(k, v) for k, v in sorted(self.as_dict().items()))

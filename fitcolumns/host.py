"""
Host interface for the column resizer, plus an in-memory host.

A host is whatever container owns the columns: it reports its extent and
insets, hands out its visible columns and (if it has one) its vertical
scrollbar, and fires change events the resizer subscribes to.

Host events:
	'width'		(old_width, new_width)		container width changed
	'columns'	()							visible column set changed
	'display'	(was_displayed, displayed)	container entered/left the display

Scrollbar events:
	'visible'	(old, new)
	'width'		(old_width, new_width)
"""

from __future__ import annotations

from typing import Callable, Optional

from .allocator import Item


class Observable:
	"""Minimal named-event listener registry."""

	def __init__(self):
		self._listeners: dict[str, list[Callable]] = {}

	def add_listener(self, event: str, callback: Callable):
		self._listeners.setdefault(event, []).append(callback)

	def remove_listener(self, event: str, callback: Callable):
		"""Remove a listener; removing one that isn't registered is a no-op."""
		listeners = self._listeners.get(event)
		if listeners and callback in listeners:
			listeners.remove(callback)

	def listener_count(self, event: str) -> int:
		return len(self._listeners.get(event, ()))

	def fire(self, event: str, *args):
		for callback in tuple(self._listeners.get(event, ())):
			callback(*args)


# -------
# Abstract host interface
# -------

class HostColumn:
	"""One resizable column as seen by the resizer."""

	@property
	def min_width(self) -> float:
		raise NotImplementedError("Subclasses must implement min_width")

	@property
	def max_width(self) -> Optional[float]:
		"""The maximum width, or None for unlimited."""
		raise NotImplementedError("Subclasses must implement max_width")

	@property
	def pref_width(self) -> float:
		raise NotImplementedError("Subclasses must implement pref_width")

	@pref_width.setter
	def pref_width(self, value: float):
		raise NotImplementedError("Subclasses must implement the pref_width setter")

	def constraints(self) -> Item:
		"""Snapshot this column for the allocator."""
		return Item(self.min_width, self.max_width, self.pref_width)

class HostScrollBar(Observable):
	@property
	def visible(self) -> bool:
		raise NotImplementedError("Subclasses must implement visible")

	@property
	def width(self) -> float:
		"""Current on-screen width, 0 if not laid out yet."""
		raise NotImplementedError("Subclasses must implement width")

	@property
	def pref_width(self) -> float:
		raise NotImplementedError("Subclasses must implement pref_width")

class ColumnHost(Observable):
	@property
	def width(self) -> float:
		raise NotImplementedError("Subclasses must implement width")

	@property
	def height(self) -> float:
		raise NotImplementedError("Subclasses must implement height")

	@property
	def insets(self) -> tuple[float, float]:
		"""(left, right) insets of the container."""
		return (0, 0)

	def is_displayed(self) -> bool:
		raise NotImplementedError("Subclasses must implement is_displayed")

	def visible_columns(self) -> list[HostColumn]:
		raise NotImplementedError("Subclasses must implement visible_columns")

	def find_vertical_scrollbar(self) -> Optional[HostScrollBar]:
		return None

	def ensure_unconstrained_policy(self) -> bool:
		"""Switch off any column fitting the host does by itself.

		Returns True if something had to be changed.
		"""
		return False


# -------
# In-memory host
# -------

class MemoryColumn(HostColumn):
	def __init__(self, name='', min_width=0, max_width=None, pref_width=80, visible=True):
		self.name = name
		self._min_width = min_width
		self._max_width = max_width
		self._pref_width = pref_width
		self.visible = visible
		self.commits = 0	# Number of pref_width writes, for observing commit thresholds

	@property
	def min_width(self):
		return self._min_width

	@property
	def max_width(self):
		return self._max_width

	@property
	def pref_width(self):
		return self._pref_width

	@pref_width.setter
	def pref_width(self, value):
		self._pref_width = value
		self.commits += 1

	def __repr__(self):
		return f"MemoryColumn({self.name!r}, pref_width={self._pref_width})"

class MemoryScrollBar(HostScrollBar):
	def __init__(self, width=15.0, pref_width=15.0, visible=False):
		super().__init__()
		self._width = width
		self._pref_width = pref_width
		self._visible = visible

	@property
	def visible(self):
		return self._visible

	@property
	def width(self):
		return self._width

	@property
	def pref_width(self):
		return self._pref_width

	def set_visible(self, visible: bool):
		old, self._visible = self._visible, visible
		if old != visible:
			self.fire('visible', old, visible)

	def set_width(self, width: float):
		old, self._width = self._width, width
		if old != width:
			self.fire('width', old, width)

class MemoryTable(ColumnHost):
	"""A column container that lives entirely in memory.

	Every mutator fires the same events a real UI container would, which makes
	it suitable both for driving the resizer from the command line and for
	tests.
	"""

	def __init__(self, width=0, height=100, *, insets=(0, 0), columns=(), scrollbar=None, displayed=True):
		super().__init__()
		self._width = width
		self._height = height
		self._insets = tuple(insets)
		self._displayed = displayed
		self.columns: list[MemoryColumn] = list(columns)
		self.scrollbar: Optional[MemoryScrollBar] = scrollbar
		self.unconstrained = False
		self.scrollbar_lookups = 0

	@property
	def width(self):
		return self._width

	@property
	def height(self):
		return self._height

	@property
	def insets(self):
		return self._insets

	def is_displayed(self):
		return self._displayed

	def visible_columns(self):
		return [column for column in self.columns if column.visible]

	def find_vertical_scrollbar(self):
		self.scrollbar_lookups += 1
		return self.scrollbar

	def ensure_unconstrained_policy(self):
		if self.unconstrained:
			return False
		self.unconstrained = True
		return True

	# --- mutators

	def set_width(self, width: float):
		old, self._width = self._width, width
		if old != width:
			self.fire('width', old, width)

	def set_height(self, height: float):
		self._height = height

	def set_displayed(self, displayed: bool):
		old, self._displayed = self._displayed, displayed
		if old != displayed:
			self.fire('display', old, displayed)

	def add_column(self, column: MemoryColumn):
		self.columns.append(column)
		if column.visible:
			self.fire('columns')
		return column

	def remove_column(self, column: MemoryColumn):
		self.columns.remove(column)
		if column.visible:
			self.fire('columns')

	def set_column_visible(self, column: MemoryColumn, visible: bool):
		if column.visible != visible:
			column.visible = visible
			self.fire('columns')

	def show_scrollbar(self, visible=True):
		"""Make the scrollbar (creating one if needed) visible or hidden."""
		if self.scrollbar is None:
			self.scrollbar = MemoryScrollBar()
		self.scrollbar.set_visible(visible)
		return self.scrollbar

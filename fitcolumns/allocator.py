from __future__ import annotations

""" Column width allocation.

Divides a linear budget among an ordered run of items, each carrying a minimum,
an optional maximum and a preferred size. Nothing in here keeps state between
calls; every function takes a snapshot and returns a fresh list.

DISTRIBUTION CASES (checked in this order):
	INSUFFICIENT	budget below the total minimum, everything sits at its minimum
	EXACT FIT		budget within EQUAL_TOLERANCE of the preferred total, keep preferences
	EXPAND			hand out the extra in proportion to each item's grow potential
	SHRINK			take back the deficit in proportion to each item's shrink potential

The exact variant rounds the float result to whole units and lets the last
item soak up the rounding remainder, so the total lands on floor(budget)
whenever the bounds allow it.
"""

import math
from typing import Iterable, NamedTuple, Optional

from .constants import ZERO_EPSILON, EQUAL_TOLERANCE

# Maximum value meaning "no upper limit"
UNBOUNDED = None


# -------
# Value types
# -------

class Item(tuple):
	"""Size constraints and current preference of one item.

	Stored as an immutable ``(minimum, maximum, preferred)`` tuple. A maximum of
	``None`` (or ``math.inf``, which is normalised to ``None``) means unbounded.
	"""
	__slots__ = ()

	def __new__(cls, minimum=0, maximum=UNBOUNDED, preferred=0):
		assert isinstance(minimum, (int, float)), \
			f"Item minimum must be a number, got {type(minimum).__name__}: {minimum}"
		assert maximum is None or isinstance(maximum, (int, float)), \
			f"Item maximum must be a number or None, got {type(maximum).__name__}: {maximum}"
		assert isinstance(preferred, (int, float)), \
			f"Item preferred must be a number, got {type(preferred).__name__}: {preferred}"

		if maximum is not None and math.isinf(maximum) and maximum > 0:
			maximum = UNBOUNDED

		if not math.isfinite(minimum) or minimum < 0:
			raise ValueError(f"Item minimum must be finite and non-negative, got {minimum}")
		if maximum is not None and not maximum >= minimum:
			raise ValueError(f"Item maximum ({maximum}) must not be below its minimum ({minimum})")
		if not math.isfinite(preferred) or preferred < 0:
			raise ValueError(f"Item preferred must be finite and non-negative, got {preferred}")
		return tuple.__new__(cls, (minimum, maximum, preferred))

	@classmethod
	def of(cls, value):
		"""Coerce an Item, a 3-sequence, or a min/max/pref mapping into an Item."""
		if isinstance(value, Item):
			return value
		if isinstance(value, dict):
			return cls(
				value.get('min', value.get('minimum', 0)),
				value.get('max', value.get('maximum', UNBOUNDED)),
				value.get('pref', value.get('preferred', 0)),
			)
		if isinstance(value, (list, tuple)) and len(value) == 3:
			return cls(*value)
		raise TypeError(f"Cannot build an Item from {type(value).__name__}: {value!r}")

	@property
	def minimum(self):
		return self[0]

	@property
	def maximum(self):
		"""The upper bound, or None for unbounded."""
		return self[1]

	@property
	def preferred(self):
		return self[2]

	@property
	def bounded(self) -> bool:
		return self[1] is not None

	def clamped_preference(self):
		return clamp(self[2], self[0], self[1])

	def __repr__(self):
		if self[1] is None:
			return f"Item(minimum={self[0]}, preferred={self[2]})"
		return f"Item(minimum={self[0]}, maximum={self[1]}, preferred={self[2]})"


class AllocationRequest(NamedTuple):
	"""The budget and the ordered item snapshot for one allocation call."""
	available_space: float
	items: tuple

	@classmethod
	def build(cls, available_space, items: Iterable) -> AllocationRequest:
		return cls(available_space, tuple(map(Item.of, items)))

	@property
	def total_minimum(self):
		return sum(item.minimum for item in self.items)

	@property
	def total_preferred(self):
		return sum(item.preferred for item in self.items)

	@property
	def has_unbounded(self) -> bool:
		return any(not item.bounded for item in self.items)


class AllocationResult(NamedTuple):
	"""Allocated sizes in request order, plus the total they were aiming for."""
	sizes: tuple
	target: float

	@property
	def total(self):
		return sum(self.sizes)

	@property
	def shortfall(self):
		"""How far the sizes fall below the target (negative when they overshoot)."""
		return self.target - self.total


# -------
# Helpers
# -------

def clamp(value, minimum, maximum=UNBOUNDED):
	"""Bound value into [minimum, maximum]; a maximum of None has no upper bound."""
	if value < minimum:
		return minimum
	if maximum is not None and value > maximum:
		return maximum
	return value

def _round_half_up(value) -> int:
	return math.floor(value + 0.5)

def _integer_bounds(item: Item) -> tuple[int, Optional[int]]:
	low = math.ceil(item.minimum)
	if item.maximum is None:
		return low, None
	# A fractional fixed size can leave no integer inside the bounds; the minimum wins
	return low, max(low, math.floor(item.maximum))

def _grow_potential(item: Item):
	if item.maximum is None:
		return max(1.0, item.preferred)
	potential = item.maximum - item.preferred
	return potential if potential > ZERO_EPSILON else 0.0

def _shrink_potential(item: Item):
	potential = item.preferred - item.minimum
	return potential if potential > ZERO_EPSILON else 0.0


# -------
# Floating-point distribution
# -------

def distribute(available_space, items) -> list[float]:
	"""Distribute available_space among items, honouring every item's bounds.

	Args:
		available_space: The budget. Non-finite values count as insufficient.
		items: Ordered Items (or anything Item.of() accepts).

	Returns:
		One size per item, in the same order.
	"""
	items = [Item.of(item) for item in items]
	if not items:
		return []

	total_minimum = sum(item.minimum for item in items)
	total_preferred = sum(item.preferred for item in items)

	if not math.isfinite(available_space) or available_space < total_minimum:
		return [item.minimum for item in items]

	if abs(available_space - total_preferred) < EQUAL_TOLERANCE:
		return [item.clamped_preference() for item in items]

	if available_space > total_preferred:
		return _expand(items, available_space - total_preferred)

	return _shrink(items, total_preferred - available_space)

def _expand(items: list[Item], extra) -> list[float]:
	potentials = [_grow_potential(item) for item in items]
	total_potential = sum(potentials)
	if total_potential < ZERO_EPSILON:
		return [item.clamped_preference() for item in items]

	# First pass: everyone gets their share of the extra, bounded by their limits
	sizes = [
		clamp(item.preferred + extra * potential / total_potential, item.minimum, item.maximum)
		for item, potential in zip(items, potentials)
	]

	# Bounded items that hit their maximum leave some of the extra unclaimed
	used = sum(size - item.preferred for size, item in zip(sizes, items))
	remaining = extra - used
	unbounded = [index for index, item in enumerate(items) if item.maximum is None]
	if remaining <= EQUAL_TOLERANCE or not unbounded:
		return sizes

	base = sum(sizes[index] for index in unbounded)
	for index in unbounded:
		if base > 0:
			share = remaining * sizes[index] / base
		else:
			share = remaining / len(unbounded)
		sizes[index] = clamp(sizes[index] + share, items[index].minimum)
	return sizes

def _shrink(items: list[Item], deficit) -> list[float]:
	potentials = [_shrink_potential(item) for item in items]
	total_potential = sum(potentials)
	if total_potential < ZERO_EPSILON:
		return [item.clamped_preference() for item in items]

	# Single pass only, whatever clamping leaves over is not handed on
	return [
		clamp(item.preferred - deficit * potential / total_potential, item.minimum, item.maximum)
		for item, potential in zip(items, potentials)
	]


# -------
# Integer-exact distribution
# -------

def distribute_exact(available_space, items) -> list[int]:
	"""Like distribute(), but in whole units summing to floor(available_space).

	Every item except the last gets its ideal size rounded to the nearest
	integer. The last item absorbs the rounding remainder, bounded by its own
	integer limits, so the total can only miss the target when the minimums
	(or maximums) make it unreachable.
	"""
	items = [Item.of(item) for item in items]
	if not items:
		return []

	ideal = distribute(available_space, items)
	target = math.floor(available_space) if math.isfinite(available_space) else 0

	sizes = []
	running_sum = 0
	for item, size in zip(items[:-1], ideal):
		low, high = _integer_bounds(item)
		size = clamp(_round_half_up(size), low, high)
		sizes.append(size)
		running_sum += size

	low, high = _integer_bounds(items[-1])
	sizes.append(clamp(target - running_sum, low, high))
	return sizes

def allocate(request: AllocationRequest, *, exact=False) -> AllocationResult:
	"""Run either distribution variant on a request and report the outcome."""
	if exact:
		available = request.available_space
		target = math.floor(available) if math.isfinite(available) else 0
		return AllocationResult(tuple(distribute_exact(available, request.items)), target)
	return AllocationResult(tuple(distribute(request.available_space, request.items)), request.available_space)

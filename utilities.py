"""
General utility functions for FitColumns.

This module contains the command-line parsing and formatting helpers that are
not part of the allocator itself, so they can be tested without going through
argparse.
"""

import math
import re

from fitcolumns.allocator import Item, UNBOUNDED

_NUMBER = r'\d+(?:\.\d+)?'
_UNBOUNDED_WORDS = ('', '*', 'inf', 'none')


def parse_size(size_str):
	"""
	Parse a single non-negative size.

	Accepts integers and decimals ('120', '80.5'). Returns None if parsing fails.
	"""
	if size_str is None:
		return None
	size_str = size_str.strip()
	if not re.fullmatch(_NUMBER, size_str):
		return None
	value = float(size_str)
	return int(value) if value.is_integer() and '.' not in size_str else value


def parse_item_spec(item_str):
	"""
	Parse an item specification into an Item.

	Supports:
	- 'MIN:MAX:PREF'	all three fields: '20:200:100'
	- 'MIN:*:PREF'		unbounded maximum; '*', 'inf', 'none' or empty all mean unbounded
	- 'PREF'			a bare preferred size, same as '0:*:PREF'

	Returns None if the string is malformed or the values contradict each other
	(negative minimum, maximum below minimum).
	"""
	if not item_str:
		return None
	if ' ' in item_str:
		return None

	parts = item_str.lower().split(':')
	if len(parts) == 1:
		preferred = parse_size(parts[0])
		return None if preferred is None else Item(0, UNBOUNDED, preferred)
	if len(parts) != 3:
		return None

	min_str, max_str, pref_str = parts
	minimum = parse_size(min_str)
	preferred = parse_size(pref_str)
	if minimum is None or preferred is None:
		return None

	if max_str in _UNBOUNDED_WORDS:
		maximum = UNBOUNDED
	else:
		maximum = parse_size(max_str)
		if maximum is None:
			return None

	try:
		return Item(minimum, maximum, preferred)
	except ValueError:
		return None


def format_item(item):
	"""
	Convert an Item back into the 'MIN:MAX:PREF' form parse_item_spec() accepts.

	Examples:
	- Item(20, None, 100) -> "20:*:100"
	- Item(50, 200, 100) -> "50:200:100"
	"""
	maximum = '*' if item.maximum is None else format_size(item.maximum)
	return f"{format_size(item.minimum)}:{maximum}:{format_size(item.preferred)}"


def format_size(size, digits=2):
	"""
	Format a size compactly: whole numbers without decimals, others rounded.

	Examples:
	- 120 -> "120"
	- 120.0 -> "120"
	- 33.333333 -> "33.33"
	"""
	if isinstance(size, int) or (math.isfinite(size) and float(size).is_integer()):
		return str(int(size))
	return f"{size:.{digits}f}".rstrip('0').rstrip('.')


def format_sizes(sizes, digits=2):
	"""Format a run of sizes as a space separated line, followed by their total."""
	sizes = list(sizes)
	return f"{' '.join(format_size(size, digits) for size in sizes)} (total {format_size(sum(sizes), digits)})"

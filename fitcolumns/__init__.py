"""
FitColumns - proportional column width allocation.

The allocator lives in fitcolumns.allocator; fitcolumns.resizer drives it from
a column host. The Win32 host (fitcolumns.win32_listview) is not imported here
since it needs pywin32.
"""

from .allocator import (
	UNBOUNDED, Item, AllocationRequest, AllocationResult,
	clamp, distribute, distribute_exact, allocate,
)

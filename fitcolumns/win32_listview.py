"""
Win32 list-view (SysListView32, report view) host for the column resizer.

The native control has no notion of column minimum/maximum widths, so the
limits are supplied per column index when the host is created. Change
detection is poll-based: call sync() from the owning window's WM_SIZE /
WM_WINDOWPOSCHANGED handling (or a periodic timer) and it fires the host
events for whatever changed since the previous call.

Typical wiring in the owner's window procedure:

	host = ListViewHost(list_hwnd, limits=[(60, None), (40, 120)], owner_hwnd=hwnd)
	resizer = ColumnResizer.install(host, debouncer_factory=host.make_debouncer)
	...
	if host.handle_message(msg, wparam, lparam):
		return 0
"""

from __future__ import annotations

from typing import Optional, Sequence

import commctrl
import win32api
import win32con
import win32gui

from .host import ColumnHost, HostColumn, HostScrollBar
from .win_api import Win32TimerDebouncer

# Timer id used for the debounced resize on the owner window
TIMER_RESIZE_DEBOUNCE = 3001


class ListViewColumn(HostColumn):
	def __init__(self, hwnd, index: int, min_width=0, max_width=None):
		self.hwnd = hwnd
		self.index = index
		self._min_width = min_width
		self._max_width = max_width

	@property
	def min_width(self):
		return self._min_width

	@property
	def max_width(self):
		return self._max_width

	@property
	def pref_width(self):
		return win32gui.SendMessage(self.hwnd, commctrl.LVM_GETCOLUMNWIDTH, self.index, 0)

	@pref_width.setter
	def pref_width(self, value):
		# The control only takes whole pixels
		win32gui.SendMessage(self.hwnd, commctrl.LVM_SETCOLUMNWIDTH, self.index, int(round(value)))

class ListViewScrollBar(HostScrollBar):
	"""The list view's built-in vertical scrollbar (WS_VSCROLL), not a child window."""

	def __init__(self, hwnd):
		super().__init__()
		self.hwnd = hwnd

	@property
	def visible(self):
		return bool(win32gui.GetWindowLong(self.hwnd, win32con.GWL_STYLE) & win32con.WS_VSCROLL)

	@property
	def width(self):
		return win32api.GetSystemMetrics(win32con.SM_CXVSCROLL)

	@property
	def pref_width(self):
		return win32api.GetSystemMetrics(win32con.SM_CXVSCROLL)

class ListViewHost(ColumnHost):
	def __init__(self, hwnd, limits: Sequence[tuple] = (), owner_hwnd=None, timer_id=TIMER_RESIZE_DEBOUNCE):
		"""
		Args:
			hwnd: The list view control.
			limits: (min_width, max_width) per column index; max_width None is unbounded.
				Columns past the end of the list get (0, None).
			owner_hwnd: Window that receives the debounce WM_TIMER; defaults to the
				list view's parent.
			timer_id: Timer id for the debounce timer on owner_hwnd.
		"""
		super().__init__()
		self.hwnd = hwnd
		self.limits = list(limits)
		self.owner_hwnd = owner_hwnd if owner_hwnd is not None else win32gui.GetParent(hwnd)
		self.timer_id = timer_id
		self.scrollbar = ListViewScrollBar(hwnd)
		self._debouncer: Optional[Win32TimerDebouncer] = None
		self._snapshot = self._take_snapshot()

	def make_debouncer(self, callback, delay_ms) -> Win32TimerDebouncer:
		"""Debouncer factory for ColumnResizer.install(); fires on the owner's thread."""
		self._debouncer = Win32TimerDebouncer(callback, delay_ms, self.owner_hwnd, self.timer_id)
		return self._debouncer

	# --- geometry

	@property
	def width(self):
		left, _, right, _ = win32gui.GetWindowRect(self.hwnd)
		return right - left

	@property
	def height(self):
		_, top, _, bottom = win32gui.GetWindowRect(self.hwnd)
		return bottom - top

	@property
	def insets(self):
		# Whatever the frame takes beyond the client area and the scrollbar is border
		_, _, client_width, _ = win32gui.GetClientRect(self.hwnd)
		scrollbar = self.scrollbar.width if self.scrollbar.visible else 0
		border = max(0, self.width - client_width - scrollbar)
		return (border / 2, border / 2)

	def is_displayed(self):
		return bool(win32gui.IsWindow(self.hwnd) and win32gui.IsWindowVisible(self.hwnd))

	# --- columns

	def column_count(self) -> int:
		header = win32gui.SendMessage(self.hwnd, commctrl.LVM_GETHEADER, 0, 0)
		if not header:
			return 0
		return win32gui.SendMessage(header, commctrl.HDM_GETITEMCOUNT, 0, 0)

	def visible_columns(self):
		columns = []
		for index in range(self.column_count()):
			min_width, max_width = self.limits[index] if index < len(self.limits) else (0, None)
			columns.append(ListViewColumn(self.hwnd, index, min_width, max_width))
		return columns

	def find_vertical_scrollbar(self):
		return self.scrollbar

	# --- change detection

	def _take_snapshot(self):
		if not win32gui.IsWindow(self.hwnd):
			return (False, 0, 0, False)
		return (self.is_displayed(), self.width, self.column_count(), self.scrollbar.visible)

	def sync(self):
		"""Fire events for everything that changed since the last sync()."""
		old_displayed, old_width, old_count, old_scrollbar = self._snapshot
		self._snapshot = displayed, width, count, scrollbar = self._take_snapshot()
		if displayed != old_displayed:
			self.fire('display', old_displayed, displayed)
		if width != old_width:
			self.fire('width', old_width, width)
		if count != old_count:
			self.fire('columns')
		if scrollbar != old_scrollbar:
			self.scrollbar.fire('visible', old_scrollbar, scrollbar)

	def handle_message(self, msg, wparam, lparam) -> bool:
		"""Feed the owner window's messages in; returns True if the message was consumed."""
		if msg == win32con.WM_TIMER:
			return self._debouncer is not None and self._debouncer.handle_timer(wparam)
		if msg in (win32con.WM_SIZE, win32con.WM_WINDOWPOSCHANGED):
			self.sync()
		return False

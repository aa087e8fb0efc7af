"""
Windows API timer helpers for FitColumns.

Timers created here post WM_TIMER to a window, so whatever they trigger runs
on that window's thread. The window procedure has to hand WM_TIMER over to
Win32TimerDebouncer.handle_timer() for the debouncer to fire.
"""

import ctypes
import logging
from typing import Callable, NamedTuple

logger = logging.getLogger(__name__)

# --- Timer class to manage window timers

class Timer(NamedTuple):
	"""Simple structure to hold timer information."""
	id: int
	ms: int | None = None  # Can be None for timers that specify interval at start time

	_timers = dict()

	def start(self, hwnd, interval_ms=None):
		"""Sets (or restarts) a timer using the user32 library.

		Args:
			hwnd: Window handle to associate the timer with
			interval_ms: Optional override for the timer interval in milliseconds.
						If None, uses self.ms. Must be positive.
		"""
		effective_ms = interval_ms if interval_ms is not None else self.ms
		if effective_ms is None or effective_ms <= 0:
			raise ValueError(f"Timer {self.id} requires a positive interval (got {effective_ms})")

		# SetTimer with an existing id on the same window replaces the old timer
		ctypes.windll.user32.SetTimer(hwnd, self.id, effective_ms, None)
		Timer._timers[self] = hwnd
		return self

	def stop(self):
		"""Kills a timer using the user32 library; stopping an idle timer is a no-op."""
		hwnd = Timer._timers.pop(self, None)
		if hwnd is not None:
			ctypes.windll.user32.KillTimer(hwnd, self.id)
		return self

	@property
	def running(self) -> bool:
		return self in Timer._timers

	@staticmethod
	def stop_all(hwnd=None):
		"""Stops all active timers."""
		for timer,t_hwnd in tuple(Timer._timers.items()):
			if hwnd is None or t_hwnd == hwnd:
				timer.stop()

# ---

class Win32TimerDebouncer:
	"""Debouncer driven by a window timer instead of a worker thread.

	Same interface as fitcolumns.debounce.Debouncer.
	"""

	def __init__(self, callback: Callable[[], None], delay_ms: int, hwnd, timer_id: int):
		self.callback = callback
		self.hwnd = hwnd
		# Windows clamps timer intervals to at least USER_TIMER_MINIMUM anyway
		self.timer = Timer(id=timer_id, ms=max(1, delay_ms))

	@property
	def pending(self) -> bool:
		return self.timer.running

	def trigger(self):
		self.timer.start(self.hwnd)

	def cancel(self) -> bool:
		was_pending = self.timer.running
		self.timer.stop()
		return was_pending

	def flush(self) -> bool:
		if not self.cancel():
			return False
		self.callback()
		return True

	def handle_timer(self, timer_id) -> bool:
		"""Handle a WM_TIMER; returns True if it was this debouncer's timer."""
		if timer_id != self.timer.id:
			return False
		# Window timers repeat, a debounce fires once
		if self.cancel():
			self.callback()
		return True

"""
Trailing-edge debouncing of callbacks.

A burst of trigger() calls within the delay collapses into a single call of the
callback, delay_ms after the last trigger. Timers run on daemon threads, so
the callback must be safe to run off the thread that triggered it.
"""

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
	"""Coalesce rapid triggers into one trailing callback."""

	def __init__(self, callback: Callable[[], None], delay_ms: int):
		if delay_ms < 0:
			raise ValueError(f"Debounce delay must be non-negative (got {delay_ms})")
		self.callback = callback
		self.delay_ms = delay_ms
		self._lock = threading.Lock()
		self._timer: Optional[threading.Timer] = None

	@property
	def pending(self) -> bool:
		"""True while a triggered call has not run or been cancelled yet."""
		with self._lock:
			return self._timer is not None

	def trigger(self):
		"""(Re)start the delay window."""
		with self._lock:
			if self._timer is not None:
				self._timer.cancel()
			timer = threading.Timer(self.delay_ms / 1000, self._fire)
			timer.daemon = True
			self._timer = timer
			timer.start()

	def cancel(self) -> bool:
		"""Drop any pending call. Returns True if one was pending."""
		with self._lock:
			timer, self._timer = self._timer, None
		if timer is None:
			return False
		timer.cancel()
		return True

	def flush(self) -> bool:
		"""Run a pending call right now instead of waiting for the delay."""
		if not self.cancel():
			return False
		self.callback()
		return True

	def _fire(self):
		with self._lock:
			# A newer trigger (or a cancel) replaced us while we were waiting
			if self._timer is not threading.current_thread():
				return
			self._timer = None
		try:
			self.callback()
		except Exception:
			logger.exception("Debounced callback %r failed", self.callback)

"""
Automatic column resizing for a column host.

The ColumnResizer keeps a host's visible columns filling its width: it turns
the host's extent, insets and scrollbar into a budget, runs the allocator over
a snapshot of the columns, and writes back the widths that changed enough to
matter.

It reacts to the host on its own once installed:
	width changes				debounced, a window drag produces one resize
	column set changes			immediate, and any pending debounced resize is dropped
	scrollbar shown/hidden		immediate
	scrollbar width changes		immediate, if the scrollbar is visible
	display changes				detach when the host leaves the display, re-attach when it returns
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .allocator import AllocationRequest, allocate
from .constants import MINIMUM_AVAILABLE_WIDTH, SCROLLBAR_WIDTH_CHANGE_THRESHOLD
from .debounce import Debouncer
from .host import ColumnHost, HostColumn, HostScrollBar
from .settings import ResizerSettings

logger = logging.getLogger(__name__)

DebouncerFactory = Callable[[Callable[[], None], int], Debouncer]


class ColumnResizer:
	"""Keeps a host's columns proportionally filling its width.

	Use install() rather than constructing directly, so the host gets a chance
	to switch off its own column fitting first.
	"""

	@classmethod
	def install(cls, host: ColumnHost, settings: Optional[ResizerSettings] = None,
			debouncer_factory: Optional[DebouncerFactory] = None) -> ColumnResizer:
		"""Install automatic column resizing on a host and return the resizer.

		Args:
			host: The column container to manage.
			settings: Tuning values; defaults to ResizerSettings().
			debouncer_factory: Builds the debouncer for width changes from
				(callback, delay_ms). Defaults to the thread-based Debouncer;
				hosts whose widgets must only be touched from their own thread
				pass a factory that fires there instead.
		"""
		if host is None:
			raise TypeError("Host cannot be None for installing a ColumnResizer")
		if host.ensure_unconstrained_policy():
			logger.info("Switched off the host's own column fitting for ColumnResizer.")
		logger.debug("ColumnResizer installing on %r...", host)
		resizer = cls(host, settings, debouncer_factory)
		logger.debug("ColumnResizer installation complete.")
		return resizer

	def __init__(self, host: ColumnHost, settings: Optional[ResizerSettings] = None,
			debouncer_factory: Optional[DebouncerFactory] = None):
		if host is None:
			raise TypeError("Host cannot be None")
		self.host = host
		self.settings = settings if settings is not None else ResizerSettings()
		factory = debouncer_factory if debouncer_factory is not None else Debouncer
		self._debouncer = factory(self._resize_columns, self.settings.debounce_ms)

		self._resize_lock = threading.Lock()
		self._rerun_requested = False
		self._attached = False
		self._scrollbar: Optional[HostScrollBar] = None
		self._scrollbar_listeners_attached = False

		self.host.add_listener('display', self._on_display_changed)
		if self.host.is_displayed():
			logger.debug("Host already displayed during construction. Attaching listeners.")
			self.attach()

	@property
	def attached(self) -> bool:
		return self._attached

	@property
	def scrollbar(self) -> Optional[HostScrollBar]:
		return self._scrollbar

	# --- lifecycle

	def attach(self):
		"""Subscribe to the host and schedule an initial resize.

		Safe to call repeatedly; listeners are only ever registered once.
		"""
		if not self._attached:
			self.host.add_listener('width', self._on_width_changed)
			self.host.add_listener('columns', self._on_columns_changed)
			self._attached = True
		self._find_and_attach_scrollbar()
		# Defer the first pass so the host can finish settling into the display
		self._debouncer.trigger()

	def detach(self):
		"""Drop every host and scrollbar subscription and any pending resize."""
		self._debouncer.cancel()
		self.host.remove_listener('width', self._on_width_changed)
		self.host.remove_listener('columns', self._on_columns_changed)
		self._detach_scrollbar_listeners()
		self._attached = False
		logger.debug("ColumnResizer listeners detached.")

	def uninstall(self):
		"""Detach and stop following the host's display changes."""
		self.detach()
		self.host.remove_listener('display', self._on_display_changed)

	def force_resize(self):
		"""Resize right now, dropping any pending debounced resize.

		Rarely needed, since the listeners catch the usual changes; useful after
		changing column constraints behind the host's back.
		"""
		logger.debug("force_resize() called externally.")
		self._debouncer.cancel()
		self._resize_columns()

	# --- event handlers

	def _on_display_changed(self, was_displayed, displayed):
		if was_displayed:
			logger.debug("Host removed from display. Detaching listeners.")
			self.detach()
		if displayed:
			logger.debug("Host added to display. Attaching listeners.")
			self.attach()

	def _on_width_changed(self, old_width, new_width):
		self._debouncer.trigger()

	def _on_columns_changed(self):
		logger.debug("Visible columns changed. Triggering instant resize.")
		self._debouncer.cancel()
		self._resize_columns()

	def _on_scrollbar_visible_changed(self, old, new):
		logger.debug("Scrollbar visibility changed: %s -> %s. Triggering resize.", old, new)
		self._debouncer.cancel()
		self._resize_columns()

	def _on_scrollbar_width_changed(self, old_width, new_width):
		scrollbar = self._scrollbar
		if scrollbar is not None and scrollbar.visible \
				and abs(old_width - new_width) > SCROLLBAR_WIDTH_CHANGE_THRESHOLD:
			logger.debug("Scrollbar width changed: %s -> %s. Triggering resize.", old_width, new_width)
			self._debouncer.cancel()
			self._resize_columns()

	# --- scrollbar tracking

	def _find_and_attach_scrollbar(self):
		if self._scrollbar is None:
			self._scrollbar = self.host.find_vertical_scrollbar()
			if self._scrollbar is not None:
				logger.debug("Vertical scrollbar found.")
		if self._scrollbar is not None and self._attached and not self._scrollbar_listeners_attached:
			logger.debug("Attaching listeners to vertical scrollbar.")
			self._scrollbar.add_listener('visible', self._on_scrollbar_visible_changed)
			self._scrollbar.add_listener('width', self._on_scrollbar_width_changed)
			self._scrollbar_listeners_attached = True

	def _detach_scrollbar_listeners(self):
		if self._scrollbar is not None and self._scrollbar_listeners_attached:
			logger.debug("Detaching listeners from vertical scrollbar.")
			self._scrollbar.remove_listener('visible', self._on_scrollbar_visible_changed)
			self._scrollbar.remove_listener('width', self._on_scrollbar_width_changed)
		self._scrollbar_listeners_attached = False

	# --- resizing

	def scrollbar_width(self) -> float:
		"""Width the visible vertical scrollbar takes out of the budget, 0 if hidden."""
		scrollbar = self._scrollbar
		if scrollbar is None or not scrollbar.visible:
			logger.debug("Resize check: scrollbar not visible or not found.")
			return 0.0
		current, preferred = scrollbar.width, scrollbar.pref_width
		logger.debug("Resize check: scrollbar is visible. width=%s, pref_width=%s", current, preferred)
		if current > 0:
			return current
		if preferred > 0:
			logger.warning("Scrollbar has no width yet, using its preferred width %s.", preferred)
			return preferred
		logger.error("Scrollbar reports no width at all, using fallback width %s.",
			self.settings.scrollbar_fallback_width)
		return self.settings.scrollbar_fallback_width

	def available_width(self) -> float:
		"""The budget: host width less insets, padding buffer and scrollbar."""
		left, right = self.host.insets
		horizontal_padding = left + right + self.settings.padding_buffer
		return self.host.width - horizontal_padding - self.scrollbar_width()

	def _resize_columns(self):
		# Set before trying the lock, so a cycle that is just finishing sees it
		self._rerun_requested = True
		while self._rerun_requested:
			if not self._resize_lock.acquire(blocking=False):
				# The running cycle goes round again once it's done
				logger.debug("Resize already in progress, queued another pass.")
				return
			try:
				self._rerun_requested = False
				self._resize_once()
			except Exception:
				logger.exception("Error during column resizing")
			finally:
				self._resize_lock.release()

	def _resize_once(self):
		host = self.host
		if not host.is_displayed() or host.width <= 0 or host.height <= 0:
			return

		# The scrollbar may only exist once the host has been laid out
		self._find_and_attach_scrollbar()

		columns = host.visible_columns()
		if not columns:
			logger.debug("No visible columns.")
			return

		available = self.available_width()
		if available <= MINIMUM_AVAILABLE_WIDTH:
			logger.warning("Available width too small (%s).", available)
			return
		logger.debug("Resizing with available width: %s", available)

		request = AllocationRequest.build(available, (column.constraints() for column in columns))
		if available < request.total_minimum:
			logger.warning("Available width %s < total min width %s. Setting columns to min width.",
				available, request.total_minimum)
		elif available > request.total_preferred and not request.has_unbounded:
			logger.debug("All columns are bounded; space beyond their maximums stays unused.")
		result = allocate(request, exact=self.settings.exact)
		if self.settings.exact and result.shortfall != 0:
			logger.info("Column widths total %s instead of %s; the column limits leave no exact fit.",
				result.total, result.target)

		self._apply_widths(columns, result.sizes)
		logger.debug("Resize finished.")

	def _apply_widths(self, columns: list[HostColumn], widths):
		applied_total = 0
		for column, width in zip(columns, widths):
			# Leave columns alone when the change wouldn't be visible
			if abs(column.pref_width - width) > self.settings.commit_threshold:
				column.pref_width = width
			applied_total += width
		logger.debug("Applied calculated total width: %s", applied_total)

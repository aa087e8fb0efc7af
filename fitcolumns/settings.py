"""
Settings management for FitColumns.
"""

import json
import logging
from typing import NamedTuple

from .constants import (
	SETTINGS_FILE, RESIZE_DEBOUNCE_MS, HORIZONTAL_PADDING_BUFFER,
	DEFAULT_SCROLLBAR_WIDTH_FALLBACK, COMMIT_THRESHOLD,
)

logger = logging.getLogger(__name__)

# -------

class ResizerSettings(NamedTuple):
	"""Tuning knobs of a column resizer."""
	debounce_ms: int = RESIZE_DEBOUNCE_MS
	padding_buffer: float = HORIZONTAL_PADDING_BUFFER
	scrollbar_fallback_width: float = DEFAULT_SCROLLBAR_WIDTH_FALLBACK
	commit_threshold: float = COMMIT_THRESHOLD
	exact: bool = False		# Whole-unit widths with the last column absorbing the remainder

	def replace(self, **changes) -> 'ResizerSettings':
		return validate_settings(self._replace(**changes))

def validate_settings(settings: ResizerSettings) -> ResizerSettings:
	"""Check every field's type and range, raising ValueError on the first bad one."""
	if isinstance(settings.debounce_ms, bool) or not isinstance(settings.debounce_ms, int) or settings.debounce_ms < 0:
		raise ValueError(f"debounce_ms must be a non-negative integer, got {settings.debounce_ms!r}")
	for name in ('padding_buffer', 'scrollbar_fallback_width', 'commit_threshold'):
		value = getattr(settings, name)
		if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
			raise ValueError(f"{name} must be a non-negative number, got {value!r}")
	if not isinstance(settings.exact, bool):
		raise ValueError(f"exact must be true or false, got {settings.exact!r}")
	return settings

def settings_from_dict(data: dict) -> ResizerSettings:
	if not isinstance(data, dict):
		raise ValueError(f"Settings must be a JSON object, got {type(data).__name__}")
	known = {key: value for key, value in data.items() if key in ResizerSettings._fields}
	for key in data.keys() - known.keys():
		logger.warning("Ignoring unknown setting %r", key)
	return validate_settings(ResizerSettings(**known))

def load_settings(settings_file=SETTINGS_FILE) -> ResizerSettings:
	"""Load resizer settings, falling back to defaults if the file is missing or unreadable."""
	try:
		with open(settings_file, "rt") as f:
			data = json.load(f)
	except FileNotFoundError:
		return ResizerSettings()
	except (json.JSONDecodeError, UnicodeDecodeError) as e:
		logger.warning("Settings file %s is not valid JSON (%s), using defaults", settings_file, e)
		return ResizerSettings()
	except OSError as e:
		logger.warning("Settings file %s could not be read (%s), using defaults", settings_file, e)
		return ResizerSettings()
	return settings_from_dict(data)

def save_settings(settings: ResizerSettings, settings_file=SETTINGS_FILE):
	"""Save resizer settings as a JSON object."""
	logger.info("Saving resizer settings to %s: %s", settings_file, dict(settings._asdict()))
	with open(settings_file, "wt") as f:
		json.dump(settings._asdict(), f, indent='\t')

"""
Constants and configuration values for FitColumns.
"""

import sys
import os

# Allocation tolerances
ZERO_EPSILON = 1e-6			# Potentials below this count as "no room at all"
EQUAL_TOLERANCE = 0.5		# Budget within this of the preferred total is an exact fit

# Resizer tuning
RESIZE_DEBOUNCE_MS = 60					# Coalescing window for width changes
DEFAULT_SCROLLBAR_WIDTH_FALLBACK = 15.0	# Used when a visible scrollbar reports no width at all
HORIZONTAL_PADDING_BUFFER = 4.0			# Extra space kept clear of the host's insets
COMMIT_THRESHOLD = 0.5					# Smaller width changes are not written back
SCROLLBAR_WIDTH_CHANGE_THRESHOLD = 0.1	# Scrollbar width jitter below this is ignored
MINIMUM_AVAILABLE_WIDTH = 1.0			# At or below this there is nothing worth allocating

# Application settings
SETTINGS_FILE = os.path.splitext(sys.argv[0])[0] + '.json'

# type: ignore

"""
fit-columns.py - FitColumns command-line entry point

FitColumns divides a fixed width among an ordered set of columns, each with a
minimum, an optional maximum and a preferred width, growing or shrinking the
columns in proportion to their slack without ever breaking their limits.

Commands:
- distribute: run the allocator once on a budget and print the widths
- simulate:   drive the column resizer on an in-memory table of the given
              width(s), including insets, padding and a vertical scrollbar

Items are written MIN:MAX:PREF, with '*' (or 'inf', or nothing) as MAX for
unbounded columns, or as a bare PREF meaning 0:*:PREF.
"""

import sys, argparse, logging

from fitcolumns import allocator, settings as settings_module
from fitcolumns.host import MemoryTable, MemoryColumn, MemoryScrollBar
from fitcolumns.resizer import ColumnResizer
from utilities import parse_item_spec, parse_size, format_item, format_sizes

logger = logging.getLogger("fit-columns")

# --- Core Functions ---

def item_type(value):
	"""argparse type for MIN:MAX:PREF item specifications."""
	item = parse_item_spec(value)
	if item is None:
		raise argparse.ArgumentTypeError(f"Invalid item '{value}', expected MIN:MAX:PREF or PREF")
	return item

def budget_type(value):
	"""argparse type for the budget; any real number is accepted."""
	try:
		return float(value)
	except ValueError:
		raise argparse.ArgumentTypeError(f"Invalid budget '{value}'")

def widths_type(value):
	"""argparse type for one or more comma separated table widths."""
	widths = [parse_size(part) for part in value.split(',')]
	if not widths or any(width is None for width in widths):
		raise argparse.ArgumentTypeError(f"Invalid table width list '{value}'")
	return widths

def parse_arguments(argv=None):
	"""Parse command line arguments."""
	parser = argparse.ArgumentParser(
		description='FitColumns - proportional column width allocation',
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  distribute 360 20:*:100 20:*:100 20:*:100
  distribute 120 50:200:100 50:200:100
  distribute --exact 301.2 100.4 100.3 100.3
  simulate --table-width 400,360,500 --scrollbar 15 60:*:120 40:120:80 100
		""".strip()
	)
	parser.add_argument('-v', '--verbose', action='count', default=0,
			help='Log more detail (repeat for debug output)')

	subparsers = parser.add_subparsers(dest='command', required=True, help='Available commands')

	distribute_parser = subparsers.add_parser('distribute', help='Allocate a budget among items once')
	distribute_parser.add_argument('budget', type=budget_type, help='Total space to divide')
	distribute_parser.add_argument('items', type=item_type, nargs='+', metavar='ITEM',
			help='Item as MIN:MAX:PREF or PREF')
	distribute_parser.add_argument('--exact', action='store_true',
			help='Whole-unit sizes, the last item absorbs the rounding remainder')

	simulate_parser = subparsers.add_parser('simulate', help='Drive the column resizer on an in-memory table')
	simulate_parser.add_argument('--table-width', type=widths_type, required=True, metavar='W[,W...]',
			help='Table width, or a comma separated sequence of widths to resize through')
	simulate_parser.add_argument('--insets', type=float, nargs=2, default=(0.0, 0.0), metavar=('LEFT', 'RIGHT'),
			help='Left and right insets of the table')
	simulate_parser.add_argument('--scrollbar', type=float, default=None, metavar='PX',
			help='Show a vertical scrollbar of this width')
	simulate_parser.add_argument('--settings', default=None, metavar='FILE',
			help='JSON resizer settings file (default: fit-columns.json beside this script)')
	simulate_parser.add_argument('--exact', action='store_true',
			help='Whole-unit widths, overriding the settings file')
	simulate_parser.add_argument('--save-settings', action='store_true',
			help='Write the effective settings back to the settings file')
	simulate_parser.add_argument('items', type=item_type, nargs='+', metavar='ITEM',
			help='Column as MIN:MAX:PREF or PREF')

	return parser.parse_args(argv)

def configure_logging(verbosity):
	level = (logging.WARNING, logging.INFO, logging.DEBUG)[min(verbosity, 2)]
	logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')

# --- Commands ---

def run_distribute(args):
	for item in args.items:
		logger.info("Item %s", format_item(item))
	if args.exact:
		sizes = allocator.distribute_exact(args.budget, args.items)
	else:
		sizes = allocator.distribute(args.budget, args.items)
	print(format_sizes(sizes))
	return 0

def run_simulate(args):
	settings_file = args.settings if args.settings is not None else settings_module.SETTINGS_FILE
	try:
		resizer_settings = settings_module.load_settings(settings_file)
	except ValueError as e:
		print(f"Error: Invalid settings in '{settings_file}': {e}", file=sys.stderr)
		return 2
	if args.exact:
		resizer_settings = resizer_settings.replace(exact=True)
	if args.save_settings:
		settings_module.save_settings(resizer_settings, settings_file)

	widths = args.table_width
	scrollbar = None
	if args.scrollbar is not None:
		scrollbar = MemoryScrollBar(width=args.scrollbar, pref_width=args.scrollbar, visible=True)
	columns = [
		MemoryColumn(f"column{index}", item.minimum, item.maximum, item.preferred)
		for index, item in enumerate(args.items, 1)
	]
	table = MemoryTable(widths[0], insets=args.insets, columns=columns, scrollbar=scrollbar)

	resizer = ColumnResizer.install(table, resizer_settings)
	try:
		for width in widths:
			table.set_width(width)
			resizer.force_resize()
			print(f"{width:>8}: available {resizer.available_width():g} -> "
				+ format_sizes(column.pref_width for column in table.visible_columns()))
	finally:
		resizer.uninstall()
	return 0

def main(argv=None):
	args = parse_arguments(argv)
	configure_logging(args.verbose)
	if args.command == 'distribute':
		return run_distribute(args)
	return run_simulate(args)

if __name__ == "__main__":
	sys.exit(main())

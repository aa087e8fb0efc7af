#!/usr/bin/env python3
"""
Test suite for argument validation in fit-columns.py

This module tests the command-line argument parsing and validation logic,
including item specifications and table width lists, and runs both commands
end to end.
"""

import unittest
import sys
import os
import tempfile
import json
from unittest.mock import patch
from io import StringIO

# Add the project root to the path so we can import from utilities.py
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from fitcolumns.allocator import Item

# fit-columns.py isn't importable by name
import importlib.util
fit_columns_path = os.path.join(project_root, "fit-columns.py")
spec = importlib.util.spec_from_file_location("fit_columns", fit_columns_path)
if spec and spec.loader:
	fit_columns = importlib.util.module_from_spec(spec)
	spec.loader.exec_module(fit_columns)
else:
	raise ImportError("Could not load fit-columns.py module")

class TestArgumentValidation(unittest.TestCase):
	"""Test the argument parsing validation functions."""

	def test_distribute_arguments(self):
		"""Test that budgets and items are parsed into numbers and Items."""
		with patch('sys.argv', ['fit-columns.py', 'distribute', '360', '20:*:100', '50:200:80', '30']):
			args = fit_columns.parse_arguments()
		self.assertEqual(args.command, 'distribute')
		self.assertEqual(args.budget, 360.0)
		self.assertEqual(args.items, [Item(20, None, 100), Item(50, 200, 80), Item(0, None, 30)])
		self.assertFalse(args.exact)

	def test_invalid_item_rejected(self):
		"""Test that malformed or contradictory items are rejected."""
		for item in ('20:100', '50:10:20', 'wide'):
			with self.subTest(item=item):
				with self.assertRaises(SystemExit):  # argparse raises SystemExit on error
					with patch('sys.stderr', new_callable=StringIO):  # Suppress error output
						fit_columns.parse_arguments(['distribute', '100', item])

	def test_invalid_budget_rejected(self):
		with self.assertRaises(SystemExit):
			with patch('sys.stderr', new_callable=StringIO):
				fit_columns.parse_arguments(['distribute', 'lots', '100'])

	def test_command_required(self):
		with self.assertRaises(SystemExit):
			with patch('sys.stderr', new_callable=StringIO):
				fit_columns.parse_arguments([])

	def test_items_required(self):
		with self.assertRaises(SystemExit):
			with patch('sys.stderr', new_callable=StringIO):
				fit_columns.parse_arguments(['distribute', '100'])

	def test_table_width_list(self):
		"""Test that table widths accept a comma separated sequence."""
		args = fit_columns.parse_arguments(['simulate', '--table-width', '400,360.5,500', '100'])
		self.assertEqual(args.table_width, [400, 360.5, 500])
		self.assertIsNone(args.scrollbar)
		self.assertEqual(tuple(args.insets), (0.0, 0.0))

		for widths in ('400,', 'wide', '-400'):
			with self.subTest(widths=widths):
				with self.assertRaises(SystemExit):
					with patch('sys.stderr', new_callable=StringIO):
						fit_columns.parse_arguments(['simulate', '--table-width', widths, '100'])

	def test_verbosity_count(self):
		args = fit_columns.parse_arguments(['-vv', 'distribute', '10', '5'])
		self.assertEqual(args.verbose, 2)

class TestCommands(unittest.TestCase):
	"""Run the commands and check what they print."""

	def run_main(self, argv):
		with patch('sys.stdout', new_callable=StringIO) as stdout:
			exit_code = fit_columns.main(argv)
		self.assertEqual(exit_code, 0)
		return stdout.getvalue().splitlines()

	def settings_path(self):
		temp_dir = tempfile.TemporaryDirectory()
		self.addCleanup(temp_dir.cleanup)
		return os.path.join(temp_dir.name, 'missing.json')

	def test_distribute(self):
		lines = self.run_main(['distribute', '360', '20:*:100', '20:*:100', '20:*:100'])
		self.assertEqual(lines, ["120 120 120 (total 360)"])

	def test_distribute_bounded(self):
		lines = self.run_main(['distribute', '120', '50:200:100', '50:200:100'])
		self.assertEqual(lines, ["60 60 (total 120)"])

	def test_distribute_exact(self):
		lines = self.run_main(['distribute', '--exact', '301.2', '100.4', '100.3', '100.3'])
		self.assertEqual(lines, ["100 100 101 (total 301)"])

	def test_simulate(self):
		lines = self.run_main(['simulate', '--settings', self.settings_path(),
			'--table-width', '364', '20:*:100', '20:*:100', '20:*:100'])
		self.assertEqual(lines, ["     364: available 360 -> 120 120 120 (total 360)"])

	def test_simulate_with_scrollbar_and_widths(self):
		lines = self.run_main(['simulate', '--settings', self.settings_path(),
			'--table-width', '400,364', '--scrollbar', '16', '100', '100', '100'])
		self.assertEqual(lines, [
			"     400: available 380 -> 126.67 126.67 126.67 (total 380)",
			"     364: available 344 -> 114.67 114.67 114.67 (total 344)",
		])

	def test_simulate_exact(self):
		lines = self.run_main(['simulate', '--settings', self.settings_path(), '--exact',
			'--table-width', '304', '100', '100', '90'])
		self.assertEqual(lines, ["     304: available 300 -> 103 103 94 (total 300)"])

	def test_distribute_logs_items(self):
		with self.assertLogs('fit-columns', level='INFO') as logs:
			self.run_main(['-v', 'distribute', '120', '50:200:100', '30'])
		self.assertEqual([record.getMessage() for record in logs.records],
			["Item 50:200:100", "Item 0:*:30"])

	def test_simulate_invalid_settings(self):
		"""Test that a settings file with bad values is reported, not raised."""
		path = self.settings_path()
		with open(path, 'wt') as f:
			f.write('{"debounce_ms": -5}')
		with patch('sys.stdout', new_callable=StringIO) as stdout, \
				patch('sys.stderr', new_callable=StringIO) as stderr:
			exit_code = fit_columns.main(['simulate', '--settings', path, '--table-width', '364', '100'])
		self.assertEqual(exit_code, 2)
		self.assertIn("Error: Invalid settings", stderr.getvalue())
		self.assertIn("debounce_ms", stderr.getvalue())
		self.assertEqual(stdout.getvalue(), "")

	def test_simulate_save_settings(self):
		path = self.settings_path()
		self.run_main(['simulate', '--settings', path, '--exact', '--save-settings',
			'--table-width', '304', '100', '100', '90'])
		with open(path, 'rt') as f:
			saved = json.load(f)
		self.assertTrue(saved['exact'])
		self.assertEqual(saved['debounce_ms'], 60)

if __name__ == '__main__':
	unittest.main()

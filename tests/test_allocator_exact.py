"""Unit tests for the whole-unit distribution and the allocate() wrapper."""

import math
import random
import unittest
import sys
import os

# Add the project root to the path so we can import fitcolumns
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fitcolumns.allocator import (
	Item, AllocationRequest, AllocationResult,
	allocate, distribute, distribute_exact,
)


class TestDistributeExact(unittest.TestCase):

	def test_empty(self):
		self.assertEqual(distribute_exact(100, []), [])

	def test_last_item_absorbs_remainder(self):
		"""Ideal widths 100.4/100.3/100.3 on a budget of 301: the last takes 101."""
		items = [Item(0, None, 100.4), Item(0, None, 100.3), Item(0, None, 100.3)]
		self.assertEqual(distribute(301.2, items), [100.4, 100.3, 100.3])
		self.assertEqual(distribute_exact(301.2, items), [100, 100, 101])

	def test_results_are_integers(self):
		items = [Item(0, None, 100), Item(0, None, 100), Item(0, None, 90)]
		sizes = distribute_exact(300, items)
		self.assertTrue(all(isinstance(size, int) for size in sizes))
		self.assertEqual(sizes, [103, 103, 94])

	def test_sum_matches_floor_of_budget(self):
		items = [Item(0, None, 100)] * 3
		sizes = distribute_exact(400.7, items)
		# 133.57 rounds to 134 twice, the last gets what is left of 400
		self.assertEqual(sizes, [134, 134, 132])
		self.assertEqual(sum(sizes), 400)

	def test_half_rounds_up(self):
		items = [Item(0, None, 10.5), Item(0, None, 20)]
		self.assertEqual(distribute_exact(30.5, items), [11, 19])

	def test_last_item_minimum_wins(self):
		"""When the remainder is below the last item's minimum, the minimum is kept."""
		items = [Item(0, None, 100), Item(50, None, 50)]
		# Ideal: 70.9 and 50; 70.9 rounds to 71 leaving 49 for a minimum of 50
		sizes = distribute_exact(120.9, items)
		self.assertEqual(sizes, [71, 50])
		self.assertEqual(sum(sizes), 121)

	def test_last_item_maximum_wins(self):
		items = [Item(0, 100, 100), Item(0, 50, 50)]
		self.assertEqual(distribute_exact(300, items), [100, 50])

	def test_fractional_bounds(self):
		"""Integer bounds are ceil(minimum) and floor(maximum)."""
		items = [Item(10.2, 20.7, 15), Item(0, None, 5)]
		self.assertEqual(distribute_exact(8, items), [11, 0])
		self.assertEqual(distribute_exact(100, [Item(10.2, 20.7, 20.6), Item(0, 10, 10)]), [20, 10])

	def test_fractional_fixed_size_keeps_minimum(self):
		"""No integer fits in [10.2, 10.7], the rounded-up minimum is used."""
		self.assertEqual(distribute_exact(50, [Item(10.2, 10.7, 10.5), Item(0, None, 39.5)]), [11, 39])

	def test_insufficient_budget(self):
		items = [Item(10.5, None, 40), Item(20, None, 40)]
		self.assertEqual(distribute_exact(5, items), [11, 20])

	def test_non_finite_budget(self):
		items = [Item(10, None, 40), Item(20, None, 40)]
		self.assertEqual(distribute_exact(math.nan, items), [10, 20])
		self.assertEqual(distribute_exact(math.inf, items), [10, 20])

	def test_single_item_takes_whole_target(self):
		self.assertEqual(distribute_exact(99.9, [Item(0, None, 10)]), [99])

	def test_exact_sum_property(self):
		"""An unbounded last item with room to move always lands the total on target."""
		rng = random.Random(4242)
		for _ in range(300):
			items = []
			for _ in range(rng.randint(0, 6)):
				minimum = rng.randint(0, 40)
				maximum = None if rng.random() < 0.4 else minimum + rng.randint(0, 150)
				preferred = rng.uniform(minimum, maximum if maximum is not None else minimum + 150)
				items.append(Item(minimum, maximum, preferred))
			items.append(Item(0, None, rng.uniform(20, 200)))
			total_preferred = sum(item.preferred for item in items)
			budget = total_preferred + rng.uniform(0, 300)

			sizes = distribute_exact(budget, items)
			with self.subTest(budget=budget, items=items):
				self.assertEqual(sum(sizes), math.floor(budget))
				for size, item in zip(sizes, items):
					self.assertGreaterEqual(size, math.ceil(item.minimum))
					if item.maximum is not None:
						self.assertLessEqual(size, math.floor(item.maximum))


class TestAllocate(unittest.TestCase):

	def test_float_result(self):
		request = AllocationRequest.build(360, [(20, None, 100)] * 3)
		result = allocate(request)
		self.assertIsInstance(result, AllocationResult)
		self.assertEqual(result.target, 360)
		for size in result.sizes:
			self.assertAlmostEqual(size, 120)
		self.assertAlmostEqual(result.total, 360)
		self.assertAlmostEqual(result.shortfall, 0)

	def test_exact_result(self):
		request = AllocationRequest.build(301.2, [(0, None, 100.4), (0, None, 100.3), (0, None, 100.3)])
		result = allocate(request, exact=True)
		self.assertEqual(result.sizes, (100, 100, 101))
		self.assertEqual(result.target, 301)
		self.assertEqual(result.shortfall, 0)

	def test_exact_shortfall_is_reported_not_raised(self):
		request = AllocationRequest.build(120.9, [(0, None, 100), (50, None, 50)])
		result = allocate(request, exact=True)
		self.assertEqual(result.target, 120)
		self.assertEqual(result.total, 121)
		self.assertEqual(result.shortfall, -1)

	def test_minimums_over_budget(self):
		request = AllocationRequest.build(90, [(50, None, 60), (50, None, 60)])
		result = allocate(request, exact=True)
		self.assertEqual(result.sizes, (50, 50))
		self.assertEqual(result.shortfall, -10)

		result = allocate(request)
		self.assertEqual(result.sizes, (50, 50))
		self.assertEqual(result.shortfall, -10)

	def test_non_finite_budget_target(self):
		request = AllocationRequest.build(math.nan, [(5, None, 10)])
		self.assertEqual(allocate(request, exact=True).target, 0)


if __name__ == '__main__':
	unittest.main()

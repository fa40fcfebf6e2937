#!/usr/bin/env python3
"""
Unit tests for the size parsing and formatting helpers in utilities.py
"""

import unittest
import sys
import os
from io import StringIO
from unittest.mock import patch

# Add the project root to the path so we can import from utilities.py
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from utilities import parse_size, validate_size, format_size
from adaptive_layout.constants import DEFAULT_LAYOUT_WIDTH, DEFAULT_LAYOUT_HEIGHT


class TestParseSize(unittest.TestCase):
	"""Test parsing of WIDTHxHEIGHT strings."""

	def test_width_by_height(self):
		self.assertEqual(parse_size("400x300"), (400, 300))
		self.assertEqual(parse_size("640X480"), (640, 480))
		self.assertEqual(parse_size(" 20x10 "), (20, 10))

	def test_square(self):
		self.assertEqual(parse_size("250"), (250, 250))

	def test_default(self):
		self.assertEqual(parse_size("default"), (DEFAULT_LAYOUT_WIDTH, DEFAULT_LAYOUT_HEIGHT))
		self.assertEqual(parse_size("DEFAULT"), (DEFAULT_LAYOUT_WIDTH, DEFAULT_LAYOUT_HEIGHT))

	def test_invalid(self):
		for value in ("", None, "x", "400x", "x300", "400 x 300", "4.5x3", "-4x3", "400x300x2", "wide"):
			with self.subTest(value=value):
				self.assertIsNone(parse_size(value))


class TestValidateSize(unittest.TestCase):
	def test_valid(self):
		self.assertEqual(validate_size((400, 300)), (400, 300))
		self.assertIsNone(validate_size(None))

	def test_zero_is_rejected(self):
		with patch('sys.stdout', new_callable=StringIO) as output:
			self.assertIsNone(validate_size((0, 300)))
		self.assertIn("must be positive", output.getvalue())


class TestFormatting(unittest.TestCase):
	def test_format_size_round_trips(self):
		self.assertEqual(format_size((400, 300)), "400x300")
		self.assertEqual(parse_size(format_size((12, 34))), (12, 34))


if __name__ == '__main__':
	unittest.main()

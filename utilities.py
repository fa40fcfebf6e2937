"""
General utility functions for the layout demo.

Argument parsing and formatting helpers that are not specific to the layout
engine itself.
"""

import re


def parse_size(size_str):
	"""
	Parse a window size string into a (width, height) tuple.

	Supports:
	- 'WIDTHxHEIGHT': '400x300', '640X480'
	- A single number for a square size: '250' -> (250, 250)
	- Special value 'default' for the configured default size

	Returns None if parsing fails.
	"""
	if not size_str:
		return None

	size_str = size_str.strip().lower()

	if size_str == 'default':
		from adaptive_layout import constants
		return (constants.DEFAULT_LAYOUT_WIDTH, constants.DEFAULT_LAYOUT_HEIGHT)

	# Reject strings with inner spaces
	if ' ' in size_str:
		return None

	if re.match(r'^\d+$', size_str):
		value = int(size_str)
		return (value, value)

	match = re.match(r'^(\d+)x(\d+)$', size_str)
	if not match:
		return None
	return (int(match.group(1)), int(match.group(2)))


def validate_size(size):
	"""
	Validate that a parsed size is usable for layout.
	Returns the size if valid, None if invalid.
	"""
	if size is None:
		return None

	width, height = size
	if width <= 0 or height <= 0:
		print(f"Error: Layout size must be positive, got {width}x{height}")
		return None

	return size


def format_size(size):
	"""Format a (width, height) tuple the way parse_size() reads it."""
	return f"{size[0]}x{size[1]}"


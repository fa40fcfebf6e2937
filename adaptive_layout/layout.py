from __future__ import annotations

""" Retained layout tree - the target renderer's primitives.

Render passes emit these nodes; they then measure and place themselves with
the target model, where fill is greedy and only rows and columns understand
weights:

SIZING:
	FixedSize		always use the same size
	FillMax			take everything the parent offers (in a row/column main axis
					this consumes all remaining space, starving later siblings)
	Weighted		share what a row/column has left after its other children
	MatchExtent		content size, stretched to the extent the parent resolves
	(none)			content size

PASSES:
	width pass (distribute_width) over the whole tree, then the height pass,
	then positioning. Text wraps during the width pass, so its height is known
	by the time the height pass asks for it.
"""

import math
from functools import lru_cache
from typing import Optional, TypeVar, Any

from .constants import HORIZONTAL, VERTICAL, AXIS_NAMES, START, CENTER, END, DEFAULT_FONT_HEIGHT
from .modifier import (
	EMPTY_MODIFIER, Arrangement, SpacedBy,
	FillMax, Weighted, MatchExtent, FixedSize,
)

# Global layout context for text measurement - will be initialized with decorator
_layout_context: Optional[LayoutPluginContext] = None


# -------
# Layout Classes
# -------

class Layout:
	# Alignment constants
	START = START
	CENTER = CENTER
	END = END

	def __init__(self, modifier=EMPTY_MODIFIER):
		self.modifier = modifier
		# Store computed sizes and positions as arrays for easy axis indexing
		# [width, height] and [x, y] - allows using [axis] and [1-axis] patterns
		self._computed_size = [0, 0]	# [width, height], including padding
		self._computed_pos = [0, 0]		# [x, y]
		self._content_size = [0, 0]		# Box left for content once padding is removed

	# --- hooks for subclasses, in content coordinates (padding already removed)

	def query_content_request(self, axis: int) -> int:
		return 0

	def distribute_content(self, available: int | None, axis: int, fill: bool) -> int:
		"""Size the content along an axis.

		Args:
			available: Space for the content, or None when unbounded
			axis: 0 for width, 1 for height
			fill: True when the node's size is already decided (fixed or filling)
				and the content must occupy exactly `available`

		Returns:
			The content size the node wants when `fill` is False
		"""
		return self.query_content_request(axis)

	def position_content(self, x: int, y: int) -> None:
		pass

	# --- measurement

	def query_axis_request(self, axis: int) -> int:
		"""Intrinsic size along an axis, including padding."""
		assert axis in (HORIZONTAL, VERTICAL), f"Invalid axis {axis}, must be 0 (width) or 1 (height)"
		outer, directive, inner = self.modifier.axis_parts(axis)
		if isinstance(directive, FixedSize):
			box = directive.value
		else:
			box = self.query_content_request(axis) + sum(inner)
		return box + sum(outer)

	def query_width_request(self) -> int:
		return self.query_axis_request(HORIZONTAL)

	def query_height_request(self) -> int:
		return self.query_axis_request(VERTICAL)

	def query_space_request(self) -> tuple[int, int]:
		# Convenience method that combines width and height requests
		return (self.query_axis_request(HORIZONTAL), self.query_axis_request(VERTICAL))

	def distribute_axis(self, available: int | None, axis: int, stretch: bool = False) -> int:
		"""Size this node along an axis within the extent its parent offers.

		Args:
			available: The parent's offer, or None when unbounded (scroll axis)
			axis: 0 for width, 1 for height
			stretch: The parent has resolved its extent and asks MatchExtent
				children to line up with it

		Returns:
			The size taken, including padding
		"""
		outer, directive, inner = self.modifier.axis_parts(axis)
		outer_total, inner_total = sum(outer), sum(inner)
		room = None if available is None else max(available - outer_total, 0)

		if isinstance(directive, FixedSize):
			box = directive.value
			self.distribute_content(max(box - inner_total, 0), axis, True)
		elif room is not None and (isinstance(directive, (FillMax, Weighted))
				or (stretch and isinstance(directive, MatchExtent))):
			box = room
			self.distribute_content(max(box - inner_total, 0), axis, True)
		else:
			content_room = None if room is None else max(room - inner_total, 0)
			box = self.distribute_content(content_room, axis, False) + inner_total
			if room is not None:
				box = min(box, room)

		self._content_size[axis] = max(box - inner_total, 0)
		self._computed_size[axis] = box + outer_total
		return self._computed_size[axis]

	def distribute_width(self, available_width: int) -> int:
		return self.distribute_axis(available_width, HORIZONTAL)

	def distribute_height(self, available_height: int) -> int:
		return self.distribute_axis(available_height, VERTICAL)

	def get_computed_width(self) -> int:
		"""Get the computed width from the last distribution pass."""
		return self._computed_size[0]

	def get_computed_height(self) -> int:
		"""Get the computed height from the last distribution pass."""
		return self._computed_size[1]

	def get_computed_size(self, axis=None) -> tuple[int, int] | int:
		"""Get computed size. If axis specified, return size for that axis, otherwise return (width, height) tuple."""
		if axis is None:
			return (self._computed_size[0], self._computed_size[1])
		return self._computed_size[axis]

	# --- positioning

	def position_at(self, x: int, y: int) -> None:
		"""Position this node at the specified coordinates.

		The content origin is moved inside the padding; containers then align
		their children within the content box.
		"""
		self._computed_pos[0] = x
		self._computed_pos[1] = y
		origin = [x, y]
		for axis in (HORIZONTAL, VERTICAL):
			outer, directive, inner = self.modifier.axis_parts(axis)
			origin[axis] += outer[0] + inner[0]
		self.position_content(origin[0], origin[1])

	def get_computed_position(self, axis=None):
		"""Get computed position. If axis specified, return position for that axis, otherwise return (x, y) tuple."""
		if axis is None:
			return (self._computed_pos[0], self._computed_pos[1])
		return self._computed_pos[axis]

	def get_computed_rect(self) -> tuple[int, int, int, int]:
		"""Get the computed rectangle (x, y, width, height) from the last layout passes."""
		return (self._computed_pos[0], self._computed_pos[1], self._computed_size[0], self._computed_size[1])

	def layout(self, x: int, y: int, width: int, height: int) -> tuple[int, int]:
		"""Perform complete layout: size distribution and positioning.

		Args:
			x: The x-coordinate for positioning
			y: The y-coordinate for positioning
			width: The available width for size distribution
			height: The available height for size distribution

		Returns:
			tuple[int, int]: The actual (width, height) used by the layout
		"""
		# Width first - text wraps here, which decides its height
		actual_width = self.distribute_width(width)
		actual_height = self.distribute_height(height)
		self.position_at(x, y)
		return (actual_width, actual_height)

	def describe(self) -> str:
		return self.__class__.__name__

# --- leaf node layouts

class LayoutLeaf(Layout):
	"""Leaf with a minimum content size that stretches when told to fill."""

	def __init__(self, width=0, height=0, modifier=EMPTY_MODIFIER, label=None):
		super().__init__(modifier)
		self.label = label
		assert isinstance(width, (int, float)) and isinstance(height, (int, float)), \
			f"Leaf size must be numeric, got {width!r}x{height!r}"
		self.size = (width, height)

	def query_content_request(self, axis):
		return self.size[axis]

	def distribute_content(self, available, axis, fill):
		if fill:
			return available
		return self.size[axis]

	def describe(self):
		if self.label:
			return f"{self.__class__.__name__} {self.label}"
		return self.__class__.__name__

class LayoutText(Layout):
	def __init__(self, text: str, font: FontObject | None = None, modifier=EMPTY_MODIFIER):
		super().__init__(modifier)
		self.text = text
		self.font = font
		self._lines = text.split('\n') if text else []

	@staticmethod
	@lru_cache
	def get_extents(text, font=None):
		"""Estimate the unwrapped extents (width, height) of text."""
		if not text:
			return (0, 0)

		assert _layout_context is not None, "Layout context not initialized"
		font_height = _layout_context.get_font_metrics(font)['height']
		lines = text.split('\n')
		width = max(_layout_context.measure_text_width(line, font) for line in lines)
		return (width, len(lines) * font_height)

	def get_lines(self) -> list[str]:
		"""Lines of text as wrapped by the last width pass."""
		return list(self._lines)

	def query_content_request(self, axis):
		if not self.text:
			return 0
		if axis == HORIZONTAL:
			# Unwrapped width - text only wraps when a parent offers less
			return self.get_extents(self.text, self.font)[0]
		assert _layout_context is not None, "Layout context not initialized"
		return len(self._lines) * _layout_context.get_font_metrics(self.font)['height']

	def get_minimum_width(self) -> int:
		"""Width of the longest word - text never wraps narrower than this."""
		words = self.text.split()
		if not words:
			return 0
		assert _layout_context is not None, "Layout context not initialized"
		return max(_layout_context.measure_text_width(word, self.font) for word in words)

	def _wrap_lines(self, target_width: int) -> list[str]:
		"""Wrap at word boundaries so that every line fits `target_width` where possible."""
		assert _layout_context is not None, "Layout context not initialized"
		lines = []
		for paragraph in self.text.split('\n'):
			current_line_words = []
			for word in paragraph.split():
				test_line_words = current_line_words + [word]
				test_line_width = _layout_context.measure_text_width(' '.join(test_line_words), self.font)
				if test_line_width <= target_width or not current_line_words:
					# Word fits, or is alone on the line and has to go somewhere
					current_line_words = test_line_words
				else:
					lines.append(' '.join(current_line_words))
					current_line_words = [word]
			lines.append(' '.join(current_line_words))
		return lines

	def try_shrink_width(self, target_width: int) -> int:
		"""Wrap to the target width and return the width actually achieved.

		May be larger than target_width if the text contains very long words.
		"""
		if not self.text:
			return 0
		self._lines = self._wrap_lines(max(target_width, self.get_minimum_width()))
		assert _layout_context is not None, "Layout context not initialized"
		return max(_layout_context.measure_text_width(line, self.font) for line in self._lines)

	def distribute_content(self, available, axis, fill):
		if axis == VERTICAL:
			return available if fill else self.query_content_request(VERTICAL)

		preferred = self.query_content_request(HORIZONTAL)
		if available is None or available >= preferred:
			self._lines = self.text.split('\n') if self.text else []
			width = preferred
		else:
			width = self.try_shrink_width(available)
		return available if fill else width

	def describe(self):
		return f"{self.__class__.__name__} {self.text!r}"

# --- multi-child layouts

class LayoutGroup(Layout):
	HORIZONTAL = HORIZONTAL
	VERTICAL = VERTICAL

	# Base class for all container layouts
	def __init__(self, *children, modifier=EMPTY_MODIFIER):
		super().__init__(modifier)
		self.children = list(children)

	def add_child(self, child):
		assert isinstance(child, Layout), f"Child must be a Layout, got {type(child).__name__}"
		self.children.append(child)
		return child

	@staticmethod
	def _stretches(child, axis):
		return isinstance(child.modifier.sizing(axis), (FillMax, Weighted, MatchExtent))

	def _distribute_cross(self, available, axis, fill):
		"""Size children along an axis where they all share one extent.

		Each child is first measured against the full offer, so a FillMax child
		claims all of it. The container's extent is then its own forced size,
		or the largest child, and every stretching child is lined up with it.
		"""
		if not self.children:
			return available if fill else 0

		sizes = [child.distribute_axis(available, axis) for child in self.children]
		extent = available if fill else max(sizes)
		for child, size in zip(self.children, sizes):
			if size != extent and self._stretches(child, axis):
				child.distribute_axis(extent, axis, stretch=True)
		return extent

	def _align_offset(self, child, axis, alignment):
		extra = self._content_size[axis] - child.get_computed_size(axis)
		if extra <= 0:
			return 0
		return int(extra * alignment)

class LayoutBox(LayoutGroup):
	"""Stacks its children on top of each other, aligned within the box."""

	def __init__(self, *children, alignment=(CENTER, CENTER), modifier=EMPTY_MODIFIER):
		super().__init__(*children, modifier=modifier)
		if not isinstance(alignment, (list, tuple)):
			alignment = (alignment, alignment)
		self.alignment = tuple(alignment)

	def query_content_request(self, axis):
		if not self.children:
			return 0
		return max(child.query_axis_request(axis) for child in self.children)

	def distribute_content(self, available, axis, fill):
		return self._distribute_cross(available, axis, fill)

	def position_content(self, x, y):
		for child in self.children:
			child.position_at(
				x + self._align_offset(child, HORIZONTAL, self.alignment[0]),
				y + self._align_offset(child, VERTICAL, self.alignment[1]))

class LayoutRoot(LayoutBox):
	"""Top of a rendered tree; content is placed at the top-left of the window."""

	def __init__(self, *children):
		super().__init__(*children, alignment=(START, START))

class LayoutLinear(LayoutGroup):
	# Unified 1D container layout that can arrange children vertically or horizontally

	def __init__(self, *children, axis=LayoutGroup.VERTICAL, arrangement=None, alignment=CENTER, modifier=EMPTY_MODIFIER):
		super().__init__(*children, modifier=modifier)
		assert axis in (HORIZONTAL, VERTICAL), f"Invalid axis {axis}, must be 0 (horizontal) or 1 (vertical)"
		self.axis = axis
		self.arrangement = arrangement if arrangement is not None else SpacedBy(0)
		assert isinstance(self.arrangement, Arrangement), \
			f"Arrangement must be an Arrangement, got {type(self.arrangement).__name__}"
		self.alignment = alignment		# Cross-axis alignment

	@classmethod
	def horizontal(cls, *children, arrangement=None, alignment=CENTER, modifier=EMPTY_MODIFIER):
		return cls(*children, axis=LayoutGroup.HORIZONTAL, arrangement=arrangement, alignment=alignment, modifier=modifier)

	@classmethod
	def vertical(cls, *children, arrangement=None, alignment=CENTER, modifier=EMPTY_MODIFIER):
		return cls(*children, axis=LayoutGroup.VERTICAL, arrangement=arrangement, alignment=alignment, modifier=modifier)

	def query_content_request(self, axis):
		if not self.children:
			return 0
		requests = [child.query_axis_request(axis) for child in self.children]
		if axis == self.axis:
			# In-Axis: sum sizes + spacing
			return sum(requests) + self.arrangement.total_spacing(len(self.children))
		# Cross-Axis: largest child
		return max(requests)

	def distribute_content(self, available, axis, fill):
		if axis != self.axis:
			return self._distribute_cross(available, axis, fill)
		if not self.children:
			return available if fill else 0

		spacing = self.arrangement.total_spacing(len(self.children))
		remaining = None if available is None else max(available - spacing, 0)

		# Unweighted children are measured in order against what is left, so a
		# FillMax child takes everything and later siblings get nothing
		weighted = []
		used = 0
		for child in self.children:
			if remaining is not None and isinstance(child.modifier.sizing(axis), Weighted):
				weighted.append(child)
				continue
			size = child.distribute_axis(remaining, axis)
			used += size
			if remaining is not None:
				remaining = max(remaining - size, 0)

		if weighted:
			used += self._distribute_weighted(weighted, remaining, axis)

		if fill:
			return available
		return used + spacing

	@staticmethod
	def _distribute_weighted(weighted, available_space, axis):
		"""Split the leftover space among weighted children in proportion to their weights.

		Whole pixels are handed out first, then the remainder one pixel at a time
		from the first child on.

		Returns:
			The total space handed out
		"""
		weights = [child.modifier.sizing(axis).weight for child in weighted]
		total_weight = sum(weights)
		shares = [math.floor(available_space * weight / total_weight) for weight in weights]
		leftover = int(available_space - sum(shares))
		for index in range(leftover):
			shares[index % len(shares)] += 1

		total = 0
		for child, share in zip(weighted, shares):
			total += child.distribute_axis(share, axis)
		return total

	def _main_extent(self):
		return self._content_size[self.axis]

	def position_content(self, x, y):
		"""Position children along the main axis by arrangement, and across it by alignment."""
		axis, cross_axis = self.axis, 1 - self.axis
		origin = [x, y]
		sizes = [child.get_computed_size(axis) for child in self.children]
		offsets = self.arrangement.place(sizes, self._main_extent())

		for child, offset in zip(self.children, offsets):
			# Build position tuple in correct order [x, y]
			pos = [0, 0]
			pos[axis] = origin[axis] + offset
			pos[cross_axis] = origin[cross_axis] + self._align_offset(child, cross_axis, self.alignment)
			child.position_at(pos[0], pos[1])

	def describe(self):
		return f"{self.__class__.__name__}[{AXIS_NAMES[self.axis]}] {self.arrangement!r}"

class LayoutScroll(LayoutLinear):
	"""Linear layout whose children are measured without a bound along the scroll axis."""

	def __init__(self, *children, axis=LayoutGroup.VERTICAL, arrangement=None, alignment=CENTER, modifier=EMPTY_MODIFIER):
		super().__init__(*children, axis=axis, arrangement=arrangement, alignment=alignment, modifier=modifier)
		self.scroll_offset = 0
		self._scroll_extent = 0

	def distribute_content(self, available, axis, fill):
		if axis != self.axis:
			return super().distribute_content(available, axis, fill)
		self._scroll_extent = super().distribute_content(None, axis, False)
		if fill:
			return available
		if available is None:
			return self._scroll_extent
		return min(self._scroll_extent, available)

	def get_scroll_extent(self) -> int:
		"""Total length of the content along the scroll axis."""
		return self._scroll_extent

	def _main_extent(self):
		return max(self._scroll_extent, self._content_size[self.axis])

	def position_content(self, x, y):
		origin = [x, y]
		origin[self.axis] -= self.scroll_offset
		super().position_content(origin[0], origin[1])

# -------

def dump_layout_tree(node, indent="  ") -> list[str]:
	"""Describe a laid out tree, one line per node."""
	x, y, w, h = node.get_computed_rect()
	lines = [f"{indent}{node.describe()}: x={x}, y={y}, width={w}, height={h}"]
	if node.modifier:
		lines[-1] += f"  {node.modifier!r}"
	for child in getattr(node, 'children', ()):
		lines.extend(dump_layout_tree(child, indent + "  "))
	return lines

# -------
# Plugin System
# -------

# Type for font objects - platform specific
FontObject = Any

def set_layout_context(context: 'LayoutPluginContext'):
	"""Set the global layout context."""
	global _layout_context
	_layout_context = context
	LayoutText.get_extents.cache_clear()

def get_layout_context() -> 'LayoutPluginContext':
	assert _layout_context is not None, "Layout context not initialized"
	return _layout_context

def layout_context(context_class):
	"""Decorator to set a layout context class as the global context."""
	set_layout_context(context_class())
	return context_class

FontType = TypeVar('FontType')  # Allow any type for fonts

# Estimated advance per character class, for when no real font backend is installed
_CHARACTER_WIDTHS = (
	(' ij', 4),
	('Il1', 5),
	('frt', 6),
	('mw', 12),
	('MW', 14),
	('ABCDEFGHJKLNOPQRSTUVXYZ', 10),
)
_DEFAULT_CHARACTER_WIDTH = 8		# other lowercase, digits, punctuation
_WIDE_CHARACTER_WIDTH = 16			# CJK ideographs
_OTHER_CHARACTER_WIDTH = 10			# remaining non-ASCII

def _estimate_character_width(char):
	for chars, width in _CHARACTER_WIDTHS:
		if char in chars:
			return width
	if 0x4E00 <= ord(char) <= 0x9FFF:
		return _WIDE_CHARACTER_WIDTH
	if ord(char) > 127:
		return _OTHER_CHARACTER_WIDTH
	return _DEFAULT_CHARACTER_WIDTH

@layout_context
class LayoutPluginContext:
	"""Creates the text nodes Text views emit, and measures them.

	Install a subclass with set_layout_context() to measure with real fonts;
	`font` is whatever the subclass understands. This default estimates widths
	per character class and uses a fixed line height.
	"""

	def create_text(self, text: str, font: FontType | None = None, modifier=EMPTY_MODIFIER) -> 'LayoutText':
		return LayoutText(text, font, modifier)

	@lru_cache
	def measure_text_width(self, text: str, font: FontType | None = None) -> int:
		"""Width of a single line of text."""
		return sum(_estimate_character_width(char) for char in text)

	@lru_cache
	def get_font_metrics(self, font: FontType | None = None) -> dict[str, int]:
		return {
			'height': DEFAULT_FONT_HEIGHT,
		}

"""Unit tests for the view catalog and the render tree walker."""

import unittest
import sys
import os

# Add the project root to the path so we can import the package
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from adaptive_layout.constants import HORIZONTAL, VERTICAL, STATE_EXPANDING, STATE_UNKNOWN
from adaptive_layout.environment import STACK_AXIS
from adaptive_layout.layout import LayoutText, LayoutLinear, LayoutScroll, LayoutBox
from adaptive_layout.modifier import FillMax, MatchExtent, Weighted, FixedSize, Padding, SpacedBy, Even
from adaptive_layout.runtime import Recomposer
from adaptive_layout.views import (
	View, Composite, Text, Spacer, Color, Divider, VStack, HStack, ZStack, ScrollView,
	ModifiedView, render_content,
)


def render(view):
	recomposer = Recomposer(view)
	return recomposer, recomposer.render()


class TestLeafViews(unittest.TestCase):
	def test_text(self):
		recomposer, root = render(Text("Hello"))
		node = root.children[0]
		self.assertIsInstance(node, LayoutText)
		self.assertEqual(node.text, "Hello")

	def test_strings_render_as_text(self):
		recomposer, root = render(VStack("a", None, ["b", "c"]))
		stack = root.children[0]
		self.assertEqual([child.text for child in stack.children], ["a", "b", "c"])

	def test_spacer_expands_along_stack(self):
		recomposer, root = render(HStack(Spacer(min_length=8)))
		spacer = root.children[0].children[0]
		self.assertEqual(spacer.modifier.sizing(HORIZONTAL), Weighted(HORIZONTAL))
		self.assertIsNone(spacer.modifier.sizing(VERTICAL))
		self.assertEqual(spacer.query_space_request(), (8, 0))

	def test_spacer_outside_stack_expands_both_ways(self):
		recomposer, root = render(Spacer())
		spacer = root.children[0]
		self.assertEqual(spacer.modifier.sizing(HORIZONTAL), FillMax(HORIZONTAL))
		self.assertEqual(spacer.modifier.sizing(VERTICAL), FillMax(VERTICAL))

	def test_divider_in_row_is_vertical(self):
		recomposer, root = render(HStack(Text("a"), Divider()))
		divider = root.children[0].children[1]
		self.assertEqual(divider.size, (1, 0))
		self.assertEqual(divider.modifier.sizing(VERTICAL), MatchExtent(VERTICAL))

	def test_divider_outside_stack_is_horizontal(self):
		recomposer, root = render(Divider())
		divider = root.children[0]
		self.assertEqual(divider.size, (0, 1))
		self.assertEqual(divider.modifier.sizing(HORIZONTAL), MatchExtent(HORIZONTAL))

	def test_rejects_non_views(self):
		with self.assertRaises(AssertionError):
			render_content(42, None)
		with self.assertRaises(AssertionError):
			ModifiedView(42)


class TestModifierViews(unittest.TestCase):
	def test_frame_overrides_fill(self):
		recomposer, root = render(Text("a").fill_width().frame(width=50))
		node = root.children[0]
		self.assertEqual(node.modifier.sizing(HORIZONTAL), FixedSize(HORIZONTAL, 50))
		# The fill request is never made under an explicit size
		self.assertNotIn(FillMax(HORIZONTAL), node.modifier)

	def test_frame_without_sizes_is_a_no_op(self):
		view = Text("a")
		self.assertIs(view.frame(), view)

	def test_padding(self):
		recomposer, root = render(Text("a").padding(2, left=5))
		self.assertEqual(root.children[0].modifier[0], Padding(5, 2, 2, 2))

	def test_modifier_order_is_outermost_first(self):
		recomposer, root = render(Color("red").frame(width=10).padding(3))
		modifier = root.children[0].modifier
		self.assertEqual(modifier[0], Padding.all(3))
		self.assertEqual(modifier[1], FixedSize(HORIZONTAL, 10))
		# Color skips its fill request on the fixed axis
		self.assertEqual(modifier.sizing(HORIZONTAL), FixedSize(HORIZONTAL, 10))
		self.assertEqual(modifier.sizing(VERTICAL), FillMax(VERTICAL))

	def test_fill_without_expanding(self):
		recomposer, root = render(VStack(Text("a").fill_width(expand_container=False)))
		text = root.children[0].children[0]
		self.assertEqual(text.modifier.sizing(HORIZONTAL), MatchExtent(HORIZONTAL))

	def test_strip_modifiers(self):
		view = Text("a")
		wrapped = view.padding().frame(width=3).fill_height()
		self.assertIs(wrapped.strip_modifiers(), view)
		self.assertIsInstance(view.frame(width=3), ModifiedView)

	def test_environment_override_is_scoped(self):
		seen = []

		def record_theme(context):
			seen.append(context.environment.get('theme'))

		render(VStack(Composite(record_theme).environment(theme='dark'), Composite(record_theme)))
		self.assertEqual(seen, ['dark', None])


class TestCustomViews(unittest.TestCase):
	def test_body(self):
		class Greeting(View):
			def __init__(self, name):
				self.name = name

			def body(self):
				return HStack(Text("Hello"), Text(self.name))

		recomposer, root = render(Greeting("there"))
		row = root.children[0]
		self.assertIsInstance(row, LayoutLinear)
		self.assertEqual(row.children[1].text, "there")

	def test_missing_body(self):
		with self.assertRaises(NotImplementedError):
			render(View())


class TestContainers(unittest.TestCase):
	def test_stack_arrangement(self):
		recomposer, root = render(VStack(Text("a"), spacing=6))
		self.assertEqual(root.children[0].arrangement, SpacedBy(6))
		recomposer, root = render(HStack(Text("a")))
		self.assertEqual(root.children[0].arrangement, Even())
		self.assertEqual(root.children[0].axis, HORIZONTAL)

	def test_column_spaces_items_by_default(self):
		recomposer, root = render(VStack(Text("a"), Color("red"), Text("b").padding(2)))
		first, second, third = root.children[0].children
		self.assertEqual(list(first.modifier), [])
		# Narrower gap after text than after anything else
		self.assertEqual(second.modifier[0], Padding(top=20))
		self.assertEqual(second.modifier.sizing(VERTICAL), Weighted(VERTICAL))
		self.assertEqual(list(third.modifier), [Padding(top=40), Padding.all(2)])

	def test_column_spacing_in_layout(self):
		recomposer, root = render(VStack(Text("a"), Text("b")))
		column = root.children[0]
		self.assertEqual(column.query_height_request(), 52)
		recomposer.layout(100, 100)
		# The gap is padding inside the second item
		self.assertEqual(column.children[1].get_computed_rect(), (0, 16, 8, 36))

	def test_explicit_spacing_and_rows_do_not_space_items(self):
		recomposer, root = render(VStack(Text("a"), Text("b"), spacing=0))
		self.assertEqual([len(child.modifier) for child in root.children[0].children], [0, 0])
		recomposer, root = render(HStack(Text("a"), Text("b")))
		self.assertEqual([len(child.modifier) for child in root.children[0].children], [0, 0])

	def test_stack_installs_axis(self):
		seen = []
		render(HStack(Composite(lambda context: seen.append(context.environment.get(STACK_AXIS)))))
		render(ZStack(Composite(lambda context: seen.append(context.environment.get(STACK_AXIS)))))
		self.assertEqual(seen, [HORIZONTAL, None])

	def test_zstack(self):
		recomposer, root = render(ZStack(Color("red"), Text("on top")))
		box = root.children[0]
		self.assertIsInstance(box, LayoutBox)
		# A box has no weights to hand out
		self.assertEqual(box.children[0].modifier.sizing(VERTICAL), FillMax(VERTICAL))

	def test_scroll_view_fills_scroll_axis(self):
		recomposer, root = render(ScrollView(Text("a"), Color("red").frame(height=500)))
		self.assertEqual(recomposer.last_render_passes, 2)
		scroll = root.children[0]
		self.assertIsInstance(scroll, LayoutScroll)
		self.assertEqual(scroll.modifier.sizing(VERTICAL), FillMax(VERTICAL))
		state = recomposer.remembered('expansion')[((0, 'ScrollView'),)]
		self.assertEqual(state.axis_state(VERTICAL), STATE_EXPANDING)
		self.assertEqual(state.axis_state(HORIZONTAL), STATE_EXPANDING)

		recomposer.layout(200, 300)
		self.assertEqual(scroll.get_computed_size(), (200, 300))
		self.assertEqual(scroll.get_scroll_extent(), 516)

	def test_scroll_view_fills_again_after_frame_is_removed(self):
		recomposer, root = render(ScrollView(Text("a")).frame(height=50))
		state = recomposer.remembered('expansion')[((0, 'ScrollView'),)]
		self.assertEqual(state.axis_state(VERTICAL), STATE_UNKNOWN)
		self.assertEqual(root.children[0].modifier.sizing(VERTICAL), FixedSize(VERTICAL, 50))

		recomposer.set_content(ScrollView(Text("a")))
		root = recomposer.render()
		self.assertEqual(recomposer.last_render_passes, 2)
		self.assertIs(recomposer.remembered('expansion')[((0, 'ScrollView'),)], state)
		self.assertEqual(state.axis_state(VERTICAL), STATE_EXPANDING)
		scroll = root.children[0]
		self.assertEqual(scroll.modifier.sizing(VERTICAL), FillMax(VERTICAL))

		recomposer.layout(200, 300)
		self.assertEqual(scroll.get_computed_size(VERTICAL), 300)

	def test_scroll_view_children_do_not_expand_scroll_axis(self):
		recomposer, root = render(ScrollView(Text("a").fill_height()))
		text = root.children[0].children[0]
		self.assertEqual(text.modifier.sizing(VERTICAL), FillMax(VERTICAL))
		state = recomposer.remembered('expansion')[((0, 'ScrollView'),)]
		self.assertEqual(state.axis_state(HORIZONTAL), STATE_UNKNOWN)


if __name__ == '__main__':
	unittest.main()

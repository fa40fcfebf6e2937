"""
Declarative views and the render tree walker.

A view describes content; rendering it emits layout nodes into the current
scope. Modifier methods wrap a view without changing its structural identity,
so a remembered container keeps its state when a frame or padding is added
around it.

	VStack(
		Text("Title"),
		HStack(Text("Name"), Spacer()),
		Divider(),
	).padding().frame(width=320)
"""

from .constants import (
	HORIZONTAL, VERTICAL, AXES, START, CENTER,
	DIVIDER_THICKNESS, DEFAULT_PADDING, TEXT_ITEM_SPACING, DEFAULT_ITEM_SPACING,
)
from .environment import STACK_AXIS, FILL_CHANNEL_KEYS, FILL_DIRECTIVE_KEYS, UNSET, with_overrides
from .layout import LayoutBox, LayoutLinear, LayoutScroll, LayoutLeaf, get_layout_context
from .modifier import Modifier, FixedSize, Padding, SpacedBy, Even
from .negotiation import adaptive_container, install_directional_channel, request_fill


def render_content(view, context):
	"""Render one view into the current scope.

	Plain strings are rendered as Text.
	"""
	if isinstance(view, str):
		view = Text(view)
	assert isinstance(view, View), f"Cannot render {type(view).__name__}, expected a View"
	return view.render(context)

def render_children(children, context):
	"""Render a container's children, through the composer it installed if any."""
	composer = context.composer
	for index, child in enumerate(children):
		child_context = context.content(index, child)
		if composer is None:
			render_content(child, child_context)
		else:
			composer(child, child_context)

def _flatten_children(children):
	# Lists are spliced in and None is skipped, so conditional content reads naturally
	result = []
	for child in children:
		if child is None:
			continue
		if isinstance(child, (list, tuple)):
			result.extend(_flatten_children(child))
		elif isinstance(child, str):
			result.append(Text(child))
		else:
			result.append(child)
	return result


class View:
	"""Base class for all views.

	Subclasses either override render(), or provide body() returning the view
	they are made of.
	"""

	def body(self):
		raise NotImplementedError(f"{self.__class__.__name__} must implement body() or render()")

	def render(self, context):
		return render_content(self.body(), context)

	def strip_modifiers(self):
		"""The view under any modifier wrappers."""
		return self

	# --- modifiers

	def frame(self, width=None, height=None):
		"""Fix the size of one or both axes. An explicit size overrides any fill."""
		elements = []
		if width is not None:
			elements.append(FixedSize(HORIZONTAL, width))
		if height is not None:
			elements.append(FixedSize(VERTICAL, height))
		if not elements:
			return self
		return ModifiedView(self, *elements)

	def padding(self, amount=DEFAULT_PADDING, *, left=None, top=None, right=None, bottom=None):
		"""Inset the content; unspecified edges use `amount`."""
		insets = [amount if edge is None else edge for edge in (left, top, right, bottom)]
		return ModifiedView(self, Padding(*insets))

	def fill_width(self, expand_container=True):
		"""Fill the width offered by the parent, expanding the parent if `expand_container`."""
		return FillView(self, HORIZONTAL, expand_container)

	def fill_height(self, expand_container=True):
		"""Fill the height offered by the parent, expanding the parent if `expand_container`."""
		return FillView(self, VERTICAL, expand_container)

	def environment(self, mutations=None, **values):
		"""Override ambient values for this view and everything inside it."""
		overrides = dict(mutations or {})
		overrides.update(values)
		return EnvironmentView(self, overrides)

class Composite(View):
	"""A view rendered by a plain function of the render context."""

	def __init__(self, render_fn, name=None):
		assert callable(render_fn), "Composite requires a callable"
		self.render_fn = render_fn
		self.name = name or getattr(render_fn, '__name__', 'Composite')

	def render(self, context):
		return self.render_fn(context)

	def __repr__(self):
		return f"Composite({self.name})"

# --- modifier views

class ModifierView(View):
	"""Wraps another view; adds no level to the tree's structural identity."""

	def __init__(self, view):
		if isinstance(view, str):
			view = Text(view)
		assert isinstance(view, View), f"Cannot modify {type(view).__name__}, expected a View"
		self.view = view

	def strip_modifiers(self):
		return self.view.strip_modifiers()

class ModifiedView(ModifierView):
	def __init__(self, view, *elements):
		super().__init__(view)
		self.elements = elements

	def render(self, context):
		return render_content(self.view, context.with_modifier(context.modifier.then(*self.elements)))

class FillView(ModifierView):
	def __init__(self, view, axis, expand_container=True):
		super().__init__(view)
		assert axis in AXES, f"Invalid axis {axis}, must be 0 (width) or 1 (height)"
		self.axis = axis
		self.expand_container = expand_container

	def render(self, context):
		# An enclosing frame already decided this axis
		if context.modifier.is_fixed(self.axis):
			return render_content(self.view, context)
		directive = request_fill(context, self.axis, self.expand_container)
		return render_content(self.view, context.with_modifier(context.modifier.then(directive)))

class EnvironmentView(ModifierView):
	def __init__(self, view, mutations):
		super().__init__(view)
		self.mutations = mutations

	def render(self, context):
		return with_overrides(context, self.mutations, lambda inner: render_content(self.view, inner))

# --- leaf views

def _fill_directives(context, axes, wants_expand):
	return [request_fill(context, axis, wants_expand) for axis in axes
		if not context.modifier.is_fixed(axis)]

class Text(View):
	def __init__(self, text, font=None):
		self.text = str(text)
		self.font = font

	def render(self, context):
		return context.scope.emit(get_layout_context().create_text(self.text, self.font, context.modifier))

	def __repr__(self):
		return f"Text({self.text!r})"

class Spacer(View):
	"""Expands along the enclosing stack's axis, or along both outside a stack."""

	def __init__(self, min_length=0):
		assert isinstance(min_length, (int, float)), \
			f"Spacer length must be a number, got {type(min_length).__name__}: {min_length}"
		self.min_length = min_length

	def render(self, context):
		stack_axis = context.environment.get(STACK_AXIS)
		axes = AXES if stack_axis is None else (stack_axis,)
		size = [0, 0]
		for axis in axes:
			size[axis] = self.min_length
		modifier = context.modifier.then(*_fill_directives(context, axes, True))
		return context.scope.emit(LayoutLeaf(size[0], size[1], modifier, label='Spacer'))

class Color(View):
	"""Solid color that expands to fill its container in both axes."""

	def __init__(self, name):
		self.name = name

	def render(self, context):
		modifier = context.modifier.then(*_fill_directives(context, AXES, True))
		return context.scope.emit(LayoutLeaf(0, 0, modifier, label=self.name))

class Divider(View):
	"""Thin line across the enclosing stack. It spans its siblings without expanding the stack."""

	def render(self, context):
		stack_axis = context.environment.get(STACK_AXIS, VERTICAL)
		line_axis = 1 - stack_axis
		size = [0, 0]
		size[stack_axis] = DIVIDER_THICKNESS
		modifier = context.modifier.then(*_fill_directives(context, (line_axis,), False))
		return context.scope.emit(LayoutLeaf(size[0], size[1], modifier, label='Divider'))

# --- containers

class DefaultItemSpacing:
	"""Composer for a column without explicit spacing: a gap before every item
	after the first, narrower when the item before it was text.
	"""

	def __init__(self):
		self.last_was_text = None

	def __call__(self, view, context):
		if self.last_was_text is not None:
			spacing = TEXT_ITEM_SPACING if self.last_was_text else DEFAULT_ITEM_SPACING
			context = context.with_modifier(Modifier(Padding(top=spacing)).then(context.modifier))
		self.last_was_text = isinstance(view.strip_modifiers(), Text)
		return render_content(view, context)

class _Stack(View):
	axis = VERTICAL
	spaces_items = False		# Applies DefaultItemSpacing when no spacing is given

	def __init__(self, *children, alignment=CENTER, spacing=None):
		if spacing is not None:
			assert isinstance(spacing, (int, float)), \
				f"Spacing must be a number, got {type(spacing).__name__}: {spacing}"
		self.children = _flatten_children(children)
		self.alignment = alignment
		self.spacing = spacing

	def arrangement(self):
		if self.spacing is None:
			return Even()
		return SpacedBy(self.spacing)

	def render(self, context):
		arrangement = self.arrangement()

		def content(context, modifier):
			node = context.scope.emit(LayoutLinear(axis=self.axis, arrangement=arrangement,
				alignment=self.alignment, modifier=modifier))
			inner = install_directional_channel(context.into(node.children), self.axis, arrangement)
			if self.spaces_items and self.spacing is None:
				inner = inner.with_composer(DefaultItemSpacing())
			render_children(self.children, inner)
			return node

		return adaptive_container(context, content=content)

	def __repr__(self):
		return f"{self.__class__.__name__}({len(self.children)} children)"

class VStack(_Stack):
	axis = VERTICAL
	spaces_items = True

class HStack(_Stack):
	axis = HORIZONTAL

class ZStack(View):
	def __init__(self, *children, alignment=(CENTER, CENTER)):
		self.children = _flatten_children(children)
		self.alignment = alignment

	def render(self, context):
		def content(context, modifier):
			node = context.scope.emit(LayoutBox(alignment=self.alignment, modifier=modifier))
			render_children(self.children, context.into(node.children).with_environment(
				context.environment.derive({STACK_AXIS: UNSET})))
			return node

		return adaptive_container(context, content=content)

	def __repr__(self):
		return f"ZStack({len(self.children)} children)"

class ScrollView(View):
	"""Scrolls its content along one axis, and fills its container along that axis."""

	def __init__(self, *children, axis=VERTICAL, spacing=None):
		assert axis in AXES, f"Invalid axis {axis}, must be 0 (horizontal) or 1 (vertical)"
		self.children = _flatten_children(children)
		self.axis = axis
		self.spacing = spacing

	def render(self, context):
		arrangement = SpacedBy(self.spacing or 0)

		def content(context, modifier):
			node = context.scope.emit(LayoutScroll(axis=self.axis, arrangement=arrangement,
				alignment=START, modifier=modifier))
			# Nothing can share out an unbounded axis, so fills along it just size to content
			inner = context.into(node.children).with_environment(context.environment.derive({
				FILL_CHANNEL_KEYS[self.axis]: UNSET,
				FILL_DIRECTIVE_KEYS[self.axis]: UNSET,
				STACK_AXIS: self.axis,
			}))
			render_children(self.children, inner)
			return node

		return adaptive_container(context,
			fill_width=self.axis == HORIZONTAL, fill_height=self.axis == VERTICAL, content=content)

	def __repr__(self):
		return f"ScrollView({len(self.children)} children)"

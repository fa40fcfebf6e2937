"""
Host renderer - the retained render loop.

A Recomposer renders its content into a fresh layout tree on every pass.
Anything a view needs to keep between passes is remembered by structural
identity: the path of (child index, view type) pairs from the root. State
changes are never made during a pass; they are queued as side effects and
applied in order once the pass has finished, and a change that matters marks
the recomposer dirty so that another pass runs.
"""

from typing import NamedTuple, Optional, Callable, Any

from .constants import MAX_RENDER_PASSES, DEBUG_NEGOTIATION
from .environment import Environment, get_default_environment
from .layout import LayoutRoot, dump_layout_tree
from .modifier import Modifier, EMPTY_MODIFIER


class RecompositionLoopError(RuntimeError):
	"""The tree kept invalidating itself and never settled."""


class RenderContext(NamedTuple):
	"""Everything a view needs to render, passed explicitly down the tree.

	modifier:		modifier chain accumulated by modifier views above the node
					that is about to be emitted (outermost first)
	environment:	ambient values for this subtree
	scope:			where emitted nodes go, and the structural identity used for
					remembered state
	composer:		optional callable(view, context) a container installs to
					render each of its children itself
	"""
	modifier: Modifier
	environment: Environment
	scope: 'RenderScope'
	composer: Optional[Callable] = None

	def with_environment(self, environment):
		return self._replace(environment=environment)

	def with_modifier(self, modifier):
		return self._replace(modifier=modifier)

	def with_composer(self, composer):
		return self._replace(composer=composer)

	def content(self, index, view):
		"""Context for the `index`th child of a container; accumulated modifiers and the composer stop here."""
		return self._replace(modifier=EMPTY_MODIFIER, composer=None, scope=self.scope.child(index, view))

	def into(self, sink):
		"""Context that emits into another node's child list."""
		return self._replace(scope=self.scope.nested(sink))


class RenderScope:
	"""Position in the tree being rendered."""
	__slots__ = ('render_pass', 'path', 'sink')

	def __init__(self, render_pass, path, sink):
		self.render_pass = render_pass
		self.path = path
		self.sink = sink

	def emit(self, node):
		self.sink.append(node)
		return node

	def child(self, index, view):
		# Modifier wrappers are transparent, so adding a frame keeps the state below it
		segment = (index, type(view.strip_modifiers()).__name__)
		return RenderScope(self.render_pass, self.path + (segment,), self.sink)

	def nested(self, sink):
		return RenderScope(self.render_pass, self.path, sink)

	def remember(self, key, factory):
		return self.render_pass.remember(self.path, key, factory)

	def side_effect(self, effect):
		self.render_pass.side_effect(effect)

	def invalidate(self):
		self.render_pass.recomposer.invalidate()

	@property
	def debug(self):
		return self.render_pass.recomposer.debug


class RenderPass:
	"""One walk over the content, plus the side effects it queued."""

	def __init__(self, recomposer, number):
		self.recomposer = recomposer
		self.number = number
		self.effects = []
		self.visited = {}

	def remember(self, path, key, factory):
		"""Return the value remembered at `path` under `key`, creating it on first use."""
		slot = (path, key)
		if slot in self.visited:
			return self.visited[slot]
		try:
			value = self.recomposer._remembered[slot]
		except KeyError:
			value = factory()
			if self.recomposer.debug:
				print(f"Pass {self.number}: remembered {key} at {format_path(path)}")
		self.visited[slot] = value
		return value

	def side_effect(self, effect):
		assert callable(effect), f"Side effect must be callable, got {type(effect).__name__}"
		self.effects.append(effect)

	def run(self, content, environment):
		# Imported here since views are built on top of this module
		from .views import render_content, Text

		root = LayoutRoot()
		context = RenderContext(EMPTY_MODIFIER, environment, RenderScope(self, (), root.children))
		if isinstance(content, str):
			content = Text(content)
		if content is not None:
			render_content(content, context.content(0, content))
		return root

	def commit(self):
		"""Apply queued side effects in the order they were queued."""
		for effect in self.effects:
			effect()
		count = len(self.effects)
		self.effects = []
		return count


class Recomposer:
	def __init__(self, content=None, environment=None, max_render_passes=None, debug=None):
		self.content = content
		self.environment = environment if environment is not None else get_default_environment()
		self.max_render_passes = max_render_passes if max_render_passes is not None else MAX_RENDER_PASSES
		assert isinstance(self.max_render_passes, int) and self.max_render_passes >= 1, \
			f"max_render_passes must be a positive integer, got {self.max_render_passes!r}"
		self.debug = DEBUG_NEGOTIATION if debug is None else debug
		self.root = None
		self.pass_count = 0			# Passes run over the recomposer's lifetime
		self.last_render_passes = 0	# Passes run by the most recent render()
		self._remembered = {}
		self._dirty = True

	@classmethod
	def from_settings(cls, content, settings, environment=None):
		return cls(content, environment,
			max_render_passes=settings.get('max_render_passes'),
			debug=settings.get('debug'))

	@property
	def is_dirty(self):
		return self._dirty

	def set_content(self, view):
		self.content = view
		self.invalidate()

	def invalidate(self):
		self._dirty = True

	def render(self) -> LayoutRoot:
		"""Run render passes until nothing is invalidated, and return the root layout node.

		Raises:
			RecompositionLoopError: if the tree is still dirty after max_render_passes passes
		"""
		passes = 0
		while self._dirty:
			if passes >= self.max_render_passes:
				raise RecompositionLoopError(
					f"Layout did not settle after {passes} render passes")
			self._dirty = False
			render_pass = RenderPass(self, self.pass_count)
			try:
				root = render_pass.run(self.content, self.environment)
			except Exception:
				# The pass never finished, so the next render() starts it over
				self._dirty = True
				raise
			passes += 1
			self.pass_count += 1

			# State that was not visited belongs to views that are gone
			self._remembered = render_pass.visited
			self.root = root
			committed = render_pass.commit()
			if self.debug:
				print(f"Pass {render_pass.number}: committed {committed} side effects"
					f"{', rendering again' if self._dirty else ''}")

		self.last_render_passes = passes
		return self.root

	def layout(self, width, height):
		"""Render, then size and place the tree within (width, height)."""
		root = self.render()
		root.layout(0, 0, width, height)
		if self.debug:
			print('\n'.join(dump_layout_tree(root)))
		return root

	def remembered(self, key=None) -> dict[tuple, Any]:
		"""Remembered values by path, optionally only those stored under `key`."""
		return {path: value for (path, slot_key), value in self._remembered.items()
			if key is None or slot_key == key}

def format_path(path):
	return '/' + '/'.join(f"{index}:{name}" for index, name in path)

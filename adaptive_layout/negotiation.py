"""
Fill negotiation between containers and their content.

A container only knows whether it should expand after its content has
rendered, because it is the content that asks for space. Each adaptive
container therefore installs a per-axis channel in the environment before
rendering its children. A child that wants to fill calls the channel, gets the
directive to attach to itself, and the container hears about it: after the
pass, a side effect records the container's new state, and the next pass
renders the container with the matching sizing of its own.

STATES (per axis, sticky until the container is unmounted or given a fixed size;
once the fixed size is removed the axis starts over from its initial state):
	unknown			natural sizing, does not ask its own parent
	expanding		asks its parent's channel to expand
	nonExpanding	asks its parent's channel to fill without expanding
"""

from .constants import AXES, AXIS_NAMES, STATE_UNKNOWN, STATE_EXPANDING, STATE_NON_EXPANDING
from .environment import (
	UNSET, STACK_AXIS, FILL_CHANNEL_KEYS, FILL_DIRECTIVE_KEYS,
)
from .modifier import EMPTY_MODIFIER, FillMax, MatchExtent, Weighted, Arrangement, Even


class ContainerExpansionState:
	"""The isFill / isNonExpandingFill flags of one container, for both axes."""
	__slots__ = ('_initial_fill', '_fill', '_non_expanding', '_fixed', '_invalidate')

	def __init__(self, fill_width=False, fill_height=False, invalidate=None):
		self._initial_fill = (bool(fill_width), bool(fill_height))
		self._fill = list(self._initial_fill)
		self._non_expanding = [False, False]
		self._fixed = [False, False]		# Axes currently given an explicit size
		self._invalidate = invalidate

	def is_fill(self, axis):
		return self._fill[axis]

	def is_non_expanding_fill(self, axis):
		return self._non_expanding[axis]

	def axis_state(self, axis):
		self._check_axis(axis)
		if self._fill[axis]:
			return STATE_EXPANDING
		if self._non_expanding[axis]:
			return STATE_NON_EXPANDING
		return STATE_UNKNOWN

	def _check_axis(self, axis):
		assert not (self._fill[axis] and self._non_expanding[axis]), \
			f"Container is both expanding and non-expanding in {AXIS_NAMES[axis]}"

	def _changed(self):
		if self._invalidate is not None:
			self._invalidate()

	def mark_fill(self, axis):
		"""Record that the content wants to expand. Only an unknown axis changes."""
		if self.axis_state(axis) != STATE_UNKNOWN:
			return False
		self._fill[axis] = True
		self._changed()
		return True

	def mark_non_expanding_fill(self, axis):
		"""Record that the content fills without expanding. Only an unknown axis changes."""
		if self.axis_state(axis) != STATE_UNKNOWN:
			return False
		self._non_expanding[axis] = True
		self._changed()
		return True

	def is_fixed(self, axis):
		return self._fixed[axis]

	def reset_axis(self, axis):
		"""Clear both flags, when the axis has been given an explicit size."""
		self._fixed[axis] = True
		if not (self._fill[axis] or self._non_expanding[axis]):
			return False
		self._fill[axis] = False
		self._non_expanding[axis] = False
		self._changed()
		return True

	def release_axis(self, axis):
		"""The explicit size is gone: start over from the state the container was created with."""
		if not self._fixed[axis]:
			return False
		self._fixed[axis] = False
		if not self._initial_fill[axis] or self._fill[axis]:
			return False
		self._fill[axis] = True
		self._non_expanding[axis] = False
		self._changed()
		return True

	def __repr__(self):
		return f"ContainerExpansionState(width={self.axis_state(0)}, height={self.axis_state(1)})"


class _AxisSignal:
	"""Collects the channel calls made against one container axis during one pass.

	However many children call, a single side effect is queued: the container
	expands if any of them wanted to, and otherwise fills without expanding.
	"""
	__slots__ = ('state', 'axis', 'scope', 'wants_expand')

	def __init__(self, state, axis, scope):
		self.state = state
		self.axis = axis
		self.scope = scope
		self.wants_expand = None

	def record(self, wants_expand):
		if self.state.axis_state(self.axis) != STATE_UNKNOWN:
			return
		if self.wants_expand is None:
			self.scope.side_effect(self.commit)
			self.wants_expand = bool(wants_expand)
		else:
			self.wants_expand = self.wants_expand or bool(wants_expand)

	def commit(self):
		if self.wants_expand:
			changed = self.state.mark_fill(self.axis)
		else:
			changed = self.state.mark_non_expanding_fill(self.axis)
		if changed and self.scope.debug:
			from .runtime import format_path
			print(f"Container {format_path(self.scope.path)} is now "
				f"{self.state.axis_state(self.axis)} in {AXIS_NAMES[self.axis]}")


class FillChannel:
	"""Callable installed in the environment for one axis of one container.

	channel(wants_expand) returns the directive the caller should attach:
	the weighted directive registered by a row/column (or FillMax) when it
	wants to expand, MatchExtent when it only wants to line up with its
	siblings.
	"""
	__slots__ = ('axis', 'directive', '_signal')

	def __init__(self, axis, signal, directive=None):
		self.axis = axis
		self.directive = directive
		self._signal = signal

	def with_directive(self, directive):
		"""Same channel, handing out `directive` to children that expand."""
		assert directive is None or directive.axis == self.axis, \
			f"Directive {directive!r} does not match channel axis {AXIS_NAMES[self.axis]}"
		return FillChannel(self.axis, self._signal, directive)

	def __call__(self, wants_expand):
		self._signal.record(wants_expand)
		if wants_expand:
			return self.directive if self.directive is not None else FillMax(self.axis)
		return MatchExtent(self.axis)

	def __repr__(self):
		return f"FillChannel({AXIS_NAMES[self.axis]}, directive={self.directive!r})"

# -------

def request_fill(context, axis, wants_expand):
	"""Ask the nearest container for the directive to fill along `axis`.

	Outside any container there is nobody to tell, so this falls back to the
	registered weighted directive or FillMax (or MatchExtent) without side effects.
	"""
	channel = context.environment.get(FILL_CHANNEL_KEYS[axis])
	if channel is not None:
		return channel(wants_expand)
	if not wants_expand:
		return MatchExtent(axis)
	directive = context.environment.get(FILL_DIRECTIVE_KEYS[axis])
	return directive if directive is not None else FillMax(axis)

def adaptive_container(context, modifier=EMPTY_MODIFIER, fill_width=False, fill_height=False, then=None, content=None):
	"""Render a container whose own sizing follows what its content asks for.

	Args:
		context: Render context of the container
		modifier: Sizing applied to the container before negotiation
		fill_width, fill_height: Start out expanding along that axis
		then: Modifier chain placed inside the negotiated sizing
		content: Callable(context, modifier) that emits the container and its
			children, with channels for this container installed in `context`

	Returns:
		Whatever `content` returns
	"""
	assert callable(content), "adaptive_container requires a content callable"
	scope = context.scope
	state = scope.remember('expansion',
		lambda: ContainerExpansionState(fill_width, fill_height, scope.invalidate))

	base = context.modifier.then(modifier)
	directives = []
	mutations = {key: UNSET for key in FILL_DIRECTIVE_KEYS}
	for axis in AXES:
		if base.is_fixed(axis):
			# The container's size is settled; its content has nobody to tell
			if not state.is_fixed(axis) or state.axis_state(axis) != STATE_UNKNOWN:
				scope.side_effect(lambda axis=axis: state.reset_axis(axis))
			mutations[FILL_CHANNEL_KEYS[axis]] = UNSET
			continue
		if state.is_fixed(axis):
			scope.side_effect(lambda axis=axis: state.release_axis(axis))

		axis_state = state.axis_state(axis)
		if axis_state == STATE_EXPANDING:
			directives.append(request_fill(context, axis, True))
		elif axis_state == STATE_NON_EXPANDING:
			directives.append(request_fill(context, axis, False))
		mutations[FILL_CHANNEL_KEYS[axis]] = FillChannel(axis, _AxisSignal(state, axis, scope))

	own_modifier = base.then(*directives).then(then)
	inner = context.with_environment(context.environment.derive(mutations)).with_modifier(EMPTY_MODIFIER)
	return content(inner, own_modifier)

def install_directional_channel(context, axis, arrangement=None):
	"""Register the weighted directive of a row (HORIZONTAL) or column (VERTICAL).

	Children that expand along the main axis share the leftover space by weight
	and are placed by `arrangement`; across it they keep the generic fill.

	Returns:
		RenderContext: The context to render the children with
	"""
	if arrangement is None:
		arrangement = Even()
	assert isinstance(arrangement, Arrangement), \
		f"Arrangement must be an Arrangement, got {type(arrangement).__name__}"
	directive = Weighted(axis, 1.0, arrangement)
	mutations = {
		FILL_DIRECTIVE_KEYS[axis]: directive,
		FILL_DIRECTIVE_KEYS[1 - axis]: UNSET,
		STACK_AXIS: axis,
	}
	channel = context.environment.get(FILL_CHANNEL_KEYS[axis])
	if channel is not None:
		mutations[FILL_CHANNEL_KEYS[axis]] = channel.with_directive(directive)
	cross_channel = context.environment.get(FILL_CHANNEL_KEYS[1 - axis])
	if cross_channel is not None:
		mutations[FILL_CHANNEL_KEYS[1 - axis]] = cross_channel.with_directive(None)
	return context.with_environment(context.environment.derive(mutations))

"""
Scoped environment store.

Ambient configuration is held in immutable, stacked Environment snapshots.
A container that wants to change an ambient value for its subtree derives a
child snapshot and passes it down inside the render context; its own snapshot
is never touched, so the parent scope is restored simply by returning.

Key features:
1. Child snapshots inherit every key of their parent and may shadow it
2. Shadowing a key with UNSET hides the inherited value (the key reads as absent)
3. Snapshots are plain values, so independent trees never observe each other
"""

from collections.abc import Mapping

class _Unset:
	"""Marker that shadows an inherited key back to 'no value'."""
	__slots__ = ()
	_instance = None

	def __new__(cls):
		if cls._instance is None:
			cls._instance = object.__new__(cls)
		return cls._instance

	def __bool__(self):
		return False

	def __repr__(self):
		return 'UNSET'

	def __reduce__(self):
		return (_Unset, ())

UNSET = _Unset()

# Ambient keys used by the negotiation engine
FILL_WIDTH = 'fill_width'						# Width negotiation channel installed by the nearest container
FILL_HEIGHT = 'fill_height'						# Height negotiation channel
FILL_WIDTH_DIRECTIVE = 'fill_width_directive'	# Weighted directive registered by a row
FILL_HEIGHT_DIRECTIVE = 'fill_height_directive'	# Weighted directive registered by a column
STACK_AXIS = 'stack_axis'						# Main axis of the nearest directional container

FILL_CHANNEL_KEYS = (FILL_WIDTH, FILL_HEIGHT)
FILL_DIRECTIVE_KEYS = (FILL_WIDTH_DIRECTIVE, FILL_HEIGHT_DIRECTIVE)


class Environment(Mapping):
	"""Immutable snapshot of ambient values, stacked over an optional parent."""

	__slots__ = ('_values', '_parent', '_depth')

	def __init__(self, values=None, parent=None):
		self._values = dict(values or {})
		self._parent = parent
		self._depth = 0 if parent is None else parent._depth + 1

	@property
	def parent(self):
		return self._parent

	@property
	def depth(self):
		"""Number of snapshots this one is stacked over."""
		return self._depth

	def __getitem__(self, key):
		env = self
		while env is not None:
			if key in env._values:
				value = env._values[key]
				if value is UNSET:
					break
				return value
			env = env._parent
		raise KeyError(key)

	def __contains__(self, key):
		try:
			self[key]
		except KeyError:
			return False
		return True

	def _flatten(self):
		values = {} if self._parent is None else self._parent._flatten()
		values.update(self._values)
		return values

	def __iter__(self):
		return (key for key, value in self._flatten().items() if value is not UNSET)

	def __len__(self):
		return sum(1 for _ in self)

	def derive(self, mutations=None, **kwargs):
		"""Return a child snapshot with the given overrides applied.

		Args:
			mutations: Mapping of key to value; UNSET hides an inherited key
			**kwargs: Further overrides, for keys that are valid identifiers

		Returns:
			Environment: The derived snapshot, or this one if there is nothing to override
		"""
		values = dict(mutations or {})
		values.update(kwargs)
		if not values:
			return self
		return Environment(values, self)

	def __repr__(self):
		items = ', '.join(f"{key}={value!r}" for key, value in self._flatten().items() if value is not UNSET)
		return f"Environment({items})"

# -------

_default_environment = Environment()

def get_default_environment():
	"""The process-wide root snapshot new render trees start from."""
	return _default_environment

def set_default_environment(environment):
	"""Replace the process-wide root snapshot."""
	global _default_environment
	assert isinstance(environment, Environment), \
		f"Default environment must be an Environment, got {type(environment).__name__}"
	_default_environment = environment

def with_overrides(context, mutations, body):
	"""Run `body` with a context whose environment carries the given overrides.

	The caller's context and snapshot are left exactly as they were, for any
	depth of nesting, because the overrides only ever exist in the derived
	context handed to `body`.

	Args:
		context: The current render context
		mutations: Mapping of ambient key to value (UNSET to clear a key)
		body: Callable taking the derived context

	Returns:
		Whatever `body` returns
	"""
	return body(context.with_environment(context.environment.derive(mutations)))

"""Sizing directives, modifier chains and arrangements.

A modifier chain is an immutable tuple of elements, outermost first, attached
to every layout node a render pass emits. The elements that matter to layout:

	FixedSize		explicit size for one axis (frame)
	FillMax			take the whole extent the parent offers (greedy)
	Weighted		take a proportional share of what a row/column has left
	MatchExtent		size to content, but stretch to the extent the parent resolves
	Padding			insets around the content

Only the first (outermost) sizing directive of an axis is honoured, so an
explicit frame wins over any fill a container negotiates inside it.
"""

from .constants import HORIZONTAL, VERTICAL, AXIS_NAMES, START


class ModifierElement(tuple):
	"""Base class for modifier chain elements.

	Elements are tuples so they stay immutable and hashable. Equality also
	compares the element type, so FillMax(0) never equals MatchExtent(0).
	"""
	__slots__ = ()

	def __eq__(self, other):
		return type(self) is type(other) and tuple.__eq__(self, other)

	def __ne__(self, other):
		return not self == other

	def __hash__(self):
		return hash((type(self).__name__, tuple(self)))


class Directive(ModifierElement):
	"""Base class for the per-axis sizing directives returned by negotiation."""
	__slots__ = ()

	def __new__(cls, axis, *values):
		assert axis in (HORIZONTAL, VERTICAL), f"Invalid axis {axis}, must be 0 (width) or 1 (height)"
		return tuple.__new__(cls, (axis, *values))

	@property
	def axis(self):
		return self[0]

	def __repr__(self):
		return f"{self.__class__.__name__}({AXIS_NAMES[self.axis]})"

class FillMax(Directive):
	"""Fill to the container maximum along one axis."""
	__slots__ = ()

	def __new__(cls, axis):
		return super().__new__(cls, axis)

class MatchExtent(Directive):
	"""Size to intrinsic content, but line up with the extent an expanding sibling gets."""
	__slots__ = ()

	def __new__(cls, axis):
		return super().__new__(cls, axis)

class Weighted(Directive):
	"""Take a weighted share of the space a row or column has left over.

	The arrangement is that of the directional container that registered the
	directive; it is informational and takes no part in equality.
	"""
	__slots__ = ()

	def __new__(cls, axis, weight=1.0, arrangement=None):
		assert isinstance(weight, (int, float)) and weight > 0, \
			f"Weight must be a positive number, got {type(weight).__name__}: {weight}"
		return super().__new__(cls, axis, weight, arrangement)

	@property
	def weight(self):
		return self[1]

	@property
	def arrangement(self):
		return self[2]

	def __eq__(self, other):
		return type(self) is type(other) and self[:2] == other[:2]

	def __hash__(self):
		return hash((type(self).__name__, self[0], self[1]))

	def __repr__(self):
		return f"Weighted({AXIS_NAMES[self.axis]}, weight={self.weight})"

class FixedSize(Directive):
	"""Explicit size along one axis."""
	__slots__ = ()

	def __new__(cls, axis, value):
		if isinstance(value, bool):
			value = int(value)
		assert isinstance(value, (int, float)), \
			f"Fixed size must be a number, got {type(value).__name__}: {value}"
		if value < 0:
			raise ValueError(f"Fixed size cannot be negative: {value}")
		return super().__new__(cls, axis, value)

	@property
	def value(self):
		return self[1]

	def __repr__(self):
		return f"FixedSize({AXIS_NAMES[self.axis]}={self.value})"


class Padding(ModifierElement):
	"""Insets around content, as (left, top, right, bottom)."""
	__slots__ = ()

	def __new__(cls, left=0, top=0, right=0, bottom=0):
		insets = (left, top, right, bottom)
		for inset in insets:
			assert isinstance(inset, (int, float)), \
				f"Padding must be a number, got {type(inset).__name__}: {inset}"
		# Negative padding is clamped rather than rejected
		return tuple.__new__(cls, tuple(max(inset, 0) for inset in insets))

	@classmethod
	def all(cls, amount):
		return cls(amount, amount, amount, amount)

	def along(self, axis):
		"""Return the (start, end) insets along an axis."""
		return (self[axis], self[axis + 2])

	def __repr__(self):
		return f"Padding{tuple(self)}"

# -------

class Modifier(tuple):
	"""Immutable chain of modifier elements, outermost first."""
	__slots__ = ()

	def __new__(cls, *elements):
		for element in elements:
			assert isinstance(element, ModifierElement), \
				f"Modifier elements must be ModifierElement instances, got {type(element).__name__}"
		return tuple.__new__(cls, elements)

	def then(self, *others):
		"""Return a chain with the given elements or chains appended (inside this one)."""
		elements = list(self)
		for other in others:
			if other is None:
				continue
			if isinstance(other, Modifier):
				elements.extend(other)
			else:
				elements.append(other)
		if len(elements) == len(self):
			return self
		return Modifier(*elements)

	def sizing(self, axis):
		"""The outermost sizing directive for an axis, or None for natural sizing."""
		for element in self:
			if isinstance(element, Directive) and element.axis == axis:
				return element
		return None

	def is_fixed(self, axis):
		return isinstance(self.sizing(axis), FixedSize)

	def axis_parts(self, axis):
		"""Split the chain along an axis into padding outside the sizing directive,
		the directive itself, and padding inside it.

		Returns:
			tuple: (outer_padding, directive, inner_padding), where the paddings
			are (start, end) pairs.
		"""
		outer = [0, 0]
		inner = [0, 0]
		directive = None
		for element in self:
			if isinstance(element, Padding):
				start, end = element.along(axis)
				target = outer if directive is None else inner
				target[0] += start
				target[1] += end
			elif directive is None and isinstance(element, Directive) and element.axis == axis:
				directive = element
		return (tuple(outer), directive, tuple(inner))

	def __repr__(self):
		return f"Modifier({', '.join(map(repr, self))})"

EMPTY_MODIFIER = Modifier()

# -------

class Arrangement(tuple):
	"""How a row or column places its children along the main axis."""
	__slots__ = ()

	def __new__(cls, *args, **kwargs):
		if cls is Arrangement:
			raise TypeError("Arrangement base class cannot be instantiated directly")
		return tuple.__new__(cls)

	@staticmethod
	def spaced(spacing, alignment=START):
		return SpacedBy(spacing, alignment)

	@staticmethod
	def even():
		return Even()

	def __eq__(self, other):
		return type(self) is type(other) and tuple.__eq__(self, other)

	def __ne__(self, other):
		return not self == other

	def __hash__(self):
		return hash((type(self).__name__, tuple(self)))

	def total_spacing(self, count):
		"""Minimum space reserved between `count` children."""
		return 0

	def place(self, sizes, extent):
		"""Return the main-axis offset of each child within `extent`."""
		raise NotImplementedError("Subclasses must implement place()")

class SpacedBy(Arrangement):
	"""Fixed gaps between children; leftover space is placed by alignment."""
	__slots__ = ()

	def __new__(cls, spacing, alignment=START):
		assert isinstance(spacing, (int, float)), \
			f"Spacing must be a number, got {type(spacing).__name__}: {spacing}"
		if spacing < 0:
			raise ValueError(f"Spacing cannot be negative: {spacing}")
		return tuple.__new__(cls, (spacing, alignment))

	@property
	def spacing(self):
		return self[0]

	@property
	def alignment(self):
		return self[1]

	def total_spacing(self, count):
		return self.spacing * max(count - 1, 0)

	def place(self, sizes, extent):
		used = sum(sizes) + self.total_spacing(len(sizes))
		current = int(max(extent - used, 0) * self.alignment)
		offsets = []
		for size in sizes:
			offsets.append(current)
			current += size + self.spacing
		return offsets

	def __repr__(self):
		return f"SpacedBy({self.spacing})"

class Even(Arrangement):
	"""Leftover space split evenly into the slots around and between children."""
	__slots__ = ()

	def place(self, sizes, extent):
		if not sizes:
			return []
		leftover = max(extent - sum(sizes), 0)
		slots = len(sizes) + 1
		gap = leftover // slots
		# Odd pixels go to the leading slots
		extra = leftover - gap * slots
		offsets = []
		current = 0
		for index, size in enumerate(sizes):
			current += gap + (1 if index < extra else 0)
			offsets.append(current)
			current += size
		return offsets

	def __repr__(self):
		return "Even()"

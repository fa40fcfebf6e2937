"""
Demo scenarios for the negotiation engine.

Each scenario renders a small tree through a Recomposer, lays it out and
prints the container states it settled on along with the computed layout.
"""

from .constants import AXIS_NAMES, DEFAULT_LAYOUT_WIDTH, DEFAULT_LAYOUT_HEIGHT
from .layout import dump_layout_tree
from .runtime import Recomposer, format_path
from .views import VStack, HStack, Text, Spacer, Color, Divider


def build_expanding_stack():
	"""A column holding auto-sized text and a color that wants to expand."""
	return VStack(
		Text("Header"),
		Color("blue"),
	)

def build_non_expanding_row():
	"""A row whose children line up with each other without asking for more space."""
	return HStack(
		Text("One").fill_height(expand_container=False),
		Divider(),
		Text("Three").fill_height(expand_container=False),
	)

def build_fixed_height_stack(height=120):
	"""The expanding column again, after it has been given an explicit height."""
	return build_expanding_stack().frame(height=height)

def build_root_fill():
	"""A lone view at the root asking to expand."""
	return Color("red")

def build_settings_form():
	return VStack(
		HStack(Text("Name"), Spacer(), Text("Value")),
		Divider(),
		HStack(Text("Left"), Color("green"), Text("Right"), spacing=8),
		Spacer(),
		spacing=4,
	).padding(8)

# -------

def dump_container_states(recomposer):
	lines = []
	for path, state in sorted(recomposer.remembered('expansion').items()):
		axes = ', '.join(f"{AXIS_NAMES[axis]}={state.axis_state(axis)}" for axis in (0, 1))
		lines.append(f"  {format_path(path)}: {axes}")
	return lines

def run_scenario(name, width=DEFAULT_LAYOUT_WIDTH, height=DEFAULT_LAYOUT_HEIGHT, settings=None):
	"""Render and lay out one scenario, printing what it settled on.

	Returns:
		Recomposer: The recomposer, for further inspection
	"""
	if name not in SCENARIOS:
		raise ValueError(f"Unknown scenario '{name}', expected one of: {', '.join(SCENARIOS)}")
	settings = settings or {}
	builder, followup = SCENARIOS[name]

	print(f"Scenario: {name}")
	print("=" * (len(name) + 10))
	recomposer = Recomposer.from_settings(builder(), settings)
	recomposer.layout(width, height)
	print(f"Settled after {recomposer.last_render_passes} render pass(es)")

	if followup is not None:
		recomposer.set_content(followup())
		recomposer.layout(width, height)
		print(f"Content changed, settled after {recomposer.last_render_passes} more render pass(es)")

	print("Container states:")
	print('\n'.join(dump_container_states(recomposer)) or "  (none)")
	print(f"Layout at {width}x{height}:")
	print('\n'.join(dump_layout_tree(recomposer.root)))
	print()
	return recomposer

# Scenario name -> (builder, builder of the content it is replaced with afterwards)
SCENARIOS = {
	'expanding': (build_expanding_stack, None),
	'non-expanding': (build_non_expanding_row, None),
	'fixed': (build_expanding_stack, build_fixed_height_stack),
	'root': (build_root_fill, None),
	'form': (build_settings_form, None),
}

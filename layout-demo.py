"""
layout-demo.py - adaptive layout negotiation demo entry point

Renders the demo scenarios through the recomposing host renderer, lays them
out at the requested size and prints the container states each one settled on
together with the computed layout tree.

Features:
- Named scenarios, or all of them in turn
- Layout size from the command line, or from the settings file
- Render pass limit override for experimenting with deep trees

The negotiation engine itself lives in the adaptive_layout package.
"""

import sys, argparse

from adaptive_layout import constants
from adaptive_layout.demo import SCENARIOS, run_scenario
from adaptive_layout.runtime import RecompositionLoopError
from adaptive_layout.settings import load_settings
from utilities import parse_size, validate_size, format_size

# --- Core Functions ---

def parse_arguments(argv=None):
	"""Parse command line arguments."""
	default_size = format_size((constants.DEFAULT_LAYOUT_WIDTH, constants.DEFAULT_LAYOUT_HEIGHT))

	parser = argparse.ArgumentParser(
		description='Adaptive layout - container fill negotiation demo',
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog=f"""
Size examples:
  --size 400x300       Lay out in a 400 by 300 window
  --size 250           Square 250 by 250 window
  --size default       Configured default size ({default_size})
Set ADAPTIVE_LAYOUT_DEBUG=1 to trace the negotiation pass by pass.
		""".strip()
	)

	def size_argument(value):
		"""Validate a WIDTHxHEIGHT size argument."""
		size = validate_size(parse_size(value))
		if size is None:
			raise argparse.ArgumentTypeError(f"Invalid size '{value}', expected WIDTHxHEIGHT")
		return size

	def positive_int(value):
		"""Validate that a pass limit is a positive integer."""
		value = int(value)
		if value < 1:
			raise argparse.ArgumentTypeError("Render pass limit must be at least 1")
		return value

	parser.add_argument('--size', type=size_argument, metavar='WxH',
			help=f'Layout size (default: from settings, otherwise {default_size})')
	parser.add_argument('--settings', metavar='PATH', default=constants.SETTINGS_FILE,
			help=f'Settings file (default: {constants.SETTINGS_FILE})')
	parser.add_argument('--max-passes', type=positive_int, metavar='N',
			help='Maximum render passes before giving up on a scenario')
	parser.add_argument('--debug', action='store_true',
			help='Trace negotiation and render passes')

	# Create subparsers for commands
	subparsers = parser.add_subparsers(dest='command', help='Available commands')

	scenario_parser = subparsers.add_parser(
		'scenario',
		help='Render one of the demo scenarios'
	)
	scenario_parser.add_argument('name', choices=[*SCENARIOS, 'all'],
			help='Scenario to render, or "all"')

	subparsers.add_parser(
		'list',
		help='List the available scenarios'
	)

	return parser.parse_args(argv)

# --- Main Logic ---

def main(argv=None):
	args = parse_arguments(argv)

	settings = load_settings(args.settings)
	if args.max_passes is not None:
		settings['max_render_passes'] = args.max_passes
	if args.debug:
		settings['debug'] = True
	width, height = args.size or (settings['default_width'], settings['default_height'])

	if args.command == 'list':
		for name, (builder, followup) in SCENARIOS.items():
			print(f"{name:15} {(builder.__doc__ or '').strip()}")
		return 0

	names = list(SCENARIOS) if args.command != 'scenario' or args.name == 'all' else [args.name]
	try:
		for name in names:
			run_scenario(name, width, height, settings)
	except RecompositionLoopError as e:
		print(f"Error: {e}")
		print("Try a larger --max-passes value.")
		return 1
	return 0

if __name__ == "__main__":
	sys.exit(main())

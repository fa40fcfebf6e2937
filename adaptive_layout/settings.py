"""
Settings management for the adaptive layout engine.
"""

import json

from .constants import (
	SETTINGS_FILE, MAX_RENDER_PASSES, DEBUG_NEGOTIATION,
	DEFAULT_LAYOUT_WIDTH, DEFAULT_LAYOUT_HEIGHT,
)

def get_default_settings():
	"""Get default settings if no settings file exists."""
	return {
		"max_render_passes": MAX_RENDER_PASSES,
		"debug": DEBUG_NEGOTIATION,
		"default_width": DEFAULT_LAYOUT_WIDTH,
		"default_height": DEFAULT_LAYOUT_HEIGHT,
	}

def load_settings(settings_file=SETTINGS_FILE):
	"""Load settings from a JSON file, merged over the defaults.

	A missing or malformed file yields the defaults. Unknown keys are ignored,
	and values of the wrong type are rejected with a warning.
	"""
	settings = get_default_settings()
	try:
		with open(settings_file, "rt") as f:
			data = json.load(f)
	except (FileNotFoundError, json.JSONDecodeError):
		return settings

	if not isinstance(data, dict):
		print(f"Ignoring settings file {settings_file}: expected a JSON object")
		return settings

	for key, default in settings.items():
		if key not in data:
			continue
		value = data[key]
		# bool is a subclass of int, so check it separately
		if isinstance(default, bool) != isinstance(value, bool) or not isinstance(value, type(default)):
			print(f"Ignoring setting '{key}': expected {type(default).__name__}, got {type(value).__name__}")
			continue
		settings[key] = value

	if settings["max_render_passes"] < 1:
		print("Ignoring setting 'max_render_passes': must be at least 1")
		settings["max_render_passes"] = MAX_RENDER_PASSES

	return settings

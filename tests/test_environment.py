"""Unit tests for the scoped environment store."""

import unittest
import sys
import os

# Add the project root to the path so we can import the package
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from adaptive_layout.environment import (
	Environment, UNSET, with_overrides,
	get_default_environment, set_default_environment,
)
from adaptive_layout.modifier import EMPTY_MODIFIER
from adaptive_layout.runtime import RenderContext


class TestEnvironmentSnapshots(unittest.TestCase):
	"""Test inheritance and shadowing between stacked snapshots."""

	def test_derived_snapshot_inherits(self):
		base = Environment({'color': 'red', 'size': 10})
		child = base.derive(size=12)
		self.assertEqual(child['color'], 'red')
		self.assertEqual(child['size'], 12)
		self.assertEqual(child.depth, 1)
		self.assertIs(child.parent, base)

		# The parent is never touched
		self.assertEqual(base['size'], 10)

	def test_unset_hides_inherited_key(self):
		base = Environment({'color': 'red'})
		child = base.derive({'color': UNSET})
		self.assertNotIn('color', child)
		self.assertIsNone(child.get('color'))
		with self.assertRaises(KeyError):
			child['color']

		# Re-setting below the shadow works again
		grandchild = child.derive(color='blue')
		self.assertEqual(grandchild['color'], 'blue')

	def test_mapping_protocol(self):
		env = Environment({'a': 1}).derive(b=2).derive({'a': UNSET, 'c': 3})
		self.assertEqual(sorted(env), ['b', 'c'])
		self.assertEqual(len(env), 2)
		self.assertEqual(dict(env), {'b': 2, 'c': 3})

	def test_derive_without_overrides_returns_same_snapshot(self):
		env = Environment({'a': 1})
		self.assertIs(env.derive(), env)
		self.assertIs(env.derive({}), env)

	def test_unset_marker(self):
		self.assertFalse(UNSET)
		self.assertEqual(repr(UNSET), 'UNSET')
		self.assertIs(type(UNSET)(), UNSET)

	def test_repr_lists_visible_values(self):
		env = Environment({'a': 1}).derive({'a': UNSET, 'b': 2})
		self.assertEqual(repr(env), "Environment(b=2)")


class TestWithOverrides(unittest.TestCase):
	"""Test that overrides only exist for the duration of the body."""

	def setUp(self):
		self.context = RenderContext(EMPTY_MODIFIER, Environment({'depth': 0, 'name': 'root'}), None)

	def test_body_sees_overrides(self):
		seen = with_overrides(self.context, {'name': 'inner'}, lambda ctx: ctx.environment['name'])
		self.assertEqual(seen, 'inner')

	def test_scope_restored_at_any_depth(self):
		before = dict(self.context.environment)
		observed = []

		def nest(context, level):
			observed.append(context.environment['depth'])
			if level == 5:
				return level
			result = with_overrides(context, {'depth': level + 1}, lambda ctx: nest(ctx, level + 1))
			# Returning from the nested call leaves this level's snapshot unchanged
			self.assertEqual(context.environment['depth'], level)
			return result

		self.assertEqual(nest(self.context, 0), 5)
		self.assertEqual(observed, [0, 1, 2, 3, 4, 5])
		self.assertEqual(dict(self.context.environment), before)

	def test_independent_trees_do_not_observe_each_other(self):
		left = with_overrides(self.context, {'name': 'left'}, lambda ctx: ctx)
		right = with_overrides(self.context, {'name': 'right'}, lambda ctx: ctx)
		self.assertEqual(left.environment['name'], 'left')
		self.assertEqual(right.environment['name'], 'right')
		self.assertEqual(self.context.environment['name'], 'root')


class TestDefaultEnvironment(unittest.TestCase):
	def setUp(self):
		self.saved = get_default_environment()

	def tearDown(self):
		set_default_environment(self.saved)

	def test_replace_default(self):
		env = Environment({'theme': 'dark'})
		set_default_environment(env)
		self.assertIs(get_default_environment(), env)

	def test_default_must_be_environment(self):
		with self.assertRaises(AssertionError):
			set_default_environment({'theme': 'dark'})


if __name__ == '__main__':
	unittest.main()

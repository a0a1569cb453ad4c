import unittest

import spacing

class InsertSpaceBeforeTest(unittest.TestCase):
	def test_operators_are_spaced_outside_annotations(self) -> None:
		self.assertTrue(spacing.insert_space_before('+', 'a', in_annotation=False))
		self.assertTrue(spacing.insert_space_before('b', '+', in_annotation=False))
		self.assertTrue(spacing.insert_space_before('==', 'a', in_annotation=False))

	def test_assignment_is_glued(self) -> None:
		self.assertFalse(spacing.insert_space_before('=', 'x', in_annotation=False))
		self.assertFalse(spacing.insert_space_before('1', '=', in_annotation=False))

	def test_comma_is_followed_by_space(self) -> None:
		self.assertFalse(spacing.insert_space_before(',', 'a', in_annotation=False))
		self.assertTrue(spacing.insert_space_before('b', ',', in_annotation=False))

	def test_annotations_glue_punctuation_and_arithmetic(self) -> None:
		self.assertFalse(spacing.insert_space_before('b', ',', in_annotation=True))
		self.assertFalse(spacing.insert_space_before('+', 'a', in_annotation=True))
		self.assertFalse(spacing.insert_space_before('{', '=', in_annotation=True))
		self.assertTrue(spacing.insert_space_before('true', 'if', in_annotation=True))

	def test_paren_after_control_keyword(self) -> None:
		for keyword in ('annotation', 'if', 'then', 'and', 'or', 'else', 'elseif'):
			with self.subTest(keyword=keyword):
				self.assertTrue(spacing.insert_space_before('(', keyword, in_annotation=False))
				self.assertTrue(spacing.insert_space_before('(', keyword, in_annotation=True))

	def test_paren_after_function_name(self) -> None:
		self.assertFalse(spacing.insert_space_before('(', 'sin', in_annotation=False))
		self.assertFalse(spacing.insert_space_before('(', 'iff', in_annotation=False))
		self.assertFalse(spacing.insert_space_before('(', 'Placement', in_annotation=True))

class AllowBreakTest(unittest.TestCase):
	def test_break_after_operator_outside_annotations(self) -> None:
		self.assertTrue(spacing.allow_break('b', '+', in_annotation=False))
		self.assertTrue(spacing.allow_break('b', '=', in_annotation=False))
		self.assertFalse(spacing.allow_break('b', '*', in_annotation=False))

	def test_annotations_only_break_before_keywords(self) -> None:
		self.assertFalse(spacing.allow_break('b', '+', in_annotation=True))
		self.assertTrue(spacing.allow_break('extent', ',', in_annotation=True))
		self.assertTrue(spacing.allow_break('"some text"', '=', in_annotation=True))
		self.assertFalse(spacing.allow_break('extents', ',', in_annotation=True))

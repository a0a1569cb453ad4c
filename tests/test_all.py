import pathlib
import re
import typing
import unittest

import modelica_grammar
import modelicafmt

PARSER = modelica_grammar.ModelicaParser()

def _options(case: pathlib.Path) -> modelicafmt.FormatOptions:
	length = re.search(r'_len(\d+)', case.stem)
	return modelicafmt.FormatOptions(
		max_line_length=int(length.group(1)) if length else 0,
		empty_lines='_noempty' not in case.stem)

def _make_test(case: pathlib.Path) -> typing.Callable:
	def test(self: 'Test') -> None:
		options = _options(case)
		with case.open('r') as f:
			result = modelicafmt.format_source(f.read(), options, PARSER)
		with case.with_name(case.name + '_expected').open('r') as f:
			self.assertEqual(result, f.read())
		self.assertEqual(modelicafmt.format_source(result, options, PARSER), result)

	return test

class Meta(type):
	def __new__(cls, name, bases, attrs):
		for case in pathlib.Path(__file__).parent.glob('case*'):
			if str(case).endswith('_expected'):
				continue
			attrs['test_' + case.stem] = _make_test(case)
		return type.__new__(cls, name, bases, attrs)

class Test(unittest.TestCase, metaclass=Meta):
	pass

import argparse
import dataclasses
import pathlib
import typing

@dataclasses.dataclass
class Config:
	filepaths: list[pathlib.Path]
	write: bool
	diff: bool
	line_length: int
	empty_lines: bool
	verbose: bool

def _parse_args(argv: typing.Optional[list[str]]) -> argparse.Namespace:
	parser = argparse.ArgumentParser(prog='modelicafmt', description='Format Modelica source files.')
	output = parser.add_mutually_exclusive_group()
	output.add_argument('-w', '--write', action='store_true', default=False,
			help='overwrite files with their formatted code')
	output.add_argument('-d', '--diff', action='store_true', default=False,
			help='output a unified diff instead of formatted code')
	parser.add_argument('--line-length', type=_line_length, default=0, metavar='N',
			help='break lines longer than N characters where allowed (0 disables wrapping)')
	parser.add_argument('--empty-lines', action=argparse.BooleanOptionalAction, default=True,
			help='insert an empty line after statements')
	parser.add_argument('-v', '--verbose', action='store_true', default=False,
			help='log what is being formatted')
	parser.add_argument('filepaths', nargs='+', type=pathlib.Path,
			help='files to format')
	return parser.parse_intermixed_args(argv)

def _line_length(value: str) -> int:
	length = int(value)
	if length < 0:
		raise argparse.ArgumentTypeError(f'line length must not be negative: {value}')
	return length

def make_config(argv: typing.Optional[list[str]] = None) -> Config:
	options = _parse_args(argv)
	return Config(options.filepaths, options.write, options.diff, options.line_length,
		options.empty_lines, options.verbose)

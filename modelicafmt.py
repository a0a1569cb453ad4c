#!/usr/bin/env python3

import collections
import dataclasses
import difflib
import logging
import sys
import typing

import lark

import config as configuration
import layout_context
import layout_rules
import line_manager
import modelica_grammar
import spacing

log = logging.getLogger(__name__)

def main() -> None:
	config = configuration.make_config()
	logging.basicConfig(level=logging.DEBUG if config.verbose else logging.WARNING,
		format='%(name)s: %(levelname)s: %(message)s')
	options = FormatOptions(config.line_length, config.empty_lines)
	parser = modelica_grammar.ModelicaParser()
	failed = False
	for path in config.filepaths:
		log.debug('formatting %s', path)
		try:
			with path.open('r', encoding='utf-8') as f:
				source = f.read()
		except UnicodeDecodeError as e:
			log.error('%s: %s', path, e)
			failed = True
			continue
		try:
			formatted = format_source(source, options, parser)
		except modelica_grammar.ModelicaSyntaxError as e:
			log.error('%s:%s', path, e)
			failed = True
			continue

		if config.diff:
			orig_lines = source.splitlines(keepends=True)
			formatted_lines = formatted.splitlines(keepends=True)
			print(''.join(difflib.unified_diff(orig_lines, formatted_lines, str(path), str(path))), end='')
		elif config.write:
			if formatted == source:
				log.debug('%s is already formatted', path)
				continue
			with path.open('w', encoding='utf-8') as f:
				f.write(formatted)
		else:
			print(formatted, end='')
	if failed:
		sys.exit(1)

@dataclasses.dataclass(frozen=True)
class FormatOptions:
	max_line_length: int = 0 # 0 disables wrapping
	empty_lines: bool = True

def format_source(source: str, options: FormatOptions = FormatOptions(),
		parser: typing.Optional[modelica_grammar.ModelicaParser] = None) -> str:
	if parser is None:
		parser = modelica_grammar.ModelicaParser()
	result = parser.parse(source)
	return format_tree(result.tree, result.comments, options)

def format_tree(tree: lark.Tree, comments: typing.Iterable[lark.Token],
		options: FormatOptions = FormatOptions()) -> str:
	formatter = ModelicaFormatter(comments, options)
	formatter.visit(tree, layout_context.LayoutContext())
	return formatter.finish()

class ModelicaFormatter:
	def __init__(self, comments: typing.Iterable[lark.Token], options: FormatOptions) -> None:
		self.lines = line_manager.Lines(options.max_line_length)
		self.empty_lines = options.empty_lines
		self.comments = collections.deque(comments)
		self.previous_text = ''
		self.previous_index = -1
		self.within_on_current_line = False
		self.inside_bracket = False

	def visit(self, node: typing.Union[lark.Tree, lark.Token], context: layout_context.LayoutContext) -> None:
		if isinstance(node, lark.Token):
			self.visit_terminal(node, context)
			return

		indent = layout_rules.insert_indent_before(node, context, self.previous_text)
		drop = not indent and layout_rules.drops_annotation_indent(node, context, self.previous_text)
		if indent:
			if not self.lines.on_new_line:
				self.lines.new_line()
			self.lines.request_indent()
		try:
			child_context = context.enter(node)
			if node.data == 'annotation' and indent:
				child_context = dataclasses.replace(child_context,
					annotation_indent=len(self.lines.indentation_stack) - 1)
			for child in node.children:
				self.visit(child, child_context)
		finally:
			if indent:
				self.lines.release()
			elif drop:
				self.lines.drop_indent(context.annotation_indent)

	def visit_terminal(self, token: lark.Token, context: layout_context.LayoutContext) -> None:
		index = token.start_pos
		while self.comments and self.previous_index < self.comments[0].start_pos < index:
			self._write_comment(self.comments.popleft(), context)

		self._write(token.value, context)

		if self.previous_text == 'within':
			self.within_on_current_line = True
		if self.previous_text == '[':
			self.inside_bracket = True
		elif self.previous_text == ']':
			self.inside_bracket = False

		if token.value == ';':
			self.lines.new_line()
			if self._insert_blank_line(context):
				self.lines.new_line()
			else:
				self.within_on_current_line = False

		self.previous_text = token.value
		self.previous_index = index

	def finish(self) -> str:
		"""Writes the comments that follow the last token and ends the file with a newline."""
		context = layout_context.LayoutContext()
		while self.comments:
			self._write_comment(self.comments.popleft(), context)
		if not self.lines.on_new_line:
			self.lines.new_line()
		assert not self.lines.indentation_stack, 'indentation still pending after the walk'
		return self.lines.get_value()

	def _write(self, s: str, context: layout_context.LayoutContext) -> None:
		in_annotation = context.in_annotation > 0
		self.lines.write(s,
			space=spacing.insert_space_before(s, self.previous_text, in_annotation),
			breakable=spacing.allow_break(s, self.previous_text, in_annotation))

	def _write_comment(self, comment: lark.Token, context: layout_context.LayoutContext) -> None:
		self._write(comment.value, context)
		if comment.type == 'LINE_COMMENT':
			self.lines.new_line()

	def _insert_blank_line(self, context: layout_context.LayoutContext) -> bool:
		if not self.empty_lines:
			return False
		# the last semicolon only gets one when comments still follow it
		if context.in_last_semicolon:
			return len(self.comments) > 0
		return not self.within_on_current_line and not self.inside_bracket

if __name__ == '__main__':
	main()

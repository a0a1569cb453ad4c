import re
import typing

import lark

import layout_context
import modelica_grammar

# arguments of element annotations that still get their own line
VENDOR_ANNOTATION_ARGUMENT = re.compile(r'choice|^enable|iconTransformation|Placement|Dialog|Evaluate|^__')

Rule = typing.Callable[[lark.Tree, layout_context.LayoutContext, str], bool]

def _always(node: lark.Tree, context: layout_context.LayoutContext, previous: str) -> bool:
	return True

def _string_comment(node: lark.Tree, context: layout_context.LayoutContext, previous: str) -> bool:
	return context.in_annotation == 0

def _argument(node: lark.Tree, context: layout_context.LayoutContext, previous: str) -> bool:
	if context.in_annotation == 0 or context.in_model_annotation > 0:
		return True
	return VENDOR_ANNOTATION_ARGUMENT.search(modelica_grammar.text(node)) is not None and previous != '('

def _expression(node: lark.Tree, context: layout_context.LayoutContext, previous: str) -> bool:
	return context.in_annotation_vector()

INDENT_RULES: dict[str, Rule] = {
	'element_list': _always,
	'equations': _always,
	'algorithm_statements': _always,
	'control_structure_body': _always,
	'statement_body': _always,
	'annotation': _always,
	'enumeration_literal': _always,
	'condition_attribute': _always,
	'expression_list': _always,
	'constraining_clause': _always,
	'external_function_call_argument': _always,
	'string_comment': _string_comment,
	'argument': _argument,
	'named_argument': _argument,
	'expression': _expression,
}

def insert_indent_before(node: lark.Tree, context: layout_context.LayoutContext, previous: str) -> bool:
	"""Reports whether `node` starts on its own line, one level deeper.

	`context` is the context of the node's parent and `previous` the text of
	the last token written.
	"""
	rule = INDENT_RULES.get(node.data)
	return rule is not None and rule(node, context, previous)

def drops_annotation_indent(node: lark.Tree, context: layout_context.LayoutContext, previous: str) -> bool:
	"""Reports whether leaving `node` stops rendering the indentation of its annotation.

	A vendor argument right after `(` stays on the annotation's line, and the
	arguments following it line up with `annotation` rather than one level
	deeper. Existing formatted code depends on this.
	"""
	if node.data not in ('argument', 'named_argument'):
		return False
	if context.in_annotation == 0 or context.in_model_annotation > 0 or context.annotation_indent is None:
		return False
	return previous == '(' and VENDOR_ANNOTATION_ARGUMENT.search(modelica_grammar.text(node)) is not None

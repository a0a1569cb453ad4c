import dataclasses
import typing

import lark

import modelica_grammar

@dataclasses.dataclass(eq=False, frozen=True)
class LayoutContext:
	"""What the walk knows about the ancestors of the node being visited.

	A node's own context is the one its parent was visited with; `enter`
	derives the context for the node's children. Counters therefore fall back
	on every exit path without explicit decrements.
	"""
	in_annotation: int = 0
	in_model_annotation: int = 0
	in_last_semicolon: bool = False
	parent: typing.Optional[lark.Tree] = None
	grandparent: typing.Optional[lark.Tree] = None
	# vectors in model annotations whose elements go on their own lines, innermost last
	annotation_vectors: tuple[lark.Tree, ...] = ()
	# stack position of the enclosing annotation's indentation marker
	annotation_indent: typing.Optional[int] = None

	def enter(self, node: lark.Tree) -> 'LayoutContext':
		changes: dict[str, typing.Any] = {'parent': node, 'grandparent': self.parent}
		if node.data == 'annotation':
			changes['in_annotation'] = self.in_annotation + 1
		elif node.data == 'model_annotation':
			changes['in_model_annotation'] = self.in_model_annotation + 1
		elif node.data == 'last_semicolon':
			changes['in_last_semicolon'] = True
		elif node.data == 'vector' and self.in_model_annotation > 0 and _has_identifier_element(node):
			changes['annotation_vectors'] = self.annotation_vectors + (node,)
		return dataclasses.replace(self, **changes)

	def in_annotation_vector(self) -> bool:
		"""Reports whether the node being visited is an element of the innermost
		vector flagged by `enter`."""
		if not self.annotation_vectors or self.parent is None or self.grandparent is None:
			return False
		if self.parent.data != 'array_arguments' or self.grandparent.data != 'vector':
			return False
		return modelica_grammar.span(self.grandparent) == modelica_grammar.span(self.annotation_vectors[-1])

def _has_identifier_element(vector: lark.Tree) -> bool:
	for child in vector.children:
		if isinstance(child, lark.Tree) and child.data == 'array_iterator_constructor':
			return False
	for child in vector.children:
		if not isinstance(child, lark.Tree) or child.data != 'array_arguments':
			continue
		for element in child.children:
			if isinstance(element, lark.Tree) and element.data == 'expression':
				first = next(modelica_grammar.iter_tokens(element), None)
				if first is not None and first.type == 'IDENT':
					return True
	return False

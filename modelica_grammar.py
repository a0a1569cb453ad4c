import dataclasses
import logging
import typing

import lark
import lark.exceptions

log = logging.getLogger(__name__)

COMMENT_TYPES = ('LINE_COMMENT', 'COMMENT')

GRAMMAR = r'''
stored_definition: _within_clause* _class_definitions?
_within_clause: "within" name? ";"
_class_definitions: (_final_class_definition ";")* _final_class_definition last_semicolon
_final_class_definition: "final"? class_definition
last_semicolon: ";"

class_definition: "encapsulated"? class_prefixes _class_specifier
class_prefixes: "partial"? _class_kind
_class_kind: "class"
	| "model"
	| "operator"? "record"
	| "block"
	| "expandable"? "connector"
	| "type"
	| "package"
	| _purity? "operator"? "function"
	| "operator"
_purity: "pure" | "impure"
_class_specifier: long_class_specifier | short_class_specifier | der_class_specifier

long_class_specifier: IDENT string_comment? composition "end" IDENT
	| "extends" IDENT class_modification? string_comment? composition "end" IDENT
short_class_specifier: IDENT "=" base_prefix type_specifier array_subscripts? class_modification? comment
	| IDENT "=" "enumeration" "(" (enum_list | ":")? ")" comment
der_class_specifier: IDENT "=" "der" "(" type_specifier "," IDENT ("," IDENT)* ")" comment
base_prefix: type_prefix
enum_list: enumeration_literal ("," enumeration_literal)*
enumeration_literal: IDENT comment

composition: element_list (_public_elements | _protected_elements | equation_section | algorithm_section)* _external_clause? _annotation_clause?
_public_elements: "public" element_list
_protected_elements: "protected" element_list
_external_clause: "external" language_specification? external_function_call? annotation? ";"
_annotation_clause: model_annotation ";"
model_annotation: annotation
language_specification: STRING
external_function_call: (component_reference "=")? IDENT "(" external_function_call_argument? ")"
external_function_call_argument: expression ("," expression)*

element_list: (element ";")*
element: import_clause
	| extends_clause
	| "redeclare"? "final"? "inner"? "outer"? (class_definition | component_clause | _replaceable_element)
_replaceable_element: "replaceable" (class_definition | component_clause) (constraining_clause comment)?
import_clause: "import" (IDENT "=" name | name ".*" | name "." "{" import_list "}" | name) comment
import_list: IDENT ("," IDENT)*
extends_clause: "extends" type_specifier class_modification? annotation?
constraining_clause: "constrainedby" type_specifier class_modification?

component_clause: type_prefix type_specifier array_subscripts? component_list
type_prefix: _flow_prefix? _variability_prefix? _causality_prefix?
_flow_prefix: "flow" | "stream"
_variability_prefix: "discrete" | "parameter" | "constant"
_causality_prefix: "input" | "output"
type_specifier: name
component_list: component_declaration ("," component_declaration)*
component_declaration: declaration condition_attribute? comment
condition_attribute: "if" expression
declaration: IDENT array_subscripts? modification?

modification: class_modification ("=" expression)?
	| "=" expression
	| ":=" expression
class_modification: "(" argument_list? ")"
argument_list: argument ("," argument)*
argument: element_modification_or_replaceable | element_redeclaration
element_modification_or_replaceable: "each"? "final"? (element_modification | element_replaceable)
element_modification: name modification? string_comment?
element_redeclaration: "redeclare" "each"? "final"? (short_class_definition | component_clause1 | element_replaceable)
element_replaceable: "replaceable" (short_class_definition | component_clause1) constraining_clause?
component_clause1: type_prefix type_specifier component_declaration1
component_declaration1: declaration comment
short_class_definition: class_prefixes short_class_specifier

equation_section: "initial"? "equation" equations
algorithm_section: "initial"? "algorithm" algorithm_statements
equations: (equation ";")*
algorithm_statements: (statement ";")*
equation: (simple_expression "=" expression
	| if_equation
	| for_equation
	| connect_clause
	| when_equation
	| component_reference function_call_args) comment
statement: (component_reference (":=" expression | function_call_args)
	| "(" output_expression_list ")" ":=" component_reference function_call_args
	| "break"
	| "return"
	| if_statement
	| for_statement
	| while_statement
	| when_statement) comment
if_equation: "if" expression "then" control_structure_body ("elseif" expression "then" control_structure_body)* ("else" control_structure_body)? "end" "if"
if_statement: "if" expression "then" statement_body ("elseif" expression "then" statement_body)* ("else" statement_body)? "end" "if"
for_equation: "for" for_indices "loop" control_structure_body "end" "for"
for_statement: "for" for_indices "loop" statement_body "end" "for"
for_indices: for_index ("," for_index)*
for_index: IDENT ("in" expression)?
while_statement: "while" expression "loop" statement_body "end" "while"
when_equation: "when" expression "then" control_structure_body ("elsewhen" expression "then" control_structure_body)* "end" "when"
when_statement: "when" expression "then" statement_body ("elsewhen" expression "then" statement_body)* "end" "when"
connect_clause: "connect" "(" component_reference "," component_reference ")"
control_structure_body: (equation ";")*
statement_body: (statement ";")*

expression: simple_expression
	| "if" expression "then" expression ("elseif" expression "then" expression)* "else" expression
simple_expression: logical_expression (":" logical_expression (":" logical_expression)?)?
?logical_expression: logical_term ("or" logical_term)*
?logical_term: logical_factor ("and" logical_factor)*
?logical_factor: "not"? relation
?relation: arithmetic_expression (_rel_op arithmetic_expression)?
_rel_op: "<" | "<=" | ">" | ">=" | "==" | "<>"
?arithmetic_expression: _add_op? term (_add_op term)*
_add_op: "+" | "-" | ".+" | ".-"
?term: factor (_mul_op factor)*
_mul_op: "*" | "/" | ".*" | "./"
?factor: primary (_pow_op primary)?
_pow_op: "^" | ".^"
?primary: UNSIGNED_NUMBER
	| STRING
	| "false"
	| "true"
	| function_call
	| component_reference
	| "(" output_expression_list ")"
	| "[" expression_list (";" expression_list)* "]"
	| vector
	| "end"
function_call: (name | "der" | "initial" | "pure") function_call_args
vector: "{" (array_iterator_constructor | array_arguments)? "}"
array_arguments: expression ("," expression)*
array_iterator_constructor: expression "for" for_indices

name: "."? IDENT ("." IDENT)*
component_reference: "."? IDENT array_subscripts? ("." IDENT array_subscripts?)*
function_call_args: "(" function_arguments? ")"
function_arguments: function_argument ("," function_arguments | "for" for_indices)?
	| named_arguments
named_arguments: named_argument ("," named_arguments)?
named_argument: IDENT "=" function_argument
function_argument: "function" name "(" named_arguments? ")"
	| expression
output_expression_list: expression? ("," expression?)*
expression_list: expression ("," expression)*
array_subscripts: "[" subscript ("," subscript)* "]"
subscript: ":" | expression

comment: string_comment? annotation?
string_comment: STRING ("+" STRING)*
annotation: "annotation" class_modification

IDENT: /[A-Za-z_][A-Za-z0-9_]*|'(?:[^'\\]|\\.)*'/
STRING: /"(?:[^"\\]|\\.)*"/
UNSIGNED_NUMBER: /[0-9]+(\.[0-9]*)?([eE][+-]?[0-9]+)?/
LINE_COMMENT: /\/\/[^\r\n]*/
COMMENT: /\/\*[\s\S]*?\*\//

%import common.WS
%ignore WS
%ignore LINE_COMMENT
%ignore COMMENT
'''

class ModelicaSyntaxError(ValueError):
	def __init__(self, message: str, line: int, column: int) -> None:
		super().__init__(f'{line}:{column}: {message}')
		self.line = line
		self.column = column

@dataclasses.dataclass
class ParseResult:
	tree: lark.Tree
	comments: list[lark.Token]

class ModelicaParser:
	"""Parses Modelica source into a rule tree plus the comments it skipped.

	Comments never reach the tree: the lexer hands every comment token to
	`_collect` and drops it, so `comments` ends up in source order.

	The Earley parser is slow on large files (in the order of 20 ms per line).
	Building one is slow too, so keep a parser around for several files.
	"""

	def __init__(self) -> None:
		self._comments: list[lark.Token] = []
		self._lark = lark.Lark(GRAMMAR, start='stored_definition', parser='earley', lexer='basic',
			keep_all_tokens=True, propagate_positions=True, maybe_placeholders=False,
			lexer_callbacks={comment_type: self._collect for comment_type in COMMENT_TYPES})

	def _collect(self, token: lark.Token) -> lark.Token:
		self._comments.append(token)
		return token

	def parse(self, source: str) -> ParseResult:
		self._comments = []
		try:
			tree = self._lark.parse(source)
		except lark.exceptions.UnexpectedInput as e:
			raise ModelicaSyntaxError(_describe(e), e.line, e.column) from e
		comments, self._comments = self._comments, []
		log.debug('parsed %d characters, %d comments', len(source), len(comments))
		return ParseResult(tree, comments)

def _describe(e: lark.exceptions.UnexpectedInput) -> str:
	if isinstance(e, lark.exceptions.UnexpectedCharacters):
		return f'unexpected character {e.char!r}'
	if isinstance(e, lark.exceptions.UnexpectedEOF):
		return 'unexpected end of file'
	if isinstance(e, lark.exceptions.UnexpectedToken):
		return f'unexpected {e.token!r}'
	return 'syntax error'

def iter_tokens(node: typing.Union[lark.Tree, lark.Token]) -> typing.Iterator[lark.Token]:
	"""Yields the terminal tokens under `node` in source order."""
	if isinstance(node, lark.Token):
		yield node
		return
	for child in node.children:
		yield from iter_tokens(child)

def text(node: typing.Union[lark.Tree, lark.Token]) -> str:
	return ''.join(iter_tokens(node))

def span(node: lark.Tree) -> tuple[int, int]:
	return node.meta.start_pos, node.meta.end_pos

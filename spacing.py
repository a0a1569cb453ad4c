import re

# tokens which should generally not have a space after them
NO_SPACE_AFTER = frozenset((
	'(',
	'=',
	'.',
	'[',
	'{',
	';',
	':', # array range constructor
))

# tokens which should generally not have a space before them
NO_SPACE_BEFORE = frozenset((
	'(', ')',
	'[', ']',
	'}',
	';',
	'=',
	',',
	'.',
	':', # array range constructor
))

NO_SPACE_AROUND_IN_ANNOTATION = frozenset((
	'(', ')',
	'[', ']',
	'{', '}',
	';',
	'=',
	'==',
	'<>',
	',',
	'.',
	'-', '+', '^', '*', '/',
	':',
))

# keywords that keep a space before a following opening paren
SPACED_PAREN_KEYWORDS = re.compile(r'\bannotation\b|\bif\b|\bthen\b|\band\b|\bor\b|\belse\b|\belseif\b')

# a line may be broken after these, outside of annotations only
ALLOW_BREAK_AFTER = frozenset((
	';',
	'+',
	'=',
	'==',
	'<>',
))

# a line may be broken before anything matching these, inside annotations too
ALLOW_BREAK_BEFORE = tuple(re.compile(pattern) for pattern in (
	r'".*"',
	r'\bcolor\b',
	r'\bextent\b',
	r'\bgroup\b',
	r'\bif\b',
	r'\bthen\b',
	r'\belse\b',
	r'\belseif\b',
	r'\band\b',
	r'\bor\b',
	r'\bhorizontalAlignment\b',
	r'\bLine\b',
	r'\bPolygon\b',
	r'\bRectangle\b',
	r'\bEllipse\b',
	r'\bText\b',
	r'\bBitmap\b',
	r'\borigin\b',
	r'\bpoints\b',
	r'\brotation\b',
	r'\btransformation\b',
	r'\bvisible\b',
))

def insert_space_before(current: str, previous: str, in_annotation: bool) -> bool:
	if current == '(' and SPACED_PAREN_KEYWORDS.search(previous):
		return True
	if in_annotation:
		return previous not in NO_SPACE_AROUND_IN_ANNOTATION and current not in NO_SPACE_AROUND_IN_ANNOTATION
	return previous not in NO_SPACE_AFTER and current not in NO_SPACE_BEFORE

def allow_break(current: str, previous: str, in_annotation: bool) -> bool:
	"""Reports whether a line may be broken between `previous` and `current`."""
	if not in_annotation and previous in ALLOW_BREAK_AFTER:
		return True
	return any(pattern.search(current) for pattern in ALLOW_BREAK_BEFORE)

import enum
import io

INDENT = '  '

class Indent(enum.Enum):
	RENDER = enum.auto()
	IGNORE = enum.auto() # keeps pushes and pops paired without indenting the line twice

class Lines:
	def __init__(self, max_line_length: int = 0) -> None:
		self.current = io.StringIO()
		self.max_line_length = max_line_length
		self.indentation_stack: list[Indent] = []
		self.on_new_line = True
		self.line_indent_increased = False # at most one indent per output line
		self.line_length = 0

	def indentation(self) -> int:
		return sum(1 for marker in self.indentation_stack if marker is Indent.RENDER)

	def request_indent(self) -> Indent:
		if self.line_indent_increased:
			marker = Indent.IGNORE
		else:
			marker = Indent.RENDER
			self.line_indent_increased = True
		self.indentation_stack.append(marker)
		return marker

	def release(self) -> None:
		assert self.indentation_stack, 'indentation released more often than requested'
		self.indentation_stack.pop()

	def drop_indent(self, position: int) -> None:
		"""Stops rendering the marker at `position`; it is still released as usual."""
		self.indentation_stack[position] = Indent.IGNORE

	def prefix(self, space: bool) -> str:
		if self.on_new_line:
			return INDENT * self.indentation()
		return ' ' if space else ''

	def write(self, s: str, space: bool, breakable: bool) -> None:
		"""Writes `s` after its whitespace prefix, first breaking the line if it
		would get too long and `breakable` says a break is allowed here.

		`space` is whether `s` is separated from the previous token when both
		sit on the same line.
		"""
		first_line = s.split('\n', 1)[0]
		projected = self.line_length + len(self.prefix(space)) + len(first_line)
		if (self.max_line_length > 0 and not self.on_new_line
				and projected > self.max_line_length and breakable):
			self.new_line()
			self.request_indent()
			self._write(s, space)
			self.release()
		else:
			self._write(s, space)

	def _write(self, s: str, space: bool) -> None:
		prefix = self.prefix(space)
		self.on_new_line = False
		self.current.write(prefix + s)
		last_newline = s.rfind('\n')
		if last_newline < 0:
			self.line_length += len(prefix) + len(s)
		else:
			self.line_length = len(s) - (last_newline + 1)

	def new_line(self) -> None:
		self.current.write('\n')
		self.on_new_line = True
		self.line_length = 0
		self.line_indent_increased = False

	def get_value(self) -> str:
		return self.current.getvalue()

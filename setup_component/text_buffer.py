from __future__ import annotations

from bisect import bisect_right
from typing import Any, Dict, List, Optional, Tuple


_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def _vlq(value: int) -> str:
	encoded = ""
	value = (-value << 1) | 1 if value < 0 else value << 1
	while True:
		digit = value & 31
		value >>= 5
		if value:
			digit |= 32
		encoded += _BASE64[digit]
		if not value:
			return encoded


class EditableText:
	"""Text buffer recording edits against the original string.

	Offsets always refer to the original text, so edits can be applied in any
	order without shifting positions by hand.
	"""

	def __init__(self, original: str):
		self.original = original
		self._intro: List[str] = []
		self._outro: List[str] = []
		# start -> (end, replacement)
		self._edits: Dict[int, Tuple[int, str]] = {}

	def overwrite(self, start: int, end: int, content: str) -> "EditableText":
		if not 0 <= start < end <= len(self.original):
			raise ValueError(f"Invalid range {start}:{end} for text of length {len(self.original)}")
		for other_start, (other_end, _) in self._edits.items():
			if start < other_end and other_start < end:
				raise ValueError(f"Range {start}:{end} overlaps edited range {other_start}:{other_end}")
		self._edits[start] = (end, content)
		return self

	def remove(self, start: int, end: int) -> "EditableText":
		return self.overwrite(start, end, "")

	def prepend(self, content: str) -> "EditableText":
		self._intro.insert(0, content)
		return self

	def append(self, content: str) -> "EditableText":
		self._outro.append(content)
		return self

	def has_changed(self) -> bool:
		return bool(self._intro or self._outro or self._edits)

	def _chunks(self) -> List[Tuple[str, Optional[int], bool]]:
		"""(text, original offset or None, edited) in output order."""
		chunks: List[Tuple[str, Optional[int], bool]] = [(text, None, True) for text in self._intro]
		cursor = 0
		for start in sorted(self._edits):
			end, content = self._edits[start]
			if cursor < start:
				chunks.append((self.original[cursor:start], cursor, False))
			if content:
				chunks.append((content, start, True))
			cursor = end
		if cursor < len(self.original):
			chunks.append((self.original[cursor:], cursor, False))
		chunks.extend((text, None, True) for text in self._outro)
		return chunks

	def __str__(self) -> str:
		return "".join(text for text, _, _ in self._chunks())

	def generate_map(self, source: str, include_content: bool = True) -> Dict[str, Any]:
		"""Source map v3 with one segment per unchanged line and per edit."""
		line_starts = [0]
		for index, char in enumerate(self.original):
			if char == "\n":
				line_starts.append(index + 1)

		def locate(offset: int) -> Tuple[int, int]:
			line = bisect_right(line_starts, offset) - 1
			return line, offset - line_starts[line]

		lines: List[List[str]] = [[]]
		state = {"column": 0, "orig_line": 0, "orig_column": 0}
		out_column = 0

		def add_segment(offset: int) -> None:
			orig_line, orig_column = locate(offset)
			lines[-1].append(
				_vlq(out_column - state["column"])
				+ _vlq(0)
				+ _vlq(orig_line - state["orig_line"])
				+ _vlq(orig_column - state["orig_column"])
			)
			state.update(column=out_column, orig_line=orig_line, orig_column=orig_column)

		for text, offset, edited in self._chunks():
			if offset is not None:
				add_segment(offset)
			for position, char in enumerate(text):
				if char != "\n":
					out_column += 1
					continue
				lines.append([])
				out_column = 0
				state["column"] = 0
				if offset is not None and not edited and position + 1 < len(text):
					add_segment(offset + position + 1)

		source_map: Dict[str, Any] = {
			"version": 3,
			"sources": [source],
			"names": [],
			"mappings": ";".join(",".join(segments) for segments in lines),
		}
		if include_content:
			source_map["sourcesContent"] = [self.original]
		return source_map

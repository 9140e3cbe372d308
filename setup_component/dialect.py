from __future__ import annotations

import os
from typing import Dict, Iterator, List, NamedTuple, Optional

from tree_sitter import Node, Tree
from tree_sitter_language_pack import get_parser


class Dialect(NamedTuple):
	grammar: str
	lang: Optional[str]


EXTENSION_DIALECT: Dict[str, Dialect] = {
	".ts": Dialect("typescript", "ts"),
	".mts": Dialect("typescript", "ts"),
	".cts": Dialect("typescript", "ts"),
	".tsx": Dialect("tsx", "tsx"),
	".js": Dialect("javascript", "js"),
	".mjs": Dialect("javascript", "js"),
	".cjs": Dialect("javascript", "js"),
	".jsx": Dialect("javascript", "jsx"),
}

# Anything else (e.g. ids of already-virtual modules) is read with the most
# permissive grammar.
DEFAULT_DIALECT = Dialect("tsx", "tsx")


def detect_dialect(id: str) -> Dialect:
	path = id.split("?", 1)[0]
	_, ext = os.path.splitext(path)
	return EXTENSION_DIALECT.get(ext.lower(), DEFAULT_DIALECT)


def parse_source(source: bytes, dialect: Dialect) -> Tree:
	return get_parser(dialect.grammar).parse(source)


def script_tag(lang: Optional[str], setup: bool = False) -> str:
	attrs = " setup" if setup else ""
	if lang:
		attrs += f' lang="{lang}"'
	return f"<script{attrs}>"


def named_children(node: Node) -> List[Node]:
	return [child for child in node.named_children if child.type != "comment"]


def unwrap_parentheses(node: Node) -> Node:
	while node.type == "parenthesized_expression":
		inner = named_children(node)
		if len(inner) != 1:
			break
		node = inner[0]
	return node


def walk_tree(node: Node, skip) -> Iterator[Node]:
	"""Pre-order walk; children of nodes for which `skip(node)` is true are not visited."""
	stack = [node]
	while stack:
		current = stack.pop()
		yield current
		if skip(current):
			continue
		stack.extend(reversed(current.children))


class SourceText:
	"""Source bytes with byte -> character offset conversion."""

	def __init__(self, text: str):
		self.text = text
		self.data = text.encode("utf-8")
		self._ascii = len(self.data) == len(text)

	def offset(self, byte_offset: int) -> int:
		if self._ascii:
			return byte_offset
		return len(self.data[:byte_offset].decode("utf-8", errors="ignore"))

	def node_range(self, node: Node) -> tuple:
		return self.offset(node.start_byte), self.offset(node.end_byte)

	def node_text(self, node: Optional[Node]) -> str:
		if node is None:
			return ""
		return self.data[node.start_byte:node.end_byte].decode("utf-8", errors="ignore")

from __future__ import annotations

from typing import Dict, Optional, Set

from .model import FileContext
from .virtual_id import normalize_path


class ContextStore:
	"""Scan results per normalized module id, shared by every hook.

	`put` replaces a whole entry; nothing is ever merged. `validated_ids` only
	grows: once a module has held a component definition, its floating
	declarations are collected on every later scan.
	"""

	def __init__(self):
		self.files: Dict[str, FileContext] = {}
		self.validated_ids: Set[str] = set()

	def put(self, id: str, context: FileContext) -> None:
		self.files[normalize_path(id)] = context

	def get(self, id: str, root: str = "") -> Optional[FileContext]:
		context = self.files.get(id)
		if context is None:
			context = self.files.get(normalize_path(id))
		if context is None and root:
			context = self.files.get(normalize_path(root + id))
		return context

	def __contains__(self, id: str) -> bool:
		return normalize_path(id) in self.files

	def __len__(self) -> int:
		return len(self.files)

from __future__ import annotations

import re
from typing import List, Optional

from .context import ContextStore
from .hot_update import hot_update_setup_component
from .loader import load_setup_component
from .model import HotUpdateContext, ModuleNode, SetupComponentOptions, TransformResult
from .transformer import transform_setup_component
from .virtual_id import is_virtual_id


class SetupComponentPlugin:
	"""The hooks a host build tool calls, sharing one context store."""

	def __init__(self, options: Optional[SetupComponentOptions] = None):
		self.options = options or SetupComponentOptions()
		self.ctx = ContextStore()
		self._include = [re.compile(pattern) for pattern in self.options.include]
		self._exclude = [re.compile(pattern) for pattern in self.options.exclude]

	def should_transform(self, id: str) -> bool:
		if is_virtual_id(id):
			return False
		if any(pattern.search(id) for pattern in self._exclude):
			return False
		return any(pattern.search(id) for pattern in self._include)

	def transform(self, code: str, id: str) -> Optional[TransformResult]:
		if not self.should_transform(id):
			return None
		return transform_setup_component(code, id, self.ctx, self.options)

	def resolve_id(self, id: str) -> Optional[str]:
		return id if is_virtual_id(id) else None

	def load(self, id: str) -> Optional[str]:
		if not is_virtual_id(id):
			return None
		return load_setup_component(id, self.ctx, self.options.root, self.options)

	async def handle_hot_update(self, hmr: HotUpdateContext) -> Optional[List[ModuleNode]]:
		return await hot_update_setup_component(hmr, self.ctx, self.options.root, self.options)

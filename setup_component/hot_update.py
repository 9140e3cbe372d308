from __future__ import annotations

from typing import List, Optional, Set

import structlog

from .context import ContextStore
from .model import HotUpdateContext, ModuleNode, SetupComponentOptions
from .scanner import scan_setup_component
from .virtual_id import is_sub_module, normalize_path


logger = structlog.get_logger(__name__)


def collect_sub_modules(module: ModuleNode, root: str = "") -> List[ModuleNode]:
	"""Every virtual module generated, directly or transitively, from `module`.

	Generated modules form a tree under their original module: a decoded virtual
	id is always shorter than the id it came from, so no cycle can form. A node
	reached twice comes from a duplicate or diamond edge and is skipped.
	"""
	found: List[ModuleNode] = []
	visited: Set[int] = {id(module)}
	worklist = [module]
	while worklist:
		current = worklist.pop()
		if not current.id:
			continue
		for imported in current.imported_modules:
			if not is_sub_module(imported.id, current.id, root):
				continue
			if id(imported) in visited:
				logger.debug("setup_component.hot_update.duplicate_edge", module=imported.id, importer=current.id)
				continue
			visited.add(id(imported))
			found.append(imported)
			worklist.append(imported)
	return found


async def hot_update_setup_component(
	hmr: HotUpdateContext,
	ctx: ContextStore,
	root: str = "",
	options: Optional[SetupComponentOptions] = None,
) -> Optional[List[ModuleNode]]:
	module = next((mod for mod in hmr.modules if mod.file == hmr.file), None)
	if module is None or not module.id:
		return None

	affected_modules = collect_sub_modules(module, root)

	normalized_id = normalize_path(hmr.file)
	file_context = scan_setup_component(await hmr.read(), normalized_id, ctx.validated_ids, options)
	if file_context is not None:
		ctx.put(normalized_id, file_context)

	logger.info(
		"setup_component.hot_update",
		file=normalized_id,
		invalidated=[mod.id for mod in affected_modules],
	)
	return [*hmr.modules, *(mod for mod in affected_modules if mod not in hmr.modules)]

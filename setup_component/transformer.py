from __future__ import annotations

from typing import Optional

import structlog

from .constants import SETUP_COMPONENT_IMPORT_NAME
from .context import ContextStore
from .model import SetupComponentOptions, TransformResult
from .scanner import scan_setup_component
from .text_buffer import EditableText
from .virtual_id import build_virtual_id, normalize_path


logger = structlog.get_logger(__name__)


def transform_setup_component(
	code: str,
	id: str,
	ctx: ContextStore,
	options: Optional[SetupComponentOptions] = None,
) -> Optional[TransformResult]:
	"""Replace every setup component of a module with an import of its virtual module."""
	normalized_id = normalize_path(id)
	file_context = scan_setup_component(code, id, ctx.validated_ids, options)
	if file_context is None:
		return None
	ctx.put(normalized_id, file_context)

	s = EditableText(code)
	for index, component in enumerate(file_context.components):
		import_name = SETUP_COMPONENT_IMPORT_NAME.format(index=index)
		s.overwrite(component.start, component.end, import_name)
		if component.annotation_start is not None:
			s.remove(component.annotation_start, component.annotation_end)
		s.prepend(f"import {import_name} from '{build_virtual_id(normalized_id, index)}'\n")

	if not s.has_changed():
		return None
	logger.debug("setup_component.transform", id=normalized_id, components=len(file_context.components))
	return TransformResult(code=str(s), map=s.generate_map(id))

from __future__ import annotations

from typing import Optional

import structlog

from .context import ContextStore
from .dialect import SourceText, detect_dialect, named_children, parse_source, script_tag
from .model import SetupComponentOptions
from .text_buffer import EditableText
from .virtual_id import decode_virtual_id


logger = structlog.get_logger(__name__)


def _render_body(body: str, lang_id: str, render_call: str) -> str:
	"""Turn each top-level `return <expr>` of a component body into `render_call(<expr>);`."""
	source = SourceText(body)
	# `return` outside a function parses fine as a top-level statement
	program = parse_source(source.data, detect_dialect(lang_id)).root_node
	s = EditableText(body)
	for stmt in program.named_children:
		if stmt.type != "return_statement":
			continue
		argument = named_children(stmt)
		if not argument:
			continue
		start, end = source.node_range(stmt)
		s.overwrite(start, end, f"{render_call}({source.node_text(argument[0])});")
	return str(s)


def load_setup_component(
	virtual_id: str,
	ctx: ContextStore,
	root: str,
	options: Optional[SetupComponentOptions] = None,
) -> Optional[str]:
	"""Synthetic single-file component for a virtual id, or None if it is stale."""
	options = options or SetupComponentOptions()
	decoded = decode_virtual_id(virtual_id)
	if decoded is None:
		return None
	id, index = decoded

	file_context = ctx.get(id, root)
	if file_context is None or index >= len(file_context.components):
		logger.debug("setup_component.load.stale", id=virtual_id)
		return None

	lang = detect_dialect(id).lang
	body = _render_body(file_context.components[index].body, id, options.render_call)

	parts = []
	# declarations live in their own block so they are not read as component logic
	if file_context.declarations:
		parts.append(script_tag(lang) + "\n")
		parts.extend(f"{declaration}\n" for declaration in file_context.declarations)
		parts.append("</script>\n")
	parts.append(script_tag(lang, setup=True) + "\n")
	parts.extend(f"{statement}\n" for statement in file_context.imports)
	parts.append(body)
	parts.append("\n</script>\n")
	return "".join(parts)

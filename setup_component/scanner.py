from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional, Set

import structlog
from tree_sitter import Node

from .constants import FUNCTION_TYPES
from .dialect import (
	SourceText,
	detect_dialect,
	named_children,
	parse_source,
	unwrap_parentheses,
	walk_tree,
)
from .model import ComponentDefinition, FileContext, SetupComponentOptions
from .virtual_id import normalize_path


logger = structlog.get_logger(__name__)


class InvalidSetupComponentError(SyntaxError):
	"""A recognized component definition whose implementation is not a function."""


@dataclass(frozen=True)
class Candidate:
	"""A definition found by the walk, before its implementation is validated."""
	kind: Literal["call", "typed"]
	# node replaced in the host module
	node: Node
	implementation: Optional[Node]
	annotation: Optional[Node] = None


def is_call_of(node: Optional[Node], name: str, source: SourceText) -> bool:
	if node is None or node.type != "call_expression":
		return False
	callee = node.child_by_field_name("function")
	return callee is not None and callee.type == "identifier" and source.node_text(callee) == name


def fc_type_annotation(node: Optional[Node], type_name: str, source: SourceText) -> Optional[Node]:
	"""The `: SetupFC` annotation of `const comp: SetupFC = ...`, if `node` is such a declarator."""
	if node is None or node.type != "variable_declarator":
		return None
	name = node.child_by_field_name("name")
	annotation = node.child_by_field_name("type")
	if name is None or name.type != "identifier" or annotation is None:
		return None
	if node.child_by_field_name("value") is None:
		return None
	types = named_children(annotation)
	if not types:
		return None
	reference = types[0]
	if reference.type == "generic_type":
		reference = reference.child_by_field_name("name")
	if reference is None or reference.type != "type_identifier":
		return None
	return annotation if source.node_text(reference) == type_name else None


def _match_candidate(node: Node, options: SetupComponentOptions, source: SourceText) -> Optional[Candidate]:
	# defineSetupComponent(...)
	if is_call_of(node, options.factory_name, source):
		arguments = node.child_by_field_name("arguments")
		args = named_children(arguments) if arguments is not None and arguments.type == "arguments" else []
		implementation = unwrap_parentheses(args[0]) if args else None
		return Candidate(kind="call", node=node, implementation=implementation)
	# const comp: SetupFC = ...
	annotation = fc_type_annotation(node, options.type_name, source)
	if annotation is not None:
		value = unwrap_parentheses(node.child_by_field_name("value"))
		return Candidate(kind="typed", node=value, implementation=value, annotation=annotation)
	return None


def _is_definition_statement(stmt: Node, options: SetupComponentOptions, source: SourceText) -> bool:
	if stmt.type == "expression_statement":
		expressions = named_children(stmt)
		return bool(expressions) and is_call_of(unwrap_parentheses(expressions[0]), options.factory_name, source)
	if stmt.type in ("lexical_declaration", "variable_declaration"):
		declarators = [child for child in named_children(stmt) if child.type == "variable_declarator"]
		if not declarators:
			return False
		first = declarators[0]
		if fc_type_annotation(first, options.type_name, source) is not None:
			return True
		value = first.child_by_field_name("value")
		return value is not None and is_call_of(unwrap_parentheses(value), options.factory_name, source)
	return False


def _is_ignored_statement(stmt: Node, options: SetupComponentOptions, source: SourceText) -> bool:
	if stmt.type in ("comment", "hash_bang_line"):
		return True
	if stmt.type == "expression_statement":
		expressions = named_children(stmt)
		return bool(expressions) and is_call_of(expressions[0], options.ignored_call, source)
	return False


def _collect_declarations(program: Node, options: SetupComponentOptions, source: SourceText) -> List[str]:
	declarations: List[str] = []
	for stmt in program.named_children:
		if stmt.type == "import_statement" or "export" in stmt.type:
			continue
		if _is_definition_statement(stmt, options, source) or _is_ignored_statement(stmt, options, source):
			continue
		declarations.append(source.node_text(stmt))
	return declarations


def _extract(candidate: Candidate, source: SourceText, id: str, options: SetupComponentOptions) -> ComponentDefinition:
	implementation = candidate.implementation
	if implementation is None or implementation.type not in FUNCTION_TYPES:
		label = options.factory_name if candidate.kind == "call" else options.type_name
		found = implementation.type if implementation is not None else "nothing"
		line = candidate.node.start_point[0] + 1
		raise InvalidSetupComponentError(
			f"{label}: invalid setup component definition at {id}:{line}, "
			f"expected a function or arrow function but found {found}"
		)

	body = implementation.child_by_field_name("body")
	body_start, body_end = source.node_range(body)
	if body.type == "statement_block":
		body_start += 1
		body_end -= 1

	start, end = source.node_range(candidate.node)
	annotation_start = annotation_end = None
	if candidate.annotation is not None:
		annotation_start, annotation_end = source.node_range(candidate.annotation)

	return ComponentDefinition(
		kind=candidate.kind,
		code=source.node_text(implementation),
		body=source.text[body_start:body_end],
		start=start,
		end=end,
		annotation_start=annotation_start,
		annotation_end=annotation_end,
	)


def scan_setup_component(
	code: str,
	id: str,
	validated_ids: Optional[Set[str]] = None,
	options: Optional[SetupComponentOptions] = None,
) -> Optional[FileContext]:
	"""Find the setup components of a module.

	Returns None when the module does not parse, or when it holds no component
	and never did. `validated_ids` records every module seen with a component;
	floating declarations are only collected for those.
	"""
	options = options or SetupComponentOptions()
	validated_ids = validated_ids if validated_ids is not None else set()
	normalized_id = normalize_path(id)
	source = SourceText(code)

	tree = parse_source(source.data, detect_dialect(id))
	program = tree.root_node
	if program.has_error:
		logger.debug("setup_component.scan.unparseable", id=id)
		return None

	candidates: List[Candidate] = []
	imports: List[str] = []

	def matched(node: Node) -> bool:
		return _match_candidate(node, options, source) is not None

	# definitions never nest: the walk stops at a matched node
	for node in walk_tree(program, matched):
		candidate = _match_candidate(node, options, source)
		if candidate is not None:
			candidates.append(candidate)
			validated_ids.add(normalized_id)
		elif node.type == "import_statement" and node.parent is not None and node.parent.type == "program":
			imports.append(source.node_text(node))

	if not candidates and normalized_id not in validated_ids:
		return None

	declarations: List[str] = []
	if normalized_id in validated_ids:
		declarations = _collect_declarations(program, options, source)

	components = [_extract(candidate, source, id, options) for candidate in candidates]
	logger.debug(
		"setup_component.scan.done",
		id=id,
		components=len(components),
		imports=len(imports),
		declarations=len(declarations),
	)
	return FileContext(components=components, imports=imports, declarations=declarations)

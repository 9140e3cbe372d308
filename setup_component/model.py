from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from .constants import (
	DEFINE_RENDER,
	DEFINE_SETUP_COMPONENT,
	IGNORED_RENDER_CALL,
	REGEX_SRC_FILE,
	SETUP_COMPONENT_TYPE,
)


class ComponentDefinition(BaseModel):
	model_config = ConfigDict(frozen=True)

	kind: Literal["call", "typed"]
	code: str
	body: str
	# character range replaced in the host module
	start: int
	end: int
	annotation_start: Optional[int] = None
	annotation_end: Optional[int] = None


class FileContext(BaseModel):
	components: List[ComponentDefinition] = []
	imports: List[str] = []
	declarations: List[str] = []


class TransformResult(BaseModel):
	code: str
	map: Dict[str, Any]


class SetupComponentOptions(BaseModel):
	root: str = Field(default_factory=os.getcwd)
	include: List[str] = [REGEX_SRC_FILE]
	exclude: List[str] = [r"node_modules"]
	factory_name: str = DEFINE_SETUP_COMPONENT
	type_name: str = SETUP_COMPONENT_TYPE
	ignored_call: str = IGNORED_RENDER_CALL
	render_call: str = DEFINE_RENDER


@dataclass(eq=False)
class ModuleNode:
	"""A node of the host's module graph."""
	id: Optional[str]
	file: Optional[str] = None
	imported_modules: List["ModuleNode"] = field(default_factory=list)


@dataclass
class HotUpdateContext:
	file: str
	modules: List[ModuleNode]
	read: Callable[[], Awaitable[str]]

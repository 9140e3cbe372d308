from __future__ import annotations

import posixpath
from typing import Optional, Tuple

from .constants import SETUP_COMPONENT_ID_REGEX, SETUP_COMPONENT_ID_SUFFIX


def normalize_path(path: str) -> str:
	"""Forward slashes and collapsed segments, matching the host's module ids."""
	normalized = posixpath.normpath(path.replace("\\", "/"))
	# normpath keeps a leading `//`, the host does not
	if normalized.startswith("//"):
		normalized = "/" + normalized.lstrip("/")
	return normalized


def build_virtual_id(normalized_id: str, index: int) -> str:
	return f"{normalized_id}{SETUP_COMPONENT_ID_SUFFIX}{index}.vue"


def is_virtual_id(id: Optional[str]) -> bool:
	return bool(id) and SETUP_COMPONENT_ID_REGEX.search(id) is not None


def decode_virtual_id(virtual_id: str) -> Optional[Tuple[str, int]]:
	match = SETUP_COMPONENT_ID_REGEX.search(virtual_id)
	if match is None:
		return None
	return virtual_id[: match.start()], int(match.group(1))


def is_sub_module(id: Optional[str], owner_id: str, root: str = "") -> bool:
	"""True when `id` is a virtual module generated from `owner_id`."""
	decoded = decode_virtual_id(id) if id else None
	if decoded is None:
		return False
	origin = normalize_path(decoded[0])
	owner = normalize_path(owner_id)
	if origin == owner:
		return True
	return bool(root) and normalize_path(root + origin) == owner

"""Compile setup-style (function) components into synthetic single-file components.

Modules:
- scanner.py: Finds qualifying component definitions, imports and floating declarations.
- transformer.py: Replaces each definition with an import of a virtual module.
- loader.py: Rebuilds the synthetic single-file component for a virtual id.
- hot_update.py: Rescans edited files and collects the generated modules to invalidate.
- plugin.py: Host-facing facade owning the context store.
"""

from .context import ContextStore
from .plugin import SetupComponentPlugin
from .scanner import InvalidSetupComponentError

__all__ = [
	"ContextStore",
	"InvalidSetupComponentError",
	"SetupComponentPlugin",
	"scanner",
	"transformer",
	"loader",
	"hot_update",
	"plugin",
]

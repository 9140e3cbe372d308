from __future__ import annotations

import re


DEFINE_SETUP_COMPONENT = "defineSetupComponent"
SETUP_COMPONENT_TYPE = "SetupFC"
# Bare `h(...)` statements at module level render nothing and are never hoisted.
IGNORED_RENDER_CALL = "h"
DEFINE_RENDER = "defineRender"

SETUP_COMPONENT_ID_SUFFIX = "__setup_component_"
SETUP_COMPONENT_ID_REGEX = re.compile(r"__setup_component_(\d+)\.vue$")
SETUP_COMPONENT_IMPORT_NAME = "setupComponent_{index}"

REGEX_SRC_FILE = r"\.[cm]?[jt]sx?$"

FUNCTION_TYPES = frozenset(
	{
		"function_expression",
		# older grammars name function expressions `function`
		"function",
		"generator_function",
		"arrow_function",
	}
)

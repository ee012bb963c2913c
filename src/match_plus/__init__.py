"""match_plus — declarative structural matching over flat data.

Replace if/elif chains with a table of condition tuples and handlers. The
most exact matching arm (fewest ANY wildcards) can win, or simply the
first one. All public types are exported from this module:

    from match_plus import ANY, generate, match_once
"""

__version__ = "0.1.0"

# Arms
from match_plus._arms import MatchArm, normalize_arms

# Extraction
from match_plus._criteria import extract_criteria

# Matcher
from match_plus._matcher import Matcher, generate, match_once

# Options and config
from match_plus._options import (
    DEFAULT_OPTIONS,
    MatchOptions,
    load_options,
    parse_options,
)

# Registry — see match_plus._registry for details
from match_plus._registry import (
    MAX_ARMS,
    ArmConfig,
    HandlerRegistry,
    HandlerRegistryBuilder,
    UnknownHandlerError,
    parse_arm_table,
)

# Resolution
from match_plus._resolver import (
    coerced_equal,
    resolve_arm,
    score_arm,
    truthy_equal,
    type_check_equal,
)
from match_plus._types import (
    ANY,
    CallFnArgs,
    CriteriaType,
    MatchableItem,
    MatchError,
    MatchMode,
    PrioritizationMode,
)

__all__ = [
    # Core
    "ANY",
    "Matcher",
    "MatchError",
    "MatchableItem",
    "generate",
    "match_once",
    # Arms
    "MatchArm",
    "normalize_arms",
    # Extraction and resolution
    "extract_criteria",
    "resolve_arm",
    "score_arm",
    "type_check_equal",
    "coerced_equal",
    "truthy_equal",
    # Options
    "MatchOptions",
    "DEFAULT_OPTIONS",
    "PrioritizationMode",
    "MatchMode",
    "CriteriaType",
    "CallFnArgs",
    "parse_options",
    "load_options",
    # Registry
    "ArmConfig",
    "HandlerRegistryBuilder",
    "HandlerRegistry",
    "UnknownHandlerError",
    "parse_arm_table",
    "MAX_ARMS",
]

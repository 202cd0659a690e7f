# gokifu/common/typed_config - typed settings accessors
#
# Frozen dataclasses built from the raw settings dict with tolerant
# converters, so a hand-edited settings file never crashes a run.

from gokifu.common.typed_config.models import (
    GoKifuConfig,
    PatternEntry,
    normalize_path,
    parse_pattern_color,
    parse_point,
    parse_points,
    safe_bool,
    safe_choice,
    safe_int,
    safe_str,
)

__all__ = [
    # Dataclasses
    "GoKifuConfig",
    "PatternEntry",
    # Helper functions
    "safe_int",
    "safe_bool",
    "safe_str",
    "safe_choice",
    "normalize_path",
    "parse_point",
    "parse_points",
    "parse_pattern_color",
]

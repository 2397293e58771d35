from .cli import apply_overrides, build_parser, parse_args, run
from .runtime import check_project, run_project

# app package exports CLI helpers for reuse in tests and entrypoints.
__all__ = ["apply_overrides", "build_parser", "check_project", "parse_args", "run", "run_project"]

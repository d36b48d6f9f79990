"""Build orchestration and its result types."""

from spritely.core.build.optimisation import FileOptimisation, expand_paths, optimise_files
from spritely.core.build.orchestrator import (
    DEFAULT_MAX_WORKERS,
    STYLESHEET_FAILURE_KEY,
    BuildOrchestrator,
    scratch_directory,
)
from spritely.core.build.result import BuildResult, UnitResult, failure_unit, success_unit

__all__ = [
    # Sprites
    "BuildOrchestrator",
    "BuildResult",
    "UnitResult",
    "success_unit",
    "failure_unit",
    "scratch_directory",
    "DEFAULT_MAX_WORKERS",
    "STYLESHEET_FAILURE_KEY",
    # Standalone files
    "FileOptimisation",
    "expand_paths",
    "optimise_files",
]

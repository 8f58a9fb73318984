"""Dashboard runner package: fetch loop sin UI.

Modules:
- config: RunnerConfig dataclass
- runner: Orchestrator (build_loop, run)
- cli: CLI entry point (main)
"""

from .config import RunnerConfig
from .runner import build_loop, run
from .cli import main

__all__ = ["RunnerConfig", "build_loop", "run", "main"]

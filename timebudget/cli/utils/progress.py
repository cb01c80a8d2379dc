"""Progress tracking utilities for CLI."""

from typing import List, Optional

import click


class ProgressTracker:
    """Track progress through the stages of a command.

    Attributes:
        stages: List of stage names
        total_stages: Total number of stages
        current_stage: Current stage index (0-based)
    """

    def __init__(self, stages: List[str]):
        self.stages = stages
        self.total_stages = len(stages)
        self.current_stage = 0

    def advance(self, message: Optional[str] = None):
        """Advance to the next stage, optionally echoing a result line."""
        if message:
            click.echo(f"  {message}")
        self.current_stage += 1

    def get_current_message(self) -> str:
        """Current stage with a ``[n/total]`` prefix."""
        if self.current_stage < self.total_stages:
            stage_name = self.stages[self.current_stage]
            return f"[{self.current_stage + 1}/{self.total_stages}] {stage_name}"
        return f"[{self.total_stages}/{self.total_stages}] Complete"

    def is_complete(self) -> bool:
        return self.current_stage >= self.total_stages

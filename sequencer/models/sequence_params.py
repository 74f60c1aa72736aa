"""
Parameters of a single generation request
"""
import os
from dataclasses import dataclass
from typing import Callable, Optional

from sequencer.models.description import MethodDescription

DEFAULT_MAX_DEPTH = 3

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}


@dataclass
class SequenceParams:
    """
    How far and how a call stack is expanded

    Attributes:
        max_depth: Bound on inlining depth, at least 1
        allow_recursion: When False, a method already on the active path is
            recorded once more as a leaf and not expanded again
        method_filter: Optional predicate; calls it rejects are left out
    """
    max_depth: int = DEFAULT_MAX_DEPTH
    allow_recursion: bool = False
    method_filter: Optional[Callable[[MethodDescription], bool]] = None

    def __post_init__(self):
        if not isinstance(self.max_depth, int) or self.max_depth < 1:
            raise ValueError(f"max_depth must be a positive integer, got {self.max_depth!r}")

    @property
    def not_allow_recursion(self):
        return not self.allow_recursion

    def allows(self, method: MethodDescription) -> bool:
        if self.method_filter is None:
            return True
        return bool(self.method_filter(method))

    @classmethod
    def from_env(cls, method_filter=None):
        """
        Read SEQUENCER_MAX_DEPTH and SEQUENCER_ALLOW_RECURSION from the environment

        Call load_dotenv() first to pick up a .env file.
        """
        max_depth = int(os.getenv('SEQUENCER_MAX_DEPTH', DEFAULT_MAX_DEPTH))
        allow_recursion = os.getenv('SEQUENCER_ALLOW_RECURSION', 'false').strip().lower() in _TRUE_VALUES
        return cls(
            max_depth=max_depth,
            allow_recursion=allow_recursion,
            method_filter=method_filter,
        )

"""
Per-request traversal state and cooperative cancellation
"""
import threading
from collections import namedtuple
from typing import List, Optional

from sequencer.errors import GenerationCancelled
from sequencer.models.call_stack import CallStack
from sequencer.models.description import MethodDescription

# A unit of scheduled work; exits also run when the traversal stops on an error
Task = namedtuple('Task', ['action', 'args', 'is_exit'])


class CancellationToken:
    """Flag a caller can set from another thread to stop a running generation"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def is_cancelled(self):
        return self._event.is_set()


class TraversalState:
    """
    Mutable state of one generation request

    The traversal is driven by an explicit work-list rather than Python
    recursion, so neither deep syntax trees nor large depth limits can
    exhaust the interpreter stack. Generators of every language share the
    same work-list while a request runs.

    Attributes:
        depth: Inlining depth of the frame being expanded (root is 0)
        active: Methods whose bodies are currently being walked, outermost first
        cancellation: Optional CancellationToken checked before every task
        pending: Scheduled tasks, last in first out
    """

    def __init__(self, cancellation: Optional[CancellationToken] = None):
        self.depth = 0
        self.active: List[MethodDescription] = []
        self.cancellation = cancellation
        self.pending: List[Task] = []
        self.running = False

    def is_recursive(self, frame: Optional[CallStack], method: MethodDescription) -> bool:
        # The active list also covers frames that live in another language's subtree
        if frame is not None and frame.is_recursive(method):
            return True
        return method in self.active

    def check_cancelled(self):
        if self.cancellation is not None and self.cancellation.is_cancelled:
            raise GenerationCancelled("Sequence generation cancelled")

    def schedule(self, action, *args):
        """Run action(*args) before anything scheduled earlier"""
        self.pending.append(Task(action, args, False))

    def schedule_exit(self, action, *args):
        """Like schedule, but also run when the traversal is aborted"""
        self.pending.append(Task(action, args, True))

    def run(self):
        """
        Process scheduled tasks until none are left

        A nested call while the loop is already running returns at once; the
        outer loop picks up whatever was scheduled.
        """
        if self.running:
            return
        self.running = True
        try:
            while self.pending:
                self.check_cancelled()
                task = self.pending.pop()
                task.action(*task.args)
        finally:
            self.running = False
            # Close the frames and depth levels left open by an error
            while self.pending:
                task = self.pending.pop()
                if task.is_exit:
                    task.action(*task.args)

"""
Invocation tree produced by the sequence generators
"""
from typing import Dict, Iterator, List, Optional

from sequencer.models.description import MethodDescription


class CallStack:
    """
    One frame of the invocation tree.

    The frame's method is fixed at construction; only the list of calls grows
    while a traversal is running. Calls are kept in source order.
    """

    def __init__(self, method: MethodDescription, parent: Optional['CallStack'] = None):
        self._method = method
        self.parent = parent
        self.calls: List['CallStack'] = []

    @property
    def method(self) -> MethodDescription:
        return self._method

    @property
    def is_root(self):
        return self.parent is None

    @property
    def level(self):
        level = 0
        node = self.parent
        while node is not None:
            level += 1
            node = node.parent
        return level

    def method_call(self, method: MethodDescription) -> 'CallStack':
        """
        Record a call made from this frame

        Every call site gets its own child, so repeated calls to the same
        method show up as separate siblings.

        Returns:
            The new child frame
        """
        child = CallStack(method, self)
        self.calls.append(child)
        return child

    def merge(self, other: 'CallStack') -> 'CallStack':
        """
        Attach an already built tree as the last call of this frame

        Returns:
            The attached root, now a child of this frame
        """
        other.parent = self
        self.calls.append(other)
        return other

    def is_recursive(self, method: MethodDescription) -> bool:
        """True if method is this frame or one of its ancestors"""
        node = self
        while node is not None:
            if node.method == method:
                return True
            node = node.parent
        return False

    def walk(self) -> Iterator['CallStack']:
        """Pre-order iteration over this frame and everything below it"""
        pending = [self]
        while pending:
            node = pending.pop()
            yield node
            pending.extend(reversed(node.calls))

    def generate_text(self, indent='  ') -> str:
        """Render the tree as indented text, one frame per line"""
        lines = []
        pending = [(self, 0)]
        while pending:
            node, offset = pending.pop()
            lines.append(f"{indent * offset}{node.method}")
            pending.extend((call, offset + 1) for call in reversed(node.calls))
        return '\n'.join(lines)

    def to_dict(self) -> Dict:
        """Nested dict of this frame and its calls, built without recursion"""
        root = self._frame_dict()
        pending = [(self, root)]
        while pending:
            node, entry = pending.pop()
            for call in node.calls:
                child_entry = call._frame_dict()
                entry['calls'].append(child_entry)
                pending.append((call, child_entry))
        return root

    def _frame_dict(self) -> Dict:
        method = self.method
        return {
            'class': method.class_description.class_name,
            'generics': list(method.class_description.generics),
            'method': method.method_name,
            'attributes': list(method.attributes),
            'return_type': method.return_type,
            'parameters': [
                {'name': name, 'type': arg_type}
                for name, arg_type in zip(method.arg_names, method.arg_types)
            ],
            'calls': [],
        }

    def __repr__(self):
        return f"<CallStack {self.method} calls={len(self.calls)}>"

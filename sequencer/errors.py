"""
Exceptions raised while building call stacks
"""


class SequencerError(Exception):
    """Base class for all sequencer errors"""


class MalformedDeclaration(SequencerError):
    """A declaration whose parameter names and types do not line up"""

    def __init__(self, method_name, arg_names, arg_types):
        self.method_name = method_name
        self.arg_names = list(arg_names)
        self.arg_types = list(arg_types)
        super().__init__(
            f"Malformed declaration '{method_name}': "
            f"{len(self.arg_names)} parameter names but {len(self.arg_types)} types"
        )


class UnsupportedElementError(SequencerError):
    """A declaration or node kind that no generator knows how to handle"""

    def __init__(self, message, element=None):
        self.element = element
        super().__init__(message)


class GenerationCancelled(SequencerError):
    """Raised when a generation request is cancelled mid-traversal"""

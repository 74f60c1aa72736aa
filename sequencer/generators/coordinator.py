"""
Dispatch generation requests to the generator of each source language
"""
import logging

from sequencer.errors import UnsupportedElementError
from sequencer.generators.java_generator import JavaSequenceGenerator
from sequencer.generators.python_generator import PythonSequenceGenerator
from sequencer.generators.traversal_state import TraversalState
from sequencer.models.declaration import SourceDeclaration

logger = logging.getLogger(__name__)


class SequenceCoordinator:
    """
    Entry point for building call stacks across languages

    Each language has its own generator. When a call crosses into another
    language, that language's generator builds the callee's subtree and the
    subtree is attached at the call site.
    """

    DEFAULT_GENERATORS = {
        'python': PythonSequenceGenerator,
        'java': JavaSequenceGenerator,
    }

    def __init__(self, params, oracle, generators=None):
        """
        Args:
            params: SequenceParams shared by all generators
            oracle: ResolutionOracle shared by all generators
            generators: Optional {language: generator class} replacing the defaults
        """
        self.params = params
        self.oracle = oracle
        self.generators = {}

        for generator_cls in (generators or self.DEFAULT_GENERATORS).values():
            self.register(generator_cls(params, oracle, self))

    def register(self, generator):
        """Add (or replace) the generator for generator.language"""
        generator.coordinator = self
        self.generators[generator.language] = generator

    def generator_for(self, language):
        generator = self.generators.get(language)
        if generator is None:
            raise UnsupportedElementError(f"No sequence generator for language '{language}'")
        return generator

    def generate(self, declaration, cancellation=None):
        """
        Build the call stack rooted at declaration

        Args:
            declaration: SourceDeclaration to start from
            cancellation: Optional CancellationToken

        Returns:
            Root CallStack of a new, independent tree

        Raises:
            UnsupportedElementError: no generator handles the starting element
            GenerationCancelled: cancellation was requested
        """
        if not isinstance(declaration, SourceDeclaration):
            raise UnsupportedElementError(f"Unsupported starting element: {declaration!r}", declaration)

        try:
            generator = self.generator_for(declaration.language)
            method = generator.create_method(declaration)
        except UnsupportedElementError as e:
            raise UnsupportedElementError(f"Unsupported starting element {declaration!r}: {e}", declaration) from e

        logger.debug("[generate] %s with %s", method, type(generator).__name__)
        return generator.generate(declaration, TraversalState(cancellation), method)

    def call_foreign(self, generator, declaration, method, frame, state):
        """
        Expand a call that lands in another language and attach the result

        The foreign generator starts a new root but keeps the caller's state,
        so depth and the recursion path carry across the language boundary.
        Inside a running traversal the root is attached at once and its body
        is filled in by the shared work-list.

        Returns:
            The attached subtree, or None when only a recursive leaf was recorded
        """
        if frame is not None and self.params.not_allow_recursion and state.is_recursive(frame, method):
            logger.debug("recursive call to %s across languages, not expanding", method)
            frame.method_call(method)
            return None

        subtree = generator.generate(declaration, state, method)
        logger.debug("[%s call] %s", generator.language, method)
        if frame is None:
            return subtree
        return frame.merge(subtree)

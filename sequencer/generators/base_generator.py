"""
Base class for language-specific sequence generators
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from sequencer.errors import MalformedDeclaration, UnsupportedElementError
from sequencer.generators.traversal_state import TraversalState
from sequencer.models.call_stack import CallStack
from sequencer.models.declaration import CallSite, DeclarationKind, Scope, SourceDeclaration
from sequencer.models.description import (
    CONSTRUCTOR_METHOD_NAME,
    ClassDescription,
    MethodDescription,
    create_method_description,
)

logger = logging.getLogger(__name__)


class BaseSequenceGenerator(ABC):
    """
    Depth-first call-stack builder for one source language.

    Subclasses describe their tree-sitter grammar: which node types are calls,
    which start nested declarations, and how to read parameters, return types
    and modifiers. The traversal itself lives here.

    The frame being filled is passed down explicitly, so one generator can
    serve any number of independent requests.
    """

    language: str = None

    # Node types that are call expressions
    CALL_NODE_TYPES = frozenset()

    # Node types that open a nested declaration; their contents are not calls
    # made by the enclosing body
    NESTED_DECLARATION_TYPES = frozenset()

    def __init__(self, params, oracle, coordinator=None):
        """
        Args:
            params: SequenceParams of the request
            oracle: ResolutionOracle used at every call site
            coordinator: SequenceCoordinator for calls into other languages
        """
        self.params = params
        self.oracle = oracle
        self.coordinator = coordinator

    # ------------------------------------------------------------------
    # Language hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def body_nodes(self, declaration: SourceDeclaration) -> List:
        """Nodes walked when the declaration is expanded (empty for no body)"""
        pass

    @abstractmethod
    def extract_parameters(self, declaration: SourceDeclaration) -> Tuple[List[str], List[str]]:
        """Parallel lists of parameter names and parameter types"""
        pass

    @abstractmethod
    def return_type(self, declaration: SourceDeclaration) -> str:
        pass

    @abstractmethod
    def attributes(self, declaration: SourceDeclaration) -> List[str]:
        """Modifier tags (visibility, static, decorators, ...)"""
        pass

    # ------------------------------------------------------------------
    # Declaration model
    # ------------------------------------------------------------------

    def create_method(self, declaration: SourceDeclaration) -> MethodDescription:
        """
        Describe a declaration as a MethodDescription

        Raises:
            MalformedDeclaration: parameter names and types do not line up
            UnsupportedElementError: declaration kind not handled
        """
        kind = declaration.kind
        if kind is DeclarationKind.NAMED_FUNCTION:
            arg_names, arg_types = self.extract_parameters(declaration)
            return create_method_description(
                self.owner_description(declaration),
                self.attributes(declaration),
                declaration.name,
                self.return_type(declaration),
                arg_names,
                arg_types,
            )
        elif kind is DeclarationKind.PRIMARY_CONSTRUCTOR or kind is DeclarationKind.SECONDARY_CONSTRUCTOR:
            arg_names, arg_types = self.extract_parameters(declaration)
            class_description = ClassDescription(declaration.owner or declaration.name, declaration.generics)
            return create_method_description(
                class_description,
                self.attributes(declaration),
                CONSTRUCTOR_METHOD_NAME,
                class_description.short_name,
                arg_names,
                arg_types,
            )
        elif kind is DeclarationKind.CLASS:
            class_description = ClassDescription(declaration.qualified_name, declaration.generics)
            return create_method_description(
                class_description,
                self.attributes(declaration),
                CONSTRUCTOR_METHOD_NAME,
                declaration.name,
                [],
                [],
            )
        raise UnsupportedElementError(f"Unsupported declaration kind: {kind}", declaration)

    def owner_description(self, declaration: SourceDeclaration) -> ClassDescription:
        if declaration.scope is Scope.TOP_LEVEL:
            return ClassDescription.file_name_as_class(declaration.filepath)
        if declaration.scope is Scope.LOCAL or not declaration.owner:
            return ClassDescription.anonymous_class()
        return ClassDescription(declaration.owner, declaration.generics)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def generate(self, declaration: SourceDeclaration, state: Optional[TraversalState] = None,
                 method: Optional[MethodDescription] = None) -> CallStack:
        """
        Build a fresh call stack rooted at declaration

        When state is already running (a call coming in from another
        language), the body is only scheduled and the returned root is filled
        in by the running loop.

        Args:
            declaration: Function, constructor or class to start from
            state: Traversal state to continue (a new one when omitted)
            method: Pre-built description of declaration

        Returns:
            Root CallStack of the new tree
        """
        if state is None:
            state = TraversalState()
        logger.debug("[generate] %r", declaration)
        frame = self._enter(declaration, None, state, method)
        state.run()
        return frame

    def _enter(self, declaration, parent, state, method=None):
        """
        Open a frame for declaration under parent and schedule its body

        Returns the new frame, or None when the method is already being
        expanded further up and recursion is not allowed. In that case a
        single leaf frame is recorded instead.
        """
        state.check_cancelled()
        if method is None:
            method = self.create_method(declaration)

        if parent is None:
            frame = CallStack(method)
        elif self.params.not_allow_recursion and state.is_recursive(parent, method):
            logger.debug("recursive call to %s, not expanding", method)
            parent.method_call(method)
            return None
        else:
            frame = parent.method_call(method)

        state.active.append(method)
        state.schedule_exit(state.active.pop)
        for node in reversed(self.body_nodes(declaration)):
            state.schedule(self._walk, node, declaration, frame, state)
        return frame

    def _walk(self, node, caller, frame, state):
        if node.type in self.NESTED_DECLARATION_TYPES:
            return
        if node.type in self.CALL_NODE_TYPES:
            self._visit_call(node, caller, frame, state)
            return
        self._walk_children(node, caller, frame, state)

    def _walk_children(self, node, caller, frame, state):
        for child in reversed(node.children):
            state.schedule(self._walk, child, caller, frame, state)

    def _visit_call(self, node, caller, frame, state):
        # Tasks run last in first out
        if self.is_complex_call(node):
            # Inner calls are evaluated first and belong to the enclosing frame
            state.schedule(self._resolve_and_call, node, caller, frame, state)
            self._walk_children(node, caller, frame, state)
        else:
            self._walk_children(node, caller, frame, state)
            state.schedule(self._resolve_and_call, node, caller, frame, state)

    def is_complex_call(self, node) -> bool:
        """True if the call has another call in its receiver or arguments"""
        pending = list(node.children)
        while pending:
            child = pending.pop()
            if child.type in self.NESTED_DECLARATION_TYPES:
                continue
            if child.type in self.CALL_NODE_TYPES:
                return True
            pending.extend(child.children)
        return False

    def _resolve_and_call(self, node, caller, frame, state):
        target = self.oracle.resolve(CallSite(node, caller))
        if target is None:
            logger.debug("unresolved call %s", caller.text(node))
            return
        try:
            self._call_declaration(target, frame, state)
        except (MalformedDeclaration, UnsupportedElementError) as e:
            logger.warning("Skipping call %s in %s: %s", caller.text(node), caller.filepath, e)

    def _call_declaration(self, target, frame, state):
        generator = self._generator_for(target)
        method = generator.create_method(target)
        if not self.params.allows(method):
            return

        if state.depth < self.params.max_depth - 1:
            state.depth += 1
            logger.debug("+ depth = %d method = %s", state.depth, method)
            # Runs once the callee's body is done
            state.schedule_exit(self._leave, method, state)
            if generator is self:
                self._enter(target, frame, state, method)
            else:
                self.coordinator.call_foreign(generator, target, method, frame, state)
        else:
            frame.method_call(method)

    @staticmethod
    def _leave(method, state):
        state.depth -= 1
        logger.debug("- depth = %d method = %s", state.depth, method)

    def _generator_for(self, declaration):
        if declaration.language == self.language:
            return self
        if self.coordinator is None:
            raise UnsupportedElementError(
                f"No generator for {declaration.language} declaration {declaration.qualified_name}",
                declaration,
            )
        return self.coordinator.generator_for(declaration.language)

    # ------------------------------------------------------------------
    # Helpers shared by the language generators
    # ------------------------------------------------------------------

    @staticmethod
    def child_of_type(node, *types):
        for child in node.children:
            if child.type in types:
                return child
        return None

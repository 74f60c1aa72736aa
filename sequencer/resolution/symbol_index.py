"""
Name-based resolution oracle over scanned declarations
"""
import logging
import os
from collections import defaultdict, namedtuple
from typing import Dict, List, Optional

from sequencer.models.declaration import CallSite, DeclarationKind, Scope, SourceDeclaration
from sequencer.models.description import CONSTRUCTOR_METHOD_NAME
from sequencer.resolution.oracle import ResolutionOracle

logger = logging.getLogger(__name__)

# What a call expression names, read off the syntax alone
CallTarget = namedtuple('CallTarget', ['receiver', 'name', 'arg_count', 'instantiation'])

PYTHON_RECEIVERS = ('self', 'cls')
JAVA_RECEIVERS = ('this',)
COMMENT_TYPES = ('comment', 'line_comment', 'block_comment')


class SymbolIndex(ResolutionOracle):
    """
    Resolve calls by name against the declarations of a scanned repository

    Rules:
        - bare or self/this calls look in the caller's class, then in the
          caller's file, then for a unique top-level name anywhere
        - `Cls.name(...)` looks up `name` in every class called `Cls`, in any
          language
        - `module.name(...)` looks up a top-level Python function of `module`
        - `Cls(...)` / `new Cls(...)` resolve to a constructor (matched by
          argument count) or to the class itself
        - Java `this(...)` / `super(...)` resolve the same way against the
          caller's class or the class it extends
        - local functions and anonymous-class methods use the class of the
          member they are nested in
    Anything else, including ambiguous matches, resolves to None.
    """

    def __init__(self, declarations=None):
        self.declarations: List[SourceDeclaration] = []
        self._top_level: Dict = defaultdict(list)   # (filepath, name) -> [decl]
        self._by_name: Dict = defaultdict(list)     # name -> [top-level decl]
        self._locals: Dict = defaultdict(list)      # (filepath, name) -> [local function decl]
        self._classes: Dict = defaultdict(list)     # simple class name -> [class decl]
        self._members: Dict = defaultdict(list)     # (owner, name) -> [member decl]
        self._modules: Dict = defaultdict(list)     # python module stem -> [filepath]
        self._types: Dict = {}                      # qualified class name -> class decl
        self._by_node: Dict = {}                    # (filepath, node span) -> decl

        if declarations:
            self.add_all(declarations)

    def __len__(self):
        return len(self.declarations)

    def add_all(self, declarations):
        for declaration in declarations:
            self.add(declaration)

    def add(self, declaration: SourceDeclaration):
        self.declarations.append(declaration)
        name = declaration.name

        if declaration.kind is DeclarationKind.CLASS:
            self._classes[name].append(declaration)
            self._types.setdefault(declaration.owner, declaration)
        elif declaration.scope is Scope.MEMBER and declaration.owner:
            key_name = CONSTRUCTOR_METHOD_NAME if declaration.kind.is_constructor else name
            self._members[(declaration.owner, key_name)].append(declaration)
        elif declaration.scope is Scope.LOCAL:
            self._locals[(declaration.filepath, name)].append(declaration)

        if declaration.scope is Scope.TOP_LEVEL:
            self._top_level[(declaration.filepath, name)].append(declaration)
            self._by_name[name].append(declaration)

        self._by_node[_node_key(declaration.filepath, declaration.node)] = declaration

        if declaration.language == 'python':
            stem = os.path.splitext(os.path.basename(declaration.filepath))[0]
            if declaration.filepath not in self._modules[stem]:
                self._modules[stem].append(declaration.filepath)

    # ------------------------------------------------------------------
    # ResolutionOracle
    # ------------------------------------------------------------------

    def resolve(self, call_site: CallSite) -> Optional[SourceDeclaration]:
        if call_site.language == 'python':
            target = self._python_target(call_site)
        elif call_site.language == 'java':
            target = self._java_target(call_site)
        else:
            logger.warning("Cannot resolve calls in %s sources", call_site.language)
            return None

        if target is None:
            return None
        declaration = self._lookup(call_site, target)
        if declaration is not None and declaration.kind is DeclarationKind.CLASS:
            return self._instantiate(declaration, target.arg_count)
        return declaration

    def _lookup(self, call_site, target):
        caller = call_site.caller
        receiver = target.receiver

        if target.instantiation:
            if receiver == 'this':
                return self._types.get(self._caller_owner(caller))
            if receiver == 'super':
                return self._superclass(caller)
            return self._find_class(target.name, caller)

        if receiver is None:
            if call_site.language == 'java':
                return self._find_member(self._caller_owner(caller), target)
            return (
                self._find_local(call_site, target.name)
                or self._unique(self._top_level.get((caller.filepath, target.name), []))
                or self._unique(self._by_name.get(target.name, []))
                or self._find_class(target.name, caller)
            )

        if receiver in PYTHON_RECEIVERS + JAVA_RECEIVERS:
            return self._find_member(self._caller_owner(caller), target)

        # Cls.method() or module.function()
        simple = receiver.rsplit('.', 1)[-1]
        class_declaration = self._find_class(simple, caller)
        if class_declaration is not None:
            return self._find_member(class_declaration.owner, target)

        if call_site.language != 'python':
            return None
        for filepath in sorted(self._modules.get(simple, [])):
            found = self._unique(self._top_level.get((filepath, target.name), []))
            if found is not None:
                return found
        return None

    def _caller_owner(self, caller):
        if caller.kind is DeclarationKind.CLASS or caller.scope is Scope.MEMBER:
            return caller.owner
        if caller.scope is Scope.LOCAL:
            return self._enclosing_owner(caller)
        return None

    def _enclosing_owner(self, declaration):
        """Owner of the nearest enclosing member, for local functions and anonymous classes"""
        node = declaration.node.parent
        while node is not None:
            enclosing = self._by_node.get(_node_key(declaration.filepath, node))
            if enclosing is not None:
                if enclosing.kind is DeclarationKind.CLASS or enclosing.scope is Scope.MEMBER:
                    return enclosing.owner
                if enclosing.scope is Scope.TOP_LEVEL:
                    return None
            node = node.parent
        return None

    def _superclass(self, caller):
        """Class named in the `extends` clause of the caller's class"""
        type_declaration = self._types.get(self._caller_owner(caller))
        if type_declaration is None:
            return None
        superclass = type_declaration.node.child_by_field_name('superclass')
        if superclass is None or not superclass.named_children:
            return None
        type_name = _simple_type_name(type_declaration.text(superclass.named_children[0]))
        return self._find_class(type_name, type_declaration)

    def _find_member(self, owner, target):
        if not owner:
            return None
        candidates = self._members.get((owner, target.name), [])
        if not candidates:
            return None
        matching = [c for c in candidates if self._arity(c) == target.arg_count]
        if matching:
            return matching[0]
        # Python has no overloads: the last definition wins
        if candidates[-1].language == 'python':
            return candidates[-1]
        return candidates[0] if len(candidates) == 1 else None

    def _find_local(self, call_site, name):
        """Innermost local function visible from the call"""
        best = None
        for declaration in self._locals.get((call_site.filepath, name), []):
            scope_node = _enclosing_block(declaration.node)
            if scope_node is None or not _contains(scope_node, call_site.node):
                continue
            if best is None or _size(scope_node) < _size(_enclosing_block(best.node)):
                best = declaration
        return best

    def _find_class(self, name, caller):
        candidates = self._classes.get(name, [])
        if not candidates:
            return None
        for declaration in candidates:
            if declaration.filepath == caller.filepath:
                return declaration
        same_language = [c for c in candidates if c.language == caller.language]
        if len(same_language) == 1:
            return same_language[0]
        return self._unique(candidates)

    def _instantiate(self, class_declaration, arg_count):
        constructors = self._members.get((class_declaration.owner, CONSTRUCTOR_METHOD_NAME), [])
        for constructor in constructors:
            if self._arity(constructor) == arg_count:
                return constructor
        if constructors and constructors[-1].language == 'python':
            return constructors[-1]
        return class_declaration

    @staticmethod
    def _unique(candidates):
        if len(candidates) == 1:
            return candidates[0]
        return None

    @staticmethod
    def _arity(declaration):
        params_node = declaration.node.child_by_field_name('parameters')
        if params_node is None:
            return 0
        count = 0
        for child in params_node.named_children:
            if child.type in COMMENT_TYPES or child.type in ('keyword_separator', 'positional_separator'):
                continue
            if child.type == 'receiver_parameter':
                continue
            count += 1
        if declaration.language == 'python' and declaration.scope is Scope.MEMBER and count:
            first = params_node.named_children[0]
            if declaration.text(first) in PYTHON_RECEIVERS:
                count -= 1
        return count

    # ------------------------------------------------------------------
    # Reading call syntax
    # ------------------------------------------------------------------

    @staticmethod
    def _argument_count(arguments):
        if arguments is None:
            return 0
        if arguments.type == 'generator_expression':
            return 1
        return len([c for c in arguments.named_children if c.type not in COMMENT_TYPES])

    def _python_target(self, call_site):
        node = call_site.node
        function = node.child_by_field_name('function')
        if function is None:
            return None
        arg_count = self._argument_count(node.child_by_field_name('arguments'))

        if function.type == 'identifier':
            return CallTarget(None, call_site.text(function), arg_count, False)

        if function.type == 'attribute':
            obj = function.child_by_field_name('object')
            attribute = function.child_by_field_name('attribute')
            if obj is None or attribute is None or obj.type not in ('identifier', 'attribute'):
                return None
            return CallTarget(call_site.text(obj), call_site.text(attribute), arg_count, False)

        return None

    def _java_target(self, call_site):
        node = call_site.node
        arg_count = self._argument_count(node.child_by_field_name('arguments'))

        if node.type == 'object_creation_expression':
            type_node = node.child_by_field_name('type')
            if type_node is None:
                return None
            return CallTarget(None, _simple_type_name(call_site.text(type_node)), arg_count, True)

        if node.type == 'explicit_constructor_invocation':
            # this(...) or super(...), possibly qualified as outer.super(...)
            constructor = node.child_by_field_name('constructor')
            if constructor is None or constructor.type not in ('this', 'super'):
                return None
            return CallTarget(constructor.type, CONSTRUCTOR_METHOD_NAME, arg_count, True)

        if node.type == 'method_invocation':
            name_node = node.child_by_field_name('name')
            if name_node is None:
                return None
            obj = node.child_by_field_name('object')
            if obj is None:
                return CallTarget(None, call_site.text(name_node), arg_count, False)
            if obj.type not in ('identifier', 'this', 'field_access', 'scoped_identifier'):
                return None
            receiver = call_site.text(obj)
            if receiver.startswith('this.'):
                # this.field.call(): the field's type is unknown
                return None
            return CallTarget(receiver, call_site.text(name_node), arg_count, False)

        return None


def _node_key(filepath, node):
    return (filepath, node.start_byte, node.end_byte, node.type)


def _simple_type_name(text):
    """'java.util.List<String>' -> 'List'"""
    return text.split('<', 1)[0].rsplit('.', 1)[-1].strip()


def _contains(outer, inner):
    return outer.start_byte <= inner.start_byte and inner.end_byte <= outer.end_byte


def _size(node):
    return node.end_byte - node.start_byte


def _enclosing_block(node):
    parent = node.parent
    if parent is not None and parent.type == 'decorated_definition':
        parent = parent.parent
    return parent

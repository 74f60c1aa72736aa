"""
Python-specific declaration extractor
"""
import os

from sequencer.extractors.base_extractor import BaseExtractor
from sequencer.models.declaration import DeclarationKind, Scope

CONSTRUCTOR_NAME = '__init__'


def module_name(filepath):
    """'pkg/mod.py' -> 'pkg.mod', 'pkg/__init__.py' -> 'pkg'"""
    stem = os.path.splitext(filepath)[0]
    parts = [part for part in stem.replace(os.sep, '/').split('/') if part and part != '.']
    if parts and parts[-1] == '__init__':
        parts = parts[:-1]
    return '.'.join(parts)


class PythonExtractor(BaseExtractor):
    """Extract functions, methods, constructors and classes from Python code"""

    language = 'python'

    def extract(self, root_node, source_code, filepath):
        """Extract declarations from Python code"""
        module = module_name(filepath)
        found = []

        # (node, owner, generics, in_function), visited in source order
        pending = [(root_node, None, (), False)]
        while pending:
            node, owner, generics, in_function = pending.pop()
            target = node
            if node.type == 'decorated_definition':
                target = node.child_by_field_name('definition')
                if target is None:
                    continue

            if target.type == 'class_definition':
                name_node = target.child_by_field_name('name')
                if not name_node:
                    continue

                class_name = self._text(source_code, name_node)
                scope = self._scope(owner, in_function)
                if scope is Scope.MEMBER:
                    qualified = f"{owner}.{class_name}"
                elif scope is Scope.TOP_LEVEL and module:
                    qualified = f"{module}.{class_name}"
                else:
                    qualified = class_name

                class_generics = self._generic_parameters(target, source_code)
                found.append(self._declaration(
                    target, class_name, DeclarationKind.CLASS, source_code, filepath,
                    scope, owner=qualified, generics=class_generics,
                ))

                body = target.child_by_field_name('body')
                if body:
                    self._push_children(pending, body, qualified, class_generics, in_function)

            elif target.type == 'function_definition':
                name_node = target.child_by_field_name('name')
                if not name_node:
                    continue

                func_name = self._text(source_code, name_node)
                kind = self._kind(bool(owner) and func_name == CONSTRUCTOR_NAME)
                found.append(self._declaration(
                    target, func_name, kind, source_code, filepath,
                    self._scope(owner, in_function), owner=owner,
                    generics=generics if owner else (),
                ))

                # Nested defs are local functions
                body = target.child_by_field_name('body')
                if body:
                    self._push_children(pending, body, None, (), True)

            else:
                self._push_children(pending, node, owner, generics, in_function)

        return found

    def _generic_parameters(self, class_node, source_code):
        """Type variables from a `Generic[...]` base, if any"""
        superclasses = class_node.child_by_field_name('superclasses')
        if superclasses is None:
            return ()
        for base in superclasses.named_children:
            if base.type != 'subscript':
                continue
            value = base.child_by_field_name('value')
            if value is None or self._text(source_code, value) not in ('Generic', 'typing.Generic'):
                continue
            return tuple(
                self._text(source_code, param)
                for param in base.children_by_field_name('subscript')
            )
        return ()

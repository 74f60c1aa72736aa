"""
Python-specific sequence generator
"""
from sequencer.generators.base_generator import BaseSequenceGenerator
from sequencer.models.declaration import DeclarationKind, Scope

UNKNOWN_TYPE = 'Any'
RECEIVER_NAMES = ('self', 'cls')


class PythonSequenceGenerator(BaseSequenceGenerator):
    """Walk Python function bodies"""

    language = 'python'

    CALL_NODE_TYPES = frozenset({'call'})

    NESTED_DECLARATION_TYPES = frozenset({
        'function_definition',
        'class_definition',
        'decorated_definition',
    })

    def body_nodes(self, declaration):
        if declaration.kind is DeclarationKind.CLASS:
            return []
        body = declaration.node.child_by_field_name('body')
        return [body] if body is not None else []

    def extract_parameters(self, declaration):
        """Parameter names and annotations, without the implicit self/cls"""
        arg_names = []
        arg_types = []
        params_node = declaration.node.child_by_field_name('parameters')
        if params_node is None:
            return arg_names, arg_types

        skip_receiver = declaration.scope is Scope.MEMBER and not self._is_static(declaration)
        for child in params_node.named_children:
            name_node, type_node = self._parameter_parts(child)
            if name_node is None:
                continue
            name = declaration.text(name_node)
            if skip_receiver:
                skip_receiver = False
                if name in RECEIVER_NAMES:
                    continue
            arg_names.append(name)
            arg_types.append(declaration.text(type_node) if type_node is not None else UNKNOWN_TYPE)
        return arg_names, arg_types

    @staticmethod
    def _parameter_parts(node):
        if node.type in ('identifier', 'list_splat_pattern', 'dictionary_splat_pattern'):
            return node, None
        if node.type == 'typed_parameter':
            type_node = node.child_by_field_name('type')
            name_node = None
            for child in node.named_children:
                if child.type in ('identifier', 'list_splat_pattern', 'dictionary_splat_pattern'):
                    name_node = child
                    break
            return name_node, type_node
        if node.type == 'default_parameter':
            return node.child_by_field_name('name'), None
        if node.type == 'typed_default_parameter':
            return node.child_by_field_name('name'), node.child_by_field_name('type')
        # '*', '/' separators and comments
        return None, None

    def return_type(self, declaration):
        type_node = declaration.node.child_by_field_name('return_type')
        if type_node is None:
            return UNKNOWN_TYPE
        return declaration.text(type_node)

    def attributes(self, declaration):
        attributes = self._decorators(declaration)
        if any(child.type == 'async' for child in declaration.node.children):
            attributes.append('async')
        return attributes

    def _is_static(self, declaration):
        return 'staticmethod' in self._decorators(declaration)

    @staticmethod
    def _decorators(declaration):
        parent = declaration.node.parent
        if parent is None or parent.type != 'decorated_definition':
            return []
        decorators = []
        for child in parent.children:
            if child.type == 'decorator':
                text = declaration.text(child).lstrip('@').strip()
                decorators.append(text.split('(', 1)[0])
        return decorators

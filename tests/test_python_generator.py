"""
Traversal tests over Python sources with a dictionary oracle
"""
import logging

import pytest

from sequencer.errors import GenerationCancelled, MalformedDeclaration, UnsupportedElementError
from sequencer.generators.coordinator import SequenceCoordinator
from sequencer.generators.python_generator import PythonSequenceGenerator
from sequencer.generators.traversal_state import CancellationToken, TraversalState
from sequencer.models.declaration import SourceDeclaration
from sequencer.models.description import ClassDescription
from sequencer.models.sequence_params import SequenceParams
from tests.helpers import FakeOracle, call_names

FUNCTIONS = '''
def a():
    pass


def b():
    pass


def c():
    pass


def empty():
    pass


def sequence():
    a()
    b()
    c()


def nested():
    a(b())


def chained():
    a().b().c()


def unresolved():
    print("start")
    a()
    os.path.join("x", "y")
    a()


def leaf_two():
    pass


def leaf_one():
    leaf_two()


def start():
    leaf_one()
    leaf_two()


def main():
    helper()


def helper():
    main()


def countdown(n):
    countdown(n - 1)


def ping():
    pong()


def pong():
    ping()
    a()
'''


@pytest.fixture
def declarations(parse_python):
    return parse_python(FUNCTIONS, 'flows.py')


def build(declarations, name, **params):
    coordinator = SequenceCoordinator(SequenceParams(**params), FakeOracle(declarations))
    return coordinator.generate(declarations[name])


def test_empty_body_gives_single_frame(declarations):
    root = build(declarations, 'empty')
    assert root.calls == []
    assert root.method.method_name == 'empty'
    assert root.method.class_description == ClassDescription('flows_py')


def test_calls_keep_source_order(declarations):
    root = build(declarations, 'sequence')
    assert call_names(root) == ['a', 'b', 'c']


def test_nested_call_records_inner_call_first(declarations):
    root = build(declarations, 'nested')
    assert call_names(root) == ['b', 'a']
    assert all(call.calls == [] for call in root.calls)
    assert all(call.parent is root for call in root.calls)


def test_chained_calls_follow_evaluation_order(declarations):
    root = build(declarations, 'chained')
    assert call_names(root) == ['a', 'b', 'c']


def test_unresolved_calls_are_dropped(declarations):
    root = build(declarations, 'unresolved')
    assert call_names(root) == ['a', 'a']
    assert root.calls[0] is not root.calls[1]


def test_max_depth_one_records_only_leaves(declarations):
    root = build(declarations, 'start', max_depth=1)
    assert call_names(root) == ['leaf_one', 'leaf_two']
    assert all(call.calls == [] for call in root.calls)


def test_depth_two_expands_one_level(declarations):
    root = build(declarations, 'start', max_depth=2)
    leaf_one = root.calls[0]
    assert call_names(leaf_one) == ['leaf_two']
    assert leaf_one.calls[0].calls == []


def test_mutual_recursion_is_cut(declarations):
    root = build(declarations, 'main', max_depth=10, allow_recursion=False)
    assert root.generate_text() == (
        "flows_py.main()\n"
        "  flows_py.helper()\n"
        "    flows_py.main()"
    )
    reentry = root.calls[0].calls[0]
    assert reentry.calls == []


def test_direct_recursion_is_cut(declarations):
    root = build(declarations, 'countdown', max_depth=10)
    assert call_names(root) == ['countdown']
    assert root.calls[0].calls == []


def test_recursion_cut_keeps_later_siblings(declarations):
    root = build(declarations, 'ping', max_depth=10)
    pong = root.calls[0]
    assert call_names(pong) == ['ping', 'a']


def test_allowed_recursion_stops_at_depth_limit(declarations):
    root = build(declarations, 'main', max_depth=4, allow_recursion=True)
    frames = list(root.walk())
    assert [frame.method.method_name for frame in frames] == ['main', 'helper', 'main', 'helper', 'main']
    assert frames[-1].calls == []
    assert frames[-1].level == 4


def test_large_depth_limit_builds_deep_tree(declarations):
    root = build(declarations, 'countdown', max_depth=2000, allow_recursion=True)
    frames = list(root.walk())
    assert len(frames) == 2001
    assert frames[-1].level == 2000
    assert frames[-1].calls == []
    assert len(root.generate_text().splitlines()) == 2001

    data = root.to_dict()
    for _ in range(2000):
        data = data['calls'][0]
    assert data['calls'] == []


def test_long_call_chain(parse_python):
    declarations = parse_python('def a():\n    pass\n\n\ndef chain():\n    x' + '.a()' * 600 + '\n')
    root = build(declarations, 'chain')
    assert call_names(root) == ['a'] * 600


def test_method_filter_drops_calls(declarations):
    root = build(declarations, 'sequence', method_filter=lambda method: method.method_name != 'b')
    assert call_names(root) == ['a', 'c']


def test_generator_is_reusable(declarations):
    coordinator = SequenceCoordinator(SequenceParams(), FakeOracle(declarations))
    first = coordinator.generate(declarations['sequence'])
    second = coordinator.generate(declarations['sequence'])
    assert first is not second
    assert call_names(first) == call_names(second) == ['a', 'b', 'c']


def test_standalone_generator(declarations):
    generator = PythonSequenceGenerator(SequenceParams(), FakeOracle(declarations))
    root = generator.generate(declarations['nested'])
    assert call_names(root) == ['b', 'a']


class TestCancellation:
    def test_cancelled_before_start(self, declarations):
        token = CancellationToken()
        token.cancel()
        coordinator = SequenceCoordinator(SequenceParams(), FakeOracle(declarations))
        with pytest.raises(GenerationCancelled):
            coordinator.generate(declarations['sequence'], cancellation=token)

    def test_cancelled_mid_traversal(self, declarations):
        token = CancellationToken()

        class CancellingOracle(FakeOracle):
            def resolve(self, call_site):
                token.cancel()
                return super().resolve(call_site)

        oracle = CancellingOracle(declarations)
        coordinator = SequenceCoordinator(SequenceParams(), oracle)
        with pytest.raises(GenerationCancelled):
            coordinator.generate(declarations['sequence'], cancellation=token)
        assert oracle.seen == ['a']

    def test_cancellation_closes_open_frames(self, declarations):
        token = CancellationToken()

        class CancellingOracle(FakeOracle):
            def resolve(self, call_site):
                target = super().resolve(call_site)
                if target is declarations['leaf_two']:
                    token.cancel()
                return target

        state = TraversalState(token)
        generator = PythonSequenceGenerator(SequenceParams(max_depth=3), CancellingOracle(declarations))
        with pytest.raises(GenerationCancelled):
            generator.generate(declarations['start'], state)
        assert state.depth == 0
        assert state.active == []
        assert state.pending == []
        assert not state.running


class BrokenParametersGenerator(PythonSequenceGenerator):
    """Reports one parameter name too many for function b"""

    def extract_parameters(self, declaration):
        arg_names, arg_types = super().extract_parameters(declaration)
        if declaration.name == 'b':
            arg_names.append('extra')
        return arg_names, arg_types


class TestNodeLevelFailures:
    def test_malformed_callee_is_skipped(self, declarations, caplog):
        coordinator = SequenceCoordinator(
            SequenceParams(), FakeOracle(declarations), generators={'python': BrokenParametersGenerator},
        )
        with caplog.at_level(logging.WARNING):
            root = coordinator.generate(declarations['sequence'])
        assert call_names(root) == ['a', 'c']
        assert "Skipping call b()" in caplog.text

    def test_malformed_root_fails(self, declarations):
        coordinator = SequenceCoordinator(
            SequenceParams(), FakeOracle(declarations), generators={'python': BrokenParametersGenerator},
        )
        with pytest.raises(MalformedDeclaration):
            coordinator.generate(declarations['b'])

    def test_unknown_language_target_is_skipped(self, declarations, caplog):
        foreign = declarations['b']
        ruby = SourceDeclaration(
            name='b', kind=foreign.kind, language='ruby', filepath='b.rb',
            node=foreign.node, source=foreign.source,
        )
        targets = dict(declarations, b=ruby)
        coordinator = SequenceCoordinator(SequenceParams(), FakeOracle(targets))
        with caplog.at_level(logging.WARNING):
            root = coordinator.generate(declarations['sequence'])
        assert call_names(root) == ['a', 'c']
        assert "ruby" in caplog.text

    def test_unsupported_starting_element(self, declarations):
        coordinator = SequenceCoordinator(SequenceParams(), FakeOracle(declarations))
        with pytest.raises(UnsupportedElementError, match="Unsupported starting element"):
            coordinator.generate("def a(): pass")

        kotlin = SourceDeclaration(
            name='a', kind=declarations['a'].kind, language='kotlin', filepath='A.kt',
            node=declarations['a'].node, source=declarations['a'].source,
        )
        with pytest.raises(UnsupportedElementError, match="Unsupported starting element"):
            coordinator.generate(kotlin)


MEMBERS = '''
class Cart:
    def __init__(self, owner: str):
        self.items = []

    @staticmethod
    def build(name: str, size: int = 3) -> Cart:
        return Cart(name)

    async def total(self, *args, **kwargs):
        pass

    def outer(self):
        def inner(value):
            pass
        inner(1)


def convert(value, *, strict=False):
    pass
'''


class TestPythonDescriptions:
    @pytest.fixture
    def members(self, parse_python):
        return parse_python(MEMBERS, 'shop/cart.py')

    @pytest.fixture
    def generator(self):
        return PythonSequenceGenerator(SequenceParams(), FakeOracle())

    def test_constructor(self, members, generator):
        method = generator.create_method(members['__init__'])
        assert method.is_constructor
        assert method.class_description == ClassDescription('shop.cart.Cart')
        assert method.return_type == 'Cart'
        assert method.arg_names == ('owner',)
        assert method.arg_types == ('str',)

    def test_static_method(self, members, generator):
        method = generator.create_method(members['build'])
        assert method.attributes == ('staticmethod',)
        assert method.arg_names == ('name', 'size')
        assert method.arg_types == ('str', 'int')
        assert method.return_type == 'Cart'

    def test_async_method_with_splats(self, members, generator):
        method = generator.create_method(members['total'])
        assert 'async' in method.attributes
        assert method.arg_names == ('*args', '**kwargs')
        assert method.arg_types == ('Any', 'Any')

    def test_class(self, members, generator):
        method = generator.create_method(members['Cart'])
        assert method.is_constructor
        assert method.class_description.class_name == 'shop.cart.Cart'
        assert method.arg_types == ()

    def test_top_level_function(self, members, generator):
        method = generator.create_method(members['convert'])
        assert method.class_description == ClassDescription('cart_py')
        assert method.arg_names == ('value', 'strict')
        assert method.return_type == 'Any'

    def test_local_function_is_anonymous(self, members, generator):
        method = generator.create_method(members['inner'])
        assert method.class_description is ClassDescription.ANONYMOUS_CLASS

    def test_local_definitions_are_not_calls(self, members):
        oracle = FakeOracle(members)
        root = PythonSequenceGenerator(SequenceParams(), oracle).generate(members['outer'])
        assert call_names(root) == ['inner']
        assert oracle.seen == ['inner']

"""
Tests for the CallStack tree primitives
"""
import pytest

from sequencer.models.call_stack import CallStack
from sequencer.models.description import ClassDescription, create_method_description


def method(name, owner='app.Service'):
    return create_method_description(ClassDescription(owner), [], name, 'None', [], [])


def test_method_call_appends_in_order():
    root = CallStack(method('main'))
    first = root.method_call(method('a'))
    second = root.method_call(method('b'))

    assert root.calls == [first, second]
    assert first.parent is root
    assert root.is_root and not first.is_root


def test_duplicate_calls_are_separate_frames():
    root = CallStack(method('main'))
    first = root.method_call(method('a'))
    second = root.method_call(method('a'))

    assert first is not second
    assert len(root.calls) == 2


def test_level():
    root = CallStack(method('main'))
    child = root.method_call(method('a'))
    grandchild = child.method_call(method('b'))
    assert (root.level, child.level, grandchild.level) == (0, 1, 2)


def test_is_recursive_checks_ancestors_only():
    root = CallStack(method('main'))
    sibling = root.method_call(method('sibling'))
    child = root.method_call(method('a'))

    assert child.is_recursive(method('main'))
    assert child.is_recursive(method('a'))
    assert not child.is_recursive(method('sibling'))
    assert not sibling.is_recursive(method('a'))


def test_merge_reparents_subtree():
    root = CallStack(method('main'))
    root.method_call(method('first'))

    other = CallStack(method('record', owner='com.acme.Ledger'))
    other.method_call(method('validate', owner='com.acme.Ledger'))

    attached = root.merge(other)

    assert attached is other
    assert other.parent is root
    assert root.calls[-1] is other
    assert other.calls[0].level == 2
    assert other.calls[0].is_recursive(method('main'))


def test_method_is_read_only():
    root = CallStack(method('main'))
    with pytest.raises(AttributeError):
        root.method = method('other')


def test_walk_and_generate_text():
    root = CallStack(method('main'))
    a = root.method_call(method('a'))
    a.method_call(method('b'))
    root.method_call(method('c'))

    assert [frame.method.method_name for frame in root.walk()] == ['main', 'a', 'b', 'c']
    assert root.generate_text() == (
        "Service.main()\n"
        "  Service.a()\n"
        "    Service.b()\n"
        "  Service.c()"
    )
    # Text of a subtree starts at its own level
    assert a.generate_text() == "Service.a()\n  Service.b()"


def test_to_dict():
    root = CallStack(create_method_description(
        ClassDescription('app.Box', ['T']), ['public'], 'put', 'None', ['item'], ['T'],
    ))
    root.method_call(method('a'))

    data = root.to_dict()
    assert data['class'] == 'app.Box'
    assert data['generics'] == ['T']
    assert data['method'] == 'put'
    assert data['attributes'] == ['public']
    assert data['parameters'] == [{'name': 'item', 'type': 'T'}]
    assert [call['method'] for call in data['calls']] == ['a']

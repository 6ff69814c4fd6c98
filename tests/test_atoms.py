import pytest
from atoms import (Storage, Number, Text, Quotation, Builtin,
                   StackUnderflow, AllocationFailure, ExecutionError)
from stack import Stack
from intrinsics import Plus, Dup

def test_lifo_order():
    stack = Stack()
    values = [Number(1), Text('two'), Number(3.5), Quotation([Number(4)])]
    for value in values: stack.push(value)
    assert [stack.pop() for _ in values] == list(reversed(values))
    assert len(stack) == 0

def test_pop_empty_is_an_error():
    with pytest.raises(StackUnderflow):
        Stack().pop()

def test_capacity_doubles_and_never_shrinks():
    storage = Storage(capacity=2)
    for i in range(5): storage.push(Number(i))
    assert storage.capacity == 8
    assert storage.used == 5
    while len(storage): storage.pop()
    assert storage.capacity == 8
    assert storage.used == 0

def test_stack_initial_capacity():
    assert Stack().capacity == 512
    assert Quotation().capacity == Storage.INITIAL_CAPACITY

def test_growth_past_limit_fails(monkeypatch):
    monkeypatch.setattr(Storage, 'MAX_CAPACITY', 4)
    storage = Storage(capacity=2)
    for i in range(4): storage.push(Number(i))
    with pytest.raises(AllocationFailure):
        storage.push(Number(5))
    assert storage.used == 4

def test_allocation_failure_is_an_execution_error():
    assert issubclass(AllocationFailure, ExecutionError)

def test_text_copy_is_independent():
    text = Text('hi')
    copy = text.copy()
    assert copy == text
    assert copy is not text

def test_number_and_builtin_copy_by_value():
    number = Number(3)
    plus = Plus()
    assert number.copy() == number
    assert plus.copy() is plus

def test_quotation_copy_is_deep():
    inner = Quotation([Text('a')])
    outer = Quotation([Number(1), inner])
    copy = outer.copy()
    assert copy == outer
    assert copy.peek() is not inner
    assert copy.peek().peek() is not inner.peek()

def test_release_empties_nested_quotations():
    inner = Quotation([Number(1)])
    outer = Quotation([inner, Number(2)])
    outer.release()
    assert len(outer) == 0
    assert len(inner) == 0

def test_executable_variants():
    assert not Number(1).executable
    assert not Text('x').executable
    assert Dup().executable
    assert Quotation().executable

def test_builtin_identity():
    assert Plus() == Plus()
    assert Plus() != Dup()
    assert isinstance(Plus(), Builtin)

def test_number_rendering():
    assert Number.format(7.0) == '7'
    assert Number.format(-7.0) == '-7'
    assert Number.format(2.5) == '2.5'
    assert 'inf' in Number.format(float('inf'))

def test_render():
    stack = Stack([Number(1), Text('hi'), Quotation([Number(2), Plus()])])
    rendered = stack.dump()
    assert rendered.startswith('[') and rendered.endswith(']')
    assert '"hi"' in rendered
    assert '<builtin +>' in rendered
    assert rendered.endswith(']]')

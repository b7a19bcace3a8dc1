"""Tests for the fixed-depth call stack."""

from __future__ import annotations

import pytest

from pychip8.cpu import CallStack, StackOverflowError, StackUnderflowError


def test_push_pop_is_last_in_first_out() -> None:
    stack = CallStack()
    stack.push(0x202)
    stack.push(0x304)

    assert stack.pop() == 0x304
    assert stack.pop() == 0x202
    assert stack.depth == 0


def test_push_beyond_capacity_raises() -> None:
    stack = CallStack(capacity=2)
    stack.push(1)
    stack.push(2)

    with pytest.raises(StackOverflowError):
        stack.push(3)
    assert stack.snapshot() == (1, 2)


def test_pop_empty_raises() -> None:
    with pytest.raises(StackUnderflowError):
        CallStack().pop()


def test_reset_empties_stack() -> None:
    stack = CallStack()
    stack.push(0x400)
    stack.reset()

    assert stack.depth == 0
    assert stack.snapshot() == ()

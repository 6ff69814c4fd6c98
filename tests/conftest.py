''' Shared fixtures: one fresh session per test '''

from typing import List
import pytest
from atoms import Atom
from onward import Interpreter

@pytest.fixture
def interpreter():
    session = Interpreter()
    yield session
    session.close()

@pytest.fixture
def runtime(interpreter):
    return interpreter.runtime

@pytest.fixture
def run(interpreter):
    ''' Evaluates lines and returns the stack bottom to top. '''
    def evaluate(*lines: str) -> List[Atom]:
        for line in lines: interpreter.execute(line)
        return list(interpreter.runtime.stack)
    return evaluate

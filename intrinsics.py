''' All builtin implementations '''

import logging
import math
from typing import TYPE_CHECKING
from atoms import Atom, Builtin, Number, ExitRequest, TypeMismatch, InvalidRepeatCount, DivisionByZero, AllocationFailure
if TYPE_CHECKING: from execution import Runtime

log = logging.getLogger(__name__)

class Plus(Builtin):
    def __init__(self): super().__init__('+', 'a b -- a+b')
    def execute(self, runtime: 'Runtime') -> None:
        arg2, arg1 = runtime.pop2(Number, Number)
        result = arg1.value + arg2.value
        log.debug('%r + %r = %r', arg1.value, arg2.value, result)
        runtime.push(Number(result))

class Minus(Builtin):
    def __init__(self): super().__init__('-', 'a b -- a-b')
    def execute(self, runtime: 'Runtime') -> None:
        arg2, arg1 = runtime.pop2(Number, Number)
        result = arg1.value - arg2.value
        log.debug('%r - %r = %r', arg1.value, arg2.value, result)
        runtime.push(Number(result))

class Star(Builtin):
    def __init__(self): super().__init__('*', 'a b -- a*b')
    def execute(self, runtime: 'Runtime') -> None:
        arg2, arg1 = runtime.pop2(Number, Number)
        result = arg1.value * arg2.value
        log.debug('%r * %r = %r', arg1.value, arg2.value, result)
        runtime.push(Number(result))

class Slash(Builtin):
    def __init__(self): super().__init__('/', 'a b -- a/b')
    def execute(self, runtime: 'Runtime') -> None:
        if len(runtime.stack) >= 2 and runtime.peek() == Number(0) and isinstance(runtime.peek(1), Number):
            raise DivisionByZero(f'cannot divide {runtime.peek(1)} by zero')
        arg2, arg1 = runtime.pop2(Number, Number)
        result = arg1.value / arg2.value
        log.debug('%r / %r = %r', arg1.value, arg2.value, result)
        runtime.push(Number(result))

class Dump(Builtin):
    ''' Prints the stack bottom to top. Runs at once outside definitions. '''
    immediate = True
    def __init__(self): super().__init__('dump', '--  , print stack')
    def execute(self, runtime: 'Runtime') -> None:
        print(runtime.stack.dump())

class Exit(Builtin):
    def __init__(self): super().__init__('exit', 'a --  , terminate with status a')
    def execute(self, runtime: 'Runtime') -> None:
        if len(runtime.stack) and isinstance(runtime.peek(), Number) and not math.isfinite(runtime.peek().value):
            raise TypeMismatch(f'exit status {runtime.peek()} is not a finite number')
        status = runtime.pop(Number)
        raise ExitRequest(int(status.value))

class Pop(Builtin):
    def __init__(self): super().__init__('pop', 'a --')
    def execute(self, runtime: 'Runtime') -> None:
        runtime.pop(Atom)

class Dup(Builtin):
    def __init__(self): super().__init__('dup', 'a -- a a')
    def execute(self, runtime: 'Runtime') -> None:
        arg = runtime.pop(Atom)
        runtime.push(arg)
        runtime.push(arg.copy())

class Rep(Builtin):
    def __init__(self): super().__init__('rep', 'a n -- a .. a  , n copies of a')
    def execute(self, runtime: 'Runtime') -> None:
        count = runtime.peek() if len(runtime.stack) else None
        if isinstance(count, Number) and not (count.value.is_integer() and count.value > 0):
            raise InvalidRepeatCount(f'repeat count {count} is not a positive integer')
        if isinstance(count, Number) and len(runtime.stack) >= 2 \
                and len(runtime.stack) - 2 + count.value > runtime.stack.MAX_CAPACITY:
            raise AllocationFailure(f'repeat count {count} exceeds the stack limit of {runtime.stack.MAX_CAPACITY} values')
        count, arg = runtime.pop2(Number, Atom)
        runtime.push(arg)
        for _ in range(int(count.value) - 1): runtime.push(arg.copy())

class Swap(Builtin):
    def __init__(self): super().__init__('swap', 'a b -- b a')
    def execute(self, runtime: 'Runtime') -> None:
        arg2, arg1 = runtime.pop2(Atom, Atom)
        runtime.push(arg2)
        runtime.push(arg1)

class Print(Builtin):
    def __init__(self): super().__init__('print', 'a --  , print a')
    def execute(self, runtime: 'Runtime') -> None:
        print(f'  = {runtime.pop(Atom)}')

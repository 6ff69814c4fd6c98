''' Base classes for values and errors '''

import logging
from typing import Iterable, Iterator, List, Optional, TYPE_CHECKING
from colorama import Fore as fg
if TYPE_CHECKING: from execution import Runtime

log = logging.getLogger(__name__)

class Error(Exception):
    ''' Abstract. Applicative Error. Rendered in red. '''
    def __init__(self, msg) -> None:
        super().__init__(f'{fg.LIGHTRED_EX}ERROR:{fg.RESET} {msg}')
        self.msg = msg

class ExecutionError(Error):
    ''' Raised during execution. '''

class StackUnderflow(ExecutionError):
    ''' Raised when popping an empty stack. '''

class TypeMismatch(ExecutionError):
    ''' Raised when an operand has the wrong type. '''

class InvalidRepeatCount(ExecutionError):
    ''' Raised by rep when the count is not a positive integer. '''

class DivisionByZero(ExecutionError):
    ''' Raised by / when the divisor is zero. '''

class DictionaryConflict(ExecutionError):
    ''' Raised when a keyword is used as a word name. '''

class AllocationFailure(ExecutionError):
    ''' Raised when storage cannot grow any further. '''

class ExitRequest(Exception):
    ''' Raise to terminate the session with a status. Not an error. '''
    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status

class Storage:
    '''
    Growable sequence of atoms, shared by the stack and by quotations.
    Capacity doubles when full and never shrinks on pop.
    '''
    INITIAL_CAPACITY = 8
    MAX_CAPACITY = 1 << 24

    def __init__(self, content: Iterable['Atom'] = (), capacity: Optional[int] = None) -> None:
        self.capacity: int = self.INITIAL_CAPACITY if capacity is None else capacity
        self.used: int = 0
        self.values: List[Optional['Atom']] = [None] * self.capacity
        for atom in content: self.push(atom)

    def grow(self) -> None:
        capacity = max(1, self.capacity * 2)
        if capacity > self.MAX_CAPACITY:
            raise AllocationFailure(f'cannot grow beyond {self.MAX_CAPACITY} values')
        try:
            self.values.extend([None] * (capacity - self.capacity))
        except MemoryError:
            raise AllocationFailure(f'out of memory growing to {capacity} values') from None
        log.debug('%s resized from %d to %d', type(self).__name__, self.capacity, capacity)
        self.capacity = capacity

    def push(self, atom: 'Atom') -> None:
        if self.used == self.capacity: self.grow()
        self.values[self.used] = atom
        self.used += 1

    def pop(self) -> 'Atom':
        if self.used == 0: raise StackUnderflow('attempting to pop an empty stack')
        self.used -= 1
        atom = self.values[self.used]
        self.values[self.used] = None
        return atom

    def peek(self, i: int = 0) -> 'Atom':
        if i >= self.used: raise StackUnderflow(f'{i+1} values needed')
        return self.values[self.used - 1 - i]

    def __len__(self) -> int: return self.used
    def __iter__(self) -> Iterator['Atom']:
        for i in range(self.used): yield self.values[i]

    def render(self) -> str:
        return '[' + ', '.join(f'{atom}' for atom in self) + ']'

class Atom:
    ''' Abstract. Smallest element of language. '''
    executable = False
    def copy(self) -> 'Atom':
        return self
    def execute(self, runtime: 'Runtime') -> None:
        raise ExecutionError(f'atom {self} cannot be executed')

class Literal(Atom):
    ''' Abstract. Plain data: number or text. '''
    def __init__(self) :
        self.value : object
    def __eq__(self, other: object) -> bool:
        return type(other) is type(self) and other.value == self.value
    def __hash__(self) -> int: return hash((type(self), self.value))
    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.value!r})'

class Number(Literal):
    ''' Double precision number. '''
    def __init__(self, value: float) -> None:
        super().__init__()
        self.value : float = float(value)
    def __str__(self) -> str:
        return f'{fg.CYAN}{Number.format(self.value)}{fg.RESET}'
    @staticmethod
    def format(value: float) -> str:
        if value.is_integer() and abs(value) < 1e16: return str(int(value))
        return repr(value)

class Text(Literal):
    ''' Owned string value. Copies are distinct objects. '''
    def __init__(self, value: str) -> None:
        super().__init__()
        self.value : str = value
    def copy(self) -> 'Text':
        return Text(self.value)
    def __str__(self) -> str:
        return f'{fg.CYAN}"{self.value}"{fg.RESET}'

class Builtin(Atom):
    '''
    Abstract. Intrinsic implementation of a stack operation.
    Every subclass registers itself and is identified by its keyword.
    '''
    classes : List[type] = []
    executable = True
    immediate = False
    def __init_subclass__(cls) -> None: Builtin.classes.append(cls)
    def __init__(self, value: str = '', comment: Optional[str] = None):
        self.value = value
        self.comment = comment
    def register(self, runtime: 'Runtime') -> None:
        runtime.register(self)
    def __eq__(self, other: object) -> bool:
        return type(other) is type(self)
    def __hash__(self) -> int: return hash(type(self))
    def __str__(self) -> str:
        return f'{fg.LIGHTBLACK_EX}<builtin {self.value}>{fg.RESET}'
    def __repr__(self) -> str:
        return f'Builtin({self.value!r})'

class Quotation(Atom, Storage):
    '''
    Ordered sequence of values, used for user defined words.
    Executing it replays copies of its elements onto the stack.
    '''
    executable = True
    def __init__(self, content: Iterable[Atom] = ()) -> None:
        Storage.__init__(self, content)
    def copy(self) -> 'Quotation':
        return Quotation(atom.copy() for atom in self)
    def execute(self, runtime: 'Runtime') -> None:
        for atom in self: runtime.push(atom.copy())
        runtime.settle()
    def release(self) -> None:
        ''' Empties the quotation and any quotation nested in it. '''
        for atom in self:
            if isinstance(atom, Quotation): atom.release()
        self.values = []
        self.used = 0
        self.capacity = 0
    def __eq__(self, other: object) -> bool:
        return isinstance(other, Quotation) and list(other) == list(self)
    __hash__ = None  # type: ignore
    def __str__(self) -> str:
        return self.render()
    def __repr__(self) -> str:
        return 'Quotation([' + ', '.join(repr(atom) for atom in self) + '])'

''' Execution engine '''

import logging
from typing import Dict, List, Optional, Tuple, TypeVar, Union, Type, cast
from atoms import Atom, Builtin, Quotation, ExecutionError, StackUnderflow, TypeMismatch
from dictionary import Dictionary
from stack import Stack
import intrinsics  # ignore 'Unused import' warning, registers the builtins

log = logging.getLogger(__name__)

TAtom1 = TypeVar('TAtom1', bound = Atom)
TAtom2 = TypeVar('TAtom2', bound = Atom)
AtomTypeSpec = Union[Type[Atom], Tuple[Type[Atom],...]]

class Runtime:
    '''
    Runtime environment for execution.
    Holds the stack, the builtins and the dictionary of user words.
    '''

    def __init__(self) -> None:
        self.stack: Stack = Stack()
        self.builtins: Dict[str, Builtin] = {}
        for builtin in Builtin.classes: builtin().register(self)
        self.dictionary: Dictionary = Dictionary(self.builtins.keys())

    def check_type(self, atom: Atom, atom_type: AtomTypeSpec) -> None:
        if isinstance(atom, atom_type): return
        if isinstance(atom_type, type):
            raise TypeMismatch(f'argument {atom} is not a {atom_type.__name__}')
        raise TypeMismatch(f'argument {atom} is not one of {" , ".join(t.__name__ for t in atom_type)}')

    def pop_args(self, types: List[AtomTypeSpec]) -> List[Atom]:
        n = len(types)
        if len(self.stack) < n:
           if n > 1: raise StackUnderflow(f'{n} arguments needed')
           raise StackUnderflow(f'one argument needed (empty stack)')
        for i, t in enumerate(types): self.check_type(self.peek(i), t)
        return [self.stack.pop() for _ in range(n)]

    def pop(self, type1: Type[TAtom1] = Atom) -> TAtom1:
        return cast(TAtom1, self.pop_args([type1])[0])

    def pop2(self, type1: Type[TAtom1], type2: Type[TAtom2]) -> Tuple[TAtom1, TAtom2]:
        ''' Pops the top (type1) then the next (type2). '''
        return cast(Tuple[TAtom1,TAtom2], tuple(self.pop_args([type1, type2])))

    def peek(self, i: int = 0) -> Atom : return self.stack.peek(i)

    def push(self, atom: Atom) -> None:
        self.stack.push(atom)

    def register(self, builtin: Builtin) -> None:
        self.builtins[builtin.value] = builtin

    def keywords(self) -> List[str]:
        return list(self.builtins.keys())

    def define(self, name: str, quotation: Quotation) -> None:
        self.dictionary.define(name, quotation)

    def resolve(self, name: str) -> Optional[Quotation]:
        ''' Copy of the word bound to name, None if unbound. '''
        quotation = self.dictionary.lookup(name)
        return quotation.copy() if quotation is not None else None

    def collapse(self) -> None:
        '''
        Runs the executable atoms on top of the stack.
        The run of consecutive executables is popped, then executed in
        push order. Repeats until the top is plain data or the stack is empty.
        '''
        if len(self.stack) == 0: raise StackUnderflow('nothing to apply (empty stack)')
        self.settle()

    def settle(self) -> None:
        ''' Collapse without the empty stack check, used after a quotation is replayed. '''
        while len(self.stack) and self.peek().executable:
            pending: List[Atom] = []
            while len(self.stack) and self.peek().executable: pending.append(self.stack.pop())
            for atom in reversed(pending): self.execute(atom)

    def execute(self, atom: Atom) -> None:
        if not atom.executable: raise ExecutionError(f'atom {atom} cannot be executed')
        log.debug('executing %r', atom)
        atom.execute(self)

    def close(self) -> None:
        ''' Releases the session state. '''
        self.dictionary.clear()
        self.stack.clear()

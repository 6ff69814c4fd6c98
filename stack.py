''' Evaluation stack '''

from typing import Iterable, Optional
from atoms import Atom, Storage

class Stack(Storage):
    '''
    The session stack. Same storage as a quotation, with a larger
    initial capacity. Access is LIFO, the last pushed atom is on top.
    '''
    INITIAL_CAPACITY = 512

    def __init__(self, content: Iterable[Atom] = (), capacity: Optional[int] = None) -> None:
        super().__init__(content, capacity)

    def dump(self) -> str:
        ''' Renders the stack bottom to top without consuming it. '''
        return self.render()

    def clear(self) -> None:
        while self.used: self.pop()

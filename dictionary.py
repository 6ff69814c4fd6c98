''' Word dictionary: names bound to quotations '''

import logging
from typing import Iterable, Iterator, List, Optional
from atoms import DictionaryConflict, Quotation

log = logging.getLogger(__name__)

class DictionaryEntry:
    ''' Link of a bucket chain. '''
    __slots__ = ('name', 'quotation', 'next')
    def __init__(self, name: str, quotation: Quotation) -> None:
        self.name = name
        self.quotation = quotation
        self.next: Optional['DictionaryEntry'] = None

class Dictionary:
    '''
    Fixed size hash table of chained entries.
    Owns every quotation stored; lookups return the stored quotation
    itself, callers copy it before putting it on a stack.
    '''
    PRIME = 7757
    BUCKETS = 128

    def __init__(self, reserved: Iterable[str] = ()) -> None:
        self.buckets: List[Optional[DictionaryEntry]] = [None] * Dictionary.BUCKETS
        self.reserved = frozenset(reserved)

    @staticmethod
    def hash(name: str, buckets: int = BUCKETS) -> int:
        ''' sum(prime^i + char_i) modulo the bucket count '''
        return sum(pow(Dictionary.PRIME, i, buckets) + ord(c) for i, c in enumerate(name)) % buckets

    def chain(self, index: int) -> Iterator[DictionaryEntry]:
        entry = self.buckets[index]
        while entry is not None:
            yield entry
            entry = entry.next

    def find(self, name: str) -> Optional[DictionaryEntry]:
        for entry in self.chain(Dictionary.hash(name)):
            if entry.name == name: return entry
        return None

    def lookup(self, name: str) -> Optional[Quotation]:
        entry = self.find(name)
        return entry.quotation if entry is not None else None

    def define(self, name: str, quotation: Quotation) -> None:
        if name in self.reserved:
            raise DictionaryConflict(f'cannot redefine builtin {name}')
        index = Dictionary.hash(name)
        entry = self.buckets[index]
        if entry is None:
            self.buckets[index] = DictionaryEntry(name, quotation)
            log.debug('created word %s in empty bucket %d', name, index)
            return
        while True:
            if entry.name == name:
                if entry.quotation is not quotation: entry.quotation.release()
                entry.quotation = quotation
                log.debug('replaced word %s', name)
                return
            if entry.next is None: break
            entry = entry.next
        entry.next = DictionaryEntry(name, quotation)
        log.debug('created word %s in bucket %d', name, index)

    def clear(self) -> None:
        for index in range(Dictionary.BUCKETS):
            for entry in self.chain(index): entry.quotation.release()
            self.buckets[index] = None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __iter__(self) -> Iterator[str]:
        for index in range(Dictionary.BUCKETS):
            for entry in self.chain(index): yield entry.name

    def __len__(self) -> int:
        return sum(1 for _ in self)

''' Parsing engine '''

import logging
from typing import Iterator, List, Optional, Sequence, Union, TYPE_CHECKING
from colorama import Fore as fg
from atoms import Error, Atom, Number, Text, Quotation, DictionaryConflict
if TYPE_CHECKING: from execution import Runtime

log = logging.getLogger(__name__)

class Keyword(Atom):
    ''' Intermediate output of the Tokenizer. Not a proper language element. '''
    def __init__(self, value: str) -> None:
        self.value = value
    def __str__(self) -> str:
        return f'{fg.MAGENTA}<{self.value}>{fg.RESET}'

class Identifier(Atom):
    ''' Intermediate output of the Tokenizer, a name to look up. '''
    def __init__(self, value: str) -> None:
        self.value = value
    def __str__(self) -> str:
        return f'{fg.YELLOW}{self.value}{fg.RESET}'

class ParsingError(Error):
    ''' Raised by the parser. '''

class UnknownToken(ParsingError):
    ''' Raised when a lexeme is neither a literal, a keyword nor a known word. '''

class UnterminatedString(ParsingError):
    ''' Raised when a string literal has no closing quote. '''

class MalformedDefinition(ParsingError):
    ''' Raised when begin ... end is misused. '''

# Token are outputs of the Tokenizer
Token = Union[ Number, Text, Keyword, Identifier ]

WHITESPACE = ' \t\r\n'
DIGITS = '0123456789'

class Tokenizer:
    '''
    Lexical tokenizer. Reads one lexeme at a time from a cursor.
    Can only produce Number, Text, Keyword, Identifier.
    '''

    def __init__(self, input_str: str, keywords: Sequence[str]) -> None:
        self.input = input_str
        self.position = 0
        self.keywords = keywords

    def at_boundary(self, position: int) -> bool:
        return position >= len(self.input) or self.input[position] in WHITESPACE

    def skip_whitespace(self) -> None:
        while self.position < len(self.input) and self.input[self.position] in WHITESPACE:
            self.position += 1

    def parse_number(self) -> Number:
        start = self.position ; value = 0.0
        while self.position < len(self.input) and self.input[self.position] in DIGITS:
            value = value * 10 + DIGITS.index(self.input[self.position])
            self.position += 1
        if self.input.startswith('.', self.position) and self.position + 1 < len(self.input) \
                and self.input[self.position + 1] in DIGITS:
            self.position += 1 ; scale = 0.1
            while self.position < len(self.input) and self.input[self.position] in DIGITS:
                value += DIGITS.index(self.input[self.position]) * scale
                scale /= 10
                self.position += 1
        if not self.at_boundary(self.position):
            raise UnknownToken(f'malformed number {self.input[start:self.parse_lexeme_end()]}')
        return Number(value)

    def parse_string(self) -> Text:
        idx = self.input.find('"', self.position + 1)
        if idx < 0: raise UnterminatedString(f'missing closing " after {self.input[self.position:]}')
        token = self.input[self.position + 1:idx] ; self.position = idx + 1
        log.debug('found string of length %d', len(token))
        return Text(token)

    def match_keyword(self) -> Optional[str]:
        for keyword in self.keywords:
            if self.input.startswith(keyword, self.position) and self.at_boundary(self.position + len(keyword)):
                return keyword
        return None

    def parse_lexeme_end(self) -> int:
        idx = self.position
        while not self.at_boundary(idx): idx += 1
        return idx

    def next(self) -> Optional[Token]:
        ''' Advances past exactly one lexeme. None at end of input. '''
        self.skip_whitespace()
        if self.position >= len(self.input): return None
        c = self.input[self.position]
        if c in DIGITS: return self.parse_number()
        if c == '"': return self.parse_string()
        keyword = self.match_keyword()
        if keyword is not None:
            self.position += len(keyword)
            return Keyword(keyword)
        end = self.parse_lexeme_end()
        token = self.input[self.position:end] ; self.position = end
        return Identifier(token)

    def tokenize(self) -> Iterator[Token]:
        while True:
            token = self.next()
            if token is None: break
            yield token

class Parser:
    '''
    Line evaluator.
    Pushes literals, pushes builtins and words unevaluated, collapses on '.'
    and compiles begin NAME ... end into a dictionary word.
    Definitions may span several lines.
    '''
    APPLY = '.'
    BEGIN = 'begin'
    END = 'end'
    CONTROL = (APPLY, BEGIN, END)

    def __init__(self) -> None:
        self.name : Optional[str] = None
        self.naming : bool = False
        self.frames : List[Quotation] = []

    @property
    def capturing(self) -> bool:
        return self.naming or len(self.frames) > 0

    def reset(self) -> None:
        self.name = None ; self.naming = False ; self.frames = []

    def keywords(self, runtime: 'Runtime') -> List[str]:
        return [*runtime.keywords(), *Parser.CONTROL]

    def execute(self, runtime: 'Runtime', input_str: str) -> None:
        tokenizer = Tokenizer(input_str, self.keywords(runtime))
        try:
            for token in tokenizer.tokenize():
                if self.capturing: self.capture(runtime, token)
                else: self.interpret(runtime, token)
        except Error:
            if self.capturing: log.info('abandoned definition of %s', self.name)
            self.reset()
            raise

    def resolve(self, runtime: 'Runtime', token: Identifier) -> Quotation:
        word = runtime.resolve(token.value)
        if word is None: raise UnknownToken(f'unknown word {token}')
        return word

    def interpret(self, runtime: 'Runtime', token: Token) -> None:
        if isinstance(token, Identifier):
            runtime.push(self.resolve(runtime, token))
        elif not isinstance(token, Keyword):
            runtime.push(token)
        elif token.value == Parser.APPLY:
            runtime.collapse()
        elif token.value == Parser.BEGIN:
            self.naming = True
        elif token.value == Parser.END:
            raise MalformedDefinition(f'{token} without {Keyword(Parser.BEGIN)}')
        else:
            builtin = runtime.builtins[token.value]
            if builtin.immediate: runtime.execute(builtin)
            else: runtime.push(builtin)

    def capture(self, runtime: 'Runtime', token: Token) -> None:
        if self.naming:
            self.start(token)
        elif isinstance(token, Identifier):
            self.frames[-1].push(self.resolve(runtime, token))
        elif not isinstance(token, Keyword):
            self.frames[-1].push(token)
        elif token.value == Parser.APPLY:
            raise MalformedDefinition(f'{token} cannot be used inside a definition')
        elif token.value == Parser.BEGIN:
            self.frames.append(Quotation())
        elif token.value == Parser.END:
            self.finish(runtime)
        else:
            self.frames[-1].push(runtime.builtins[token.value])

    def start(self, token: Token) -> None:
        if isinstance(token, Keyword):
            raise DictionaryConflict(f'cannot redefine keyword {token.value}')
        if not isinstance(token, Identifier):
            raise MalformedDefinition(f'invalid word name {token}')
        self.name = token.value ; self.naming = False
        self.frames = [Quotation()]
        log.debug('capturing word %s', self.name)

    def finish(self, runtime: 'Runtime') -> None:
        quotation = self.frames.pop()
        if self.frames:
            self.frames[-1].push(quotation)
            return
        name = self.name ; self.reset()
        runtime.define(name, quotation)
        log.info('defined word %s (%d values)', name, len(quotation))

''' ONWARD : a minimal concatenative language '''

import argparse
import logging
import sys
from typing import Iterable, List, Optional
import colorama
from colorama import Fore as fg

from atoms import Error, ExecutionError, ExitRequest
from parsing import Parser
from execution import Runtime

log = logging.getLogger(__name__)

class Interpreter:
    ''' The interpreter program: one session with its own stack and dictionary. '''

    def __init__(self, showstack: bool = False) -> None:
        self.prompt = fg.LIGHTWHITE_EX + '>> ' + fg.RESET
        self.prompt_continued = fg.LIGHTWHITE_EX + '.. ' + fg.RESET
        self.showstack = showstack
        self.runtime = Runtime()
        self.parser = Parser()

    def execute(self, expression: str) -> None:
        self.parser.execute(self.runtime, expression)

    def run(self, lines: Iterable[str]) -> None:
        ''' Evaluates lines in order, stops at the first error. '''
        for line in lines: self.execute(line)

    def banner(self) -> None:
        print(f'Welcome to {fg.LIGHTWHITE_EX}ONWARD{fg.RESET} {fg.GREEN}( a minimal concatenative language ){fg.RESET}.')
        print(fg.LIGHTBLACK_EX+'BUILTINS'+fg.RESET)
        for builtin in self.runtime.builtins.values():
            print(f'  {fg.YELLOW}{builtin.value}{fg.RESET}\t{fg.LIGHTBLACK_EX}( {builtin.comment} ){fg.RESET}')
        print(f'Examples:{fg.LIGHTBLACK_EX} ( words are applied with . )')
        print('  3 4 + .                         ( 7 )')
        print('  begin double dup + end  5 double .    ( 10 )')
        print('  "hi" 3 rep dump' + fg.RESET)

    def execute_input(self) -> None:
        prompt = self.prompt_continued if self.parser.capturing else self.prompt
        self.execute(input(prompt))

    def loop(self) -> None:
        self.banner()
        while True :
            if self.showstack and not self.parser.capturing: print(); print(self.runtime.stack.dump())
            try:
                self.execute_input()
            except EOFError:
                break
            except Error as error:
                print(error)
            except KeyboardInterrupt:
                self.parser.reset()
                print(ExecutionError('execution interrupted by user'))
        print('\nSee you soon !\n')

    def close(self) -> None:
        self.runtime.close()

def read_lines(path: str) -> List[str]:
    log.info('reading %s', path)
    with open(path, encoding='utf-8') as f:
        return f.read().splitlines()

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog='onward', description='A minimal concatenative language interpreter.')
    parser.add_argument('files', nargs='*', help='source files evaluated line by line')
    parser.add_argument('-c', '--command', action='append', default=[], help='line of code to evaluate (repeatable)')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='more diagnostics (-vv for debug traces)')
    parser.add_argument('-q', '--quiet', action='store_true', help='only report errors')
    parser.add_argument('--no-color', dest='color', action='store_false', help='disable colored output')
    parser.add_argument('--show-stack', action='store_true', help='print the stack before each prompt')
    return parser.parse_args(argv)

def configure_logging(verbose: int, quiet: bool) -> None:
    if quiet: level = logging.ERROR
    elif verbose >= 2: level = logging.DEBUG
    elif verbose == 1: level = logging.INFO
    else: level = logging.WARNING
    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s', stream=sys.stderr)
    logging.getLogger().setLevel(level)

def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose, args.quiet)
    colorama.init(strip = not args.color)
    interpreter = Interpreter(showstack = args.show_stack)
    try:
        if not args.files and not args.command and sys.stdin.isatty():
            interpreter.loop()
            return 0
        for path in args.files: interpreter.run(read_lines(path))
        if args.command: interpreter.run(args.command)
        if not args.files and not args.command: interpreter.run(line.rstrip('\n') for line in sys.stdin)
        if interpreter.parser.capturing:
            print(ExecutionError(f'unterminated definition of {interpreter.parser.name}'), file=sys.stderr)
            return 1
        return 0
    except ExitRequest as request:
        return request.status
    except Error as error:
        print(error, file=sys.stderr)
        return 1
    except OSError as error:
        print(Error(f'cannot read {error.filename}: {error.strerror}'), file=sys.stderr)
        return 1
    finally:
        interpreter.close()
        colorama.deinit()

# Main function calling
if __name__ == '__main__':
    sys.exit(main())

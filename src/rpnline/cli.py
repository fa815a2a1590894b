from os import path
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import sys

from prompt_toolkit import PromptSession
from prompt_toolkit.application import get_app
from prompt_toolkit.history import FileHistory

from . import operators
from .lexer import Lexer
from .machine import Machine, evaluate


class InteractiveInput:
    '''
    Prompt for lines, showing the result of the line being edited as it
    changes.
    '''
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history
        self._last = None

    def _current(self):
        # Whole buffer, evaluated from scratch; only the latest is kept so the
        # toolbar and rprompt share one evaluation per redraw.
        text = get_app().current_buffer.text
        if self._last is None or self._last[0] != text:
            self._last = text, evaluate(text)
        return self._last[1]

    def _toolbar(self):
        return self._current().render()

    def _rprompt(self):
        return self._current().error or ''

    def __iter__(self):
        history = None
        if self.history is not None:
            history = FileHistory(path.expanduser(self.history))
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    history=history,
                                    # Error, if any, of the current line
                                    rprompt=self._rprompt,
                                    # Stack of the current line
                                    bottom_toolbar=self._toolbar,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Interferes with X11 selection.
                                    mouse_support=False,
                                    # Keep committed lines on screen.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to RPN system.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.rpnline_history'

    def dumper(self):
        '''
        Dump all lexeme matches and the operation each runs.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(token)>\t<operation>')
        for line in self.args.expressions:
            for match in lexer.lex(line):
                groups = lexer.matchedgroups(match)
                print(*groups.keys(),
                      repr(match.group(0)),
                      self._operation(match),
                      sep='\t')

    @staticmethod
    def _operation(match):
        '''
        Name what the machine would do with lexeme, or None if nothing.
        '''
        if Machine().parse(match) is not None:
            return 'push'
        token = match.group(0)
        opcode = Machine.OPCODES.get(token[:1])
        if opcode is not None:
            return opcode.__name__
        op = operators.lookup(token[:1])
        if op is not None:
            return op.__name__
        return None

    @staticmethod
    def report(result):
        '''
        Line to print for result: the error if there is one, else the stack.
        '''
        if result.error is not None:
            return result.error
        return result.render()

    def executor(self):
        '''
        Run machine (RPN calculator), once per line.
        '''
        interactive = self._interactive()
        for line in self.args.expressions:
            result = evaluate(line,
                              verbose=self.args.verbose and not interactive)
            if interactive:
                # The error was already on screen while editing.
                print(result.render())
            else:
                print(self.report(result))

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        lexer = Lexer()
        print(lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting input, or plain stdin...

        Prompting if either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=self.args.history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='report every error on '
                                               'stderr, not just the last')
        self.argument_parser.add_argument('-p', '--prompt',
                                          nargs=OPTIONAL,
                                          const=self.DEFAULT_PROMPT)
        self.argument_parser.add_argument('--history',
                                          nargs=OPTIONAL,
                                          const=self.HISTORY_FILE,
                                          metavar='FILE')
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        # Everything else is one expression, joined by spaces.
        self.argument_parser.add_argument('expression',
                                          nargs=REMAINDER)
        self.argument_parser.set_defaults(action=self.executor)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        # Tokens like -0x1f or -x aren't options, but argparse can't know;
        # anything it doesn't recognise is expression, and comes before
        # the rest of it.
        self.args, extras = self.argument_parser.parse_known_args(args)
        self.args.expression = extras + self.args.expression
        if self.args.expression:
            if self.args.prompt:
                self.argument_parser.error('--prompt takes no expression')
            self.args.expressions = [' '.join(self.args.expression)]
        else:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)

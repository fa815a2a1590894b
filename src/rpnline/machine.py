from collections import deque, namedtuple
from functools import reduce
import sys

from .util import RPNError, in_range
from .lexer import Lexer
from .formatting import IntFormat, DEFAULT_FMT, render
from . import operators


class Result(namedtuple('Result', 'stack error fmt')):
    '''
    Final state of one evaluation: stack (bottom first), last error, format.

    error is only ever the most recent error of the pass; earlier ones are
    overwritten, not collected.
    '''
    __slots__ = ()

    def render(self):
        return render(self.stack, self.fmt)


class Machine:
    '''
    Integer stack machine (RPN calculator).

    Takes lexemes and runs them. One machine per evaluation; nothing carries
    over between lines.
    '''

    # .h, .d
    FMTS = {fmt.value: fmt for fmt in IntFormat}

    def __init__(self, verbose=None):
        '''
        Create empty stack machine.

        :param verbose: Report every error on stderr as it happens, not just
                        the last one.
        '''
        self.stack = deque()
        self.fmt = DEFAULT_FMT
        self.error = None
        self.verbose = verbose

    def run(self, lexemes):
        '''
        Feed all lexemes, never stopping on errors, and return the Result.
        '''
        for match in lexemes:
            try:
                self.feed(match)
            except RPNError as e:
                self._report(match.group(0), e)
        return self.result()

    def result(self):
        return Result(tuple(self.stack), self.error, self.fmt)

    def _report(self, token, e):
        # Most recent wins.
        self.error = e.args[0]
        if self.verbose:
            print('{!r}: {}'.format(token, self.error), file=sys.stderr)
            for cause in e.args[1:]:
                print('  caused by {!r}'.format(cause), file=sys.stderr)

    def feed(self, match):
        '''
        Push or run one lexeme.

        :param match: regex Match object on the whole token.
        '''
        number = self.parse(match)
        if number is not None:
            self._pshstack(number)
        else:
            token = match.group(0)
            self.dispatch(token[:1], token[1:], token)

    def parse(self, match):
        '''
        Parse literal lexeme into an integer, or None if it isn't one.

        Hex literals switch the machine to hex output.
        '''
        groups = match.groupdict()
        if groups['hex'] is not None:
            number = int(groups['hex'], 16)
            if in_range(number):
                self.fmt = IntFormat.HEX
                return number
        elif groups['number'] is not None:
            number = int(groups['number'])
            if in_range(number):
                return number
        return None

    def dispatch(self, head, rest, token):
        '''
        Run word lexeme, by its first character.
        '''
        opcode = type(self).OPCODES.get(head)
        if opcode is not None:
            opcode(self, rest)
            return
        op = operators.lookup(head)
        if op is None or len(self.stack) < 2:
            raise RPNError("couldn't parse '{}'".format(token))
        self._apply(op)

    def _apply(self, op):
        '''
        Apply binary operator to the two topmost elements.

        Second from the top is the left operand: 8 2 d is 4, not 0.
        '''
        right, left = self._popstack(2)
        try:
            self._pshstack(op(left, right))
        except RPNError:
            self._pshstack(left, right)
            raise

    def iota(self, rest=None):
        '''
        Replace top of stack n with 1 .. n. Nothing for n < 1.
        '''
        if not self.stack:
            raise RPNError('i needs a number')
        count = self._popstack()[0]
        # Not capped: n i builds all n elements, on every redraw when
        # interactive.
        self.stack.extend(range(1, count + 1))

    def fold(self, name):
        '''
        Reduce the entire stack, bottom to top, with operator name.
        '''
        op = operators.lookup(name)
        if op is None:
            raise RPNError('/<op>')
        if not self.stack:
            raise RPNError('/{} needs a number'.format(name))
        res = reduce(op, self.stack)
        self.clrstack()
        self._pshstack(res)

    def directive(self, name):
        '''
        Switch output format. Unknown formats are ignored.
        '''
        fmt = type(self).FMTS.get(name)
        if fmt is not None:
            self.fmt = fmt

    def clrstack(self):
        '''
        Clear everything from the stack.
        '''
        self.stack.clear()

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n=1):
        '''
        Pop specified number of args from stack, topmost first.

        Callers check there are enough.
        '''
        return [self.stack.pop() for _ in range(n)]

    # Language mapping of word heads to stack operations. Heads that are
    # neither opcodes nor operators don't parse.
    OPCODES = {
        # iota, n --- 1 .. n
        'i': iota,
        # fold, /op, a b .. x --- a op b op .. op x
        '/': fold,
        # output format, .h .d
        '.': directive,
    }


def evaluate(line, verbose=None):
    '''
    Evaluate a whole line from scratch.
    '''
    return Machine(verbose=verbose).run(Lexer().lex(line))

'''
RPN integer calculator.

A line is whitespace-separated tokens, run left to right against a stack of
64-bit integers:

- 12, -3: push decimal
- 0x1f: push hex, and show the whole stack in hex
- p or +, m or *, d: add, multiply, divide the two topmost
- i: replace n with 1 .. n
- /p, /m, /d: fold the whole stack with an operator
- .h, .d: show the stack in hex or decimal

Errors never stop a line; the last one is reported. The whole line is
evaluated from scratch each time, so the interactive prompt can show the
result as you type.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine, Result, evaluate
from .formatting import IntFormat, render


__all__ = 'Machine', 'Lexer', 'CLI', 'Result', 'IntFormat', 'evaluate', 'render'

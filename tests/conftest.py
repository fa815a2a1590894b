from pytest import Item, fixture

from rpnline.lexer import Lexer
from rpnline.machine import Machine


@fixture
def lexer():
    return Lexer()


@fixture
def run(lexer):
    '''
    Run a line on a fresh machine and return the Result.
    '''
    def run(line):
        return Machine().run(lexer.lex(line))
    return run


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every passing assertion, in case we later need to audit a run.

    Needs enable_assertion_pass_hook, and pytest -rP to see it.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))  # no repr()!
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))

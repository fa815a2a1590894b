'''
RPN machine tests
'''

from rpnline.formatting import IntFormat
from rpnline.machine import Machine, Result, evaluate


def test_literals_only(run):
    result = run('1 -2 +3 0x10')
    assert result.stack == (1, -2, 3, 16)
    assert result.error is None


def test_add(run):
    assert run('3 4 p') == Result((7,), None, IntFormat.DEC)
    assert run('3 4 +').stack == (7,)


def test_multiply(run):
    assert run('3 4 m').stack == (12,)
    assert run('3 4 *').stack == (12,)


def test_operand_order(run):
    # Second from the top is the left operand.
    assert run('8 2 d').stack == (4,)
    assert run('2 8 d').stack == (0,)
    assert run('-7 2 d').stack == (-3,)


def test_operator_suffix_ignored(run):
    assert run('3 4 plus').stack == (7,)


def test_operator_needs_two(run):
    result = run('3 p')
    assert result.stack == (3,)
    assert result.error == "couldn't parse 'p'"


def test_divide_by_zero(run):
    result = run('4 0 d')
    assert result.stack == (4, 0)
    assert result.error == 'division by zero'


def test_divide_by_zero_keeps_going(run):
    result = run('4 0 d p')
    assert result.stack == (4,)
    assert result.error == 'division by zero'


def test_iota(run):
    assert run('5 i') == Result((1, 2, 3, 4, 5), None, IntFormat.DEC)
    assert run('7 3 i').stack == (7, 1, 2, 3)


def test_iota_nothing(run):
    assert run('0 i') == Result((), None, IntFormat.DEC)
    assert run('3 -2 i') == Result((3,), None, IntFormat.DEC)


def test_iota_empty(run):
    result = run('i')
    assert result.stack == ()
    assert result.error == 'i needs a number'


def test_fold(run):
    assert run('1 2 3 /p') == Result((6,), None, IntFormat.DEC)
    assert run('5 i /m').stack == (120,)
    assert run('100 5 2 /d').stack == (10,)
    assert run('9 /p').stack == (9,)


def test_fold_empty(run):
    result = run('/p')
    assert result.stack == ()
    assert result.error == '/p needs a number'


def test_fold_bad_operator(run):
    for token in '/x', '/', '/pp':
        result = run('1 2 ' + token)
        assert result.stack == (1, 2)
        assert result.error == '/<op>'


def test_fold_divide_by_zero(run):
    result = run('1 0 3 /d')
    assert result.stack == (1, 0, 3)
    assert result.error == 'division by zero'


def test_hex_literal(run):
    result = run('0x1f')
    assert result == Result((31,), None, IntFormat.HEX)
    assert result.render() == '0x1f '


def test_hex_literal_anywhere(run):
    assert run('1 2 0x3').fmt is IntFormat.HEX
    assert run('0x3 .d').fmt is IntFormat.DEC


def test_directives(run):
    assert run('.h 10').render() == '0xa '
    assert run('.h 10 .d').render() == '10 '
    assert run('10 .d .h').fmt is IntFormat.HEX


def test_unknown_directive(run):
    result = run('.h 10 .x .')
    assert result.fmt is IntFormat.HEX
    assert result.error is None


def test_unknown_token(run):
    assert run('foo') == Result((), "couldn't parse 'foo'", IntFormat.DEC)


def test_last_error_wins(run):
    assert run('foo bar').error == "couldn't parse 'bar'"
    assert run('i 1 2 /x').error == '/<op>'


def test_error_does_not_stop(run):
    result = run('foo 1 2 p')
    assert result.stack == (3,)
    assert result.error == "couldn't parse 'foo'"


def test_non_ascii_skipped(run):
    assert run('1 é 2') == Result((1, 2), None, IntFormat.DEC)


def test_out_of_range_literals(run):
    assert run('9223372036854775807').stack == (9223372036854775807,)
    assert run('-9223372036854775808').stack == (-9223372036854775808,)
    result = run('9223372036854775808')
    assert result.stack == ()
    assert result.error == "couldn't parse '9223372036854775808'"
    result = run('0xffffffffffffffff')
    assert result == Result((), "couldn't parse '0xffffffffffffffff'",
                            IntFormat.DEC)


def test_overflow_wraps(run):
    assert run('9223372036854775807 1 p').stack == (-9223372036854775808,)


def test_negative_hex(run):
    assert run('-1 .h').render() == '0xffffffffffffffff '
    assert run('0x-1f').stack == (-31,)


def test_bad_hex(run):
    assert run('0x').error == "couldn't parse '0x'"
    assert run('0xg').error == "couldn't parse '0xg'"


def test_evaluate_is_stateless():
    assert evaluate('1 2') == evaluate('1 2')
    evaluate('0x1 5 i')
    assert evaluate('3') == Result((3,), None, IntFormat.DEC)


def test_result_is_immutable():
    result = evaluate('1 2')
    assert isinstance(result.stack, tuple)


def test_verbose_reports_every_error(lexer, capsys):
    result = Machine(verbose=True).run(lexer.lex('foo 4 0 d bar'))
    assert result.error == "couldn't parse 'bar'"
    err = capsys.readouterr().err
    assert "'foo': couldn't parse 'foo'" in err
    assert "'d': division by zero" in err
    assert 'ZeroDivisionError' in err
    assert "'bar': couldn't parse 'bar'" in err


def test_quiet_by_default(capsys):
    evaluate('foo bar')
    assert capsys.readouterr().err == ''


def test_missing_operands_leave_stack(run):
    assert run('p') == Result((), "couldn't parse 'p'", IntFormat.DEC)
    assert run('i') == Result((), 'i needs a number', IntFormat.DEC)

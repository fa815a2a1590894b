from functools import reduce
import operator

import regex


class Lexer:
    '''
    Lexer for the RPN token grammar.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    # Whitespace-delimited token. ASCII whitespace only: \v is \x0b.
    TOKEN = r'[^ \t\n\x0b\f\r]+'
    # Hexadecimal literal. Sign goes after the prefix: 0x-1f.
    HEX = r'''
           0x
           (?<hex>
               [+-]?
               [0-9A-Fa-f]+
           )
           '''
    # Decimal literal, optionally signed: 12, -3, +4
    NUMBER = r'''
              [+-]?
              [0-9]+
              '''
    # Everything else; dispatched on its first character by the machine.
    WORD = r'.+'

    # All possible lexemes. WORD matches anything, so it goes last.
    LEXEME = r'(?:' + HEX + r')|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<word>' + WORD + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def tokens(self, line):
        '''
        Take a line and yield all whitespace-delimited tokens, in order.

        Tokens with non-ASCII characters are skipped, not reported.
        '''
        for match in regex.finditer(type(self).TOKEN, line):
            token = match.group(0)
            if not token.isascii():
                continue
            yield token

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Every token lexes, if only as a word.
        '''
        for token in self.tokens(line):
            yield regex.fullmatch(type(self).LEXEME, token,
                                  flags=type(self).FLAGS)

    def matchedgroups(self, match):
        '''
        Return the lexeme's matched groups.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}

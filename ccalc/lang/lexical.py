"""Lexical analysis and parsing for the ccalc language. Scanning and LALR table construction are lark's job: this module
feeds it the rules from grammar/rules.py and translates its failures into ccalc errors.

Tokens are lark Tokens. token.type is the kind and str(token) the matched text; for literal kinds token.value is
replaced by the Complex the literal denotes, so reductions read the value instead of re-parsing the text.
"""

import logging

from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedToken

from ccalc.grammar.rules import GRAMMAR, LITERALS, START
from ccalc.lang.error import LexicalError, ParseError

logger = logging.getLogger(__name__)

PARSER = Lark(GRAMMAR, start=START, parser="lalr", lexer="basic")


def tokenize(text):
    """Returns the tokens of text, a single line. Raises a LexicalError at the first character no token pattern
    matches.
    """
    tokens = []
    try:
        for token in PARSER.lex(text):
            if token.type in LITERALS:
                token.value = LITERALS[token.type](str(token))
            tokens.append(token)
    except UnexpectedCharacters as e:
        raise LexicalError(text[e.pos_in_stream], text, e.pos_in_stream) from None

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("tokens: %s", " ".join(f"{t.type}({t})" for t in tokens))
    return tokens


def describe(terminal):
    """Returns terminal as error messages show it: the text of a fixed token in quotes, the kind of any other token."""
    if terminal == "$END":
        return "end of input"
    pattern = PARSER.get_terminal(terminal).pattern
    return f"'{pattern.value}'" if pattern.type == "str" else terminal


def parse(tokens, text=""):
    """Parses tokens into a lark Tree rooted at a line production. text is the line the tokens came from, used for
    error messages. Raises a ParseError naming the first token that cannot be shifted, or the end of input.
    """
    interactive = PARSER.parse_interactive("")
    try:
        for token in tokens:
            interactive.feed_token(token)
        return interactive.feed_eof(tokens[-1] if tokens else Token("$END", "", start_pos=0, line=1, column=1))
    except UnexpectedEOF as e:
        raise ParseError(None, text, [describe(t) for t in e.expected]) from None
    except UnexpectedToken as e:
        token = None if e.token.type == "$END" else e.token
        raise ParseError(token, text, [describe(t) for t in e.expected]) from None

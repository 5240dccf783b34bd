"""Semantic actions for the ccalc language and the entry point hosts call once per line.

Each production of grammar/rules.py maps to one action. REDUCTIONS holds the pure ones, which only combine the values
of already-reduced children; the two actions that touch the environment (reading a name, assigning one) are handled by
reduce itself. Evaluator walks a parse tree bottom-up, children before parents, calling reduce exactly once per node.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from lark.exceptions import VisitError
from lark.visitors import Transformer_NonRecursive

from ccalc.grammar.rules import Production
from ccalc.lang.error import GenericException, SemanticError
from ccalc.lang.lexical import parse, tokenize
from ccalc.numerical import Complex

logger = logging.getLogger(__name__)


def _identity(value):
    return value


def _literal(token):
    return token.value


REDUCTIONS = {
    Production.BARE: _identity,

    Production.ADD: Complex.add,
    Production.SUB: Complex.sub,
    Production.EXPR_TERM: _identity,

    Production.MUL: Complex.mul,
    Production.DIV: Complex.div,
    Production.TERM_FACTOR: _identity,

    Production.FACTOR_INNER: _identity,
    Production.POS: _identity,
    Production.NEG: Complex.neg,

    Production.INNER_UNIT: _identity,
    Production.PAREN: _identity,
    Production.ABS: Complex.abs,
    Production.ARG: Complex.arg,
    Production.NORM: Complex.norm,
    Production.CONJ: Complex.conj,

    Production.NUMBER: _literal,
    Production.IMAGINARY: _literal,
    Production.IMAG_UNIT: _literal,
}


def reduce(production, children, env, text=""):
    """Returns the value of production given the values of its children. Raises a SemanticError if a name is read
    before it was bound. text is the line being evaluated, used for error messages.
    """
    if production is Production.VAR:
        name, = children
        value = env.lookup(str(name))
        if value is None:
            start = name.start_pos or 0
            raise SemanticError(str(name), expr=text, start=start, end=start + len(name))
        return value

    if production is Production.ASSIGN:
        name, value = children  # value is fully reduced before the binding happens
        return env.bind(str(name), value)

    return REDUCTIONS[production](*children)


class Evaluator(Transformer_NonRecursive):
    """Reduces a parse tree to a Complex against env. Walks the tree with an explicit stack, so nesting depth is not
    bounded by the interpreter's recursion limit.
    """

    def __init__(self, env, text=""):
        super().__init__()
        self.env = env
        self.text = text

    def __default__(self, data, children, meta):
        production = Production(data)
        value = reduce(production, children, self.env, self.text)
        logger.debug("reduce %s -> %s", production.value, value)
        return value


@dataclass(frozen=True)
class Result:
    """Outcome of evaluating one line: exactly one of value and error is set."""
    value: Optional[Complex] = None
    error: Optional[GenericException] = None

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        """Returns value, or raises error."""
        if self.error is not None:
            raise self.error
        return self.value

    def __str__(self):
        return str(self.value) if self.ok else f"{self.error.label}: {self.error}"


def evaluate(env, text):
    """Lexes, parses and reduces text against env. Raises LexicalError, ParseError or SemanticError."""
    tree = parse(tokenize(text), text)
    try:
        return Evaluator(env, text).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, GenericException):
            raise e.orig_exc from None
        raise


def evaluate_line(env, text):
    """Evaluates a single line against env and returns a Result. Lexical, syntax and semantic errors are returned, not
    raised; env keeps every binding made before the failing line.
    """
    try:
        return Result(value=evaluate(env, text))
    except GenericException as e:
        return Result(error=e)

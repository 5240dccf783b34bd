"""Lexical rules and productions of the ccalc language, as data for lark's basic lexer and LALR parser.

Precedence and associativity are encoded structurally (expression/term/factor stratification), not with declared
precedence levels:

```
<line>         ::= <name> "=" <expr>                 ; binds the value of <expr> to <name> and evaluates to it
                 | <expr>
<expr>         ::= <expr> "+" <term> | <expr> "-" <term> | <term>              ; left-associative
<term>         ::= <term> "*" <factor> | <term> "/" <factor> | <factor>        ; left-associative
<factor>       ::= <inner_factor> | "+" <inner_factor> | "-" <inner_factor>    ; sign binds to one inner factor
<inner_factor> ::= <unit> | "(" <expr> ")" | <func> "(" <expr> ")"
<func>         ::= "abs" | "arg" | "norm" | "conj"
<unit>         ::= <number> | <imaginary> | <name>
```

Every alternative carries an alias naming its production (see Production), so the grammar stays pure data and the
semantic actions live in lang/semantics.py.

Tokens, in tie-break order:
    1. NUMBER     digits, optional fraction, optional exponent with optional sign (1, 2.5, 1e-3)
    2. IMAGINARY  a NUMBER immediately followed by "i" (2i, 0.5i); IMAG_UNIT is the bare "i"
    3. NAME       letter or underscore, then letters/digits/underscores. lark re-types a NAME that matches a string
                  terminal exactly, so "i" is IMAG_UNIT and "abs" is ABS, while "absx" and "ix" stay NAMEs
    4. operators  + - * / = ( )
    5. keywords   abs arg norm conj
"""

from enum import Enum

from ccalc.numerical import Complex, I


GRAMMAR = r"""
line: NAME "=" expr                 -> assign
    | expr                          -> bare

expr: expr "+" term                 -> add
    | expr "-" term                 -> sub
    | term                          -> expr_term

term: term "*" factor               -> mul
    | term "/" factor               -> div
    | factor                        -> term_factor

factor: inner_factor                -> factor_inner
      | "+" inner_factor            -> pos
      | "-" inner_factor            -> neg

inner_factor: unit                  -> inner_unit
            | "(" expr ")"          -> paren
            | "abs" "(" expr ")"    -> call_abs
            | "arg" "(" expr ")"    -> call_arg
            | "norm" "(" expr ")"   -> call_norm
            | "conj" "(" expr ")"   -> call_conj

unit: NUMBER                        -> number
    | IMAGINARY                     -> imaginary
    | IMAG_UNIT                     -> imag_unit
    | NAME                          -> var

NUMBER: /\d+(?:\.\d+)?(?:[eE][+-]?\d+)?/
IMAGINARY.2: /\d+(?:\.\d+)?(?:[eE][+-]?\d+)?i/
IMAG_UNIT: "i"
NAME: /[A-Za-z_][A-Za-z0-9_]*/

%import common.WS_INLINE
%ignore WS_INLINE
"""

START = "line"


class Production(Enum):
    """Production IDs, one per grammar alternative. Values are the lark aliases."""
    ASSIGN = "assign"
    BARE = "bare"

    ADD = "add"
    SUB = "sub"
    EXPR_TERM = "expr_term"

    MUL = "mul"
    DIV = "div"
    TERM_FACTOR = "term_factor"

    FACTOR_INNER = "factor_inner"
    POS = "pos"
    NEG = "neg"

    INNER_UNIT = "inner_unit"
    PAREN = "paren"
    ABS = "call_abs"
    ARG = "call_arg"
    NORM = "call_norm"
    CONJ = "call_conj"

    NUMBER = "number"
    IMAGINARY = "imaginary"
    IMAG_UNIT = "imag_unit"
    VAR = "var"


KEYWORDS = ("abs", "arg", "norm", "conj")

# token kind: text -> Complex value, attached to literal tokens by tokenize
LITERALS = {
    "NUMBER": lambda text: Complex(float(text), 0),
    "IMAGINARY": lambda text: Complex(0, float(text[:-1])),
    "IMAG_UNIT": lambda text: I,
}

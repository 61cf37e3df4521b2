"""Go build constraint expressions: parsing, negation and rendering.

Both the ``//go:build`` expression syntax and the legacy ``// +build``
option syntax parse into the same tree, so a constraint read in either form
can be negated and written back in both.
"""

import re
from dataclasses import dataclass
from itertools import product

_TOKEN_RE = re.compile(r"\s*(!|&&|\|\||\(|\)|[^\s!&|()]+)")


@dataclass(frozen=True)
class Tag:
    name: str


@dataclass(frozen=True)
class Not:
    operand: "Expr"


@dataclass(frozen=True)
class And:
    operands: tuple["Expr", ...]


@dataclass(frozen=True)
class Or:
    operands: tuple["Expr", ...]


Expr = Tag | Not | And | Or


def _tokenize(expression: str) -> list[str]:
    tokens = []
    pos = 0
    expression = expression.rstrip()
    while pos < len(expression):
        m = _TOKEN_RE.match(expression, pos)
        if m is None:
            raise ValueError(f"unexpected input in build constraint: {expression[pos:]!r}")
        tokens.append(m.group(1))
        pos = m.end()
    return tokens


class _Parser:
    def __init__(self, expression: str) -> None:
        self._tokens = _tokenize(expression)
        self._pos = 0

    def parse(self) -> Expr:
        expr = self._or()
        if self._pos != len(self._tokens):
            raise ValueError(f"unexpected token {self._tokens[self._pos]!r} in build constraint")
        return expr

    def _peek(self) -> str | None:
        return self._tokens[self._pos] if self._pos < len(self._tokens) else None

    def _next(self) -> str:
        tok = self._peek()
        if tok is None:
            raise ValueError("unexpected end of build constraint")
        self._pos += 1
        return tok

    def _or(self) -> Expr:
        operands = [self._and()]
        while self._peek() == "||":
            self._pos += 1
            operands.append(self._and())
        return operands[0] if len(operands) == 1 else Or(tuple(operands))

    def _and(self) -> Expr:
        operands = [self._unary()]
        while self._peek() == "&&":
            self._pos += 1
            operands.append(self._unary())
        return operands[0] if len(operands) == 1 else And(tuple(operands))

    def _unary(self) -> Expr:
        tok = self._next()
        if tok == "!":
            return Not(self._unary())
        if tok == "(":
            expr = self._or()
            if self._next() != ")":
                raise ValueError("missing ) in build constraint")
            return expr
        if tok in ("&&", "||", ")"):
            raise ValueError(f"unexpected token {tok!r} in build constraint")
        return Tag(tok)


def parse_expression(expression: str) -> Expr:
    """Parse the expression of a ``//go:build`` line. Raises ``ValueError`` if malformed."""
    return _Parser(expression).parse()


def parse_plus_build(options: str) -> Expr:
    """Parse the options of a ``// +build`` line: spaces separate alternatives, commas conjuncts."""
    alternatives: list[Expr] = []
    for option in options.split():
        terms: list[Expr] = []
        for term in option.split(","):
            negated = term.startswith("!")
            name = term[1:] if negated else term
            if not name or "!" in name:
                raise ValueError(f"malformed +build term {term!r}")
            terms.append(Not(Tag(name)) if negated else Tag(name))
        alternatives.append(terms[0] if len(terms) == 1 else And(tuple(terms)))
    if not alternatives:
        raise ValueError("empty +build line")
    return alternatives[0] if len(alternatives) == 1 else Or(tuple(alternatives))


def positive_tags(expr: Expr, negated: bool = False) -> set[str]:
    """Names of the tags that occur under an even number of negations."""
    if isinstance(expr, Tag):
        return set() if negated else {expr.name}
    if isinstance(expr, Not):
        return positive_tags(expr.operand, not negated)
    return set().union(*(positive_tags(op, negated) for op in expr.operands))


def negate(expr: Expr) -> Expr:
    """Return the negation of ``expr`` with ``!`` pushed down onto the tags."""
    return _nnf(expr, True)


def _nnf(expr: Expr, negated: bool) -> Expr:
    if isinstance(expr, Tag):
        return Not(expr) if negated else expr
    if isinstance(expr, Not):
        return _nnf(expr.operand, not negated)
    operands = tuple(_nnf(op, negated) for op in expr.operands)
    if isinstance(expr, And):
        return Or(operands) if negated else And(operands)
    return And(operands) if negated else Or(operands)


def render_expression(expr: Expr) -> str:
    """Render ``expr`` in ``//go:build`` syntax; conjunctions inside alternatives are parenthesized."""
    if isinstance(expr, Tag):
        return expr.name
    if isinstance(expr, Not):
        inner = render_expression(expr.operand)
        return f"!{inner}" if isinstance(expr.operand, Tag) else f"!({inner})"
    if isinstance(expr, And):
        return " && ".join(
            f"({render_expression(op)})" if isinstance(op, Or) else render_expression(op) for op in expr.operands
        )
    return " || ".join(
        f"({render_expression(op)})" if isinstance(op, And) else render_expression(op) for op in expr.operands
    )


def render_plus_build(expr: Expr) -> str:
    """Render ``expr`` as ``// +build`` options (disjunctive normal form)."""
    return " ".join(",".join(term) for term in _dnf(_nnf(expr, False)))


def _dnf(expr: Expr) -> list[list[str]]:
    if isinstance(expr, Tag):
        return [[expr.name]]
    if isinstance(expr, Not):
        # only tags are negated after _nnf
        assert isinstance(expr.operand, Tag)
        return [[f"!{expr.operand.name}"]]
    if isinstance(expr, Or):
        return [term for op in expr.operands for term in _dnf(op)]
    return [[lit for part in combo for lit in part] for combo in product(*(_dnf(op) for op in expr.operands))]

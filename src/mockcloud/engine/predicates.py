# src/mockcloud/engine/predicates.py
"""Query predicates written as restricted Python expressions.

A predicate string is parsed with ``ast`` in eval mode, checked against a
whitelist, and then interpreted node by node against each record. Nothing
is ever passed to eval() or compile().

Three names are in scope:

    record        the Record under test; supports record['f'] and record.get('f'[, default])
    record_type   the record's type string
    record_name   the record's name

Examples:

    record['age'] >= 18 and record.get('city') in ('Oslo', 'Bergen')
    record_type == 'Person' and record_name != 'me'
"""

from __future__ import annotations

import ast
import operator
from collections.abc import Callable, Iterable
from typing import Any

from mockcloud.contracts.errors import (
    PredicateEvaluationError,
    PredicateSecurityError,
    PredicateSyntaxError,
)
from mockcloud.contracts.records import Record

_RECORD = "record"
_SCOPE_NAMES = frozenset({_RECORD, "record_type", "record_name", "True", "False", "None"})

_COMPARISONS: dict[type[ast.cmpop], Callable[[Any, Any], Any]] = {
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Is: operator.is_,
    ast.IsNot: operator.is_not,
    ast.In: lambda item, container: item in container,
    ast.NotIn: lambda item, container: item not in container,
}

_ARITHMETIC: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
}

_UNARY: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.Not: operator.not_,
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
}

# Readable labels for constructs that are always rejected
_REJECTED_LABELS: dict[type[ast.AST], str] = {
    ast.Lambda: "lambda",
    ast.ListComp: "list comprehension",
    ast.SetComp: "set comprehension",
    ast.DictComp: "dict comprehension",
    ast.GeneratorExp: "generator expression",
    ast.NamedExpr: "assignment expression (:=)",
    ast.JoinedStr: "f-string",
    ast.Starred: "starred expression",
    ast.Slice: "slice",
    ast.Await: "await",
    ast.Yield: "yield",
    ast.YieldFrom: "yield from",
}


def _is_record_get(node: ast.AST) -> bool:
    match node:
        case ast.Attribute(value=ast.Name(id="record"), attr="get"):
            return True
    return False


def _reads_record(node: ast.AST) -> bool:
    """True for record, record[...][...] and record.get(...)[...] chains."""
    match node:
        case ast.Name(id="record"):
            return True
        case ast.Subscript(value=inner):
            return _reads_record(inner)
        case ast.Call(func=func):
            return _is_record_get(func)
    return False


def _is_none(node: ast.AST) -> bool:
    match node:
        case ast.Constant(value=None) | ast.Name(id="None"):
            return True
    return False


class _Whitelist:
    """Walks a parsed predicate and records every construct it rejects."""

    def __init__(self) -> None:
        self.problems: list[str] = []

    def check_all(self, nodes: Iterable[ast.AST]) -> None:
        for node in nodes:
            self.check(node)

    def check(self, node: ast.AST) -> None:
        match node:
            case ast.Expression(body=body):
                self.check(body)
            case ast.Name(id=name):
                if name not in _SCOPE_NAMES:
                    self.problems.append(f"Forbidden name: {name!r}")
            case ast.Constant(value=value):
                if value is not None and not isinstance(value, str | int | float | bool):
                    self.problems.append(f"Forbidden constant type: {type(value).__name__}")
            case ast.Call(func=func, args=args, keywords=keywords):
                self._check_call(func, args, keywords)
            case ast.Attribute(value=owner, attr=attr):
                # Only reached outside the func position of a record.get(...) call.
                if _is_record_get(node):
                    self.problems.append("Bare 'record.get' is forbidden; call it as record.get(key) or record.get(key, default)")
                elif isinstance(owner, ast.Name) and owner.id == _RECORD:
                    self.problems.append(f"Forbidden record attribute: {attr!r} (only 'get' is allowed)")
                else:
                    self.problems.append(f"Forbidden attribute access: {attr!r}")
                    self.check(owner)
            case ast.Subscript(value=container, slice=index):
                if not _reads_record(container):
                    self.problems.append("Subscripts are only allowed on record data")
                self.check(container)
                self.check(index)
            case ast.Compare(left=left, ops=ops, comparators=comparators):
                operands = [left, *comparators]
                for position, op in enumerate(ops):
                    if type(op) not in _COMPARISONS:
                        self.problems.append(f"Forbidden comparison: {type(op).__name__}")
                    elif isinstance(op, ast.Is | ast.IsNot) and not (
                        _is_none(operands[position]) or _is_none(operands[position + 1])
                    ):
                        self.problems.append("'is' and 'is not' may only compare against None")
                self.check_all(operands)
            case ast.BoolOp(values=values):
                self.check_all(values)
            case ast.BinOp(left=left, op=op, right=right):
                if type(op) not in _ARITHMETIC:
                    self.problems.append(f"Forbidden operator: {type(op).__name__}")
                self.check(left)
                self.check(right)
            case ast.UnaryOp(op=op, operand=operand):
                if type(op) not in _UNARY:
                    self.problems.append(f"Forbidden unary operator: {type(op).__name__}")
                self.check(operand)
            case ast.IfExp(test=test, body=body, orelse=orelse):
                self.check_all((test, body, orelse))
            case ast.List(elts=elts) | ast.Tuple(elts=elts) | ast.Set(elts=elts):
                self.check_all(elts)
            case ast.Dict(keys=keys, values=values):
                if any(key is None for key in keys):
                    self.problems.append("Dict unpacking (**) is forbidden")
                self.check_all(key for key in keys if key is not None)
                self.check_all(values)
            case _:
                label = _REJECTED_LABELS.get(type(node), type(node).__name__)
                self.problems.append(f"Forbidden construct: {label}")

    def _check_call(self, func: ast.expr, args: list[ast.expr], keywords: list[ast.keyword]) -> None:
        if not _is_record_get(func):
            self.problems.append("Function calls are forbidden (only record.get() is allowed)")
            self.check(func)
        else:
            if not 1 <= len(args) <= 2:
                self.problems.append(f"record.get() takes 1 or 2 arguments, got {len(args)}")
            if keywords:
                self.problems.append("record.get() does not accept keyword arguments")
        self.check_all(args)
        self.check_all(keyword.value for keyword in keywords)


class _Interpreter:
    """Evaluates a whitelisted predicate tree against one record."""

    def __init__(self, record: Record) -> None:
        self._record = record

    def run(self, node: ast.AST) -> Any:
        match node:
            case ast.Expression(body=body):
                return self.run(body)
            case ast.Constant(value=value):
                return value
            case ast.Name(id=name):
                return self._lookup(name)
            case ast.Subscript(value=container, slice=index):
                return self._subscript(self.run(container), self.run(index))
            case ast.Call(args=args):
                return self._record_get([self.run(arg) for arg in args])
            case ast.Compare(left=left, ops=ops, comparators=comparators):
                return self._compare(left, ops, comparators)
            case ast.BoolOp(op=ast.And(), values=values):
                result: Any = True
                for value in values:
                    result = self.run(value)
                    if not result:
                        break
                return result
            case ast.BoolOp(op=ast.Or(), values=values):
                result = False
                for value in values:
                    result = self.run(value)
                    if result:
                        break
                return result
            case ast.BinOp(left=left, op=op, right=right):
                return self._arithmetic(op, self.run(left), self.run(right))
            case ast.UnaryOp(op=op, operand=operand):
                value = self.run(operand)
                try:
                    return _UNARY[type(op)](value)
                except TypeError as e:
                    raise PredicateEvaluationError(f"bad operand type for {type(op).__name__}: {type(value).__name__}") from e
            case ast.IfExp(test=test, body=body, orelse=orelse):
                return self.run(body) if self.run(test) else self.run(orelse)
            case ast.List(elts=elts):
                return [self.run(elt) for elt in elts]
            case ast.Tuple(elts=elts):
                return tuple(self.run(elt) for elt in elts)
            case ast.Set(elts=elts):
                try:
                    return {self.run(elt) for elt in elts}
                except TypeError as e:
                    raise PredicateEvaluationError(f"cannot build set literal: {e}") from e
            case ast.Dict(keys=keys, values=values):
                try:
                    return {self.run(k): self.run(v) for k, v in zip(keys, values, strict=True) if k is not None}
                except TypeError as e:
                    raise PredicateEvaluationError(f"cannot build dict literal: {e}") from e
        raise PredicateSecurityError(f"Unexpected construct in validated predicate: {type(node).__name__}")

    def _lookup(self, name: str) -> Any:
        match name:
            case "record":
                return self._record
            case "record_type":
                return self._record.record_type
            case "record_name":
                return self._record.record_name
            case "True":
                return True
            case "False":
                return False
            case "None":
                return None
        raise PredicateSecurityError(f"Unknown name: {name}")

    def _record_get(self, args: list[Any]) -> Any:
        try:
            return self._record.get(*args)
        except TypeError as e:
            raise PredicateEvaluationError(f"invalid record.get() argument: {e}") from e

    @staticmethod
    def _subscript(container: Any, key: Any) -> Any:
        try:
            return container[key]
        except KeyError as e:
            if isinstance(container, Record):
                msg = f"Field {key!r} not found on {container.record_type} record. Available fields: {container.keys()}"
            else:
                msg = f"Key {key!r} not found in {type(container).__name__}"
            raise PredicateEvaluationError(msg) from e
        except IndexError as e:
            raise PredicateEvaluationError(f"Index {key!r} out of range for {type(container).__name__}") from e
        except TypeError as e:
            raise PredicateEvaluationError(f"Cannot subscript {type(container).__name__} with {key!r}: {e}") from e

    def _compare(self, left: ast.expr, ops: list[ast.cmpop], comparators: list[ast.expr]) -> bool:
        current = self.run(left)
        for op, comparator in zip(ops, comparators, strict=True):
            other = self.run(comparator)
            try:
                holds = _COMPARISONS[type(op)](current, other)
            except TypeError as e:
                msg = f"cannot compare {type(current).__name__} and {type(other).__name__} with {type(op).__name__}"
                raise PredicateEvaluationError(msg) from e
            if not holds:
                return False
            current = other
        return True

    @staticmethod
    def _arithmetic(op: ast.operator, left: Any, right: Any) -> Any:
        name = type(op).__name__
        try:
            return _ARITHMETIC[type(op)](left, right)
        except ZeroDivisionError as e:
            raise PredicateEvaluationError(f"division by zero in {name}") from e
        except TypeError as e:
            raise PredicateEvaluationError(f"unsupported operand types for {name}: {type(left).__name__} and {type(right).__name__}") from e


class PredicateParser:
    """A compiled, whitelisted predicate over records.

    The expression is parsed and checked once, at construction. Instances
    are callable and can stand in anywhere a ``Callable[[Record], bool]`` is
    expected; the result is always coerced to bool.

    Allowed: field access through ``record``, the ``record_type`` and
    ``record_name`` names, comparisons (``is``/``is not`` only against
    None), ``and``/``or``/``not``, ``+ - * / // %``, conditional
    expressions, and str/number/bool/None literals plus list, tuple, set
    and dict displays of them.

    Example:
        adults = PredicateParser("record['age'] >= 18")
        adults(Record.named("r1", "Person", age=30))  # True
    """

    def __init__(self, expression: str) -> None:
        """Parse and check ``expression``.

        Raises:
            PredicateSyntaxError: If it is not a Python expression
            PredicateSecurityError: If it uses anything outside the whitelist;
                every problem found is listed, separated by "; "
        """
        self._expression = expression
        try:
            self._tree = ast.parse(expression, mode="eval")
        except SyntaxError as e:
            raise PredicateSyntaxError(f"Invalid syntax in predicate {expression!r}: {e.msg}") from e

        whitelist = _Whitelist()
        whitelist.check(self._tree)
        if whitelist.problems:
            raise PredicateSecurityError("; ".join(whitelist.problems))

    @property
    def expression(self) -> str:
        return self._expression

    def evaluate(self, record: Record) -> bool:
        """Raises PredicateEvaluationError on missing fields or bad operand types."""
        return bool(_Interpreter(record).run(self._tree))

    def __call__(self, record: Record) -> bool:
        return self.evaluate(record)

    def __repr__(self) -> str:
        return f"PredicateParser({self._expression!r})"


def as_callable(predicate: str | Callable[[Record], bool]) -> Callable[[Record], bool]:
    """Compile string predicates; callables pass through unchanged."""
    if isinstance(predicate, str):
        return PredicateParser(predicate)
    return predicate

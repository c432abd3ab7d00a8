# src/mockcloud/engine/__init__.py
"""Operation execution and query predicate evaluation."""

from mockcloud.engine.executor import ExecutionEngine
from mockcloud.engine.predicates import PredicateParser, as_callable

__all__ = [
    "ExecutionEngine",
    "PredicateParser",
    "as_callable",
]

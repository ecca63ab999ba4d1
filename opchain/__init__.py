"""Composable async operations: sequential, parallel and fallible combinators, and OneOrMany."""

__version__ = "0.1.0"
__all__ = ["agent_ops", "builder", "one_or_many", "op", "parallel", "result", "try_op"]
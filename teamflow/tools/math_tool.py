"""Arithmetic expression tool backed by a restricted AST evaluator."""

from __future__ import annotations

import ast
import math
import operator
from typing import Any, Callable

from .base import BaseTool


_BINARY_OPS: dict[type[ast.operator], Callable[[Any, Any], Any]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS: dict[type[ast.unaryop], Callable[[Any], Any]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

_FUNCTIONS: dict[str, Callable[..., float]] = {
    "sqrt": math.sqrt,
    "abs": abs,
    "exp": math.exp,
    "ln": math.log,
    "log": math.log,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "floor": math.floor,
    "ceil": math.ceil,
}

_CONSTANTS = {"pi": math.pi, "e": math.e}

MAX_EXPONENT = 1000
MAX_RESULT_BITS = 4096


def evaluate_expression(expression: str) -> float | int:
    """Evaluate a plain arithmetic expression.

    Raises ``ValueError`` for anything outside numbers, the operators above,
    whitelisted functions and constants.
    """
    tree = ast.parse(expression.strip(), mode="eval")
    return _eval(tree.body)


def _eval(node: ast.AST) -> Any:
    if isinstance(node, ast.Constant) and isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
        return node.value
    if isinstance(node, ast.Name) and node.id in _CONSTANTS:
        return _CONSTANTS[node.id]
    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        left = _eval(node.left)
        right = _eval(node.right)
        if isinstance(node.op, ast.Pow):
            _check_power(left, right)
        return _BINARY_OPS[type(node.op)](left, right)
    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval(node.operand))
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and node.func.id in _FUNCTIONS:
        if node.keywords:
            raise ValueError("keyword arguments are not supported")
        return _FUNCTIONS[node.func.id](*[_eval(arg) for arg in node.args])
    raise ValueError(f"unsupported expression element: {ast.dump(node)[:60]}")


def _check_power(base: Any, exponent: Any) -> None:
    # Integer powers run as one uninterruptible big-int operation.
    if abs(exponent) > MAX_EXPONENT:
        raise ValueError(f"exponent {exponent} is too large")
    if abs(base) > 1 and exponent > 0 and exponent * math.log2(abs(base)) > MAX_RESULT_BITS:
        raise ValueError("result is too large")


def _format_number(value: float | int) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class MathTool(BaseTool):
    name = "math"
    description = "Evaluates an arithmetic expression, e.g. '2 * (3 + 4)'."

    async def call(self, args: str) -> str:
        try:
            return f"Result: {_format_number(evaluate_expression(args))}"
        except (SyntaxError, ValueError, TypeError, ArithmeticError) as exc:
            return f"Math error: {exc}"

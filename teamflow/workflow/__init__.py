"""Workflow state tracking and the dispatch engine."""

from .state import StepResult, WorkflowState, WorkflowStatus
from .executor import WorkflowExecutor, WorkflowResult

__all__ = [
    "StepResult",
    "WorkflowState",
    "WorkflowStatus",
    "WorkflowExecutor",
    "WorkflowResult",
]

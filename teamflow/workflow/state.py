"""Per-run workflow state tracking."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import time
from typing import Any
import uuid


@dataclass(slots=True)
class StepResult:
    """One agent invocation within a run."""

    step_index: int
    agent: str
    input: str
    output: str
    timestamp: float
    duration_ms: float


@dataclass(slots=True)
class WorkflowStatus:
    """Read-only snapshot of a run for status reporting."""

    workflow_id: str
    current_step: int
    current_agent: str | None
    execution_time_seconds: float
    is_complete: bool


@dataclass(slots=True)
class WorkflowState:
    """Mutable record of one in-flight workflow execution.

    Owned by a single ``WorkflowExecutor.execute`` call; never shared across
    runs.
    """

    workflow_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    current_step: int = 0
    current_agent: str | None = None
    variables: dict[str, str] = field(default_factory=dict)
    start_time: float = field(default_factory=time.time)
    step_results: list[StepResult] = field(default_factory=list)
    metadata: dict[str, str] = field(default_factory=dict)
    completed_at: float | None = None

    def set_variable(self, key: str, value: str) -> None:
        self.variables[key] = value

    def get_variable(self, key: str) -> str | None:
        return self.variables.get(key)

    def set_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value

    def get_metadata(self, key: str) -> str | None:
        return self.metadata.get(key)

    def add_step_result(self, result: StepResult) -> None:
        self.step_results.append(result)

    def mark_complete(self) -> None:
        if self.completed_at is None:
            self.completed_at = time.time()

    def is_complete(self) -> bool:
        return self.completed_at is not None

    def execution_time_seconds(self) -> float:
        end = self.completed_at if self.completed_at is not None else time.time()
        return max(0.0, end - self.start_time)

    def status(self) -> WorkflowStatus:
        return WorkflowStatus(
            workflow_id=self.workflow_id,
            current_step=self.current_step,
            current_agent=self.current_agent,
            execution_time_seconds=self.execution_time_seconds(),
            is_complete=self.is_complete(),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to serializable dictionary."""
        return asdict(self)

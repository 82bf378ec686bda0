# src/prover_cache/coordinator/types.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from ..tasks.task_models import TaskType


class ProofStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


class ProofFailureType(StrEnum):
    UNDEFINED = "undefined"
    PANIC = "panic"
    NO_PANIC = "no_panic"


@dataclass(frozen=True, slots=True)
class SubmitProofRequest:
    """
    What the prover sent to the coordinator for one task.

    Delivered to listeners once the coordinator has accepted the submission.
    """

    task_id: str
    task_type: TaskType = TaskType.UNDEFINED
    status: ProofStatus = ProofStatus.OK
    proof: str = ""
    failure_type: ProofFailureType | None = None
    failure_msg: str | None = None
    hard_fork_name: str = ""

#!/usr/bin/env python3
"""Data models shared by the lister, the action gate and the coordinators."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

DISK_FORMATS = ("qcow2", "raw", "vdi")

# virsh prints "-" in the Id column for inactive domains
NO_ID = "-"


class StatusKind(Enum):
    """Canonical run state of a domain."""

    RUNNING = "running"
    SHUT_OFF = "shut off"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CanonicalStatus:
    """Normalized status; ``raw`` keeps the hypervisor's text verbatim."""

    kind: StatusKind
    raw: str = ""

    @property
    def is_running(self) -> bool:
        return self.kind is StatusKind.RUNNING

    @property
    def is_shut_off(self) -> bool:
        return self.kind is StatusKind.SHUT_OFF

    @classmethod
    def unknown(cls, raw: str) -> "CanonicalStatus":
        return cls(StatusKind.UNKNOWN, raw)

    def __str__(self) -> str:
        if self.kind is StatusKind.UNKNOWN:
            return self.raw
        return self.kind.value


RUNNING = CanonicalStatus(StatusKind.RUNNING, "running")
SHUT_OFF = CanonicalStatus(StatusKind.SHUT_OFF, "shut off")


@dataclass(frozen=True)
class DomainRecord:
    """One row of the hypervisor's domain list."""

    id: str
    name: str
    status: CanonicalStatus

    @property
    def is_active(self) -> bool:
        return self.id not in ("", NO_ID)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "status": str(self.status)}


class Action(Enum):
    """Operations the VM menu can offer; values are the virsh verbs."""

    START = "start"
    REBOOT = "reboot"
    SHUTDOWN = "shutdown"
    FORCE_STOP = "destroy"
    UNDEFINE = "undefine"
    DISK_OPS = "diskops"
    RENAME = "domrename"


class StepPolicy(Enum):
    """What a failed step means for the rest of the operation."""

    HARD_STOP = "hard_stop"  # abort, nothing after it runs
    BEST_EFFORT = "best_effort"  # record a warning and carry on


class DeleteOutcome(Enum):
    DELETED = "deleted"
    NOTHING_TO_DELETE = "nothing_to_delete"
    SKIPPED = "skipped"


@dataclass
class StepOutcome:
    """Result of a single step of a multi-step operation."""

    step: str
    policy: StepPolicy
    ok: bool
    message: str = ""
    error: Optional[BaseException] = None


@dataclass
class OperationReport:
    """Everything an operation did, including the steps that failed softly."""

    operation: str
    domain: str
    steps: List[StepOutcome] = field(default_factory=list)
    outputs: List[str] = field(default_factory=list)
    outcome: Optional[DeleteOutcome] = None

    def add_step(
        self,
        step: str,
        ok: bool,
        message: str = "",
        policy: StepPolicy = StepPolicy.HARD_STOP,
        error: Optional[BaseException] = None,
    ) -> StepOutcome:
        outcome = StepOutcome(step=step, policy=policy, ok=ok, message=message, error=error)
        self.steps.append(outcome)
        return outcome

    def add_output(self, text: Optional[str]) -> None:
        if text and text.strip():
            self.outputs.append(text.strip())

    @property
    def warnings(self) -> List[StepOutcome]:
        return [s for s in self.steps if not s.ok and s.policy is StepPolicy.BEST_EFFORT]

    @property
    def succeeded(self) -> bool:
        return all(s.ok for s in self.steps if s.policy is StepPolicy.HARD_STOP)

    def step(self, name: str) -> Optional[StepOutcome]:
        for s in self.steps:
            if s.step == name:
                return s
        return None

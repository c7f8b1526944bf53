"""Domain models for pc_upstream — pure dataclasses, no I/O."""

from dataclasses import dataclass, field

from src.pc_common.enums import FetchOutcome
from src.pc_upstream.application.schemas import RpcAccountResponse


@dataclass
class EndpointAttempt:
    """One POST against one endpoint."""

    endpoint: str
    elapsed_ms: float
    error: str | None = None


@dataclass
class FetchResult:
    outcome: FetchOutcome
    response: RpcAccountResponse | None = None
    reason: str | None = None
    attempts: list[EndpointAttempt] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.outcome is FetchOutcome.OK

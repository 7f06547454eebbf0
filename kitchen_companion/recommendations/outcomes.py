from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .models import MealPlan, Recipe


class OutcomeKind(str, Enum):
    success = "success"
    domain_refusal = "domain_refusal"
    malformed_output = "malformed_output"
    transport_failure = "transport_failure"


@dataclass(frozen=True)
class Success:
    payload: Recipe | MealPlan
    kind: OutcomeKind = OutcomeKind.success


@dataclass(frozen=True)
class DomainRefusal:
    """The model judged the request's inputs invalid. Not retried."""

    reason: str
    kind: OutcomeKind = OutcomeKind.domain_refusal


@dataclass(frozen=True)
class MalformedOutput:
    raw_text: str
    detail: str = ""
    kind: OutcomeKind = OutcomeKind.malformed_output


@dataclass(frozen=True)
class TransportFailure:
    cause: BaseException
    kind: OutcomeKind = OutcomeKind.transport_failure

    @property
    def message(self) -> str:
        return str(self.cause) or type(self.cause).__name__


CompletionOutcome = Union[Success, DomainRefusal, MalformedOutput, TransportFailure]

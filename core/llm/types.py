from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class CompletionMessage:
    role: Role
    content: str | None


@dataclass(frozen=True)
class CompletionResponse:
    finish_reason: str | None
    message: CompletionMessage

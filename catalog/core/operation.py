"""
Per-operation context: a short operation id plus the request correlation id,
passed explicitly down the create call chain so every log event carries both.
"""

import logging
import random
from dataclasses import dataclass, field

from catalog.core.constants import OPERATION_ID_CHARACTERS, OPERATION_ID_LENGTH
from catalog.core.logging import OperationLogger

_system_random = random.SystemRandom()


def generate_operation_id(rng: random.Random | None = None) -> str:
    """8 characters from A-Z0-9. Pass a seeded Random for deterministic ids."""
    rng = rng or _system_random
    return "".join(rng.choices(OPERATION_ID_CHARACTERS, k=OPERATION_ID_LENGTH))


@dataclass(frozen=True)
class OperationContext:
    operation_id: str
    correlation_id: str | None = None
    logger: OperationLogger = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        extra = {"operation_id": self.operation_id}
        if self.correlation_id:
            extra["correlation_id"] = self.correlation_id
        object.__setattr__(self, "logger", OperationLogger(logging.getLogger("catalog.operations"), extra))

    @classmethod
    def start(cls, rng: random.Random | None = None, correlation_id: str | None = None) -> "OperationContext":
        return cls(operation_id=generate_operation_id(rng), correlation_id=correlation_id)

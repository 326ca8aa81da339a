from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict

# Largest integer the canonical serializer can encode.
MAX_FIELD_VALUE = 2**64 - 1


def _check_int(name: str, value: Any, minimum: int) -> None:
    # bool is an int subclass but serializes as true/false.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Record {name} must be an int, got {type(value).__name__}")
    if value < minimum or value > MAX_FIELD_VALUE:
        raise ValueError(
            f"Record {name} must be in [{minimum}, {MAX_FIELD_VALUE}], got {value}"
        )


@dataclass(frozen=True)
class Record:
    id: int
    origin: str
    destination: str
    quantity: int

    def __post_init__(self) -> None:
        _check_int("id", self.id, 1)
        _check_int("quantity", self.quantity, 0)
        for name in ("origin", "destination"):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"Record {name} must be a str")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = ["MAX_FIELD_VALUE", "Record"]

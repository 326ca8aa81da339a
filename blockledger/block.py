from __future__ import annotations

import hashlib
import time
from enum import Enum
from typing import Any, Dict, List, Optional

import orjson
from loguru import logger

from .errors import ContractViolation
from .records import Record

BATCH_SIZE = 5
GENESIS_PREDECESSOR_HASH = "0"


class BlockState(str, Enum):
    OPEN = "open"
    SEALED = "sealed"


class Block:
    """Fixed-capacity batch of records linked to its predecessor by hash.

    A block starts OPEN and accepts records until it holds BATCH_SIZE of
    them, at which point it seals itself: the content hash is computed once
    and never recomputed. Records offered to a full or sealed block are
    dropped without error.
    """

    def __init__(
        self,
        sequence_number: int,
        predecessor_hash: str,
        *,
        created_at: Optional[int] = None,
    ) -> None:
        self.sequence_number = sequence_number
        self.created_at: int = int(time.time()) if created_at is None else created_at
        self.records: List[Record] = []
        self.predecessor_hash = predecessor_hash
        self.content_hash: Optional[str] = None
        self.state = BlockState.OPEN

    @property
    def is_full(self) -> bool:
        return len(self.records) >= BATCH_SIZE

    @property
    def is_sealed(self) -> bool:
        return self.state is BlockState.SEALED

    def add_record(self, record: Record) -> None:
        if self.is_sealed or self.is_full:
            logger.bind(event="record_dropped").debug(
                {"sequence_number": self.sequence_number, "record_id": record.id}
            )
            return
        self.records.append(record)
        if len(self.records) == BATCH_SIZE:
            self.seal()

    def seal(self) -> str:
        if self.is_sealed:
            raise ContractViolation(f"Block {self.sequence_number} is already sealed")
        if len(self.records) != BATCH_SIZE:
            raise ContractViolation(
                f"Block {self.sequence_number} holds {len(self.records)} records; "
                f"sealing requires exactly {BATCH_SIZE}"
            )
        return self._seal()

    def seal_genesis(self) -> str:
        # Genesis is the only block sealed empty.
        if self.is_sealed:
            raise ContractViolation("Genesis block is already sealed")
        if (
            self.sequence_number != 0
            or self.records
            or self.predecessor_hash != GENESIS_PREDECESSOR_HASH
        ):
            raise ContractViolation(
                f"Block {self.sequence_number} is not an empty genesis block"
            )
        return self._seal()

    def _seal(self) -> str:
        self.content_hash = self.calculate_hash()
        self.state = BlockState.SEALED
        logger.bind(event="block_sealed").info(
            {
                "sequence_number": self.sequence_number,
                "records": len(self.records),
                "hash": self.content_hash,
            }
        )
        return self.content_hash

    def hash_payload(self) -> Dict[str, Any]:
        return {
            "sequence_number": self.sequence_number,
            "created_at": self.created_at,
            "records": [r.to_dict() for r in self.records],
            "predecessor_hash": self.predecessor_hash,
        }

    def calculate_hash(self) -> str:
        data = orjson.dumps(self.hash_payload(), option=orjson.OPT_SORT_KEYS)
        return hashlib.sha256(data).hexdigest()

    def to_dict(self) -> Dict[str, Any]:
        out = self.hash_payload()
        out["content_hash"] = self.content_hash
        out["state"] = self.state.value
        return out

    def __repr__(self) -> str:
        short = (self.content_hash or "-")[:10]
        return (
            f"Block(sequence_number={self.sequence_number}, "
            f"records={len(self.records)}, hash={short})"
        )


__all__ = ["BATCH_SIZE", "GENESIS_PREDECESSOR_HASH", "Block", "BlockState"]

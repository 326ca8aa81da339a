from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from loguru import logger

from .block import BATCH_SIZE, GENESIS_PREDECESSOR_HASH, Block
from .errors import ContractViolation
from .records import Record


@dataclass(frozen=True)
class ChainFault:
    sequence_number: int
    reason: str  # missing | unsealed | hash_mismatch | link_mismatch


class Ledger:
    """In-memory chain of sealed blocks keyed by sequence number.

    Not safe for concurrent writers: add_block reads the tip, builds and
    seals a block, then advances the tip as separate steps.
    """

    def __init__(self) -> None:
        genesis = Block(0, GENESIS_PREDECESSOR_HASH)
        genesis.seal_genesis()
        self.blocks: Dict[int, Block] = {0: genesis}
        self.tip: int = 0

    @property
    def tip_block(self) -> Block:
        return self.blocks[self.tip]

    def __len__(self) -> int:
        return len(self.blocks)

    def __iter__(self) -> Iterator[Block]:
        for n in sorted(self.blocks):
            yield self.blocks[n]

    def add_block(self, records: Iterable[Record]) -> Block:
        batch = list(records)
        if len(batch) != BATCH_SIZE:
            raise ContractViolation(
                f"A block must contain exactly {BATCH_SIZE} records, got {len(batch)}"
            )
        tip_block = self.blocks.get(self.tip)
        if tip_block is None:
            raise ContractViolation(f"Tip block {self.tip} is missing")
        prev_hash = tip_block.content_hash
        if prev_hash is None:
            raise ContractViolation(f"Tip block {self.tip} is not sealed")

        block = Block(self.tip + 1, prev_hash)
        for rec in batch:
            block.add_record(rec)
        if not block.is_sealed:
            raise ContractViolation(f"Block {block.sequence_number} failed to seal")

        self.blocks[block.sequence_number] = block
        self.tip = block.sequence_number
        logger.bind(event="block_appended").info(
            {"sequence_number": block.sequence_number, "tip": self.tip}
        )
        return block

    def get_block_by_sequence_number(self, n: int) -> Optional[Block]:
        return self.blocks.get(n)

    def audit_chain(self) -> Optional[ChainFault]:
        """Walk genesis..tip and return the first integrity failure, if any.

        Each block's hash is re-derived from its current contents and its
        predecessor link is compared against the previous block's stored
        hash. Seal state flags are not consulted.
        """
        expected_prev = GENESIS_PREDECESSOR_HASH
        for n in range(0, self.tip + 1):
            block = self.blocks.get(n)
            fault: Optional[str] = None
            if block is None:
                fault = "missing"
            elif block.content_hash is None:
                fault = "unsealed"
            elif block.content_hash != block.calculate_hash():
                fault = "hash_mismatch"
            elif block.predecessor_hash != expected_prev:
                fault = "link_mismatch"
            if fault is not None:
                logger.bind(event="chain_invalid").warning(
                    {"sequence_number": n, "reason": fault}
                )
                return ChainFault(n, fault)
            expected_prev = block.content_hash  # type: ignore[union-attr]
        return None

    def validate_chain(self) -> bool:
        return self.audit_chain() is None


__all__ = ["ChainFault", "Ledger"]

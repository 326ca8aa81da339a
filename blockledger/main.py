from __future__ import annotations

import argparse
from typing import List

from dotenv import load_dotenv
from loguru import logger

from .block import BATCH_SIZE
from .config import load_settings
from .ledger import Ledger
from .logging import setup_logging
from .records import Record


def fabricate_batch(first_id: int) -> List[Record]:
    return [
        Record(
            id=i,
            origin=f"User{i}",
            destination=f"User{i + 1}",
            quantity=i * 10,
        )
        for i in range(first_id, first_id + BATCH_SIZE)
    ]


def run(blocks: int, first_record_id: int = 1) -> Ledger:
    ledger = Ledger()
    next_id = first_record_id
    for _ in range(blocks):
        block = ledger.add_block(fabricate_batch(next_id))
        next_id += BATCH_SIZE
        logger.info(f"Added block with sequence number {block.sequence_number}")
    return ledger


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    settings = load_settings()

    p = argparse.ArgumentParser(prog="blockledger")
    p.add_argument("--blocks", type=int, default=settings.demo.blocks, help="Number of batches to append")
    p.add_argument("--first-id", type=int, default=settings.demo.first_record_id, dest="first_id")
    p.add_argument("--log-level", type=str, default=settings.log_level, dest="log_level")
    args = p.parse_args(argv)
    if args.blocks < 0:
        p.error("--blocks must be non-negative")
    if args.first_id < 1:
        p.error("--first-id must be positive")

    setup_logging(settings.log_dir, args.log_level, settings.log_to_file)
    ledger = run(args.blocks, args.first_id)

    if ledger.validate_chain():
        logger.info("The blockchain is valid.")
        return 0
    logger.error("The blockchain is not valid.")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

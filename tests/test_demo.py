from __future__ import annotations

from pathlib import Path

import pytest
from loguru import logger

from blockledger.logging import setup_logging
from blockledger.main import fabricate_batch, main, run


def test_fabricate_batch_numbering():
    batch = fabricate_batch(6)
    assert [r.id for r in batch] == [6, 7, 8, 9, 10]
    assert batch[0].origin == "User6"
    assert batch[0].destination == "User7"
    assert batch[-1].quantity == 100


def test_run_builds_valid_chain():
    ledger = run(20)
    assert ledger.tip == 20
    assert ledger.validate_chain()
    last = ledger.get_block_by_sequence_number(20)
    assert last.records[-1].id == 100


def test_main_exits_zero_for_valid_chain(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BLOCKLEDGER_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("BLOCKLEDGER_LOG_TO_FILE", "true")
    assert main(["--blocks", "3", "--log-level", "WARNING"]) == 0
    assert (tmp_path / "logs" / "app.log").exists()
    logger.remove()


def test_setup_logging_writes_serialized_file(tmp_path: Path):
    setup_logging(str(tmp_path), "INFO", to_file=True)
    logger.bind(event="probe").info("hello")
    logger.remove()
    text = (tmp_path / "app.log").read_text(encoding="utf-8")
    assert '"event": "probe"' in text


def test_main_rejects_non_positive_first_id():
    with pytest.raises(SystemExit) as exc:
        main(["--first-id", "0"])
    assert exc.value.code == 2

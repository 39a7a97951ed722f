# -*- coding: utf-8 -*-
"""
コマンドラインのテスト。
"""

import logging
from pathlib import Path

import pytest

from core import logger
from core.logger import LogLevel
from main import default_output_path, main


@pytest.fixture(autouse=True)
def _reset_log_level():
    yield
    logger.set_log_level(LogLevel.INFO)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8", newline="")
    return path


def test_default_output_path():
    assert default_output_path(Path("/tmp/doc.html")) == Path("/tmp/doc_typograf.html")


def test_process_file_with_default_output(tmp_path):
    src = _write(tmp_path / "doc.txt", 'Москва - столица "Привет"')

    assert main([str(src), "-l", "ru"]) == 0
    out = tmp_path / "doc_typograf.txt"
    assert out.read_text(encoding="utf-8") == "Москва\u00a0— столица «Привет»"


def test_explicit_output_and_mode(tmp_path):
    src = _write(tmp_path / "in.txt", "(c) 2024\r\nnext")
    out = tmp_path / "sub" / "out.txt"

    assert main([str(src), "-o", str(out), "-m", "name"]) == 0
    assert out.read_bytes().decode("utf-8") == "&copy; 2024\nnext"


def test_enable_and_disable_options(tmp_path):
    src = _write(tmp_path / "in.html", "<p>Wait...</p>")
    out = tmp_path / "out.txt"

    args = [str(src), "-o", str(out), "--enable", "common/html/stripTags", "--disable", "common/punctuation/*"]
    assert main(args) == 0
    assert out.read_text(encoding="utf-8") == "Wait..."


def test_missing_input_returns_error(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="typograf")
    missing = tmp_path / "nope.txt"

    assert main([str(missing)]) == 1
    assert str(missing) in caplog.text
    assert not (tmp_path / "nope_typograf.txt").exists()


def test_list_rules(caplog):
    caplog.set_level(logging.INFO, logger="typograf")

    assert main(["--list-rules", "-l", "ru", "--disable", "ru/dash/main"]) == 0
    assert "ru/dash/main" in caplog.text
    assert "common/space/delBOM" in caplog.text


def test_input_is_required():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_unknown_language_is_rejected():
    with pytest.raises(SystemExit):
        main(["x.txt", "-l", "xx"])

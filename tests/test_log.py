import re

import pytest

from licensekit.log import log, log_path, shutdown_log


@pytest.fixture
def fresh_log(tmp_path, monkeypatch):
    shutdown_log()
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    yield
    shutdown_log()


def test_log_path_name(fresh_log):
    assert log_path().endswith("open-license.log")


def test_log_writes_timestamped_lines(fresh_log):
    log("[INFO] first")
    log("[WARN] second\n")
    shutdown_log()
    with open(log_path(), encoding="utf-8") as handle:
        lines = handle.read().splitlines()
    assert lines[-2].endswith("[INFO] first")
    assert lines[-1].endswith("[WARN] second")
    assert re.match(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\[INFO\]", lines[-2])


def test_log_reopens_after_shutdown(fresh_log):
    log("one")
    shutdown_log()
    log("two")
    shutdown_log()
    with open(log_path(), encoding="utf-8") as handle:
        content = handle.read()
    assert content.index("one") < content.index("two")
# tests/install_cost/test_measure.py
import os
import sys

import pytest

from install_cost.errors import MeasurementError
from install_cost.measure import MeasurementRecord, collect, count_sub_dependencies, folder_size
from install_cost.sandbox import Sandbox


@pytest.fixture()
def sandbox(tmp_path):
    root = tmp_path / "sandbox"
    (root / "node_modules").mkdir(parents=True)
    return Sandbox(root=root)


def _populate(modules):
    (modules / "a" / "lib").mkdir(parents=True)
    (modules / "a" / "index.js").write_bytes(b"x" * 100)
    (modules / "a" / "lib" / "util.js").write_bytes(b"x" * 50)
    (modules / "dep1").mkdir()
    (modules / "dep1" / "index.js").write_bytes(b"y" * 10)
    (modules / "dep2").mkdir()


def _lstat_total(root):
    total = os.lstat(root).st_size
    for dirpath, dirnames, filenames in os.walk(root):
        for entry in dirnames + filenames:
            total += os.lstat(os.path.join(dirpath, entry)).st_size
    return total


def test_folder_size_is_recursive(sandbox):
    _populate(sandbox.modules_dir)
    assert folder_size(sandbox.modules_dir) == _lstat_total(sandbox.modules_dir)


def test_folder_size_counts_directory_entries(sandbox):
    modules = sandbox.modules_dir
    _populate(modules)
    directories = [modules, modules / "a", modules / "a" / "lib", modules / "dep1", modules / "dep2"]
    assert folder_size(modules) == 160 + sum(d.lstat().st_size for d in directories)


@pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
def test_folder_size_does_not_follow_symlinks(sandbox):
    _populate(sandbox.modules_dir)
    (sandbox.modules_dir / ".bin").mkdir()
    link = sandbox.modules_dir / ".bin" / "a"
    os.symlink(sandbox.modules_dir / "a", link, target_is_directory=True)
    before = _lstat_total(sandbox.modules_dir) - link.lstat().st_size
    assert folder_size(sandbox.modules_dir) == before + link.lstat().st_size
    assert folder_size(sandbox.modules_dir) == _lstat_total(sandbox.modules_dir)


def test_sub_dependencies_exclude_the_dependency_itself(sandbox):
    _populate(sandbox.modules_dir)
    assert count_sub_dependencies(sandbox.modules_dir) == 2


def test_collect_builds_a_record(sandbox):
    _populate(sandbox.modules_dir)
    record = collect("a", 1234.5, sandbox)
    assert record == MeasurementRecord(
        name="a",
        duration_ms=1234.5,
        size=_lstat_total(sandbox.modules_dir),
        sub_dependencies=2,
    )


def test_record_is_immutable(sandbox):
    record = MeasurementRecord(name="a", duration_ms=1.0, size=1, sub_dependencies=0)
    with pytest.raises(AttributeError):
        record.size = 2


def test_missing_node_modules_is_a_measurement_error(tmp_path):
    with pytest.raises(MeasurementError, match="Could not measure a"):
        collect("a", 1.0, Sandbox(root=tmp_path))


def test_size_failure_is_a_measurement_error(sandbox, monkeypatch):
    _populate(sandbox.modules_dir)

    def _vanished(_path):
        raise FileNotFoundError("deleted underneath us")

    monkeypatch.setattr("install_cost.measure.folder_size", _vanished)
    with pytest.raises(MeasurementError):
        collect("a", 1.0, sandbox)

# tests/install_cost/test_sandbox.py
import shutil

import pytest

from install_cost.errors import SandboxError
from install_cost.sandbox import Sandbox, SandboxRegistry, seed_config


def test_allocate_creates_distinct_empty_directories(sandbox_root):
    registry = SandboxRegistry(sandbox_root)
    sandboxes = [registry.allocate() for _ in range(5)]

    roots = [s.root for s in sandboxes]
    assert len(set(roots)) == 5
    for root in roots:
        assert root.is_dir()
        assert root.parent == sandbox_root
        assert root.name.startswith("install-cost-")
        assert list(root.iterdir()) == []
    assert registry.paths == roots


def test_allocate_creates_missing_base_dir(tmp_path):
    registry = SandboxRegistry(tmp_path / "not" / "yet")
    assert registry.allocate().root.is_dir()


def test_allocate_failure_is_a_sandbox_error(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("")
    with pytest.raises(SandboxError, match="Could not create sandbox"):
        SandboxRegistry(blocker).allocate()


def test_sandbox_paths(tmp_path):
    sandbox = Sandbox(root=tmp_path)
    assert sandbox.config_path == tmp_path / ".npmrc"
    assert sandbox.cache_dir == tmp_path / ".cache"
    assert sandbox.modules_dir == tmp_path / "node_modules"
    assert sandbox.manifest_path == tmp_path / "package.json"
    assert sandbox.lock_path == tmp_path / "npm-shrinkwrap.json"


def test_context_manager_removes_sandboxes(sandbox_root):
    with SandboxRegistry(sandbox_root) as registry:
        first = registry.allocate().root
        (first / "node_modules").mkdir()
        second = registry.allocate().root
    assert not first.exists()
    assert not second.exists()
    assert registry.paths == []


def test_context_manager_cleans_up_on_error(sandbox_root):
    with pytest.raises(RuntimeError):
        with SandboxRegistry(sandbox_root) as registry:
            root = registry.allocate().root
            raise RuntimeError("boom")
    assert not root.exists()


def test_keep_leaves_sandboxes_on_disk(sandbox_root):
    with SandboxRegistry(sandbox_root, keep=True) as registry:
        root = registry.allocate().root
    assert root.is_dir()
    assert registry.paths == [root]


def test_cleanup_tolerates_already_removed_sandbox(sandbox_root):
    registry = SandboxRegistry(sandbox_root)
    root = registry.allocate().root
    shutil.rmtree(root)
    registry.cleanup()
    registry.cleanup()
    assert registry.paths == []


def test_seed_config_without_host_npmrc(tmp_path, sandbox_root):
    sandbox = SandboxRegistry(sandbox_root).allocate()
    seed_config(sandbox, tmp_path)
    assert sandbox.config_path.read_text() == f"\ncache={sandbox.root / '.cache'}"


def test_seed_config_copies_host_npmrc(tmp_path, sandbox_root):
    (tmp_path / ".npmrc").write_text("registry=https://npm.example.com/\n//npm.example.com/:_authToken=abc")
    sandbox = SandboxRegistry(sandbox_root).allocate()
    seed_config(sandbox, tmp_path)
    assert sandbox.config_path.read_text() == (
        "registry=https://npm.example.com/\n//npm.example.com/:_authToken=abc"
        f"\ncache={sandbox.cache_dir}"
    )


def test_seed_config_falls_back_to_empty_when_copy_fails(tmp_path, sandbox_root, monkeypatch):
    (tmp_path / ".npmrc").write_text("registry=https://npm.example.com/")

    def _broken_copy(*_args, **_kwargs):
        raise PermissionError("denied")

    monkeypatch.setattr("install_cost.sandbox.shutil.copyfile", _broken_copy)
    sandbox = SandboxRegistry(sandbox_root).allocate()
    seed_config(sandbox, tmp_path)
    assert sandbox.config_path.read_text() == f"\ncache={sandbox.cache_dir}"


def test_seed_config_ignores_npmrc_directory(tmp_path, sandbox_root):
    (tmp_path / ".npmrc").mkdir()
    sandbox = SandboxRegistry(sandbox_root).allocate()
    seed_config(sandbox, tmp_path)
    assert sandbox.config_path.read_text() == f"\ncache={sandbox.cache_dir}"


def test_seed_config_into_missing_sandbox_is_fatal(tmp_path):
    with pytest.raises(SandboxError):
        seed_config(Sandbox(root=tmp_path / "gone"), tmp_path)

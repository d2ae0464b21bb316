# tests/conftest.py
import json
import logging
import stat
import sys
import textwrap

import pytest

# ---------------------------------------------------------------------------
# A stand-in for ``npm``: reads package.json and fakes a node_modules tree.
#
# * the dependency gets ``node_modules/<name>/index.js`` (size = len(version))
# * ``FAKE_NPM_SUBDEPS=<n>`` adds n extra sibling packages
# * ``FAKE_NPM_FAIL=<name>`` makes the install of <name> exit 1
# * every invocation appends "<cwd>\t<name>" to ``FAKE_NPM_LOG`` if set
# ---------------------------------------------------------------------------
FAKE_NPM = textwrap.dedent(
    """\
    #!{python}
    import json, os, sys
    from pathlib import Path

    deps = json.loads(Path("package.json").read_text())["dependencies"]
    name, version = next(iter(deps.items()))

    log = os.environ.get("FAKE_NPM_LOG")
    if log:
        with open(log, "a") as handle:
            handle.write(os.getcwd() + "\\t" + name + "\\n")

    if os.environ.get("FAKE_NPM_FAIL") == name:
        sys.stderr.write("npm ERR! 404 Not Found: " + name + "\\n")
        sys.exit(1)

    modules = Path("node_modules")
    (modules / name).mkdir(parents=True)
    (modules / name / "index.js").write_text("x" * len(version))
    for i in range(int(os.environ.get("FAKE_NPM_SUBDEPS", "0"))):
        (modules / ("sub%d" % i)).mkdir()
        (modules / ("sub%d" % i) / "index.js").write_text("y")
    """
)

@pytest.fixture()
def fake_npm(tmp_path):
    """Path to an executable fake npm."""
    path = tmp_path / "bin" / "fake-npm"
    path.parent.mkdir()
    path.write_text(FAKE_NPM.format(python=sys.executable))
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture()
def project(tmp_path, monkeypatch):
    """An empty project directory that is also the working directory."""
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    for var in ("INSTALL_COST_NPM", "INSTALL_COST_TMPDIR", "INSTALL_COST_KEEP"):
        monkeypatch.delenv(var, raising=False)
    return root


@pytest.fixture()
def write_package_json(project):
    def _write(**sections):
        (project / "package.json").write_text(json.dumps(sections))
        return project / "package.json"

    return _write


@pytest.fixture()
def sandbox_root(tmp_path):
    root = tmp_path / "sandboxes"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def restore_root_logger():
    """The CLI reconfigures the root logger; undo it after every test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    package_level = logging.getLogger("install_cost").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("install_cost").setLevel(package_level)

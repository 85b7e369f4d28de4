"""Shared test fixtures for inistream."""

import os
import subprocess
import sys

import pytest


SAMPLE_INI = (
    "; sample settings\n"
    "[Section1]\n"
    "var1 = hello\n"
    "var2 = 42\n"
    "var3 = 3.14\n"
)


@pytest.fixture
def inistream_home(tmp_path, monkeypatch):
    """Provide an isolated ~/.inistream/ directory for testing.

    Sets INISTREAM_HOME env var so config lookups use tmp_path.
    Does NOT create the directory.
    """
    home = tmp_path / ".inistream"
    monkeypatch.setenv("INISTREAM_HOME", str(home))
    return home


@pytest.fixture
def config_file(inistream_home):
    """Write arbitrary TOML content to the test config file.

    Returns a helper function. Call it with a TOML string.
    """
    def _write(content: str):
        inistream_home.mkdir(parents=True, exist_ok=True)
        config_path = inistream_home / "config.toml"
        config_path.write_text(content, encoding="utf-8")
        return config_path
    return _write


@pytest.fixture
def ini_file(tmp_path):
    """Write INI content to a file under tmp_path.

    Returns a helper function: ini_file(content, name="test.ini").
    Content is written byte-for-byte (no newline translation).
    """
    def _write(content: str, name: str = "test.ini"):
        path = tmp_path / name
        path.write_bytes(content.encode("utf-8"))
        return path
    return _write


@pytest.fixture
def sample_ini(ini_file):
    """The three-variable sample file used across tests."""
    return ini_file(SAMPLE_INI)


@pytest.fixture
def run_inistream(tmp_path):
    """Run inistream as a subprocess with isolated INISTREAM_HOME.

    Returns a callable: run_inistream(args)
    The callable has a .home attribute pointing to the inistream data dir.
    """
    inistream_home = tmp_path / ".inistream"

    def _run(args):
        env = os.environ.copy()
        env["INISTREAM_HOME"] = str(inistream_home)
        cmd = [sys.executable, "-m", "inistream"] + [str(a) for a in args]
        return subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            env=env,
            timeout=30,
        )

    _run.home = inistream_home
    return _run

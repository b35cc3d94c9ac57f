# File: tests/conftest.py

import os
import sys
import json
import struct
import logging
from pathlib import Path

import pytest

# 1. Add project root to path
sys.path.append(os.getcwd())


def write_safetensors(path: Path, metadata: dict = None, tensors: dict = None) -> Path:
    """
    Writes a minimal .safetensors file: u64 LE header length + JSON header.
    No tensor payload is needed since only the header is ever read.
    """
    header = dict(tensors or {})
    if metadata is not None:
        header["__metadata__"] = metadata
    raw = json.dumps(header).encode("utf-8")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(struct.pack("<Q", len(raw)) + raw)
    return path


class RecordingHandler:
    """
    Remembers every path it was given; fails on request.
    """

    def __init__(self, fail_on=()):
        self.calls = []
        self.fail_on = set(fail_on)

    def __call__(self, path: Path):
        self.calls.append(Path(path))
        if Path(path).name in self.fail_on:
            raise RuntimeError(f"simulated failure for {Path(path).name}")

    @property
    def names(self):
        return sorted(p.name for p in self.calls)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """
    The CLI reconfigures the root logger; keep that from leaking into other tests.
    """
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def recorder():
    return RecordingHandler()


@pytest.fixture
def sample_tree(tmp_path):
    """
    root/
      a.safetensors
      c.other
      sub/b.safetensors
      sub/deeper/d.safetensors.txt
    """
    root = tmp_path / "models"
    write_safetensors(root / "a.safetensors", {"name": "a"})
    (root / "c.other").write_text("not a model")
    write_safetensors(root / "sub" / "b.safetensors", {"name": "b"})
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "sub" / "deeper" / "d.safetensors.txt").write_text("decoy")
    return root


@pytest.fixture
def chdir(monkeypatch):
    """Switch the working directory for the duration of a test."""
    def _chdir(path: Path):
        monkeypatch.chdir(path)
        return path
    return _chdir


@pytest.fixture
def make_safetensors():
    return write_safetensors


@pytest.fixture
def make_recorder():
    return RecordingHandler

import os
import pytest
from pathlib import Path

from extract_metadata.core.common.enums import DispatchMode, FileOutcome
from extract_metadata.core.errors import EscapesRootError, GlobSyntaxError, InvalidPathError, WalkError
from extract_metadata.features.glob_dispatcher.service.api import GlobDispatcher
from extract_metadata.features.path_normalizer.service.api import normalize_path
from extract_metadata.features.dispatch.domain.interfaces import IFileHandler
from extract_metadata.features.dispatch.domain.models import DispatchSummary
from extract_metadata.features.dispatch.service.api import dispatch
from extract_metadata.features.dispatch.service.orchestrator import ContinueOnErrorHandler, Orchestrator


def test_directory_input_walks_the_tree(sample_tree, recorder):
    summary = dispatch(sample_tree, "safetensors", recorder)

    assert summary.mode == DispatchMode.DIRECTORY
    assert recorder.names == ["a.safetensors", "b.safetensors"]
    assert summary.files_processed == 2
    assert summary.files_failed == 0


def test_handler_failures_do_not_stop_the_batch(tmp_path, make_safetensors, make_recorder):
    # 1. Arrange: 5 files, 2 of them fail
    root = tmp_path / "batch"
    names = [f"m{i}.safetensors" for i in range(5)]
    for name in names:
        make_safetensors(root / name, {})
    handler = make_recorder(fail_on={"m1.safetensors", "m3.safetensors"})

    # 2. Act
    summary = dispatch(root, "safetensors", handler)

    # 3. Assert: every file was still attempted
    assert handler.names == names
    assert summary.files_found == 5
    assert summary.files_processed == 3
    assert summary.files_failed == 2
    assert len(summary.warnings) == 2
    assert "m1.safetensors" in summary.warnings[0]


def test_failures_are_logged_as_warnings(tmp_path, make_safetensors, make_recorder, caplog):
    path = make_safetensors(tmp_path / "bad.safetensors", {})

    with caplog.at_level("WARNING"):
        dispatch(path, "safetensors", make_recorder(fail_on={"bad.safetensors"}))

    assert any("Failed to process file" in r.getMessage() and r.levelname == "WARNING" for r in caplog.records)


def test_glob_input_is_expanded_from_the_raw_string(tmp_path, make_safetensors, recorder):
    root = tmp_path / "flat"
    for name in ("one.safetensors", "two.safetensors"):
        make_safetensors(root / name, {})
    for name in ("x.txt", "y.json", "z.bin"):
        (root / name).write_text("x")

    summary = dispatch(str(root / "*.safetensors"), "safetensors", recorder)

    assert summary.mode == DispatchMode.GLOB
    assert recorder.names == ["one.safetensors", "two.safetensors"]


def test_glob_failures_do_not_stop_the_batch(tmp_path, make_safetensors, make_recorder):
    root = tmp_path / "flat"
    for name in ("a.safetensors", "b.safetensors", "c.safetensors"):
        make_safetensors(root / name, {})
    handler = make_recorder(fail_on={"a.safetensors"})

    summary = dispatch(str(root / "*.safetensors"), "safetensors", handler)

    assert len(handler.calls) == 3
    assert summary.files_failed == 1
    assert summary.files_processed == 2


def test_single_file_input(tmp_path, make_safetensors, recorder):
    path = make_safetensors(tmp_path / "one.safetensors", {})

    summary = dispatch(str(path), "safetensors", recorder)

    assert summary.mode == DispatchMode.SINGLE_FILE
    assert recorder.calls == [path.resolve()]


def test_single_file_failure_is_absorbed(tmp_path, make_recorder):
    handler = make_recorder(fail_on={"ghost.safetensors"})

    summary = dispatch(str(tmp_path / "ghost.safetensors"), "safetensors", handler)

    assert summary.files_failed == 1


def test_single_file_extension_is_not_filtered(tmp_path, recorder):
    path = tmp_path / "notes.txt"
    path.write_text("x")

    dispatch(path, "safetensors", recorder)

    assert recorder.names == ["notes.txt"]


def test_interface_handlers_are_supported(tmp_path, make_safetensors):
    class Collecting(IFileHandler):
        def __init__(self):
            self.seen = []

        def handle(self, path: Path):
            self.seen.append(path)

    handler = Collecting()
    make_safetensors(tmp_path / "d" / "a.safetensors", {})

    dispatch(tmp_path / "d", "safetensors", handler)

    assert [p.name for p in handler.seen] == ["a.safetensors"]


# --- Structural errors ---

def test_malformed_glob_aborts_before_dispatch(tmp_path, recorder):
    with pytest.raises(GlobSyntaxError):
        dispatch(str(tmp_path / "[abc.safetensors"), "safetensors", recorder)

    assert recorder.calls == []


def test_walk_errors_propagate(sample_tree, recorder):
    class BrokenWalker:
        def walk(self, root, extension, handler):
            raise WalkError(root, PermissionError("denied"))

    with pytest.raises(WalkError):
        Orchestrator(walker=BrokenWalker()).dispatch(sample_tree, "safetensors", recorder)


def test_input_escaping_root_aborts(recorder):
    with pytest.raises(EscapesRootError):
        dispatch("/extract-metadata-missing-dir/../../..", "safetensors", recorder)


def test_non_utf8_path_is_rejected(tmp_path, recorder):
    # What os.fsdecode produces for an undecodable byte
    raw = str(tmp_path / "bad\udcff.safetensors")

    with pytest.raises(InvalidPathError):
        dispatch(raw, "safetensors", recorder)

    assert recorder.calls == []


# --- Wrapper & summary ---

def test_wrapper_skips_candidates_that_cannot_be_normalized(recorder):
    summary = DispatchSummary()
    wrapped = ContinueOnErrorHandler(recorder, summary, normalize=True)

    wrapped(Path("/extract-metadata-missing-dir/../../x"))

    assert recorder.calls == []
    assert summary.files_skipped == 1
    assert "Failed to normalize" in summary.warnings[0]


def test_summary_record_counts_outcomes():
    summary = DispatchSummary()

    summary.record(FileOutcome.PROCESSED)
    summary.record(FileOutcome.FAILED, "boom")
    summary.record_skip("skipped")

    assert (summary.files_found, summary.files_processed, summary.files_failed, summary.files_skipped) == (2, 1, 1, 1)
    assert summary.warnings == ["boom", "skipped"]


# --- Ancestors without search permission ---

@pytest.fixture
def deny_below(monkeypatch):
    """
    os.stat fails with EACCES for anything strictly inside a directory
    with the given name, like a parent set to mode 000.
    """
    real_stat = os.stat

    def _deny(dir_name: str):
        def guarded_stat(path, *args, **kwargs):
            if isinstance(path, (str, os.PathLike)) and dir_name in Path(path).parts[:-1]:
                raise PermissionError(13, "Permission denied", os.fspath(path))
            return real_stat(path, *args, **kwargs)

        monkeypatch.setattr(os, "stat", guarded_stat)

    return _deny


def test_single_file_under_unsearchable_parent_reaches_handler(tmp_path, make_safetensors, recorder, deny_below):
    path = make_safetensors(tmp_path / "locked" / "sub" / "m.safetensors", {})
    deny_below("locked")

    summary = dispatch(str(path), "safetensors", recorder)

    assert summary.mode == DispatchMode.SINGLE_FILE
    assert [p.name for p in recorder.calls] == ["m.safetensors"]


def test_glob_under_unsearchable_parent_is_reported_not_raised(tmp_path, make_safetensors, recorder, deny_below):
    make_safetensors(tmp_path / "locked" / "sub" / "m.safetensors", {})
    deny_below("locked")

    summary = dispatch(str(tmp_path / "locked" / "sub" / "*.safetensors"), "safetensors", recorder)

    assert summary.mode == DispatchMode.GLOB
    assert recorder.calls == []
    assert summary.files_skipped == 1
    assert "Permission denied" in summary.warnings[0]


def test_glob_candidate_that_cannot_be_normalized_is_skipped(tmp_path, make_safetensors, recorder):
    root = tmp_path / "flat"
    for name in ("a.safetensors", "b.safetensors", "c.safetensors"):
        make_safetensors(root / name, {})

    def flaky_normalize(path):
        if Path(path).name == "b.safetensors":
            raise EscapesRootError(path, "simulated")
        return normalize_path(path)

    orchestrator = Orchestrator(glob_dispatcher=GlobDispatcher(normalizer=flaky_normalize))

    summary = orchestrator.dispatch(str(root / "*.safetensors"), "safetensors", recorder)

    assert recorder.names == ["a.safetensors", "c.safetensors"]
    assert summary.files_processed == 2
    assert summary.files_skipped == 1
    assert "Failed to normalize path" in summary.warnings[0]

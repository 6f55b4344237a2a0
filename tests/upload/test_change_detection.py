"""Tests for detecting snippet files that need uploading."""

import hashlib

import pytest

from common.identities import IdentityDirectory
from upload.change_detection import (
    detect_changes,
    fingerprint,
    iter_snippet_files,
    needs_upload,
    state_key_for,
)
from upload.models import UploadStateEntry


@pytest.fixture
def identities():
    return IdentityDirectory({"eunho": "a@x.com"})


@pytest.fixture
def snippets(tmp_path):
    folder = tmp_path / "snippets" / "eunho"
    folder.mkdir(parents=True)
    (folder / "2024-01-01.txt").write_text("hello\n", encoding="utf-8")
    return tmp_path / "snippets"


def test_fingerprint_is_sha256_of_trimmed_content():
    expected = hashlib.sha256("hello".encode("utf-8")).hexdigest()
    assert fingerprint("  hello\n\n") == expected
    assert fingerprint("hello") != fingerprint("hellO")


@pytest.mark.parametrize(
    "previous,force,expected",
    [
        (None, False, True),
        (UploadStateEntry(hash="abc", at=""), False, False),
        (UploadStateEntry(hash="old", at=""), False, True),
        (UploadStateEntry(hash="abc", at=""), True, True),
    ],
)
def test_needs_upload(previous, force, expected):
    assert needs_upload("abc", previous, force=force) is expected


def test_iter_snippet_files_filters_extensions(snippets, identities):
    folder = snippets / "eunho"
    (folder / "notes.MD").write_text("x", encoding="utf-8")
    (folder / "draft.markdown").write_text("x", encoding="utf-8")
    (folder / "image.png").write_bytes(b"\x89PNG")

    names = [path.name for _, _, path in iter_snippet_files(snippets, identities)]

    assert names == ["2024-01-01.txt", "draft.markdown", "notes.MD"]


def test_unknown_folder_is_skipped(snippets, identities, caplog):
    (snippets / "stranger").mkdir()
    (snippets / "stranger" / "2024-01-01.txt").write_text("x", encoding="utf-8")

    found = iter_snippet_files(snippets, identities)

    assert [folder for folder, _, _ in found] == ["eunho"]
    assert "stranger" in caplog.text


def test_new_file_is_a_candidate(tmp_path, snippets, identities):
    candidates = detect_changes(tmp_path, snippets, identities, state={})

    assert len(candidates) == 1
    candidate = candidates[0]
    assert candidate.identity == "a@x.com"
    assert candidate.content == "hello"
    assert candidate.fingerprint == fingerprint("hello")
    assert candidate.state_key == "snippets/eunho/2024-01-01.txt"


def test_unchanged_file_is_excluded(tmp_path, snippets, identities):
    state = {"snippets/eunho/2024-01-01.txt": UploadStateEntry(hash=fingerprint("hello"), at="")}

    assert detect_changes(tmp_path, snippets, identities, state) == []


def test_whitespace_only_change_is_excluded(tmp_path, snippets, identities):
    (snippets / "eunho" / "2024-01-01.txt").write_text("\n  hello  \n\n", encoding="utf-8")
    state = {"snippets/eunho/2024-01-01.txt": UploadStateEntry(hash=fingerprint("hello"), at="")}

    assert detect_changes(tmp_path, snippets, identities, state) == []


def test_one_character_change_is_included(tmp_path, snippets, identities):
    state = {"snippets/eunho/2024-01-01.txt": UploadStateEntry(hash=fingerprint("hello"), at="")}
    (snippets / "eunho" / "2024-01-01.txt").write_text("hellp\n", encoding="utf-8")

    candidates = detect_changes(tmp_path, snippets, identities, state)

    assert [c.content for c in candidates] == ["hellp"]


def test_force_includes_unchanged(tmp_path, snippets, identities):
    state = {"snippets/eunho/2024-01-01.txt": UploadStateEntry(hash=fingerprint("hello"), at="")}

    assert len(detect_changes(tmp_path, snippets, identities, state, force=True)) == 1


def test_state_key_outside_root_is_absolute(tmp_path):
    outside = tmp_path / "elsewhere" / "a.txt"
    key = state_key_for(tmp_path / "root", outside)
    assert key == outside.resolve().as_posix()

"""Tests for ZIP archive streaming."""
import io
import zipfile

import pytest

from initializr.core.errors import ClientDisconnected
from initializr.generators.archive import ZIP_EPOCH, build_archive, iter_archive
from initializr.generators.types import FilePlan


def _plan():
    plan = FilePlan("svc")
    plan.add("go.mod", "module svc\n")
    plan.add("cmd/svc/main.go", "package main\n")
    plan.add("README.md", "# Svc\n")
    return plan


def test_archive_contains_every_file_in_sorted_order():
    data = build_archive(_plan())
    with zipfile.ZipFile(io.BytesIO(data)) as archive:
        assert archive.testzip() is None
        assert archive.namelist() == ["README.md", "cmd/svc/main.go", "go.mod"]
        assert archive.read("go.mod") == b"module svc\n"
        for info in archive.infolist():
            assert info.date_time == ZIP_EPOCH
            assert info.compress_type == zipfile.ZIP_DEFLATED


def test_archive_is_byte_identical_across_runs():
    assert build_archive(_plan()) == build_archive(_plan())


def test_cancelled_stream_stops_between_entries():
    polls = []

    def is_cancelled():
        polls.append(1)
        return len(polls) > 1

    chunks = []
    with pytest.raises(ClientDisconnected):
        for chunk in iter_archive(_plan(), is_cancelled=is_cancelled):
            chunks.append(chunk)
    assert len(polls) == 2
    assert chunks, "The first entry should have been streamed"

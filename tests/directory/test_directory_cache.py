from __future__ import annotations

import threading

import pytest

from src.student_portal.student_portal.core.exceptions import FetchFailure, RefreshFailure, StudentNotFound
from src.student_portal.student_portal.credentials.deriver import CredentialDeriver
from src.student_portal.student_portal.directory.cache import DirectoryCache
from src.student_portal.student_portal.students.model import StudentRecord


def _student(preferred, name, student_id=None):
    return StudentRecord(record_id=f"rec{preferred}", preferred_name=preferred, name=name, student_id=student_id)


class FakeStudents:
    def __init__(self, batches):
        self._batches = list(batches)
        self.calls = 0

    def list_all(self):
        self.calls += 1
        batch = self._batches.pop(0)
        if isinstance(batch, Exception):
            raise batch
        return batch


DERIVER = CredentialDeriver("test-secret")


def test_refresh_builds_entries_and_lookup_is_case_insensitive():
    cache = DirectoryCache(FakeStudents([[_student("Jane", "S022 - Jane Doe")]]), DERIVER)

    assert cache.refresh() == 1

    entry = cache.lookup("Jane")
    assert entry is not None
    assert entry.identity_token == "S022"
    assert entry.derived_secret == "ac-6Hu2h-3NKp9P"
    assert cache.lookup("  jane ") is entry
    assert cache.lookup("JANE") is entry


def test_skips_records_without_alias_or_identity_and_uses_fallback_field():
    records = [
        _student("Sam", "Sam Smith", student_id="S010"),
        _student("Nobody", "Just A Name"),
        StudentRecord(record_id="r", preferred_name=None, name="S033 - Ghost", student_id=None),
    ]
    cache = DirectoryCache(FakeStudents([records]), DERIVER)

    assert cache.refresh() == 1
    assert cache.lookup("sam").identity_token == "S010"
    assert cache.lookup("Nobody") is None


def test_first_record_wins_for_duplicate_alias():
    records = [_student("Jane", "S022 - Jane"), _student("jane", "S023 - Jane Two")]
    cache = DirectoryCache(FakeStudents([records]), DERIVER)

    cache.refresh()

    assert cache.lookup("JANE").identity_token == "S022"


def test_failed_refresh_keeps_previous_directory():
    source = FakeStudents([[_student("Jane", "S022 - Jane")], FetchFailure("boom", status=503, body="down")])
    cache = DirectoryCache(source, DERIVER)
    cache.refresh()

    with pytest.raises(RefreshFailure):
        cache.refresh()

    assert cache.lookup("jane").identity_token == "S022"
    assert cache.status.entry_count == 1
    assert "boom" in cache.status.last_error


def test_refresh_replaces_whole_mapping():
    source = FakeStudents([
        [_student("Jane", "S022 - Jane"), _student("Sam", "S010 - Sam")],
        [_student("Ana", "S050 - Ana")],
    ])
    cache = DirectoryCache(source, DERIVER)
    cache.refresh()
    old = cache.snapshot()

    cache.refresh()

    assert set(old) == {"jane", "sam"}
    assert set(cache.snapshot()) == {"ana"}
    assert cache.lookup("Jane") is None


def test_reader_never_sees_a_mix_during_refresh():
    started = threading.Event()
    release = threading.Event()

    class SlowStudents:
        def __init__(self):
            self.calls = 0

        def list_all(self):
            self.calls += 1
            if self.calls == 1:
                return [_student("Jane", "S022 - Jane"), _student("Sam", "S010 - Sam")]
            started.set()
            release.wait(timeout=5)
            return [_student("Jane", "S099 - Jane"), _student("Sam", "S098 - Sam")]

    cache = DirectoryCache(SlowStudents(), DERIVER)
    cache.refresh()

    worker = threading.Thread(target=cache.refresh)
    worker.start()
    assert started.wait(timeout=5)

    # Refresh in progress: readers still get the complete old mapping.
    snap = cache.snapshot()
    assert (snap["jane"].identity_token, snap["sam"].identity_token) == ("S022", "S010")

    release.set()
    worker.join(timeout=5)

    snap = cache.snapshot()
    assert (snap["jane"].identity_token, snap["sam"].identity_token) == ("S099", "S098")


def test_require_raises_not_found():
    cache = DirectoryCache(FakeStudents([[]]), DERIVER)
    cache.refresh()

    with pytest.raises(StudentNotFound):
        cache.require("ghost")

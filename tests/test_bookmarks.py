"""Tests for the saved-jobs bookmark store."""
import json
from dataclasses import replace

import pytest

from conftest import JOB_PAYLOAD
from gradhire.bookmarks import SAVED_JOBS_KEY, BookmarkStore
from gradhire.models import Job

OTHER_ID = "0b6f7a52-3c1d-4e8f-9a2b-5c6d7e8f9a0b"


@pytest.fixture
def job():
    return Job.from_dict(JOB_PAYLOAD)


@pytest.mark.unit
def test_missing_store_starts_empty(tmp_path, job):
    store = BookmarkStore(tmp_path / "bookmarks.json")
    assert not store.is_saved(job)
    assert store.saved_ids == frozenset()


@pytest.mark.unit
def test_toggle_persists_immediately(tmp_path, job):
    path = tmp_path / "bookmarks.json"
    store = BookmarkStore(path)

    assert store.toggle(job) is True
    assert json.loads(path.read_text())[SAVED_JOBS_KEY] == [job.id]
    assert BookmarkStore(path).is_saved(job)

    assert store.toggle(job) is False
    assert json.loads(path.read_text())[SAVED_JOBS_KEY] == []
    assert not BookmarkStore(path).is_saved(job)


@pytest.mark.unit
def test_malformed_ids_are_dropped_on_load(tmp_path, job):
    path = tmp_path / "bookmarks.json"
    path.write_text(json.dumps({SAVED_JOBS_KEY: [job.id, "garbage", 42, None, OTHER_ID]}))

    store = BookmarkStore(path)

    assert store.saved_ids == frozenset({job.id, OTHER_ID})


@pytest.mark.unit
@pytest.mark.parametrize("content", ["{not json", "[1, 2]", json.dumps({SAVED_JOBS_KEY: "oops"})])
def test_corrupt_store_counts_as_empty(tmp_path, content):
    path = tmp_path / "bookmarks.json"
    path.write_text(content)
    assert BookmarkStore(path).saved_ids == frozenset()


@pytest.mark.unit
def test_other_keys_in_store_survive_toggle(tmp_path, job):
    path = tmp_path / "bookmarks.json"
    path.write_text(json.dumps({"theme": "dark"}))

    BookmarkStore(path).toggle(job)

    assert json.loads(path.read_text())["theme"] == "dark"


@pytest.mark.unit
def test_saved_jobs_filters_in_list_order(tmp_path, job):
    other = replace(job, id=OTHER_ID, title="Data Engineer")
    store = BookmarkStore.in_dir(tmp_path)
    store.toggle(other)
    store.toggle(job)

    assert store.saved_jobs([job, other]) == [job, other]
    store.toggle(job)
    assert store.saved_jobs([job, other]) == [other]

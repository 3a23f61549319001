# tests/test_storage.py

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from academic_planner.core.models import DEFAULT_SUBJECT_COLOR, Subject, Task, TaskStatus
from academic_planner.storage import json_store
from academic_planner.storage.codec import (
    decode_subjects,
    decode_tasks,
    subject_from_dict,
    subject_to_dict,
    task_from_dict,
    task_to_dict,
)
from academic_planner.storage.json_store import JsonStore


def test_json_store_missing_key_is_empty(tmp_path: Path) -> None:
    store = JsonStore(tmp_path / "sub" / "planner.json")
    assert store.load("subjects") == []
    assert store.load("tasks") == []


def test_json_store_save_replaces_value_and_survives_reopen(tmp_path: Path) -> None:
    path = tmp_path / "planner.json"
    store = JsonStore(path)
    store.save("subjects", [{"id": "a"}, {"id": "b"}])
    store.save("tasks", [{"id": "t"}])
    store.save("subjects", [{"id": "c"}])

    reopened = JsonStore(path)
    assert reopened.load("subjects") == [{"id": "c"}]
    assert reopened.load("tasks") == [{"id": "t"}]
    assert not path.with_suffix(".tmp").exists()


def test_json_store_corrupt_file_reads_as_empty(tmp_path: Path) -> None:
    path = tmp_path / "planner.json"
    path.write_text("{not json", "utf-8")
    assert JsonStore(path).load("subjects") == []

    path.write_text('["a list"]', "utf-8")
    assert JsonStore(path).load("subjects") == []

    path.write_text('{"subjects": "oops"}', "utf-8")
    assert JsonStore(path).load("subjects") == []


def test_subject_dict_uses_original_field_names() -> None:
    s = Subject(id="s1", name="Calculus", color="#123456", course_load=60.0, absences=3)
    d = subject_to_dict(s)
    assert d == {"id": "s1", "name": "Calculus", "color": "#123456", "courseLoad": 60.0, "absences": 3}
    assert subject_from_dict(d) == s

    untracked = subject_to_dict(Subject(id="s2", name="Art"))
    assert "courseLoad" not in untracked


def test_subject_from_dict_tolerates_bad_numbers() -> None:
    s = subject_from_dict({"id": "s1", "name": "Art", "courseLoad": -5, "absences": -2})
    assert s is not None
    assert s.course_load is None
    assert s.absences == 0
    assert s.color == DEFAULT_SUBJECT_COLOR

    zero = subject_from_dict({"id": "s2", "name": "Music", "courseLoad": 0})
    assert zero is not None
    assert zero.course_load == 0.0
    assert zero.absences == 0


def test_task_dict_and_legacy_status() -> None:
    due = datetime(2024, 1, 3, 10, 30, tzinfo=timezone.utc)
    t = Task(id="t1", subject_id="s1", title="Exam", due_date=due, status=TaskStatus.COMPLETED)
    d = task_to_dict(t)
    assert d["dueDate"] == "2024-01-03T10:30:00+00:00"
    assert d["status"] == "completed"
    assert task_from_dict(d) == t

    legacy = task_from_dict(
        {"id": "t2", "subjectId": "s1", "title": "Essay", "dueDate": "2024-01-03T00:00:00.000Z", "status": "Concluído"}
    )
    assert legacy is not None
    assert legacy.status == TaskStatus.COMPLETED
    assert legacy.due_date == datetime(2024, 1, 3, tzinfo=timezone.utc)

    unknown = task_from_dict({"id": "t3", "subjectId": "s1", "title": "X", "dueDate": "2024-01-03", "status": "???"})
    assert unknown is not None
    assert unknown.status == TaskStatus.PENDING


def test_decode_skips_malformed_records() -> None:
    subjects = decode_subjects([{"id": "s1", "name": "Calc"}, {"id": "s2"}, "junk", {"name": "no id"}])
    assert [s.id for s in subjects] == ["s1"]

    tasks = decode_tasks(
        [
            {"id": "t1", "subjectId": "s1", "title": "A", "dueDate": "2024-01-01"},
            {"id": "t2", "subjectId": "s1", "title": "B", "dueDate": "not a date"},
            {"id": "t3", "subjectId": "s1", "title": "", "dueDate": "2024-01-01"},
            42,
        ]
    )
    assert [t.id for t in tasks] == ["t1"]


def test_json_store_failed_write_leaves_no_temp_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "planner.json"
    store = JsonStore(path)
    store.save("subjects", [{"id": "a"}])

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(json_store.os, "replace", broken_replace)
    with pytest.raises(OSError):
        store.save("subjects", [{"id": "b"}])

    assert not path.with_suffix(".tmp").exists()
    assert store.load("subjects") == [{"id": "a"}]


def test_json_store_rejects_non_finite_numbers(tmp_path: Path) -> None:
    path = tmp_path / "planner.json"
    store = JsonStore(path)
    with pytest.raises(ValueError):
        store.save("subjects", [{"id": "a", "courseLoad": float("inf")}])
    assert not path.with_suffix(".tmp").exists()
    assert store.load("subjects") == []

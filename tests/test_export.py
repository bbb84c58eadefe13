import datetime as dt
import json

import pytest

from todolist import crud
from todolist.models import DEADLINE_FORMAT, format_deadline, parse_deadline
from todolist.services.export import CSV_HEADER, export_csv, export_json, import_csv, import_json

NOW = dt.datetime(2024, 1, 1, 10, 0)


def test_deadline_text_format():
    value = dt.datetime(2024, 1, 2, 18, 0)
    assert DEADLINE_FORMAT == "%Y-%m-%d %H:%M:%S"
    assert format_deadline(value) == "2024-01-02 18:00:00"
    assert format_deadline(None) == ""
    assert parse_deadline(" 2024-01-02 18:00:00 ") == value


def test_export_rows(session_factory):
    with session_factory() as db:
        crud.create_task(
            db,
            title="Pay rent",
            details="landlord, March",
            deadline=dt.datetime(2024, 3, 1, 9, 0),
            category="personal",
            priority=3,
            created_at=NOW,
        )
        text = export_csv(crud.list_tasks(db))

    lines = text.splitlines()
    assert lines[0] == ",".join(CSV_HEADER)
    assert lines[1].endswith('Pay rent,"landlord, March",2024-03-01 09:00:00,PERSONAL,HIGH,false,2024-01-01 10:00:00,')


def test_import_is_lenient(session_factory):
    content = "\n".join(
        [
            ",".join(CSV_HEADER),
            "77,Pay rent,,2024-03-01 09:00:00,PERSONAL,HIGH,false,2024-01-01 08:00:00,",
            "78,Odd one,,not a date,CHORES,SOMETIMES,true,,2024-01-01 09:30:00",
            "79,Short row",
            "80,,,,,,,,",
            "",
        ]
    )
    with session_factory() as db:
        created = import_csv(db, content, NOW)
        assert [t.title for t in created] == ["Pay rent", "Odd one", "Short row"]

        rent, odd, short = created
        assert rent.deadline == dt.datetime(2024, 3, 1, 9, 0)
        assert rent.category == "personal"
        assert rent.priority == 3
        assert rent.id != 77

        assert odd.deadline == dt.datetime(2024, 1, 2, 9, 0)
        assert odd.category == "other"
        assert odd.priority == 2
        assert odd.is_done is True
        assert odd.completed_at == dt.datetime(2024, 1, 1, 9, 30)

        assert short.deadline is None
        assert short.created_at == NOW


def test_import_rejects_empty_file(session_factory):
    with session_factory() as db:
        with pytest.raises(ValueError):
            import_csv(db, "", NOW)


def test_export_import_over_api(client):
    client.post("/tasks", json={"when": "call mom tomorrow at 6pm"})
    client.post("/tasks", json={"title": "Gym", "category": "health"})

    exported = client.get("/tasks/export.csv")
    assert exported.status_code == 200
    assert exported.headers["content-type"].startswith("text/csv")

    resp = client.post("/tasks/import", content=exported.text, headers={"Content-Type": "text/csv"})
    assert resp.status_code == 200
    assert resp.json() == {"imported": 2}

    titles = sorted(t["title"] for t in client.get("/tasks").json())
    assert titles == ["Gym", "Gym", "call mom", "call mom"]

    assert client.post("/tasks/import", content="", headers={"Content-Type": "text/csv"}).status_code == 400


def test_json_export_record(session_factory):
    with session_factory() as db:
        crud.create_task(
            db,
            title="Pay rent",
            details="landlord, March",
            deadline=dt.datetime(2024, 3, 1, 9, 0),
            category="personal",
            priority=3,
            created_at=NOW,
        )
        records = json.loads(export_json(crud.list_tasks(db)))

    assert records == [
        {
            "id": 1,
            "title": "Pay rent",
            "details": "landlord, March",
            "deadline": "2024-03-01 09:00:00",
            "category": "PERSONAL",
            "priority": "HIGH",
            "is_done": False,
            "created_at": "2024-01-01 10:00:00",
            "completed_at": None,
        }
    ]


def test_json_import_is_lenient(session_factory):
    content = json.dumps(
        [
            {"id": 77, "title": "Pay rent", "deadline": "2024-03-01 09:00:00", "category": "PERSONAL",
             "priority": "HIGH", "is_done": False, "created_at": "2024-01-01 08:00:00"},
            {"title": "Odd one", "deadline": "soon", "category": "chores", "priority": 4, "is_done": True,
             "completed_at": "2024-01-01 09:30:00"},
            {"title": "   "},
            "not a task",
            {"title": "Numbers", "priority": "3", "details": None},
        ]
    )
    with session_factory() as db:
        created = import_json(db, content, NOW)
        assert [t.title for t in created] == ["Pay rent", "Odd one", "Numbers"]

        rent, odd, numbers = created
        assert rent.id != 77
        assert rent.category == "personal"
        assert rent.priority == 3
        assert rent.created_at == dt.datetime(2024, 1, 1, 8, 0)

        assert odd.deadline == dt.datetime(2024, 1, 2, 9, 0)
        assert odd.category == "other"
        assert odd.priority == 4
        assert odd.is_done is True
        assert odd.completed_at == dt.datetime(2024, 1, 1, 9, 30)

        assert numbers.priority == 3
        assert numbers.details is None
        assert numbers.deadline is None
        assert numbers.created_at == NOW


def test_json_import_rejects_malformed_content(session_factory):
    with session_factory() as db:
        for content in ["", "[{", '{"title": "not a list"}']:
            with pytest.raises(ValueError):
                import_json(db, content, NOW)


def test_json_export_import_over_api(client):
    client.post("/tasks", json={"when": "call mom tomorrow at 6pm"})
    client.post("/tasks", json={"title": "Gym", "category": "health"})

    exported = client.get("/tasks/export.json")
    assert exported.status_code == 200
    assert exported.headers["content-type"].startswith("application/json")
    assert [r["title"] for r in exported.json()] == ["call mom", "Gym"]

    resp = client.post("/tasks/import", content=exported.text, headers={"Content-Type": "application/json"})
    assert resp.status_code == 200
    assert resp.json() == {"imported": 2}

    copies = client.get("/tasks", params={"search": "call mom"}).json()
    assert [t["deadline"] for t in copies] == ["2024-01-02T18:00:00", "2024-01-02T18:00:00"]

    bad = client.post("/tasks/import", content="[1", headers={"Content-Type": "application/json"})
    assert bad.status_code == 400

from datetime import datetime

import pytest

from taskmanager.validation import validate_create, validate_update

from .conftest import task_payload


def _fields(result):
    return [e.field for e in result.errors]


def test_minimal_create_applies_defaults():
    result = validate_create({"title": "  Buy milk  ", "dueDate": "2030-01-01T09:00:00.000Z"})

    assert result.ok
    assert result.value == {
        "title": "Buy milk",
        "description": None,
        "dueDate": datetime(2030, 1, 1, 9, 0, 0),
        "priority": "medium",
        "status": "todo",
        "assignee": None,
        "reminders": [],
    }


@pytest.mark.parametrize("title", ["", "   ", "\t\n"])
def test_blank_title_is_rejected(title):
    result = validate_create(task_payload(title=title))
    assert not result.ok
    assert _fields(result) == ["title"]
    assert result.value is None


def test_single_character_title_is_accepted():
    assert validate_create(task_payload(title="x")).ok


def test_unknown_priority_is_rejected():
    result = validate_create(task_payload(priority="urgent"))
    assert _fields(result) == ["priority"]


def test_unknown_status_is_rejected():
    result = validate_create(task_payload(status="done"))
    assert _fields(result) == ["status"]


def test_missing_due_date_is_rejected():
    payload = task_payload()
    del payload["dueDate"]
    result = validate_create(payload)
    assert _fields(result) == ["dueDate"]


@pytest.mark.parametrize(
    "value",
    [
        "not-a-date",
        "2030-13-01T00:00:00Z",
        "0001-01-01T00:00:00+01:00",
        "9999-12-31T23:00:00-05:00",
        1893456000,
        None,
    ],
)
def test_malformed_due_date_is_rejected(value):
    result = validate_create(task_payload(dueDate=value))
    assert _fields(result) == ["dueDate"]
    assert result.errors[0].message == "must be an ISO-8601 timestamp string"


def test_due_date_with_offset_is_normalized_to_utc():
    result = validate_create(task_payload(dueDate="2030-01-01T09:30:00.123456+02:00"))
    assert result.value["dueDate"] == datetime(2030, 1, 1, 7, 30, 0, 123000)


def test_all_violations_are_reported_together():
    result = validate_create({"title": "", "priority": "urgent"})
    assert sorted(_fields(result)) == ["dueDate", "priority", "title"]


def test_owner_and_store_fields_in_input_are_dropped():
    result = validate_create(
        task_payload(owner="someone-else", user="someone-else", id="abc", _id="abc", createdAt="x")
    )
    assert result.ok
    for key in ("owner", "user", "id", "_id", "createdAt"):
        assert key not in result.value


@pytest.mark.parametrize("payload", [None, [], "title", 42])
def test_non_object_body_is_rejected(payload):
    result = validate_create(payload)
    assert _fields(result) == ["body"]


def test_reminders_are_parsed_in_order():
    result = validate_create(
        task_payload(
            reminders=[
                {"date": "2030-03-20T08:00:00.000Z"},
                {"date": "2030-03-21T08:00:00.000Z", "recurring": {"frequency": "weekly", "interval": 2}},
            ]
        )
    )

    assert result.ok
    assert result.value["reminders"] == [
        {"date": datetime(2030, 3, 20, 8)},
        {"date": datetime(2030, 3, 21, 8), "recurring": {"frequency": "weekly", "interval": 2}},
    ]


def test_null_reminders_default_to_empty():
    result = validate_create(task_payload(reminders=None))
    assert result.value["reminders"] == []


def test_recurring_interval_zero_is_rejected():
    result = validate_create(
        task_payload(reminders=[{"date": "2030-03-20T08:00:00Z", "recurring": {"frequency": "daily", "interval": 0}}])
    )
    assert _fields(result) == ["reminders.0.recurring.interval"]


def test_recurring_interval_one_is_accepted():
    result = validate_create(
        task_payload(reminders=[{"date": "2030-03-20T08:00:00Z", "recurring": {"frequency": "daily", "interval": 1}}])
    )
    assert result.ok


@pytest.mark.parametrize(
    "recurring, field",
    [
        ({"frequency": "daily"}, "reminders.0.recurring.interval"),
        ({"interval": 3}, "reminders.0.recurring.frequency"),
        ({"frequency": "hourly", "interval": 1}, "reminders.0.recurring.frequency"),
        ({"frequency": "daily", "interval": "2"}, "reminders.0.recurring.interval"),
    ],
)
def test_incomplete_or_invalid_recurring_is_rejected(recurring, field):
    result = validate_create(task_payload(reminders=[{"date": "2030-03-20T08:00:00Z", "recurring": recurring}]))
    assert _fields(result) == [field]


def test_reminder_without_date_is_rejected():
    result = validate_create(task_payload(reminders=[{}, {"date": "2030-03-20T08:00:00Z"}]))
    assert _fields(result) == ["reminders.0.date"]


def test_reminder_id_is_dropped_on_create():
    result = validate_create(task_payload(reminders=[{"id": "r1", "date": "2030-03-20T08:00:00Z"}]))
    assert result.value["reminders"] == [{"date": datetime(2030, 3, 20, 8)}]


def test_reminder_id_is_carried_through_on_update():
    result = validate_update({"reminders": [{"id": "r1", "date": "2030-03-20T08:00:00Z"}]})
    assert result.value["reminders"][0]["id"] == "r1"


@pytest.mark.parametrize("date", ["0001-01-01T00:00:00+01:00", "9999-12-31T23:00:00-05:00"])
def test_reminder_date_out_of_range_after_utc_conversion_is_rejected(date):
    for result in (
        validate_create(task_payload(reminders=[{"date": date}])),
        validate_update({"reminders": [{"date": date}]}),
    ):
        assert _fields(result) == ["reminders.0.date"]
        assert result.errors[0].message == "must be an ISO-8601 timestamp string"


def test_recurring_interval_beyond_int64_is_rejected():
    result = validate_create(
        task_payload(reminders=[{"date": "2030-03-20T08:00:00Z", "recurring": {"frequency": "daily", "interval": 2**70}}])
    )
    assert _fields(result) == ["reminders.0.recurring.interval"]


def test_recurring_interval_at_int64_limit_is_accepted():
    result = validate_create(
        task_payload(
            reminders=[{"date": "2030-03-20T08:00:00Z", "recurring": {"frequency": "daily", "interval": 2**63 - 1}}]
        )
    )
    assert result.ok


def test_empty_update_is_valid_and_empty():
    result = validate_update({})
    assert result.ok
    assert result.value == {}


def test_update_keeps_only_present_fields():
    result = validate_update({"status": "completed"})
    assert result.value == {"status": "completed"}


def test_update_applies_the_same_field_rules():
    result = validate_update({"title": "  ", "priority": "urgent", "dueDate": "tomorrow"})
    assert sorted(_fields(result)) == ["dueDate", "priority", "title"]


@pytest.mark.parametrize("field", ["title", "dueDate", "priority", "status"])
def test_update_rejects_null_for_required_fields(field):
    result = validate_update({field: None})
    assert _fields(result) == [field]


def test_update_may_clear_optional_text():
    result = validate_update({"description": None, "assignee": None})
    assert result.value == {"description": None, "assignee": None}


def test_update_with_null_reminders_clears_them():
    result = validate_update({"reminders": None})
    assert result.value == {"reminders": []}


def test_update_ignores_owner_change():
    result = validate_update({"user": "intruder", "owner": "intruder"})
    assert result.value == {}

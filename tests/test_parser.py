import json

from schedule_cache import Event, ParseFailure, ScheduleDocument, parse_schedule_document
from schedule_cache.parser import load_schedule_document


def test_parses_document_fields():
    raw = json.dumps({
        "weekNum": 5,
        "yearTerm": "2024-1",
        "weekList": ["1", "2", ""],
        "weekDayList": [{"weekDay": "3", "weekDate": "10.16", "today": True}],
        "eventList": [{
            "weekDay": 3,
            "eventName": "数据结构",
            "sessionStart": 1,
            "sessionLast": "2",
            "sessionList": ["1", "2"],
            "address": "A101",
            "memberName": "王老师",
            "eventID": "ev-1",
        }],
    }, ensure_ascii=False)

    document = parse_schedule_document(raw)

    assert isinstance(document, ScheduleDocument)
    assert document.week_number == "5"
    assert document.week_list == ["1", "2"]
    assert document.week_day_list[0].is_today is True
    assert document.week_day_list[0].week_date == "10.16"

    event = document.event_list[0]
    assert event.week_day == "3"
    assert event.session_start == 1
    assert event.session_last == 2
    assert event.session_end == 2
    assert event.event_id == "ev-1"
    assert event.member_name == "王老师"


def test_event_id_accepts_camel_case_key():
    document = parse_schedule_document('{"eventList": [{"eventId": "x"}]}')

    assert document.event_list[0].event_id == "x"


def test_invalid_json_is_parse_failure():
    result = parse_schedule_document("{not json")

    assert isinstance(result, ParseFailure)
    assert "Invalid JSON" in result.reason


def test_non_object_root_is_parse_failure():
    assert isinstance(parse_schedule_document("[1, 2]"), ParseFailure)


def test_deeply_nested_json_is_parse_failure():
    raw = "[" * 100000 + "]" * 100000

    result = parse_schedule_document(raw)

    assert isinstance(result, ParseFailure)
    assert load_schedule_document(raw) is None


def test_skips_entries_that_are_not_objects():
    raw = '{"weekDayList": [1, {"weekDay": "1"}], "eventList": ["x", null, {"weekDay": "2"}]}'

    document = parse_schedule_document(raw)

    assert len(document.week_day_list) == 1
    assert document.event_list == [Event(week_day="2")]


def test_missing_lists_become_empty():
    document = parse_schedule_document('{"weekNum": "7"}')

    assert document.week_day_list == []
    assert document.event_list == []


def test_unusable_session_numbers_are_absent():
    raw = '{"eventList": [{"sessionStart": "abc", "sessionLast": true}]}'

    event = parse_schedule_document(raw).event_list[0]

    assert event.session_start is None
    assert event.session_last is None
    assert event.session_end is None


def test_load_collapses_failures_to_none():
    assert load_schedule_document(None) is None
    assert load_schedule_document("") is None
    assert load_schedule_document("42") is None
    assert load_schedule_document("{}") == ScheduleDocument()

from unittest.mock import MagicMock

import pytest

from widget import SummaryRenderer, TodayCourseRenderer, WidgetHub

from conftest import WEDNESDAY


@pytest.fixture
def sink():
    return MagicMock()


@pytest.fixture
def hub(env, sink):
    return WidgetHub(env, sink, clock=lambda: WEDNESDAY)


def test_register_renders_once(hub, sink):
    view = hub.register(1, TodayCourseRenderer())

    sink.assert_called_once_with(1, view)
    assert hub.widget_ids == [1]


def test_update_all_picks_up_cache_changes(hub, sink, put_schedule, document):
    hub.register(1, TodayCourseRenderer())
    hub.register(2, SummaryRenderer(1))
    assert hub.update_all()[1].courses == []

    put_schedule(document(today=WEDNESDAY, events=[{"weekDay": "3", "eventName": "数据结构"}]))
    views = hub.update_all()

    assert [c.name for c in views[1].courses] == ["数据结构"]
    assert views[2].rows[0].title == "数据结构"
    assert sink.call_count == 6


def test_toggle_day_rerenders_only_that_widget(hub, sink, env):
    hub.register(1, TodayCourseRenderer())
    hub.register(2, TodayCourseRenderer())
    sink.reset_mock()

    view = hub.toggle_day(2)

    assert view.day_offset == 1
    assert env.offsets.get(1) == 0
    sink.assert_called_once_with(2, view)


def test_toggle_unknown_widget_refreshes_all(hub, sink):
    hub.register(1, TodayCourseRenderer())
    sink.reset_mock()

    views = hub.toggle_day(None)

    assert list(views) == [1]
    assert views[1].day_offset == 0


def test_configuration_change_applies_system_theme(hub):
    hub.register(1, TodayCourseRenderer())

    views = hub.on_configuration_changed(system_dark=True)

    assert views[1].colors.dark is True


def test_remove_forgets_toggle_state(hub, env):
    hub.register(1, TodayCourseRenderer())
    hub.toggle_day(1)

    hub.remove(1)

    assert hub.widget_ids == []
    assert env.offsets.get(1) == 0
    with pytest.raises(KeyError):
        hub.update(1)

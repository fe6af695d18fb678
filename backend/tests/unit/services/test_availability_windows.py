from datetime import date, timedelta

from drivebook.services.availability import derive_open_windows
from drivebook.utils.intervals import Interval
from tests.helpers.slot_factories import at, make_override, make_profile

DAY = date(2024, 5, 1)


def spans(windows):
    return [(w.start, w.end) for w in windows]


def test_profile_hours_form_the_base_window():
    windows = derive_open_windows(DAY, make_profile())
    assert spans(windows) == [(at(DAY, 9), at(DAY, 17))]


def test_working_hours_override_replaces_profile_hours():
    windows = derive_open_windows(
        DAY,
        make_profile(),
        [
            make_override(DAY, "07:00", "09:00", "working_hours"),
            make_override(DAY, "18:00", "20:00", "working_hours"),
        ],
    )
    assert spans(windows) == [(at(DAY, 7), at(DAY, 9)), (at(DAY, 18), at(DAY, 20))]


def test_open_override_merges_with_base():
    windows = derive_open_windows(
        DAY, make_profile(), [make_override(DAY, "16:00", "19:00", "override_open")]
    )
    assert spans(windows) == [(at(DAY, 9), at(DAY, 19))]


def test_touching_windows_are_merged():
    windows = derive_open_windows(
        DAY, make_profile(), [make_override(DAY, "17:00", "18:00", "override_open")]
    )
    assert len(windows) == 1


def test_closed_override_splits_window():
    windows = derive_open_windows(
        DAY, make_profile(), [make_override(DAY, "12:00", "13:30", "override_closed")]
    )
    assert spans(windows) == [(at(DAY, 9), at(DAY, 12)), (at(DAY, 13, 30), at(DAY, 17))]


def test_closed_wins_over_open_in_any_order():
    opened = make_override(DAY, "18:00", "20:00", "override_open")
    closed = make_override(DAY, "16:00", "21:00", "override_closed")

    first = derive_open_windows(DAY, make_profile(), [opened, closed])
    second = derive_open_windows(DAY, make_profile(), [closed, opened])

    assert spans(first) == spans(second) == [(at(DAY, 9), at(DAY, 16))]


def test_midnight_end_rolls_to_next_day():
    windows = derive_open_windows(
        DAY, make_profile(work_day_start="20:00", work_day_end="24:00")
    )
    assert spans(windows) == [(at(DAY, 20), at(DAY + timedelta(days=1), 0))]


def test_overrides_for_other_dates_are_ignored():
    windows = derive_open_windows(
        DAY,
        make_profile(),
        [make_override(DAY + timedelta(days=1), "09:00", "17:00", "override_closed")],
    )
    assert spans(windows) == [(at(DAY, 9), at(DAY, 17))]


def test_no_base_hours_leaves_only_open_overrides():
    profile = make_profile(work_day_start=None, work_day_end=None)

    assert not derive_open_windows(DAY, profile)

    windows = derive_open_windows(DAY, profile, [make_override(DAY, "10:00", "11:00", "override_open")])
    assert list(windows) == [Interval(at(DAY, 10), at(DAY, 11))]


def test_inverted_override_is_dropped():
    windows = derive_open_windows(
        DAY, make_profile(), [make_override(DAY, "12:00", "10:00", "working_hours")]
    )
    assert not windows

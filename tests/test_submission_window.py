"""Which weeks are still open for on-time or late submission."""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from whirkplace.services.submission_window import calculate_submission_window, is_week_open
from whirkplace.utils.errors import ValidationError

TODAY = date(2025, 10, 22)  # Wednesday
THIS_FRIDAY = date(2025, 10, 24)


def fridays(window):
    return [w.week_of for w in window.late_weeks]


def test_no_history_opens_full_lookback():
    window = calculate_submission_window([], TODAY)

    assert window.current_week.week_of == THIS_FRIDAY
    assert window.current_week.label == "This week"
    assert fridays(window) == [
        date(2025, 10, 17),
        date(2025, 10, 10),
        date(2025, 10, 3),
        date(2025, 9, 26),
    ]
    assert [w.label for w in window.late_weeks] == [
        "Last week",
        "2 weeks ago",
        "3 weeks ago",
        "4 weeks ago",
    ]
    assert window.submission_required is True


def test_account_three_weeks_old_gets_three_late_weeks():
    window = calculate_submission_window([], TODAY, account_created=date(2025, 10, 1))

    assert window.current_week is not None
    assert fridays(window) == [date(2025, 10, 17), date(2025, 10, 10), date(2025, 10, 3)]


def test_account_created_this_week_has_no_late_weeks():
    window = calculate_submission_window([], TODAY, account_created=date(2025, 10, 20))

    assert window.current_week.week_of == THIS_FRIDAY
    assert window.late_weeks == []


def test_submitted_weeks_are_excluded():
    history = [date(2025, 10, 16), THIS_FRIDAY]  # Thursday maps to Oct 17
    window = calculate_submission_window(history, TODAY)

    assert window.current_week is None
    assert window.submission_required is False
    assert date(2025, 10, 17) not in fridays(window)
    assert fridays(window) == [date(2025, 10, 10), date(2025, 10, 3), date(2025, 9, 26)]


def test_accepts_checkin_rows():
    history = [SimpleNamespace(week_of=date(2025, 10, 10))]
    window = calculate_submission_window(history, TODAY)

    assert date(2025, 10, 10) not in fridays(window)
    assert len(window.late_weeks) == 3


def test_week_bounds_in_entries():
    last_week = calculate_submission_window([], TODAY).late_weeks[0]

    assert last_week.week_start == date(2025, 10, 11)
    assert last_week.week_end == date(2025, 10, 18)
    assert last_week.week_of == date(2025, 10, 17)


def test_vacation_lifts_obligation_but_keeps_weeks_open():
    window = calculate_submission_window([], TODAY, on_vacation=True)

    assert window.on_vacation is True
    assert window.submission_required is False
    assert window.current_week is not None
    assert len(window.late_weeks) == 4


def test_friday_is_still_the_current_week():
    window = calculate_submission_window([], THIS_FRIDAY)

    assert window.current_week.week_of == THIS_FRIDAY
    assert fridays(window)[0] == date(2025, 10, 17)


def test_zero_lookback_only_offers_current_week():
    window = calculate_submission_window([], TODAY, lookback=0)

    assert window.current_week is not None
    assert window.late_weeks == []


def test_negative_lookback_rejected():
    with pytest.raises(ValidationError):
        calculate_submission_window([], TODAY, lookback=-1)


@pytest.mark.parametrize("lookback", [0, 1, 2, 4, 6, 10])
@pytest.mark.parametrize("submitted_offsets", [[], [1], [0, 2], [1, 2, 3], [5, 7]])
def test_window_never_exceeds_lookback_or_reopens_submitted(lookback, submitted_offsets):
    history = [THIS_FRIDAY - timedelta(weeks=n) for n in submitted_offsets]
    window = calculate_submission_window(history, TODAY, lookback=lookback)

    assert len(window.late_weeks) <= lookback
    offered = fridays(window) + ([window.current_week.week_of] if window.current_week else [])
    assert not set(offered) & set(history)
    assert fridays(window) == sorted(fridays(window), reverse=True)


def test_is_week_open():
    assert is_week_open(TODAY, [], TODAY)
    assert is_week_open(date(2025, 10, 8), [], TODAY)
    assert not is_week_open(date(2025, 9, 19), [], TODAY)  # five weeks back
    assert not is_week_open(date(2025, 10, 31), [], TODAY)  # next week
    assert not is_week_open(date(2025, 10, 17), [date(2025, 10, 17)], TODAY)

# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Whirkplace - Team Check-ins project.
# Licensed under the MIT License - see the LICENSE file for details.

import os
from datetime import date, timedelta
from typing import Iterable, Optional, Set

from whirkplace.schemas.checkin_schemas import SubmissionWeek, SubmissionWindow
from whirkplace.utils.errors import ValidationError
from whirkplace.utils.week_utils import (
    DateLike,
    canonical_week_of,
    parse_date,
    week_end,
    week_start,
)

DEFAULT_LOOKBACK_WEEKS = int(os.getenv("CHECKIN_LOOKBACK_WEEKS", "4"))


def _week_key(entry) -> date:
    # Accepts Checkin/Vacation rows as well as plain dates
    return canonical_week_of(getattr(entry, "week_of", entry))


def _label(weeks_ago: int) -> str:
    if weeks_ago == 0:
        return "This week"
    if weeks_ago == 1:
        return "Last week"
    return f"{weeks_ago} weeks ago"


def _build_week(friday: date, weeks_ago: int) -> SubmissionWeek:
    return SubmissionWeek(
        week_start=week_start(friday),
        week_end=week_end(friday),
        week_of=friday,
        label=_label(weeks_ago),
    )


def calculate_submission_window(
    submitted_weeks: Iterable,
    today: DateLike,
    lookback: int = DEFAULT_LOOKBACK_WEEKS,
    account_created: Optional[DateLike] = None,
    on_vacation: bool = False,
) -> SubmissionWindow:
    """
    Works out which weeks a user may still submit a check-in for.

    - current_week: this week's call-to-action, present while it is unsubmitted.
    - late_weeks: past weeks without a check-in, most recent first, at most
      ``lookback`` of them, never older than the week the account was created in.
    - submission_required: the current week is open and the user is not on vacation.
      Vacation never hides weeks, it only lifts the obligation.
    """
    if lookback < 0:
        raise ValidationError("Lookback must be zero or more weeks.")

    today = parse_date(today)
    submitted: Set[date] = {_week_key(w) for w in submitted_weeks}
    current_friday = canonical_week_of(today)
    first_friday = canonical_week_of(account_created) if account_created is not None else None

    # today never lies past its own week's Friday, so the current week is never overdue here
    current_week = None
    if current_friday not in submitted:
        current_week = _build_week(current_friday, 0)

    late_weeks = []
    for weeks_ago in range(1, lookback + 1):
        friday = current_friday - timedelta(weeks=weeks_ago)
        if first_friday is not None and friday < first_friday:
            break
        if friday in submitted:
            continue
        late_weeks.append(_build_week(friday, weeks_ago))

    return SubmissionWindow(
        current_week=current_week,
        late_weeks=late_weeks,
        submission_required=current_week is not None and not on_vacation,
        on_vacation=on_vacation,
    )


def is_week_open(
    week_of: DateLike,
    submitted_weeks: Iterable,
    today: DateLike,
    lookback: int = DEFAULT_LOOKBACK_WEEKS,
    account_created: Optional[DateLike] = None,
) -> bool:
    target = canonical_week_of(week_of)
    window = calculate_submission_window(submitted_weeks, today, lookback, account_created)
    open_weeks = [w.week_of for w in window.late_weeks]
    if window.current_week is not None:
        open_weeks.append(window.current_week.week_of)
    return target in open_weeks

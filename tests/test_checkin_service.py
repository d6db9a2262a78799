"""Check-in submission, history and missing check-ins."""

from datetime import date, datetime

import pytest
from sqlalchemy.exc import IntegrityError

from whirkplace.models import Checkin, ReviewStatus, UserRole
from whirkplace.models.database import SessionLocal
from whirkplace.services import checkin_service
from whirkplace.services.vacation_service import add_vacation_week
from whirkplace.utils.errors import DuplicateSubmissionError, InvalidDateError, ValidationError

from conftest import NOW, TODAY


def submit(db, user, answers, **kwargs):
    kwargs.setdefault("overall_mood", 4)
    kwargs.setdefault("today", TODAY)
    kwargs.setdefault("now", NOW)
    return checkin_service.submit_checkin(db, user, responses=answers, **kwargs)


def test_submit_current_week(db, member, questions, answers):
    checkin = submit(db, member, answers, winning_next_week="  Close the Q4 plan ")

    assert checkin.week_of == date(2025, 10, 24)
    assert checkin.due_date == date(2025, 10, 24)
    assert checkin.review_status == ReviewStatus.PENDING
    assert checkin.submitted_at == NOW
    assert checkin.submitted_on_time is True
    assert checkin.winning_next_week == "Close the Q4 plan"
    assert checkin.responses == answers
    assert checkin.question_snapshots == {str(q.id): q.text for q in questions}
    assert checkin.review_due_date == date(2025, 10, 24)
    assert checkin.reviewed_on_time is False


def test_late_submission_for_previous_week(db, member, questions, answers):
    checkin = submit(db, member, answers, week_of="2025-10-15")

    assert checkin.week_of == date(2025, 10, 17)
    assert checkin.submitted_on_time is False


def test_snapshots_survive_question_edits(db, member, questions, answers):
    checkin = submit(db, member, answers)
    questions[0].text = "Reworded question"
    db.commit()

    db.expire_all()
    stored = db.get(Checkin, checkin.id)
    assert stored.question_snapshots[str(questions[0].id)] == "What went well this week?"


def test_duplicate_week_rejected(db, member, questions, answers):
    submit(db, member, answers, week_of="2025-10-20")

    with pytest.raises(DuplicateSubmissionError):
        submit(db, member, answers, week_of="2025-10-18")

    assert db.query(Checkin).filter(Checkin.user_id == member.id).count() == 1


def test_unique_constraint_backs_up_duplicate_check(db, member, make_checkin):
    make_checkin(member)
    db.add(
        Checkin(
            user_id=member.id,
            week_of=date(2025, 10, 24),
            overall_mood=3,
            responses={},
            question_snapshots={},
            due_date=date(2025, 10, 24),
        )
    )
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


@pytest.mark.parametrize("week_of", ["2025-09-01", "2025-11-05"])
def test_weeks_outside_window_rejected(db, member, questions, answers, week_of):
    with pytest.raises(ValidationError):
        submit(db, member, answers, week_of=week_of)


def test_weeks_before_account_creation_rejected(db, make_user, questions, answers):
    newcomer = make_user(created_at=datetime(2025, 10, 15, 12, 0))

    with pytest.raises(ValidationError):
        submit(db, newcomer, answers, week_of="2025-10-08")
    assert submit(db, newcomer, answers, week_of="2025-10-15").week_of == date(2025, 10, 17)


def test_account_created_friday_evening_can_catch_up_that_week(db, make_user, questions, answers):
    # 03:00 UTC on Saturday is still Friday evening in Chicago
    newcomer = make_user(created_at=datetime(2025, 10, 18, 3, 0))

    window = checkin_service.get_submission_window(db, newcomer, today=TODAY)
    assert [w.week_of for w in window.late_weeks] == [date(2025, 10, 17)]

    assert submit(db, newcomer, answers, week_of="2025-10-17").week_of == date(2025, 10, 17)


def test_lost_race_reports_duplicate(db, member, questions, answers, monkeypatch):
    real_is_week_open = checkin_service.is_week_open

    def competing_submit(*args, **kwargs):
        # Another request commits the same week after the duplicate pre-check
        other = SessionLocal()
        try:
            other.add(
                Checkin(
                    user_id=member.id,
                    week_of=date(2025, 10, 24),
                    overall_mood=2,
                    responses=answers,
                    question_snapshots={},
                    due_date=date(2025, 10, 24),
                )
            )
            other.commit()
        finally:
            other.close()
        return real_is_week_open(*args, **kwargs)

    monkeypatch.setattr(checkin_service, "is_week_open", competing_submit)

    with pytest.raises(DuplicateSubmissionError):
        submit(db, member, answers)

    stored = db.query(Checkin).filter(Checkin.user_id == member.id).all()
    assert [c.overall_mood for c in stored] == [2]


def test_invalid_week_of(db, member, questions, answers):
    with pytest.raises(InvalidDateError):
        submit(db, member, answers, week_of="next friday")


@pytest.mark.parametrize("mood", [0, 6, -1, True, "3", 3.5, None])
def test_mood_out_of_range(db, member, questions, answers, mood):
    with pytest.raises(ValidationError):
        submit(db, member, answers, overall_mood=mood)
    assert db.query(Checkin).count() == 0


def test_empty_responses(db, member, questions):
    with pytest.raises(ValidationError):
        submit(db, member, {})


def test_every_active_question_needs_an_answer(db, member, questions, answers):
    partial = dict(answers)
    partial[str(questions[1].id)] = "   "
    with pytest.raises(ValidationError):
        submit(db, member, partial)

    partial.pop(str(questions[1].id))
    with pytest.raises(ValidationError):
        submit(db, member, partial)


def test_inactive_questions_not_required(db, member, questions, answers):
    questions[1].is_active = False
    db.commit()

    answers.pop(str(questions[1].id))
    checkin = submit(db, member, answers)
    assert set(checkin.question_snapshots) == {str(questions[0].id)}


def test_unknown_question_rejected(db, member, questions, answers):
    answers["9999"] = "Stray answer"
    with pytest.raises(ValidationError):
        submit(db, member, answers)


def test_history_newest_first(db, member, make_checkin):
    make_checkin(member, week_of="2025-10-08")
    make_checkin(member, week_of="2025-10-22")
    make_checkin(member, week_of="2025-10-15")

    weeks = [c.week_of for c in checkin_service.get_checkins_for_user(db, member.id)]
    assert weeks == [date(2025, 10, 24), date(2025, 10, 17), date(2025, 10, 10)]


def test_current_week_checkin(db, member, make_checkin):
    assert checkin_service.get_current_week_checkin(db, member.id, TODAY) is None
    checkin = make_checkin(member)
    assert checkin_service.get_current_week_checkin(db, member.id, TODAY).id == checkin.id


def test_submission_window_reflects_history_and_vacation(db, member, make_checkin):
    make_checkin(member, week_of="2025-10-15")
    add_vacation_week(db, member.id, "2025-10-20", note="Lake trip")

    window = checkin_service.get_submission_window(db, member, today=TODAY)

    assert window.on_vacation is True
    assert window.submission_required is False
    assert window.current_week.week_of == date(2025, 10, 24)
    assert date(2025, 10, 17) not in [w.week_of for w in window.late_weeks]


def test_missing_checkins_for_manager(db, make_user, manager, make_checkin):
    done = make_user(manager=manager, name="Dana")
    away = make_user(manager=manager, name="Avery")
    late = make_user(manager=manager, name="Lee")
    make_user(name="Other team")
    make_checkin(done)
    add_vacation_week(db, away.id, TODAY)

    missing = checkin_service.get_missing_checkins(db, manager, today=TODAY)

    assert [(m.user_id, m.on_vacation) for m in missing] == [(away.id, True), (late.id, False)]
    assert all(m.week_of == date(2025, 10, 24) for m in missing)


def test_missing_checkins_empty_for_members(db, member):
    assert checkin_service.get_missing_checkins(db, member, today=TODAY) == []


def test_admin_sees_everyone_missing(db, make_user):
    admin = make_user(role=UserRole.admin)
    a = make_user()
    b = make_user()

    missing = checkin_service.get_missing_checkins(db, admin, today=TODAY)
    assert {m.user_id for m in missing} == {a.id, b.id}

from icpc_core import (
    ProblemRecord,
    Submission,
    apply_verdict,
    display_token,
    record_submission,
    reveal,
)
from icpc_core.problem import reset_freeze_state


def _sub(verdict, time, problem="A"):
    return Submission(problem=problem, verdict=verdict, time=time)


def test_apply_verdict_counts_wrong_then_solves_once():
    rec = ProblemRecord()
    apply_verdict(rec, _sub("Wrong_Answer", 3))
    apply_verdict(rec, _sub("Time_Limit_Exceed", 4))
    assert rec.wrong_attempts == 2
    assert rec.solved is False

    apply_verdict(rec, _sub("Accepted", 10))
    assert rec.solved is True
    assert rec.solve_time == 10

    # Post-accept submissions have no scoring effect.
    apply_verdict(rec, _sub("Wrong_Answer", 11))
    apply_verdict(rec, _sub("Accepted", 12))
    assert rec.wrong_attempts == 2
    assert rec.solve_time == 10


def test_apply_verdict_honours_custom_accept_verdict():
    rec = ProblemRecord()
    apply_verdict(rec, _sub("Accepted", 5), accepted_verdict="OK")
    assert rec.wrong_attempts == 1
    apply_verdict(rec, _sub("OK", 7), accepted_verdict="OK")
    assert rec.solve_time == 7


def test_record_submission_buffers_only_armed_records():
    rec = ProblemRecord(wrong_attempts=2, was_unsolved_at_freeze=True)
    buffered = record_submission(rec, _sub("Wrong_Answer", 100), freeze_active=True)
    assert buffered is True
    assert rec.frozen is True
    assert rec.wrong_before_freeze == 2
    assert rec.submissions_after_freeze == 1

    record_submission(rec, _sub("Accepted", 110), freeze_active=True)
    assert rec.submissions_after_freeze == 2
    assert [s.time for s in rec.pending] == [100, 110]
    # Nothing is scored while buffered.
    assert rec.wrong_attempts == 2
    assert rec.solved is False


def test_record_submission_scores_immediately_when_not_armed():
    rec = ProblemRecord()
    buffered = record_submission(rec, _sub("Accepted", 50), freeze_active=True)
    assert buffered is False
    assert rec.solve_time == 50
    assert rec.frozen is False

    armed_but_open = ProblemRecord(was_unsolved_at_freeze=True)
    record_submission(armed_but_open, _sub("Wrong_Answer", 1), freeze_active=False)
    assert armed_but_open.wrong_attempts == 1
    assert armed_but_open.pending == []


def test_reveal_replays_in_order_and_stops_at_first_accept():
    rec = ProblemRecord(was_unsolved_at_freeze=True)
    for verdict, time in [("Wrong_Answer", 200), ("Accepted", 210), ("Wrong_Answer", 220)]:
        record_submission(rec, _sub(verdict, time), freeze_active=True)

    reveal(rec)
    assert rec.frozen is False
    assert rec.pending == []
    assert rec.wrong_attempts == 1
    assert rec.solve_time == 210
    # Left for display until the scroll finishes.
    assert rec.submissions_after_freeze == 3
    assert rec.was_unsolved_at_freeze is True

    reset_freeze_state(rec)
    assert rec.submissions_after_freeze == 0
    assert rec.was_unsolved_at_freeze is False


def test_reveal_of_only_wrong_submissions_keeps_problem_unsolved():
    rec = ProblemRecord(wrong_attempts=1, was_unsolved_at_freeze=True)
    record_submission(rec, _sub("Runtime_Error", 60), freeze_active=True)
    record_submission(rec, _sub("Wrong_Answer", 70), freeze_active=True)
    reveal(rec)
    assert rec.solved is False
    assert rec.wrong_attempts == 3


def test_display_tokens():
    assert display_token(None) == "."
    assert display_token(ProblemRecord()) == "."
    assert display_token(ProblemRecord(was_unsolved_at_freeze=True)) == "."
    assert display_token(ProblemRecord(wrong_attempts=2)) == "-2"
    assert display_token(ProblemRecord(solve_time=30)) == "+"
    assert display_token(ProblemRecord(wrong_attempts=1, solve_time=30)) == "+1"
    assert display_token(
        ProblemRecord(frozen=True, wrong_before_freeze=0, submissions_after_freeze=2)
    ) == "0/2"
    assert display_token(
        ProblemRecord(
            wrong_attempts=3, frozen=True, wrong_before_freeze=3, submissions_after_freeze=1
        )
    ) == "-3/1"

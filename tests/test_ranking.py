from icpc_core import (
    Submission,
    Team,
    TeamStanding,
    apply_verdict,
    build_board,
    compare_standings,
    re_rank,
    reposition,
)


def _solve(team, problem, time, wrong=0):
    rec = team.record(problem)
    for i in range(wrong):
        apply_verdict(rec, Submission(problem, "Wrong_Answer", i))
    apply_verdict(rec, Submission(problem, "Accepted", time))


def test_lower_penalty_ranks_first():
    a = Team("A")
    b = Team("B")
    _solve(a, "A", 10, wrong=1)
    _solve(b, "A", 5)

    assert a.standing(20).penalty == 30
    assert b.standing(20).penalty == 5
    ordered = re_rank([a, b])
    assert [t.name for t in ordered] == ["B", "A"]
    assert (b.rank, a.rank) == (1, 2)


def test_more_solved_beats_lower_penalty():
    a = Team("A")
    b = Team("B")
    _solve(a, "A", 200)
    _solve(a, "B", 250)
    _solve(b, "A", 1)
    re_rank([b, a])
    assert a.rank == 1
    assert b.rank == 2


def test_solve_times_compared_largest_first():
    x = TeamStanding(name="X", solved_count=2, penalty=100, solve_times=(50, 30))
    y = TeamStanding(name="Y", solved_count=2, penalty=100, solve_times=(50, 40))
    # Index 0 ties at 50; at index 1, 30 < 40 so X ranks better.
    assert compare_standings(x, y) < 0
    assert compare_standings(y, x) > 0


def test_solve_times_first_difference_decides():
    x = TeamStanding(name="X", solved_count=2, penalty=110, solve_times=(60, 30))
    y = TeamStanding(name="Y", solved_count=2, penalty=110, solve_times=(50, 40))
    assert compare_standings(y, x) < 0


def test_solve_time_prefix_falls_through_to_name():
    a = TeamStanding(name="a", solved_count=2, penalty=0, solve_times=(5, 3))
    b = TeamStanding(name="b", solved_count=2, penalty=0, solve_times=(5,))
    assert compare_standings(a, b) < 0
    assert compare_standings(b, a) > 0


def test_name_breaks_full_ties_and_ranks_are_unique():
    teams = [Team(name) for name in ["delta", "alpha", "charlie", "bravo"]]
    for team in teams:
        _solve(team, "A", 42)
    ordered = re_rank(teams)
    assert [t.name for t in ordered] == ["alpha", "bravo", "charlie", "delta"]
    assert sorted(t.rank for t in teams) == [1, 2, 3, 4]


def test_frozen_solves_are_not_effective():
    team = Team("T")
    _solve(team, "A", 10)
    _solve(team, "B", 20)
    team.problems["B"].frozen = True
    standing = team.standing(20)
    assert standing.solved_count == 1
    assert standing.penalty == 10
    assert standing.solve_times == (10,)


def test_custom_wrong_attempt_penalty():
    team = Team("T")
    _solve(team, "A", 10, wrong=2)
    assert team.standing(wrong_attempt_penalty=5).penalty == 20


def test_re_rank_is_idempotent():
    teams = [Team("A"), Team("B"), Team("C")]
    _solve(teams[2], "A", 7)
    first = [(t.name, t.rank) for t in re_rank(teams)]
    second = [(t.name, t.rank) for t in re_rank(teams)]
    assert first == second == [("C", 1), ("A", 2), ("B", 3)]


def test_build_board_rows_follow_rank_order():
    a = Team("A")
    b = Team("B")
    _solve(b, "B", 15, wrong=1)
    rec = a.record("A")
    apply_verdict(rec, Submission("A", "Wrong_Answer", 3))
    re_rank([a, b])

    rows = build_board([a, b], ["A", "B", "C"])
    assert [row.team_name for row in rows] == ["B", "A"]
    assert rows[0].rank == 1
    assert rows[0].solved_count == 1
    assert rows[0].penalty == 35
    assert rows[0].tokens == (".", "+1", ".")
    assert rows[1].tokens == ("-1", ".", ".")


def _order(teams):
    return [(t.name, t.rank) for t in teams]


def test_reposition_matches_full_re_rank_when_team_climbs_and_drops():
    teams = [Team(name) for name in ["A", "B", "C", "D", "E"]]
    _solve(teams[0], "A", 50)
    _solve(teams[1], "A", 40)
    _solve(teams[2], "A", 30, wrong=1)
    ordered = re_rank(teams)
    standings = {t.name: t.standing(20) for t in ordered}

    # E jumps to the top.
    _solve(teams[4], "A", 5)
    _solve(teams[4], "B", 6)
    reposition(ordered, teams[4], standings)
    assert _order(ordered) == _order(re_rank(list(teams)))
    assert teams[4].rank == 1

    # Hiding B's solve drops it below A and C.
    teams[1].problems["A"].frozen = True
    reposition(ordered, teams[1], standings)
    assert _order(ordered) == _order(re_rank(list(teams)))
    assert [t.rank for t in ordered] == [1, 2, 3, 4, 5]

from app.algorithms.ranking import RankingEntry, assign_ranks


def _entry(player_id, xp, name=None):
    return RankingEntry(player_id=player_id, display_name=name or player_id, xp=xp)


def test_tied_leaders_share_rank_and_next_rank_skips():
    ranked = assign_ranks([_entry("c", 300), _entry("a", 500), _entry("b", 500)])

    assert [(e.player_id, e.rank) for e in ranked] == [("a", 1), ("b", 1), ("c", 3)]
    assert [e.is_king for e in ranked] == [True, True, False]


def test_distinct_scores_rank_sequentially():
    ranked = assign_ranks([_entry("a", 10), _entry("b", 30), _entry("c", 20)])

    assert [(e.player_id, e.rank) for e in ranked] == [("b", 1), ("c", 2), ("a", 3)]


def test_ties_ordered_by_display_name():
    ranked = assign_ranks([_entry("1", 100, "zoe"), _entry("2", 100, "Adam")])

    assert [e.display_name for e in ranked] == ["Adam", "zoe"]


def test_middle_tie():
    ranked = assign_ranks(
        [_entry("a", 900), _entry("b", 400), _entry("c", 400), _entry("d", 100)]
    )

    assert [e.rank for e in ranked] == [1, 2, 2, 4]


def test_empty_population():
    assert assign_ranks([]) == []

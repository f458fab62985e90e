import itertools

from cinematch.models.recommendation import CatalogMatch, GenreSignal
from cinematch.services.recommendation.aggregator import aggregate


def _match(tmdb_id: int, *genres: int) -> CatalogMatch:
    return CatalogMatch(tmdb_id=tmdb_id, title=f"Movie {tmdb_id}", genre_ids=frozenset(genres))


def test_counts_overlapping_genres():
    signal = aggregate([_match(1, 1, 2), _match(2, 2, 3)])

    assert signal.counts == {1: 1, 2: 2, 3: 1}
    assert signal.qualifying() == [1, 2, 3]
    assert not signal.is_empty


def test_order_of_matches_does_not_matter():
    matches = [_match(1, 28, 878), _match(2, 18, 10749), _match(3, 27, 878), None]
    expected = aggregate(matches)

    for perm in itertools.permutations(matches):
        signal = aggregate(perm)
        assert signal == expected
        assert signal.qualifying() == expected.qualifying()


def test_unresolved_and_genreless_titles_contribute_nothing():
    signal = aggregate([None, _match(1), None])

    assert signal.is_empty
    assert signal.qualifying() == []


def test_empty_input():
    assert aggregate([]).is_empty


def test_absent_genres_are_not_keys():
    signal = aggregate([_match(1, 28)])
    assert 28 in signal.counts
    assert 35 not in signal.counts


def test_higher_threshold_keeps_shared_genres_only():
    signal = aggregate([_match(1, 1, 2), _match(2, 2, 3), _match(3, 2, 3)])

    assert signal.qualifying(min_count=2) == [2, 3]
    assert signal.qualifying(min_count=3) == [2]
    assert signal.qualifying(min_count=4) == []


def test_threshold_below_one_behaves_as_one():
    signal = GenreSignal(counts={5: 1})
    assert signal.qualifying(min_count=0) == [5]

from collections import Counter
from collections.abc import Iterable

from cinematch.models.recommendation import CatalogMatch, GenreSignal


def aggregate(matches: Iterable[CatalogMatch | None]) -> GenreSignal:
    """Flatten the genre sets of every resolved title and count them.

    Unresolved titles (None) contribute nothing, same as a match without genres.
    """
    counter: Counter[int] = Counter()
    for match in matches:
        if match is None:
            continue
        counter.update(match.genre_ids)
    return GenreSignal(counts=dict(counter))

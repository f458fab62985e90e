from collections.abc import Iterable

movie_genres = {
    28: "Action",
    12: "Adventure",
    16: "Animation",
    35: "Comedy",
    80: "Crime",
    99: "Documentary",
    18: "Drama",
    10751: "Family",
    14: "Fantasy",
    36: "History",
    27: "Horror",
    10402: "Music",
    9648: "Mystery",
    10749: "Romance",
    878: "Science Fiction",
    10770: "TV Movie",
    53: "Thriller",
    10752: "War",
    37: "Western",
}


def genre_names(genre_ids: Iterable[int]) -> list[str]:
    """Readable names for log lines; unknown ids are shown as-is."""
    return [movie_genres.get(gid, str(gid)) for gid in sorted(genre_ids)]

"""Bundled genre catalogs per content category.

Ids are TMDB genre ids, kept for display only. The catalogs are static for
the lifetime of the process.
"""

from types import MappingProxyType
from typing import Mapping

from reelpick.core.contracts import ContentCategory, Genre

MOVIE_GENRES: tuple[Genre, ...] = (
    Genre(28, "Action"),
    Genre(12, "Adventure"),
    Genre(16, "Animation"),
    Genre(35, "Comedy"),
    Genre(80, "Crime"),
    Genre(99, "Documentary"),
    Genre(18, "Drama"),
    Genre(10751, "Family"),
    Genre(14, "Fantasy"),
    Genre(36, "History"),
    Genre(27, "Horror"),
    Genre(10402, "Music"),
    Genre(9648, "Mystery"),
    Genre(10749, "Romance"),
    Genre(878, "Science Fiction"),
    Genre(10770, "TV Movie"),
    Genre(53, "Thriller"),
    Genre(10752, "War"),
    Genre(37, "Western"),
)

TV_GENRES: tuple[Genre, ...] = (
    Genre(10759, "Action & Adventure"),
    Genre(16, "Animation"),
    Genre(35, "Comedy"),
    Genre(80, "Crime"),
    Genre(99, "Documentary"),
    Genre(18, "Drama"),
    Genre(10751, "Family"),
    Genre(10762, "Kids"),
    Genre(9648, "Mystery"),
    Genre(10763, "News"),
    Genre(10764, "Reality"),
    Genre(10765, "Sci-Fi & Fantasy"),
    Genre(10766, "Soap"),
    Genre(10767, "Talk"),
    Genre(10768, "War & Politics"),
    Genre(37, "Western"),
)


class TaxonomyRegistry:
    """Read-only lookup of genre catalogs keyed by category."""

    def __init__(self, catalogs: Mapping[ContentCategory, tuple[Genre, ...]]) -> None:
        for category, genres in catalogs.items():
            names = [g.name for g in genres]
            if len(names) != len(set(names)):
                raise ValueError(f"Duplicate genre names in {category.value} catalog")

        self._catalogs: Mapping[ContentCategory, tuple[Genre, ...]] = MappingProxyType(
            {category: tuple(genres) for category, genres in catalogs.items()}
        )
        self._names: Mapping[ContentCategory, frozenset[str]] = MappingProxyType(
            {
                category: frozenset(g.name for g in genres)
                for category, genres in self._catalogs.items()
            }
        )

    def genres_for(self, category: ContentCategory) -> tuple[Genre, ...]:
        """Ordered genre catalog for a category."""
        return self._catalogs[category]

    def names_for(self, category: ContentCategory) -> frozenset[str]:
        """Set of valid genre names for a category."""
        return self._names[category]

    def genre_at(self, category: ContentCategory, index: int) -> Genre:
        """Genre at a catalog position.

        Raises:
            IndexError: If index is outside the catalog
        """
        genres = self._catalogs[category]
        if index < 0 or index >= len(genres):
            raise IndexError(f"No genre at position {index} for {category.value}")
        return genres[index]

    def index_of(self, category: ContentCategory, name: str) -> int | None:
        """Catalog position of a genre name, or None if unknown."""
        for i, genre in enumerate(self._catalogs[category]):
            if genre.name == name:
                return i
        return None


TAXONOMY = TaxonomyRegistry(
    {
        ContentCategory.MOVIES: MOVIE_GENRES,
        ContentCategory.SHOWS: TV_GENRES,
    }
)


def genres_for(category: ContentCategory) -> tuple[Genre, ...]:
    """Ordered genre catalog for a category from the bundled registry."""
    return TAXONOMY.genres_for(category)

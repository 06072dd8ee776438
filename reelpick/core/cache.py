"""Per-category recommendation results for one session."""

from collections.abc import Iterable

from reelpick.core.contracts import ContentCategory, RecommendationItem


class RecommendationCache:
    """Two independent result slots, one per category.

    A write replaces a whole slot; the other slot is never touched.
    """

    def __init__(self) -> None:
        self._slots: dict[ContentCategory, tuple[RecommendationItem, ...]] = {
            category: () for category in ContentCategory
        }

    def get(self, category: ContentCategory) -> tuple[RecommendationItem, ...]:
        """Current results for a category (empty until the first success)."""
        return self._slots[category]

    def replace(
        self,
        category: ContentCategory,
        items: Iterable[RecommendationItem],
    ) -> None:
        """Replace a category's results."""
        self._slots[category] = tuple(items)

    def snapshot(self) -> dict[ContentCategory, tuple[RecommendationItem, ...]]:
        """Copy of all slots."""
        return dict(self._slots)

    def __len__(self) -> int:
        return sum(len(items) for items in self._slots.values())

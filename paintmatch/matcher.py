"""
Paint matcher: from a picked color to a ranked, ownership-annotated list.
"""

import logging
from typing import Iterable, List, Optional

from .catalog_search import CatalogSearcher, MatchResult, find_top_matches
from .ownership import annotate_ownership
from .paint_catalog import CatalogEntry
from .pixel_sampler import ImageData, sample_displayed_pixel, sample_pixel
from .preferences import MatcherPreferences, get_preferences_manager

logger = logging.getLogger(__name__)


class PaintMatcher:
    """Match sampled colors against a paint catalog snapshot.

    The matcher keeps no catalog or inventory state; both are passed to
    every call, so one instance can serve many threads at once.
    """

    def __init__(self, preferences: Optional[MatcherPreferences] = None,
                 searcher: Optional[CatalogSearcher] = None):
        """Initialize the matcher.

        Args:
            preferences: Search preferences, the saved user preferences when omitted
            searcher: Ranking strategy passed to the catalog search
        """
        self.preferences = preferences or get_preferences_manager().preferences
        self.searcher = searcher

    @property
    def default_top_k(self) -> int:
        return self.preferences.search_prefs.default_top_k

    def match_hex(self, target_hex: str, catalog: Iterable[CatalogEntry],
                  owned: Iterable[str] = (), k: Optional[int] = None) -> List[MatchResult]:
        """Rank the catalog against target_hex and flag owned paints."""
        k = self.default_top_k if k is None else k
        matches = find_top_matches(target_hex, catalog, k, self.searcher)
        results = annotate_ownership(matches, owned)
        logger.debug(f"{target_hex}: {len(results)} matches, {sum(m.owned for m in results)} owned")
        return results

    def match_pixel(self, image: ImageData, x: float, y: float, catalog: Iterable[CatalogEntry],
                    owned: Iterable[str] = (), k: Optional[int] = None) -> List[MatchResult]:
        """Sample the pixel at natural-resolution (x, y) and match it."""
        return self.match_hex(sample_pixel(image, x, y), catalog, owned, k)

    def match_displayed_pixel(self, image: ImageData, display_x: float, display_y: float,
                              display_width: float, display_height: float,
                              catalog: Iterable[CatalogEntry], owned: Iterable[str] = (),
                              k: Optional[int] = None) -> List[MatchResult]:
        """Sample the pixel under a click on a scaled display and match it."""
        target_hex = sample_displayed_pixel(image, display_x, display_y, display_width, display_height)
        return self.match_hex(target_hex, catalog, owned, k)

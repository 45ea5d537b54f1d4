"""
Ranked paint catalog search.

Finds the K catalog entries closest to a target color using CIE76 Delta E.
Every call works on the catalog snapshot it is given: Lab values are
computed during the call and thrown away afterwards, so a catalog update
can never leave stale colors behind.
"""

import heapq
import logging
from collections import abc
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import numpy as np

from .color_converter import hex_to_lab, Lab
from .color_difference import MatchBand, delta_e_76_many, delta_e_to_similarity, match_band
from .errors import InvalidTopK
from .paint_catalog import CatalogEntry

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 10
DEFAULT_ROLE = "general"


@dataclass(frozen=True)
class MatchResult:
    """A catalog entry ranked against a target color."""
    entry: CatalogEntry
    distance: float          # CIE76 Delta E, 0.0 is an exact sRGB match
    owned: bool = False

    @property
    def band(self) -> MatchBand:
        return match_band(self.distance)

    @property
    def similarity(self) -> float:
        return delta_e_to_similarity(self.distance)


def _validate_k(k) -> int:
    # bool is an int subclass but never a meaningful count
    if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
        raise InvalidTopK(k)
    return int(k)


class CatalogSearcher:
    """Strategy for ranking a catalog against a target Lab color.

    Subclasses may build a spatial index over the catalog, as long as they
    return the same ordering: ascending distance, catalog order on ties.
    """

    def search(self, target_lab: Lab, catalog: Sequence[CatalogEntry], k: int) -> List[MatchResult]:
        raise NotImplementedError


class LinearScanSearcher(CatalogSearcher):
    """Full scan of the catalog keeping the K best with a bounded heap.

    Fine for catalogs of a few thousand paints.
    """

    def catalog_labs(self, catalog: Sequence[CatalogEntry]) -> np.ndarray:
        """Convert each entry's hex color to Lab, converting each distinct hex once."""
        lab_by_hex: Dict[str, Lab] = {}
        labs = np.empty((len(catalog), 3), dtype=float)
        for i, entry in enumerate(catalog):
            lab = lab_by_hex.get(entry.hex_color)
            if lab is None:
                lab = lab_by_hex[entry.hex_color] = hex_to_lab(entry.hex_color)
            labs[i] = lab
        return labs

    def search(self, target_lab: Lab, catalog: Sequence[CatalogEntry], k: int) -> List[MatchResult]:
        if not catalog:
            return []

        distances = delta_e_76_many(target_lab, self.catalog_labs(catalog))

        # (distance, index) keys keep equal distances in catalog order
        best = heapq.nsmallest(k, range(len(catalog)), key=lambda i: (distances[i], i))
        return [MatchResult(entry=catalog[i], distance=float(distances[i])) for i in best]


def find_top_matches(target_hex: str, catalog: Iterable[CatalogEntry], k: int = DEFAULT_TOP_K,
                     searcher: Optional[CatalogSearcher] = None) -> List[MatchResult]:
    """Find the K paints closest to a target color.

    Args:
        target_hex: Target color as '#RRGGBB'
        catalog: Catalog snapshot, read but never modified
        k: Maximum number of matches to return (>= 1)
        searcher: Ranking strategy, a linear scan by default

    Returns:
        Up to k MatchResult objects sorted by ascending Delta E; equal
        distances keep their catalog order

    Raises:
        InvalidColorFormat: if target_hex is malformed
        InvalidTopK: if k is not a positive integer
    """
    k = _validate_k(k)
    target_lab = hex_to_lab(target_hex)

    if not isinstance(catalog, (list, tuple)):
        catalog = list(catalog)
    if not catalog:
        logger.debug(f"Empty catalog, no matches for {target_hex}")
        return []

    searcher = searcher or LinearScanSearcher()
    matches = searcher.search(target_lab, catalog, k)

    if matches:
        logger.debug(
            f"Matched {target_hex} against {len(catalog)} paints: best "
            f"{matches[0].entry.name} ({matches[0].entry.brand}) ΔE {matches[0].distance:.2f}"
        )
    return matches


def find_closest_match(target_hex: str, catalog: Iterable[CatalogEntry],
                       searcher: Optional[CatalogSearcher] = None) -> Optional[MatchResult]:
    """Return the single closest paint, or None for an empty catalog."""
    matches = find_top_matches(target_hex, catalog, k=1, searcher=searcher)
    return matches[0] if matches else None


ColorRole = Union[Tuple[str, Optional[str]], Mapping[str, Optional[str]], str]


def _role_color(color: ColorRole) -> Tuple[str, str]:
    if isinstance(color, str):
        return color, DEFAULT_ROLE
    if isinstance(color, abc.Mapping):
        return color['hex'], color.get('location') or DEFAULT_ROLE
    hex_color, location = color
    return hex_color, location or DEFAULT_ROLE


def find_matches_by_role(colors: Iterable[ColorRole], catalog: Iterable[CatalogEntry],
                         matches_per_color: int = 3,
                         searcher: Optional[CatalogSearcher] = None) -> Dict[str, List[MatchResult]]:
    """Match several colors at once, grouped by where they are used.

    Useful for suggesting a base, highlight and shadow paint from a palette.
    Each color is a '#RRGGBB' string, a (hex, location) pair or a mapping
    with 'hex' and optional 'location'. Colors without a location are
    grouped under "general"; a later color replaces an earlier one with
    the same location.
    """
    if not isinstance(catalog, (list, tuple)):
        catalog = list(catalog)

    results: Dict[str, List[MatchResult]] = {}
    for color in colors:
        hex_color, role = _role_color(color)
        results[role] = find_top_matches(hex_color, catalog, matches_per_color, searcher)
    return results

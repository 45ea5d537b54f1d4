#!/usr/bin/env python3
"""
Tests for ranked catalog search.
"""

import copy

import numpy as np
import pytest

from conftest import make_entry
from paintmatch.catalog_search import (
    CatalogSearcher, LinearScanSearcher, MatchResult, find_closest_match,
    find_matches_by_role, find_top_matches,
)
from paintmatch.color_converter import hex_to_lab, rgb_to_hex
from paintmatch.color_difference import MatchBand, delta_e_76
from paintmatch.errors import InvalidColorFormat, InvalidTopK


def test_black_target_ranks_black_before_white():
    catalog = [make_entry("a", "#000000"), make_entry("b", "#FFFFFF")]
    results = find_top_matches("#000000", catalog, 2)

    assert [r.entry.id for r in results] == ["a", "b"]
    assert results[0].distance == 0.0
    assert results[1].distance == pytest.approx(100.0, abs=0.01)


def test_near_red_beats_green():
    catalog = [make_entry("green", "#00FF00"), make_entry("near-red", "#FE0000")]
    results = find_top_matches("#FF0000", catalog, 1)

    assert len(results) == 1
    assert results[0].entry.id == "near-red"
    assert results[0].distance < 1.0


def test_empty_catalog_returns_empty_list():
    assert find_top_matches("#123456", [], 5) == []


def test_malformed_target_raises():
    with pytest.raises(InvalidColorFormat):
        find_top_matches("red", [make_entry("a", "#000000")], 1)


@pytest.mark.parametrize("k", [0, -1, True, 2.0, "3", None])
def test_invalid_k_raises(k):
    with pytest.raises(InvalidTopK) as excinfo:
        find_top_matches("#000000", [make_entry("a", "#000000")], k)
    assert excinfo.value.k == k


def test_invalid_k_raises_even_for_empty_catalog():
    with pytest.raises(InvalidTopK):
        find_top_matches("#000000", [], 0)


def test_numpy_integer_k_is_accepted(paint_catalog):
    assert len(find_top_matches("#000000", paint_catalog, np.int64(2))) == 2


@pytest.mark.parametrize("k", [1, 3, 9, 50])
def test_result_length_is_min_of_k_and_catalog(paint_catalog, k):
    results = find_top_matches("#808080", paint_catalog, k)
    assert len(results) == min(k, len(paint_catalog))


def test_results_are_ranked_by_distance():
    rng = np.random.default_rng(42)
    catalog = [make_entry(f"p{i}", rgb_to_hex(rgb)) for i, rgb in enumerate(rng.integers(0, 256, size=(300, 3)))]
    target = "#7a3b9c"
    target_lab = hex_to_lab(target)

    results = find_top_matches(target, catalog, len(catalog))
    distances = [r.distance for r in results]

    assert distances == sorted(distances)
    for result in results:
        assert result.distance == pytest.approx(delta_e_76(target_lab, hex_to_lab(result.entry.hex_color)))

    # The top 10 are exactly the first 10 of the full ranking
    assert find_top_matches(target, catalog, 10) == results[:10]


def test_equal_distances_keep_catalog_order():
    catalog = [
        make_entry("citadel-white", "#FFFFFF", brand="Citadel"),
        make_entry("black", "#000000"),
        make_entry("vallejo-white", "#ffffff", brand="Vallejo"),
        make_entry("army-painter-white", "#FfFfFf", brand="Army Painter"),
    ]
    results = find_top_matches("#FFFFFF", catalog, 3)

    assert [r.entry.id for r in results] == ["citadel-white", "vallejo-white", "army-painter-white"]
    assert all(r.distance == 0.0 for r in results)


def test_search_does_not_modify_catalog(paint_catalog):
    snapshot = copy.deepcopy(paint_catalog)
    find_top_matches("#c01411", paint_catalog, 3)
    assert paint_catalog == snapshot


def test_results_start_unowned_with_bands(paint_catalog):
    results = find_top_matches("#C01411", paint_catalog, 3)

    assert all(isinstance(r, MatchResult) and r.owned is False for r in results)
    assert results[0].entry.id == "evil-sunz-scarlet"
    assert results[0].band is MatchBand.PERFECT
    assert results[0].similarity == 100.0


def test_catalog_may_be_any_iterable(paint_catalog):
    from_generator = find_top_matches("#0d407f", (entry for entry in paint_catalog), 2)
    assert from_generator == find_top_matches("#0d407f", paint_catalog, 2)
    assert from_generator[0].entry.id == "macragge-blue"


def test_custom_searcher_is_used(paint_catalog):
    calls = []

    class RecordingSearcher(CatalogSearcher):
        def search(self, target_lab, catalog, k):
            calls.append((target_lab, len(catalog), k))
            return LinearScanSearcher().search(target_lab, catalog, k)

    results = find_top_matches("#000000", paint_catalog, 2, searcher=RecordingSearcher())

    assert calls == [(hex_to_lab("#000000"), len(paint_catalog), 2)]
    assert [r.entry.id for r in results] == ["black", "abaddon-black"]


def test_base_searcher_is_abstract():
    with pytest.raises(NotImplementedError):
        CatalogSearcher().search((0.0, 0.0, 0.0), [make_entry("a", "#000000")], 1)


def test_find_closest_match(paint_catalog):
    match = find_closest_match("#52B245", paint_catalog)
    assert match.entry.id == "moot-green"
    assert find_closest_match("#52B245", []) is None


def test_find_matches_by_role(paint_catalog):
    results = find_matches_by_role(
        [("#C01411", "base"), {"hex": "#FFFFFF", "location": "highlight"}, {"hex": "#0D407F"}],
        paint_catalog,
        matches_per_color=2,
    )

    assert list(results) == ["base", "highlight", "general"]
    assert all(len(matches) == 2 for matches in results.values())
    assert results["base"][0].entry.id == "evil-sunz-scarlet"
    assert [m.entry.id for m in results["highlight"]] == ["white-scar", "dead-white"]
    assert results["general"][0].entry.id == "macragge-blue"


def test_find_matches_by_role_later_color_replaces_same_role(paint_catalog):
    results = find_matches_by_role(["#000000", ("#FFFFFF", None)], paint_catalog, matches_per_color=1)
    assert list(results) == ["general"]
    assert results["general"][0].entry.id == "white-scar"

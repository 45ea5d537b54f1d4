"""
PaintMatch - Perceptual paint color matching
Finds the commercial paints closest to a color picked from a reference photo
"""

__version__ = "1.0.0"
__app_name__ = 'PaintMatch'
__description__ = 'Perceptual paint color matching against multi-brand paint catalogs'

from .errors import PaintMatchError, InvalidColorFormat, InvalidTopK, InvalidCatalogRecord
from .color_converter import hex_to_rgb, rgb_to_hex, rgb_to_lab, hex_to_lab, is_valid_hex
from .color_difference import MatchBand, delta_e_76, delta_e_76_many, match_band, delta_e_to_similarity
from .paint_catalog import (
    CatalogEntry, PaintSource, PaintType, build_catalog, catalog_from_dataframe,
    entries_from_records, entry_from_record, filter_by_brand, read_catalog_csv,
)
from .catalog_search import (
    CatalogSearcher, LinearScanSearcher, MatchResult, find_closest_match,
    find_matches_by_role, find_top_matches,
)
from .ownership import annotate_ownership, owned_ids_from_inventory
from .pixel_sampler import (
    ImageLoadError, display_to_natural, load_reference_image, sample_displayed_pixel, sample_pixel,
)
from .matcher import PaintMatcher
from .match_dispatcher import MatchDispatcher
from .preferences import MatcherPreferences, PreferencesManager, get_preferences_manager
from .logging_setup import setup_logging

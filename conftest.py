import pytest

from paintmatch import preferences
from paintmatch.paint_catalog import CatalogEntry, PaintSource, PaintType


@pytest.fixture(autouse=True)
def paintmatch_home(tmp_path, monkeypatch):
    """Keep saved preferences and logs out of the real home directory."""
    home = tmp_path / "paintmatch-home"
    monkeypatch.setenv("PAINTMATCH_HOME", str(home))
    monkeypatch.setattr(preferences, "_prefs_manager", None)
    return home


def make_entry(entry_id, hex_color, name=None, brand="Citadel", **kwargs):
    return CatalogEntry(id=entry_id, name=name or f"Paint {entry_id}", brand=brand,
                        hex_color=hex_color, **kwargs)


@pytest.fixture
def paint_catalog():
    """A small multi-brand catalog snapshot."""
    return [
        make_entry("abaddon-black", "#231F20", "Abaddon Black", paint_type=PaintType.BASE),
        make_entry("white-scar", "#FFFFFF", "White Scar", paint_type=PaintType.LAYER),
        make_entry("mephiston-red", "#960C09", "Mephiston Red", paint_type=PaintType.BASE),
        make_entry("evil-sunz-scarlet", "#C01411", "Evil Sunz Scarlet", paint_type=PaintType.LAYER),
        make_entry("macragge-blue", "#0D407F", "Macragge Blue", paint_type=PaintType.BASE),
        make_entry("moot-green", "#52B244", "Moot Green", paint_type=PaintType.LAYER),
        make_entry("black", "#000000", "Black", brand="Vallejo", category="Model Color"),
        make_entry("dead-white", "#FFFFFF", "Dead White", brand="Vallejo", category="Model Color"),
        make_entry("my-red", "#C11512", "My Red", brand="Custom Mix", source=PaintSource.CUSTOM),
    ]

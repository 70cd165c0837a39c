"""Tests for catalog_loader.py — TSV catalog -> hierarchy, bases, runewords."""

import logging

import pytest

from catalog_loader import CatalogLoader


@pytest.fixture
def loader(catalog_dir, translator):
    return CatalogLoader(catalog_dir, translator=translator)


def test_item_types(loader):
    nodes = {n.code: n.parents for n in loader.load_item_types()}
    assert nodes["swor"] == ("mele",)
    assert nodes["weap"] == ()
    assert len(nodes) == 9


def test_base_items_sequential_ids(loader):
    bases = loader.load_base_items()
    assert [b.id for b in bases] == list(range(1, len(bases) + 1))
    assert [b.code for b in bases[:3]] == ["qui", "xtp", "pa1"]
    assert {b.category for b in bases} == {"armor", "weapon", "misc"}
    crs = next(b for b in bases if b.code == "crs")
    assert (crs.primary_type, crs.max_sockets, crs.category) == ("swor", 6, "weapon")


def test_expansion_rows_skipped(loader):
    assert all(not b.name.startswith("Expansion") for b in loader.load_base_items())


def test_rune_codes(loader):
    assert loader.load_rune_codes() == {"r01", "r03", "r08", "r31"}


class TestRunewords:

    def test_only_complete(self, loader):
        names = [rw.display_name for rw in loader.load_runewords()]
        assert names == ["Steel", "Stealth", "Spirit", "Mystery"]

    def test_types_and_runes(self, loader):
        spirit = next(rw for rw in loader.load_runewords() if rw.display_name == "Spirit")
        assert spirit.valid_types == ("swor", "shld")
        assert spirit.excluded_types == ("pala",)
        assert spirit.runes == ("r01", "r03", "r08", "r31")

    def test_properties_enriched(self, loader):
        spirit = next(rw for rw in loader.load_runewords() if rw.display_name == "Spirit")
        texts = [p.display_text for p in spirit.properties]
        assert texts == ["+25-35% Faster Cast Rate", "+2 To Combat Skills"]
        assert spirit.properties[0].has_range

    def test_attributes_combined(self, loader):
        stealth = next(rw for rw in loader.load_runewords() if rw.display_name == "Stealth")
        assert [p.code for p in stealth.properties] == ["all-stats"]
        assert stealth.properties[0].display_text == "+6 To All Attributes"


def test_load_all(loader):
    data = loader.load()
    assert len(data.item_types) == 9
    assert len(data.runewords) == 4
    assert "r31" in data.rune_codes


def test_missing_misc_is_optional(catalog_dir, translator, caplog):
    (catalog_dir / "misc.txt").unlink()
    with caplog.at_level(logging.WARNING, logger="catalog_loader"):
        data = CatalogLoader(catalog_dir, translator=translator).load()
    assert data.rune_codes == set()
    assert all(b.category != "misc" for b in data.base_items)
    assert "misc.txt" in caplog.text


@pytest.mark.parametrize("filename", ["itemtypes.txt", "armor.txt", "weapons.txt", "runes.txt"])
def test_missing_required_file(catalog_dir, translator, filename):
    (catalog_dir / filename).unlink()
    with pytest.raises(FileNotFoundError):
        CatalogLoader(catalog_dir, translator=translator).load()


def test_custom_file_names(catalog_dir, translator):
    (catalog_dir / "runes.txt").rename(catalog_dir / "runewords.txt")
    loader = CatalogLoader(catalog_dir, translator=translator, runewords_file="runewords.txt")
    assert len(loader.load_runewords()) == 4

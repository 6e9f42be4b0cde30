"""Tests for catalog module."""
from dustsweeper.catalog import Catalog, default_catalog
from dustsweeper.prestige import PrestigeUpgradeDef, UpgradeFamily
from dustsweeper.tool import ToolDef, ToolKind
from dustsweeper.zone import ZoneDef


def test_default_catalog_is_valid():
    assert default_catalog().validate() == []


def test_default_catalog_contents():
    catalog = default_catalog()
    assert len(catalog.zones) == 8
    assert len(catalog.tools) == 30
    assert len(catalog.prestige_upgrades) == 12
    assert len(catalog.achievements) == 27
    assert len(catalog.prestige_titles) == 11
    assert catalog.zones[0].cost == 0
    assert [z.cost for z in catalog.zones] == sorted(z.cost for z in catalog.zones)


def test_every_family_has_two_upgrades():
    catalog = default_catalog()
    for family in UpgradeFamily:
        assert len(catalog.family(family)) == 2


def test_lookups():
    catalog = default_catalog()
    basic = catalog.get_tool("basic")
    assert basic.base_cost == 20
    assert basic.kind is ToolKind.CLICK
    assert catalog.get_tool("nope") is None
    assert catalog.get_prestige_upgrade("windfall").family is UpgradeFamily.YIELD
    assert catalog.get_achievement("first_dust").display_name == "First Sweep"
    assert catalog.get_zone(7).name == "Aurora Spire"
    assert catalog.get_zone(8) is None
    assert catalog.get_zone(-1) is None


def test_validate_reports_problems():
    catalog = Catalog(
        zones=[ZoneDef("Only")],
        tools=[
            ToolDef("a", base_cost=10, increment=1, kind=ToolKind.CLICK, currency_zone=3),
            ToolDef("b", base_cost=0, increment=1, kind=ToolKind.PASSIVE),
        ],
        prestige_upgrades=[
            PrestigeUpgradeDef("p", "P", 0, 0.1, UpgradeFamily.CLICK, ""),
            PrestigeUpgradeDef("p", "P", 1, 0.1, UpgradeFamily.CLICK, ""),
        ],
    )
    errors = catalog.validate()
    assert any("unknown zone 3" in e for e in errors)
    assert any("non-positive base cost" in e for e in errors)
    assert any("Duplicate prestige upgrade ID" in e for e in errors)
    assert any("'p' has non-positive cost" in e for e in errors)


def test_empty_catalog_needs_a_zone():
    assert "Catalog needs at least one zone" in Catalog().validate()


def test_validate_rejects_unknown_family():
    catalog = Catalog(
        zones=[ZoneDef("Only")],
        prestige_upgrades=[PrestigeUpgradeDef("q", "Q", 1, 0.1, "click", "")],
    )
    assert any("unknown family" in e for e in catalog.validate())

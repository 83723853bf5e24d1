from sizecompare.geometry import MultiPolygon, Polygon
from sizecompare.registry import BoundaryRegistry, region_style, resolve_name


def test_resolve_name_uses_first_non_empty_key():
    assert resolve_name({"NAME": "", "name": "Germany", "NAME_EN": "Deutschland"}) == "Germany"
    assert resolve_name({"NAME_LONG": "Atlantis"}) == "Atlantis"
    assert resolve_name({"NAME": "   "}) is None
    assert resolve_name({"ISO": "XXX"}) is None
    assert resolve_name(None) is None


def test_resolve_name_with_custom_keys():
    props = {"NAME": "Indonesia", "admin": "Republic of Indonesia"}
    assert resolve_name(props, ("admin", "NAME")) == "Republic of Indonesia"


def test_build_registers_named_features(registry):
    assert len(registry) == 4
    assert set(registry.names) == {"Indonesia", "Germany", "Russia", "Atlantis"}
    assert "Germany" in registry
    assert "germany" not in registry
    assert isinstance(registry.geometry("Indonesia"), MultiPolygon)
    assert isinstance(registry.geometry("Germany"), Polygon)
    assert registry.geometry("Nowhere") is None


def test_unnamed_feature_is_kept_but_not_selectable(registry):
    assert len(registry.unknown) == 1
    region = registry.unknown[0]
    assert region.name is None
    assert region.selectable is False
    assert region.interaction is None
    assert region in registry.all_regions


def test_non_polygon_features_are_skipped(registry):
    assert "Null Island" not in registry


def test_reference_region(registry):
    ref = registry.reference_region
    assert ref is not None and ref.is_reference
    assert not registry.get("Germany").is_reference


def test_area_lookup_is_exact(registry):
    assert registry.area("Germany") == 357114
    assert registry.area("GERMANY") is None
    assert registry.area("Atlantis") is None


def test_duplicate_names_keep_first(features, areas):
    extra = dict(features[1], properties={"NAME": "Germany", "marker": 2})
    registry = BoundaryRegistry.build(features + [extra], areas)
    assert registry.get("Germany").boundary.properties == {"name": "Germany"}


def test_missing_reference_is_tolerated(features, areas):
    registry = BoundaryRegistry.build(features[1:], areas, reference="Indonesia")
    assert registry.reference_region is None


def test_region_styles():
    assert region_style(True).fill_color == "#ff4444"
    assert region_style(True).fill_opacity == 0.7
    assert region_style(False).fill_color == "#ffffff"
    assert region_style(False).fill_opacity == 0.3
    assert region_style(False, is_hovered=True).fill_opacity == 0.6
    assert region_style(False, is_hovered=True).weight == 2
    assert region_style(False, is_highlighted=True).fill_opacity == 0.5
    assert region_style(False).to_leaflet()["weight"] == 1


def test_highlight_is_exclusive(registry):
    registry.highlight("Germany")
    registry.highlight("Russia")
    assert registry.highlighted == "Russia"
    assert not registry.get("Germany").highlighted
    assert registry.get("Russia").style == region_style(False, is_highlighted=True)


def test_reset_styles_returns_to_baseline(registry):
    registry.highlight("Germany")
    registry.set_hovered("Russia")
    registry.set_hovered("Indonesia")
    registry.reset_styles()
    for region in registry.all_regions:
        assert region.style == region_style(region.is_reference)
    assert registry.highlighted is None

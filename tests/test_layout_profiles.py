"""
Tests for the layout profile and reference config tables.
"""
from flyerkit.layout_profiles import (
    BASE_PROFILE,
    LAYOUT_PROFILES,
    REFERENCE_CONFIGS,
    layout_profile_for,
    reference_config_for,
)
from flyerkit.models import DECOR_KINDS
from flyerkit.templates import PRESETS, get_preset, list_presets, normalize_preset_id


class TestLayoutProfiles:

    def test_one_profile_per_decor_kind(self):
        assert set(LAYOUT_PROFILES) == set(DECOR_KINDS)

    def test_generic_is_base(self):
        assert layout_profile_for("generic") is BASE_PROFILE

    def test_unknown_kind_gets_base_profile(self):
        assert layout_profile_for("no-such-kind") is BASE_PROFILE

    def test_profiles_only_use_known_roles(self):
        roles = {"Body", "Display", "Script"}
        for profile in LAYOUT_PROFILES.values():
            assert {
                profile.invite_font,
                profile.title_top_font,
                profile.title_bottom_font,
                profile.tagline_font,
                profile.detail_label_font,
                profile.detail_value_font,
                profile.closing_font,
            } <= roles

    def test_winter_overrides(self):
        winter = layout_profile_for("winter")
        assert winter.title_top_size == 140
        assert winter.tagline_color_mode == "text"
        assert winter.date_ribbon_style == BASE_PROFILE.date_ribbon_style


class TestReferenceConfigs:
    """Every catalog preset has exactly one reference config."""

    def test_configs_match_catalog(self):
        assert set(REFERENCE_CONFIGS) == {p.id for p in PRESETS}
        assert len(REFERENCE_CONFIGS) == 12

    def test_background_matches_catalog_asset(self):
        for preset in PRESETS:
            assert REFERENCE_CONFIGS[preset.id].background == preset.asset_file

    def test_variant_suffix_shares_base_config(self):
        assert reference_config_for("eid-lantern-gold-2") is REFERENCE_CONFIGS["eid-lantern-gold"]

    def test_lookup_is_case_insensitive(self):
        assert reference_config_for("  Red-Gold-Luxe ") is REFERENCE_CONFIGS["red-gold-luxe"]

    def test_unknown_preset(self):
        assert reference_config_for("neon-something") is None
        assert reference_config_for(None) is None

    def test_insets_are_four_sided(self):
        for config in REFERENCE_CONFIGS.values():
            assert len(config.panel_inset) == 4
            assert all(v >= 0 for v in config.panel_inset)


class TestPresetCatalog:

    def test_normalize(self):
        assert normalize_preset_id("Blue-Arch-Floral-2") == "blue-arch-floral"
        assert normalize_preset_id(None) == ""

    def test_get_preset(self):
        assert get_preset("lilac-hex-floral").label == "Lilac Hex Floral"
        assert get_preset("missing") is None

    def test_list_presets_shape(self):
        listed = list_presets()
        assert [p["id"] for p in listed] == [p.id for p in PRESETS]
        assert all(len(p["palette"]) == 3 for p in listed)

"""
test_section_config.py - section descriptor parsing

- empty descriptors are not errors
- section keys must be non-empty strings (all-or-nothing per template)
- is_dynamic handling at template and section level
- field settings validated into FieldConfig
"""

from datetime import date
from pathlib import Path

import pytest

from pagebuilder.domain.exceptions import ConfigurationError
from pagebuilder.domain.section_config import (
    FieldConfig,
    load_descriptor,
    parse_fields,
    parse_sections,
)


# =============================================================================
# load_descriptor
# =============================================================================

class TestLoadDescriptor:

    def test_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("hero:\n  title: {}\nfooter: {}\n")

        assert load_descriptor(path, template="home") == {"hero": {"title": {}}, "footer": {}}

    def test_json(self, tmp_path: Path):
        path = tmp_path / "config.json"
        path.write_text('{"hero": {"title": {}}, "is_dynamic": false}')

        assert load_descriptor(path, template="home") == {"hero": {"title": {}}, "is_dynamic": False}

    def test_empty_file_is_empty_descriptor(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")

        assert load_descriptor(path, template="home") == {}

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("hero: [unclosed\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_descriptor(path, template="home")

        assert exc_info.value.template == "home"

    def test_top_level_must_be_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("- hero\n- footer\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_descriptor(path, template="home")


# =============================================================================
# parse_sections
# =============================================================================

class TestParseSections:

    def test_empty_descriptor(self):
        assert parse_sections("home", {}, template_is_dynamic=False) == []

    def test_order_follows_descriptor(self):
        sections = parse_sections(
            "home",
            {"hero": {}, "features": {}, "footer": {}},
            template_is_dynamic=False,
        )

        assert [(s.key, s.order) for s in sections] == [("hero", 0), ("features", 1), ("footer", 2)]

    def test_top_level_is_dynamic_is_not_a_section(self):
        sections = parse_sections(
            "home",
            {"hero": {"title": {}}, "is_dynamic": False},
            template_is_dynamic=False,
        )

        assert [s.key for s in sections] == ["hero"]
        assert sections[0].order == 0
        assert sections[0].empty_data() == {"title": ""}

    def test_section_flag_is_stripped_from_fields(self):
        sections = parse_sections(
            "home",
            {"banner": {"is_dynamic": True, "image": {"type": "image"}}},
            template_is_dynamic=False,
        )

        banner = sections[0]
        assert banner.is_dynamic is True
        assert list(banner.fields) == ["image"]
        assert "is_dynamic" not in banner.fields_dict()

    def test_sections_default_to_static(self):
        sections = parse_sections("home", {"hero": {"title": {}}}, template_is_dynamic=False)

        assert sections[0].is_dynamic is False

    def test_dynamic_template_forces_dynamic_sections(self):
        sections = parse_sections(
            "dynamic",
            {"cta": {"is_dynamic": False, "text": {}}, "quote": {}},
            template_is_dynamic=True,
        )

        assert all(s.is_dynamic for s in sections)
        assert list(sections[0].fields) == ["text"]

    def test_null_section_has_no_fields(self):
        sections = parse_sections("home", {"divider": None}, template_is_dynamic=False)

        assert sections[0].fields == {}
        assert sections[0].empty_data() == {}

    @pytest.mark.parametrize("bad_key", ["", "   ", 0, 1, None, True])
    def test_invalid_keys_reject_whole_descriptor(self, bad_key):
        descriptor = {"hero": {"title": {}}, bad_key: {"body": {}}}

        with pytest.raises(ConfigurationError) as exc_info:
            parse_sections("home", descriptor, template_is_dynamic=False)

        assert exc_info.value.template == "home"
        assert exc_info.value.key == bad_key
        assert "home" in str(exc_info.value)

    def test_section_must_be_mapping(self):
        with pytest.raises(ConfigurationError, match="hero"):
            parse_sections("home", {"hero": ["title"]}, template_is_dynamic=False)

    def test_non_boolean_is_dynamic(self):
        with pytest.raises(ConfigurationError, match="is_dynamic"):
            parse_sections("home", {"hero": {"is_dynamic": "yes"}}, template_is_dynamic=False)


# =============================================================================
# parse_fields
# =============================================================================

class TestParseFields:

    def test_field_shapes(self):
        fields = parse_fields("home", "hero", {
            "title": {},
            "subtitle": None,
            "image": "image",
            "cta": {"type": "link", "label": "Call to action", "required": True},
        })

        assert fields["title"] == FieldConfig()
        assert fields["subtitle"] == FieldConfig()
        assert fields["image"] == FieldConfig(type="image")
        assert fields["cta"] == FieldConfig(type="link", label="Call to action", options={"required": True})

    def test_to_dict_keeps_options(self):
        config = FieldConfig(type="select", label="Size", options={"choices": ["s", "m"]})

        assert config.to_dict() == {"choices": ["s", "m"], "type": "select", "label": "Size"}

    def test_default_field_serializes_type(self):
        assert FieldConfig().to_dict() == {"type": "text"}

    @pytest.mark.parametrize("settings", [42, ["text"], {"type": 5}, {"type": ""}, {"label": 3}])
    def test_invalid_field_settings(self, settings):
        with pytest.raises(ConfigurationError):
            parse_fields("home", "hero", {"title": settings})

    def test_invalid_field_name(self):
        with pytest.raises(ConfigurationError, match="field name"):
            parse_fields("home", "hero", {"": {}})

    def test_options_must_be_json_serializable(self):
        with pytest.raises(ConfigurationError, match="JSON-serializable") as excinfo:
            parse_fields("events", "hero", {"date": {"default": date(2024, 1, 1)}})

        assert excinfo.value.template == "events"
        assert excinfo.value.key == "hero"

    def test_yaml_dates_in_options_are_rejected(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("hero:\n  date:\n    default: 2024-01-01\n")

        descriptor = load_descriptor(path, template="events")

        with pytest.raises(ConfigurationError, match="default"):
            parse_sections("events", descriptor, template_is_dynamic=False)

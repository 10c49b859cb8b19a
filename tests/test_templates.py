# ABOUTME: Tests the default template catalogue and YAML template loading.
# ABOUTME: Checks round-tripping, the shipped config file, and malformed entries.

import tempfile
import unittest
from pathlib import Path

import pytest
import yaml

from src.gamification.conditions import SubjectMastery, WeeklyChampion
from src.gamification.templates import (
    default_registry,
    load_registry,
    registry_from_dict,
    registry_to_dict,
)

CONFIG_PATH = Path(__file__).resolve().parents[1] / "configs" / "gamification.yaml"


class TestTemplateLoading(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self.tmpdir.name) / "templates.yaml"

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_yaml_round_trip_preserves_registry(self):
        registry = default_registry()
        self.path.write_text(yaml.safe_dump(registry_to_dict(registry), allow_unicode=True), encoding="utf-8")
        self.assertEqual(load_registry(self.path), registry)

    def test_missing_required_field_is_value_error(self):
        self.path.write_text(yaml.safe_dump({"badges": [{"name": "No key"}]}), encoding="utf-8")
        with self.assertRaises(ValueError):
            load_registry(self.path)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_registry(Path(self.tmpdir.name) / "absent.yaml")


def test_shipped_config_matches_defaults():
    assert load_registry(CONFIG_PATH) == default_registry()


def test_default_catalogue_contents():
    registry = default_registry()
    assert len(registry.achievements) == 6
    assert len(registry.badges) == 7
    by_key = {t.key: t for t in registry.achievements}
    assert by_key["math_mastery"].condition == SubjectMastery("Mathematics", 20)
    badges = {t.key: t for t in registry.badges}
    assert badges["weekly_champion"].condition == WeeklyChampion(500)


def test_custom_template_from_mapping():
    registry = registry_from_dict(
        {
            "achievements": [
                {"key": "marathon", "name": "Marathon", "points": 75, "condition": {"kind": "total_study_hours", "target": 10}}
            ],
            "badges": [],
        }
    )
    assert registry.achievements[0].points == 75
    assert registry.badges == ()


def test_unknown_condition_kind_is_rejected():
    with pytest.raises(ValueError, match="unsupported condition kind"):
        registry_from_dict({"badges": [{"key": "x", "condition": {"kind": "teleport"}}]})


def test_unexpected_condition_parameters_are_rejected():
    with pytest.raises(ValueError, match="unexpected parameters"):
        registry_from_dict({"badges": [{"key": "x", "condition": {"kind": "night_owl", "moon": 1}}]})


def test_duplicate_names_are_rejected():
    entry = {"key": "a", "name": "Same", "condition": {"kind": "first_study_session"}}
    with pytest.raises(ValueError, match="Duplicate"):
        registry_from_dict({"badges": [entry, {**entry, "key": "b"}]})

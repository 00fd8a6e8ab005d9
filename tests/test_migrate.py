"""Tests for legacy profile store migration"""
import pytest

from ccode.profiles import (
    DefaultSelection,
    ProfileGroups,
    ProfileStoreData,
    migrate,
    migrate_raw,
)

LEGACY_ENTRY = {
    "ANTHROPIC_AUTH_TOKEN": "legacy-token",
    "ANTHROPIC_BASE_URL": "https://legacy.test",
}


@pytest.fixture
def legacy_raw() -> dict:
    return {
        "default": "work",
        "profiles": {"work": dict(LEGACY_ENTRY), "home": dict(LEGACY_ENTRY)},
    }


class TestMigrate:
    """Test the flat → grouped transform"""

    def test_legacy_profiles_move_to_direct(self, legacy_raw):
        data = migrate_raw(legacy_raw)
        assert sorted(data.groups.direct) == ["home", "work"]
        assert data.groups.direct["work"].auth_token == "legacy-token"
        assert data.defaults.direct_name == "work"
        assert data.legacy_profiles is None
        assert data.legacy_default is None
        assert data.default_group == "direct"
        assert data.schema_version == "1.0"

    def test_legacy_default_not_promoted_over_current(self, legacy_raw):
        legacy_raw["default_profile"] = {"direct": "home"}
        data = migrate_raw(legacy_raw)
        assert data.defaults.direct_name == "home"
        assert data.legacy_default is None

    def test_legacy_entry_wins_on_clash(self, legacy_raw):
        legacy_raw["groups"] = {
            "direct": {
                "work": {
                    "ANTHROPIC_AUTH_TOKEN": "current-token",
                    "ANTHROPIC_BASE_URL": "https://current.test",
                }
            }
        }
        data = migrate_raw(legacy_raw)
        assert data.groups.direct["work"].auth_token == "legacy-token"
        assert "home" in data.groups.direct

    def test_missing_default_group_filled(self):
        data = migrate(ProfileStoreData(default_group=None))
        assert data.default_group == "direct"

    def test_input_not_mutated(self, legacy_raw):
        data = ProfileStoreData.model_validate(legacy_raw)
        migrate(data)
        assert data.legacy_profiles is not None
        assert data.legacy_default == "work"

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            {"version": "1.0"},
            {"groups": {"direct": {"a": LEGACY_ENTRY}}},
            {"groups": None, "default_profile": None, "default_group": None},
            {"default": "ghost"},
            {"default": "work", "profiles": {"work": LEGACY_ENTRY}},
        ],
    )
    def test_idempotent(self, raw):
        once = migrate_raw(raw)
        assert migrate(once) == once

    def test_tolerates_partial_documents(self):
        data = migrate_raw({"groups": {"router": {}}})
        assert data.groups.direct == {}
        assert data.groups.router == {}
        assert data.defaults == DefaultSelection()

    def test_current_document_unchanged(self):
        data = ProfileStoreData(
            groups=ProfileGroups(),
            defaults=DefaultSelection(direct_name=None, router_name=None),
        )
        assert migrate(data) == data

"""
Tests for the console estimation demo and its entry point.
"""

import json

import pytest

import lazybar.__main__ as entry
from lazybar.demo import ItemSizing, run_demo, run_profile


class TestDemo:
    """Test the demo item profiles and runs."""

    def test_item_profiles(self):
        assert ItemSizing.FIXED.heights == [30] * 50
        assert ItemSizing.GROWING.heights[:3] == [5, 10, 15]
        assert ItemSizing.SHRINKING.heights[:3] == [250, 245, 240]

    @pytest.mark.asyncio
    async def test_fixed_sizes_are_estimated_exactly(self):
        summary = await run_profile(ItemSizing.FIXED)

        assert summary["simple"] == pytest.approx(0)
        assert summary["caching"] == pytest.approx(0)

    @pytest.mark.asyncio
    async def test_run_demo_covers_all_profiles(self):
        results = await run_demo()

        assert set(results) == {"FIXED", "GROWING", "SHRINKING"}
        assert results["GROWING"]["caching"] < results["GROWING"]["simple"]


class TestEntryPoint:
    """Test that the entry point applies the loaded configuration."""

    @pytest.fixture
    def entry_calls(self, monkeypatch):
        calls = {"levels": [], "demo_runs": 0}

        async def fake_run_demo():
            calls["demo_runs"] += 1
            return {}

        monkeypatch.setattr(entry, "setup_logging", lambda level: calls["levels"].append(level))
        monkeypatch.setattr(entry, "run_demo", fake_run_demo)
        return calls

    def test_log_level_comes_from_config_file(self, tmp_path, entry_calls):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"log_level": "debug"}))

        assert entry.main([str(config_file)]) == 0
        assert entry_calls["levels"] == ["DEBUG"]
        assert entry_calls["demo_runs"] == 1

    def test_missing_config_file_uses_default_level(self, tmp_path, entry_calls):
        assert entry.main([str(tmp_path / "absent.json")]) == 0
        assert entry_calls["levels"] == ["INFO"]

    def test_unreadable_config_file_fails(self, tmp_path, entry_calls):
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json")

        assert entry.main([str(config_file)]) == 1
        assert entry_calls["demo_runs"] == 0

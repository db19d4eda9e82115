"""Tests for name and description synthesis."""

import pytest

from core.constants import MAX_NAME_LENGTH
from ingestion.synthesizer import derive_name, generate_description, join_app_names, name_from_filename


@pytest.mark.unit
class TestNames:

    @pytest.mark.parametrize("filename,expected", [
        ("6102_Slack_Lead_Notify.json", "Slack Lead Notify"),
        ("0042 - Daily  Report.json", "Daily Report"),
        ("__Weird__Name__.json", "Weird Name"),
        ("no_id_prefix.json", "no id prefix"),
        ("123_.json", ""),
        ("readme", "readme"),
        ("١٢_Arabic_Digits.json", "١٢ Arabic Digits"),
        ("１２_Fullwidth.json", "１２ Fullwidth"),
    ])
    def test_name_from_filename(self, filename, expected):
        assert name_from_filename(filename) == expected

    def test_declared_name_wins(self):
        assert derive_name("  Lead routing  ", "6102_Slack_Lead_Notify.json") == "Lead routing"

    @pytest.mark.parametrize("declared", [None, "", "   "])
    def test_falls_back_to_filename(self, declared):
        assert derive_name(declared, "6102_Slack_Lead_Notify.json") == "Slack Lead Notify"

    def test_empty_when_nothing_derivable(self):
        assert derive_name(None, "123_.json") == ""

    def test_truncated_to_max_length(self):
        assert derive_name("x" * 250, "a.json") == "x" * MAX_NAME_LENGTH
        assert len(derive_name(None, "1_" + "y" * 300 + ".json")) == MAX_NAME_LENGTH


@pytest.mark.unit
class TestDescriptions:

    def test_join_app_names(self):
        assert join_app_names(["Slack"]) == "Slack"
        assert join_app_names(["Slack", "Gmail"]) == "Slack and Gmail"
        assert join_app_names(["Slack", "Gmail", "Notion"]) == "Slack, Gmail, and Notion"

    def test_two_apps(self):
        assert generate_description(["Slack", "Gmail"], 2) == "Connects Slack and Gmail with 2 steps"

    def test_infrastructure_tags_excluded_and_capped_at_three(self):
        tags = ["Webhook", "Slack", "HTTP/API", "Notion", "Stripe", "Gmail"]
        assert generate_description(tags, 6) == "Connects Slack, Notion, and Stripe with 6 steps"

    def test_singular_step(self):
        assert generate_description(["Slack"], 1) == "Connects Slack with 1 step"

    def test_duplicate_tags_named_once(self):
        assert generate_description(["Slack", "Slack"], 2) == "Connects Slack with 2 steps"

    def test_generic_sentence_without_apps(self):
        assert generate_description(["Webhook", "Scheduled", "Database"], 3) == (
            "Automates a 3-step workflow using n8n."
        )
        assert generate_description([], 5) == "Automates a 5-step workflow using n8n."

    def test_generic_sentence_uses_platform_display_name(self):
        assert generate_description([], 5, platform="make") == "Automates a 5-step workflow using Make.com."
        assert generate_description([], 2, platform="pipedream") == "Automates a 2-step workflow using pipedream."

"""Tests for the pydantic-settings configuration."""

from app.config.settings import Settings


def test_defaults_match_layout_constants():
    config = Settings().pagination_config()
    assert config.capacity_per_page == 40
    assert config.footer_overflow_item_cutoff == 15
    assert config.footer_overflow_threshold == 300


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("PAGE_CAPACITY", "12")
    monkeypatch.setenv("footer_overflow_threshold", "150")
    config = Settings().pagination_config()
    assert config.capacity_per_page == 12
    assert config.footer_overflow_threshold == 150


def test_request_capacity_wins():
    assert Settings(PAGE_CAPACITY=25).pagination_config(capacity_per_page=8).capacity_per_page == 8

"""Tests for GSTIN / PAN format checks and state codes."""

from app.domain.services.gstin_pan_validation import (
    has_gstin,
    is_valid_gstin,
    is_valid_pan,
    state_from_gstin,
)


class TestFormats:
    def test_valid_pan(self):
        assert is_valid_pan("AAPFU0939F")
        assert is_valid_pan(" aapfu0939f ")

    def test_invalid_pan(self):
        assert not is_valid_pan("AAPF0939F")
        assert not is_valid_pan(None)

    def test_valid_gstin(self):
        assert is_valid_gstin("27AAPFU0939F1ZV")
        assert is_valid_gstin("29aabct1332l1zz")

    def test_invalid_gstin(self):
        assert not is_valid_gstin("27AAPFU0939F1XV")  # 14th char must be Z
        assert not is_valid_gstin("27ABC")
        assert not is_valid_gstin("")

    def test_has_gstin(self):
        assert has_gstin("27ABC")
        assert not has_gstin("   ")
        assert not has_gstin(None)


class TestStateFromGstin:
    def test_known_prefix(self):
        assert state_from_gstin("27AAPFU0939F1ZV") == "Maharashtra"
        assert state_from_gstin("36AABCU9603R1ZM") == "Telangana"

    def test_unknown_prefix(self):
        assert state_from_gstin("99AAPFU0939F1ZV") is None
        assert state_from_gstin(None) is None

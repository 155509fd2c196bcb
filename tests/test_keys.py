"""Tests for stable keys and rounding helpers."""

from app.onboarding.keys import derive_stable_key
from app.onboarding.stats import mean, mean_of, percent, round_half_up


class TestStableKey:
    """Tests for derive_stable_key."""

    def test_deterministic(self):
        assert derive_stable_key("Basics", "Read Handbook") == derive_stable_key(
            "Basics", "Read Handbook"
        )

    def test_hex_sha256(self):
        key = derive_stable_key("Basics", "Read Handbook")
        assert len(key) == 64
        int(key, 16)

    def test_title_change_changes_key(self):
        assert derive_stable_key("Basics", "Read Handbook") != derive_stable_key(
            "Basics", "Read the Handbook"
        )

    def test_section_change_changes_key(self):
        assert derive_stable_key("Basics", "Read Handbook") != derive_stable_key(
            "Company Basics", "Read Handbook"
        )

    def test_separator_prevents_collisions(self):
        """Test the split between section and item title matters."""
        assert derive_stable_key("a b", "c") != derive_stable_key("a", "b c")


class TestRounding:
    """Tests for the half-up rounding helpers."""

    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(12.4) == 12
        assert round_half_up(0.5) == 1

    def test_percent(self):
        assert percent(1, 8) == 13
        assert percent(1, 3) == 33
        assert percent(2, 3) == 67
        assert percent(0, 0) == 0

    def test_mean(self):
        assert mean([]) == 0
        assert mean([1, 2]) == 2
        assert mean_of(5, 2) == 3
        assert mean_of(10, 0) == 0

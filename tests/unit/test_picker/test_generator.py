"""Unit tests for color pool generation."""

from src.palette import hsl_to_hex
from src.picker.generator import generate_distinct_colors, new_palette_seed


class TestGenerateDistinctColors:
    """Tests for generate_distinct_colors."""

    def test_empty_for_non_positive_count(self) -> None:
        """Test zero or negative counts produce no items."""
        assert generate_distinct_colors(0, seed=0.5) == []
        assert generate_distinct_colors(-3, seed=0.5) == []

    def test_ids_and_names(self) -> None:
        """Test items are numbered from zero with one-based names."""
        items = generate_distinct_colors(3, seed=0.1)
        assert [item.id for item in items] == ["color_0", "color_1", "color_2"]
        assert [item.name for item in items] == ["Color 1", "Color 2", "Color 3"]

    def test_initial_statistics(self) -> None:
        """Test generated items start unrated."""
        for item in generate_distinct_colors(5, seed=0.1):
            assert item.rating == 1500.0
            assert item.comparisons == item.wins == item.losses == 0
            assert item.is_active

    def test_golden_ratio_hue_steps(self) -> None:
        """Test hue advances by the golden-ratio conjugate from the seed."""
        items = generate_distinct_colors(2, seed=0.0)
        assert items[0].hsl is not None and items[0].hsl.h == 222
        assert items[1].hsl is not None and items[1].hsl.h == 84

    def test_saturation_and_lightness_cycles(self) -> None:
        """Test saturation cycles per item and lightness per four items."""
        items = generate_distinct_colors(9, seed=0.3)
        hsl = [item.hsl for item in items]
        assert [c.s for c in hsl if c] == [40, 60, 80, 100, 40, 60, 80, 100, 40]
        assert [c.l for c in hsl if c] == [30, 30, 30, 30, 40, 40, 40, 40, 50]

    def test_neighbours_differ(self) -> None:
        """Test consecutive colors never share saturation."""
        items = generate_distinct_colors(50, seed=0.7)
        for prev, cur in zip(items, items[1:]):
            assert prev.hsl is not None and cur.hsl is not None
            assert prev.hsl.s != cur.hsl.s

    def test_hex_matches_hsl(self) -> None:
        """Test derived hex agrees with the HSL components."""
        for item in generate_distinct_colors(20, seed=0.42):
            assert item.hsl is not None
            assert item.hex == hsl_to_hex(item.hsl.h, item.hsl.s, item.hsl.l)

    def test_same_seed_same_palette(self) -> None:
        """Test the seed fully determines the palette."""
        first = generate_distinct_colors(30, seed=0.123)
        second = generate_distinct_colors(30, seed=0.123)
        assert [item.hex for item in first] == [item.hex for item in second]

    def test_hues_within_wheel(self) -> None:
        """Test hues stay in [0, 360)."""
        for item in generate_distinct_colors(200):
            assert item.hsl is not None
            assert 0 <= item.hsl.h < 360


class TestNewPaletteSeed:
    """Tests for new_palette_seed."""

    def test_unit_interval(self) -> None:
        """Test seeds fall within [0, 1)."""
        for _ in range(20):
            assert 0 <= new_palette_seed() < 1

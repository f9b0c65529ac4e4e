"""Unit tests for token tables and name registries."""

from tailwind_cleaner.tokens import (
    COLORS,
    ColorNameRecord,
    DiscoveredValue,
    NameRegistry,
    TokenSource,
    TokenTable,
)


class TestTokenTable:
    """Tests for TokenTable."""

    def test_first_name_for_value_is_kept(self):
        """Test that a later name for the same value does not replace the first."""
        table = TokenTable()
        table.add(COLORS, "ff0000", "red")
        table.add(COLORS, "ff0000", "danger")

        assert table.lookup(COLORS, "ff0000") == "red"
        assert table.names(COLORS) == {"red", "danger"}
        assert table.total_tokens == 1

    def test_lookup_unknown(self):
        """Test lookups in missing categories."""
        table = TokenTable()
        assert table.lookup("spacing", "4px") is None
        assert not table.has_value("spacing", "4px")
        assert table.values("spacing") == {}

    def test_constructor_seeds_names(self):
        """Test that names passed to the constructor are tracked."""
        table = TokenTable({"spacing": {"12px": "gutter"}})
        assert table.names("spacing") == {"gutter"}

    def test_reserve_takes_name_without_value(self):
        """Test that a reserved name blocks the registry but adds no token."""
        table = TokenTable()
        table.reserve(COLORS, "red")

        assert table.names(COLORS) == {"red"}
        assert table.total_tokens == 0
        assert NameRegistry(COLORS, table.names(COLORS)).claim("red") == "red-1"

    def test_truthiness(self):
        """Test that empty tables are falsy."""
        assert not TokenTable()
        assert TokenTable({"spacing": {"1px": "hair"}})

    def test_config_orientation(self):
        """Test conversion to name -> value with hash-prefixed colors."""
        table = TokenTable()
        table.add(COLORS, "ff0000", "red")
        table.add("spacing", "15.6px", "16")

        assert table.to_config_dict() == {
            "colors": {"red": "#ff0000"},
            "spacing": {"16": "15.6px"},
        }

    def test_dict_round_trip(self):
        """Test serialization helpers."""
        table = TokenTable({"width": {"50%": "1/2"}})
        restored = TokenTable.from_dict(table.to_dict())
        assert restored.lookup("width", "50%") == "1/2"


class TestNameRegistry:
    """Tests for NameRegistry."""

    def test_free_name_is_returned_unchanged(self):
        """Test a name with no collision."""
        registry = NameRegistry(COLORS)
        assert registry.claim("red") == "red"
        assert "red" in registry

    def test_suffixes_increment(self):
        """Test that collisions take the first free numeric suffix."""
        registry = NameRegistry(COLORS, {"red", "red-1"})
        assert registry.claim("red") == "red-2"
        assert registry.claim("red") == "red-3"
        assert len(registry) == 4

    def test_ensure_unique_does_not_register(self):
        """Test that ensure_unique only proposes."""
        registry = NameRegistry(COLORS)
        assert registry.ensure_unique("blue") == "blue"
        assert "blue" not in registry


class TestRecords:
    """Tests for color name records and discovered values."""

    def test_exact_record(self):
        """Test distance zero means exact."""
        assert ColorNameRecord("Red").is_exact
        assert not ColorNameRecord("Reddish", 4.2).is_exact

    def test_record_from_dict(self):
        """Test that a missing distance defaults to exact."""
        record = ColorNameRecord.from_dict({"name": "Red"})
        assert record.distance == 0.0
        assert record.to_dict() == {"name": "Red", "distance": 0.0}

    def test_discovered_config_value(self):
        """Test the value written to the config for each category."""
        color = DiscoveredValue(COLORS, "ff0000", "red", TokenSource.CATALOG)
        spacing = DiscoveredValue("spacing", "15.6px", "16", TokenSource.GENERATED)

        assert color.config_value == "#ff0000"
        assert spacing.config_value == "15.6px"
        assert color.to_dict()["source"] == "catalog"

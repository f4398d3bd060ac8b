"""Unit tests for the element schema."""

import pytest

from layout_builder.schema import (
    ALLOWED_EXPORT_TYPES,
    ELEMENT_REGISTRY,
    GRID_SIZE,
    ElementType,
    get_element_meta,
    parse_element_type,
    to_export_type,
)


class TestElementType:
    """Tests for the ElementType enum."""

    @pytest.mark.unit
    def test_all_types_exist(self):
        """The palette has exactly five block types."""
        actual = {et.value for et in ElementType}
        assert actual == {"header", "footer", "card", "text", "slider"}

    @pytest.mark.unit
    def test_every_type_registered(self):
        """Each type has registry metadata."""
        assert set(ELEMENT_REGISTRY) == set(ElementType)


class TestExportTypes:
    """Tests for canvas-to-export type mapping."""

    @pytest.mark.unit
    def test_text_maps_to_text_content(self):
        """Only text is renamed on export."""
        assert to_export_type(ElementType.TEXT) == "text-content"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "element_type",
        [ElementType.HEADER, ElementType.FOOTER, ElementType.CARD, ElementType.SLIDER],
    )
    def test_other_types_pass_through(self, element_type):
        """Non-text types keep their name."""
        assert to_export_type(element_type) == element_type.value

    @pytest.mark.unit
    def test_allowed_export_types(self):
        """Allowed export types cover the whole palette."""
        assert ALLOWED_EXPORT_TYPES == (
            "header",
            "footer",
            "card",
            "text-content",
            "slider",
        )

    @pytest.mark.unit
    def test_grid_size(self):
        """Grid snapping unit is 20 pixels."""
        assert GRID_SIZE == 20


class TestParseElementType:
    """Tests for type name resolution."""

    @pytest.mark.unit
    def test_canvas_name(self):
        assert parse_element_type("card") is ElementType.CARD

    @pytest.mark.unit
    def test_export_name(self):
        """The exported spelling resolves to the canvas type."""
        assert parse_element_type("text-content") is ElementType.TEXT

    @pytest.mark.unit
    def test_case_insensitive(self):
        assert parse_element_type("  Header ") is ElementType.HEADER

    @pytest.mark.unit
    def test_unknown(self):
        assert parse_element_type("carousel") is None


class TestElementMeta:
    """Tests for palette metadata."""

    @pytest.mark.unit
    def test_text_label(self):
        meta = get_element_meta(ElementType.TEXT)
        assert meta.label == "Text Content"

    @pytest.mark.unit
    def test_to_dict(self):
        """Metadata serializes with plain string values."""
        data = get_element_meta(ElementType.CARD).to_dict()
        assert data["type"] == "card"
        assert data["export_type"] == "card"
        assert "300px" in data["meta"]

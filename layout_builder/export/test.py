"""Unit tests for the export transformer."""

import json
import re
from datetime import UTC, datetime

import pytest

from layout_builder.export import (
    ExportDocument,
    build_export_document,
    dump_export_json,
    export_id,
    format_timestamp,
    write_export_file,
)
from layout_builder.model import CanvasElement
from layout_builder.schema import ElementType

NOW = datetime(2026, 3, 14, 9, 26, 53, 589000, tzinfo=UTC)
ID_PATTERN = re.compile(r"elem_(header|footer|card|text-content|slider)_\d{3}")


def _element(
    element_id: int,
    element_type: ElementType,
    z_index: int | None = None,
    **geometry,
) -> CanvasElement:
    defaults = {"x": 0, "y": 0, "width": 300, "height": 200}
    defaults.update(geometry)
    return CanvasElement(id=element_id, type=element_type, z_index=z_index, **defaults)


@pytest.fixture
def mixed_elements() -> list[CanvasElement]:
    return [
        _element(1, ElementType.HEADER, z_index=2, width=1200, height=80),
        _element(2, ElementType.CARD, z_index=3, x=40, y=100),
        _element(3, ElementType.TEXT, z_index=4, x=400, y=100, width=400, height=100),
        _element(4, ElementType.FOOTER, z_index=5, y=740, width=1200, height=60),
        _element(5, ElementType.SLIDER, z_index=6, y=320, width=1200, height=400),
    ]


class TestDocumentShape:
    """Tests for the top-level document blocks."""

    @pytest.mark.unit
    def test_top_level_keys(self, mixed_elements):
        data = build_export_document(mixed_elements, now=NOW).to_dict()
        assert list(data) == ["project", "canvas", "elements", "metadata"]

    @pytest.mark.unit
    def test_project_block(self):
        data = build_export_document([], now=NOW).to_dict()
        assert data["project"] == {
            "name": "Test Builder Layout",
            "version": "1.0",
            "created": "2026-03-14T09:26:53.589Z",
            "lastModified": "2026-03-14T09:26:53.589Z",
        }

    @pytest.mark.unit
    def test_custom_project_name(self):
        data = build_export_document([], now=NOW, project_name="Landing").to_dict()
        assert data["project"]["name"] == "Landing"

    @pytest.mark.unit
    def test_canvas_block_is_fixed(self):
        data = build_export_document([], now=NOW).to_dict()
        assert data["canvas"] == {
            "width": 1200,
            "height": 800,
            "grid": {"enabled": True, "size": 20, "snap": True},
        }

    @pytest.mark.unit
    def test_metadata_block(self, mixed_elements):
        data = build_export_document(mixed_elements, now=NOW).to_dict()
        assert data["metadata"] == {
            "totalElements": 5,
            "exportFormat": "json",
            "exportVersion": "2.0",
        }

    @pytest.mark.unit
    def test_default_timestamp_is_now(self):
        doc = build_export_document([])
        created = datetime.fromisoformat(doc.project.created.replace("Z", "+00:00"))
        assert abs((datetime.now(UTC) - created).total_seconds()) < 60
        assert doc.project.created == doc.project.last_modified


class TestElements:
    """Tests for per-element synthesis."""

    @pytest.mark.unit
    def test_count_and_unique_ids(self, mixed_elements):
        data = build_export_document(mixed_elements, now=NOW).to_dict()
        ids = [e["id"] for e in data["elements"]]
        assert len(ids) == len(mixed_elements)
        assert len(set(ids)) == len(ids)
        assert all(ID_PATTERN.fullmatch(i) for i in ids)

    @pytest.mark.unit
    def test_ids_and_types(self, mixed_elements):
        data = build_export_document(mixed_elements, now=NOW).to_dict()
        assert [(e["id"], e["type"]) for e in data["elements"]] == [
            ("elem_header_001", "header"),
            ("elem_card_002", "card"),
            ("elem_text-content_003", "text-content"),
            ("elem_footer_004", "footer"),
            ("elem_slider_005", "slider"),
        ]

    @pytest.mark.unit
    def test_header(self, mixed_elements):
        header = build_export_document(mixed_elements, now=NOW).to_dict()["elements"][0]
        assert header["content"] == {"text": "Site Title", "style": "default"}
        assert header["position"] == {
            "x": 0,
            "y": 0,
            "width": "100%",
            "height": 80,
            "zIndex": 1,
        }
        assert header["responsive"] == {
            "mobile": {"width": "100%", "height": 60},
            "tablet": {"width": "100%", "height": 70},
        }

    @pytest.mark.unit
    def test_card(self, mixed_elements):
        card = build_export_document(mixed_elements, now=NOW).to_dict()["elements"][1]
        assert card["content"] == {
            "title": "Card 2",
            "description": "Content description",
            "image": None,
        }
        assert card["position"] == {
            "x": 40,
            "y": 100,
            "width": 300,
            "height": 200,
            "zIndex": 2,
        }
        assert card["responsive"]["mobile"] == {"x": 10, "width": "calc(100% - 20px)"}
        assert card["responsive"]["tablet"] == {"x": 30, "width": 350}

    @pytest.mark.unit
    def test_text(self, mixed_elements):
        text = build_export_document(mixed_elements, now=NOW).to_dict()["elements"][2]
        assert text["content"] == {
            "html": "Text content goes here",
            "plainText": "Text content goes here",
        }
        assert "responsive" not in text

    @pytest.mark.unit
    def test_footer(self, mixed_elements):
        footer = build_export_document(mixed_elements, now=NOW).to_dict()["elements"][3]
        assert footer["content"] == {"copyright": "© 2026 Test Builder", "links": []}
        assert footer["position"] == {
            "x": 0,
            "y": 740,
            "width": "100%",
            "height": 60,
            "zIndex": 4,
            "fixed": True,
        }
        assert "responsive" not in footer

    @pytest.mark.unit
    def test_slider(self, mixed_elements):
        slider = build_export_document(mixed_elements, now=NOW).to_dict()["elements"][4]
        assert slider["content"] == {}
        assert "responsive" not in slider
        assert "fixed" not in slider["position"]

    @pytest.mark.unit
    def test_rounding(self):
        element = _element(
            1, ElementType.CARD, z_index=2, x=10.5, y=20.4, width=99.5, height=66.49
        )
        position = build_export_document([element], now=NOW).to_dict()["elements"][0][
            "position"
        ]
        assert (position["x"], position["y"]) == (11, 20)
        assert (position["width"], position["height"]) == (100, 66)


class TestZOrdering:
    """Tests for z-index ranking on export."""

    @pytest.mark.unit
    def test_sorted_by_z_index(self):
        elements = [
            _element(1, ElementType.CARD, z_index=9),
            _element(2, ElementType.TEXT, z_index=-2),
            _element(3, ElementType.SLIDER, z_index=4),
        ]
        data = build_export_document(elements, now=NOW).to_dict()
        assert [e["type"] for e in data["elements"]] == ["text-content", "slider", "card"]
        assert [e["position"]["zIndex"] for e in data["elements"]] == [1, 2, 3]

    @pytest.mark.unit
    def test_duplicates_become_dense(self):
        """Raw [1, 2, 2, 4] still exports as 1..4."""
        elements = [
            _element(1, ElementType.CARD, z_index=1),
            _element(2, ElementType.CARD, z_index=2),
            _element(3, ElementType.CARD, z_index=2),
            _element(4, ElementType.CARD, z_index=4),
        ]
        data = build_export_document(elements, now=NOW).to_dict()
        assert [e["position"]["zIndex"] for e in data["elements"]] == [1, 2, 3, 4]
        assert [e["content"]["title"] for e in data["elements"]] == [
            "Card 1",
            "Card 2",
            "Card 3",
            "Card 4",
        ]

    @pytest.mark.unit
    def test_zero_ties_with_one(self):
        """A z-index of 0 ranks as 1, so collection order breaks the tie."""
        elements = [
            _element(1, ElementType.CARD, z_index=1),
            _element(2, ElementType.TEXT, z_index=0),
        ]
        data = build_export_document(elements, now=NOW).to_dict()
        assert [e["type"] for e in data["elements"]] == ["card", "text-content"]

    @pytest.mark.unit
    def test_input_not_mutated(self):
        elements = [_element(1, ElementType.CARD, z_index=7)]
        build_export_document(elements, now=NOW)
        assert elements[0].z_index == 7


class TestSerialization:
    """Tests for JSON rendering and the file sink."""

    @pytest.mark.unit
    def test_fresh_document_each_call(self, mixed_elements):
        first = build_export_document(mixed_elements, now=NOW)
        second = build_export_document(mixed_elements, now=NOW)
        assert first is not second
        assert first.to_dict() == second.to_dict()

    @pytest.mark.unit
    def test_dump_json(self, mixed_elements):
        text = dump_export_json(build_export_document(mixed_elements, now=NOW))
        assert text.startswith("{\n  \"project\"")
        assert "©" in text
        assert json.loads(text)["metadata"]["totalElements"] == 5

    @pytest.mark.integration
    def test_write_file(self, tmp_path, mixed_elements):
        doc = build_export_document(mixed_elements, now=NOW)
        path = write_export_file(doc, tmp_path / "layout.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == doc.to_dict()

    @pytest.mark.integration
    def test_write_file_missing_directory(self, tmp_path):
        doc = build_export_document([], now=NOW)
        with pytest.raises(OSError):
            write_export_file(doc, tmp_path / "missing" / "layout.json")

    @pytest.mark.unit
    def test_model_round_trip(self, mixed_elements):
        """The dict form parses back into an equal document."""
        doc = build_export_document(mixed_elements, now=NOW)
        assert ExportDocument.model_validate(doc.to_dict()) == doc


class TestHelpers:
    """Tests for id and timestamp helpers."""

    @pytest.mark.unit
    def test_export_id_padding(self):
        assert export_id("card", 7) == "elem_card_007"
        assert export_id("text-content", 123) == "elem_text-content_123"

    @pytest.mark.unit
    def test_format_timestamp(self):
        assert format_timestamp(NOW) == "2026-03-14T09:26:53.589Z"

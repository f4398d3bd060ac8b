"""Integration tests for export followed by validation.

Whatever the canvas looks like, the document produced by the export
transformer must pass the validator:
1. Build a canvas (directly or through the controller)
2. Export it
3. Validate the exported dictionary
"""

import json

import pytest

from layout_builder.canvas import CanvasController
from layout_builder.export import build_export_document, dump_export_json
from layout_builder.geometry import Point
from layout_builder.model import CanvasElement
from layout_builder.schema import ElementType
from layout_builder.validation import validate_document


def _round_trip(elements, now):
    document = build_export_document(elements, now=now)
    return document, validate_document(document.to_dict())


@pytest.mark.integration
class TestExportValidatesForAnyCanvas:
    """The exported document is valid regardless of the raw z-index values."""

    def test_empty_canvas(self, fixed_now):
        document, result = _round_trip([], fixed_now)
        assert result.is_valid, result.errors
        assert document.elements == []

    def test_messy_z_indices(self, messy_elements, fixed_now):
        document, result = _round_trip(messy_elements, fixed_now)
        assert result.is_valid, result.errors
        z_values = [e.position.z_index for e in document.elements]
        assert z_values == list(range(1, len(messy_elements) + 1))

    def test_duplicate_raw_z_indices(self, fixed_now):
        elements = [
            CanvasElement(id=i, type=ElementType.CARD, width=300, height=200, z_index=z)
            for i, z in enumerate([1, 2, 2, 4], start=1)
        ]
        _, result = _round_trip(elements, fixed_now)
        assert result.is_valid, result.errors

    @pytest.mark.parametrize("count", [1, 12, 150])
    def test_many_elements(self, count, fixed_now):
        types = list(ElementType)
        elements = [
            CanvasElement(
                id=i,
                type=types[i % len(types)],
                x=(i * 7) % 900,
                y=(i * 13) % 600,
                width=300,
                height=200,
                z_index=(i % 5) - 2,
            )
            for i in range(count)
        ]
        document, result = _round_trip(elements, fixed_now)
        assert result.is_valid, result.errors
        assert len({e.id for e in document.elements}) == count

    def test_fractional_geometry(self, fixed_now):
        element = CanvasElement(
            id=1, type=ElementType.CARD, x=10.5, y=0.4, width=333.3, height=222.2
        )
        document, result = _round_trip([element], fixed_now)
        assert result.is_valid, result.errors
        position = document.to_dict()["elements"][0]["position"]
        assert position == {"x": 11, "y": 0, "width": 333, "height": 222, "zIndex": 1}

    def test_survives_json_text(self, messy_elements, fixed_now):
        document = build_export_document(messy_elements, now=fixed_now)
        reloaded = json.loads(dump_export_json(document))
        assert validate_document(reloaded).is_valid


@pytest.mark.integration
class TestControllerWorkflow:
    """Editing through the controller keeps the export valid."""

    def test_after_front_back_delete(self, sample_canvas, fixed_now):
        sample_canvas.send_to_back(1)
        sample_canvas.send_to_back(2)
        sample_canvas.bring_to_front(5)
        sample_canvas.select(3)
        sample_canvas.delete()

        result = sample_canvas.validate_export(now=fixed_now)
        assert result.is_valid, result.errors

        # Header and slider both end at 0, which ranks as 1; ties keep creation order.
        document = sample_canvas.export_document(now=fixed_now)
        assert [e.type for e in document.elements] == [
            "header",
            "slider",
            "text-content",
            "footer",
        ]

    def test_after_move_and_resize(self, sample_canvas, container, fixed_now):
        sample_canvas.begin_move(3, Point(100, 550), container)
        sample_canvas.update_move(Point(-500, 900))
        sample_canvas.end_move()

        sample_canvas.begin_resize(4, Point(800, 600), container)
        sample_canvas.update_resize(Point(2000, 600))
        sample_canvas.end_resize()

        card = sample_canvas.get_element(3)
        assert (card.x, card.y) == (0, 600)

        text = sample_canvas.get_element(4)
        assert text.x + text.width <= container.width - 2
        assert text.y + text.height <= container.height - 2

        assert sample_canvas.validate_export(now=fixed_now).is_valid

    def test_collision_cascade(self, container, fixed_now):
        controller = CanvasController()
        for _ in range(4):
            controller.drop_element(ElementType.CARD, Point(40, 40), container)

        assert [e.y for e in controller.elements] == [40, 240, 440, 640]
        assert controller.validate_export(now=fixed_now).is_valid


@pytest.mark.integration
class TestHandBuiltDocuments:
    """Documents that did not come from the export transformer."""

    def test_gapped_z_sequence_rejected(self, sample_canvas, fixed_now):
        document = sample_canvas.export_document(now=fixed_now).to_dict()
        for element, z_index in zip(document["elements"], [1, 2, 2, 4, 5]):
            element["position"]["zIndex"] = z_index

        result = validate_document(document)
        assert not result.is_valid
        assert result.errors == ["zIndex must be sequential 1..N. Got: [1, 2, 4, 5]"]

    def test_missing_metadata(self, sample_canvas, fixed_now):
        document = sample_canvas.export_document(now=fixed_now).to_dict()
        del document["metadata"]

        result = validate_document(document)
        assert result.errors == ["Missing root key: metadata"]

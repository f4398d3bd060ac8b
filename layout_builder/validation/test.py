"""Unit tests for export document validation."""

import copy

import pytest

from layout_builder.validation import (
    ValidationResult,
    is_percent_string,
    is_valid_document,
    validate_document,
)


def _element(
    index: int = 1,
    element_type: str = "card",
    z_index=None,
    **position,
) -> dict:
    pos = {"x": 0, "y": 0, "width": 300, "height": 200, "zIndex": z_index or index}
    pos.update(position)
    return {
        "id": f"elem_{element_type}_{index:03d}",
        "type": element_type,
        "content": {},
        "position": pos,
    }


@pytest.fixture
def valid_document() -> dict:
    return {
        "project": {"name": "Test Builder Layout", "version": "1.0"},
        "canvas": {"width": 1200, "height": 800},
        "elements": [
            _element(1, "header", width="100%", height=80),
            _element(2, "card"),
            _element(3, "text-content"),
            _element(4, "footer", width="100%", height=60, fixed=True),
        ],
        "metadata": {"totalElements": 4},
    }


class TestRoot:
    """Tests for root-level checks."""

    @pytest.mark.unit
    def test_valid_document(self, valid_document):
        result = validate_document(valid_document)
        assert result == ValidationResult(is_valid=True, errors=[])

    @pytest.mark.unit
    @pytest.mark.parametrize("root", [None, "layout", 42, ["elements"], True])
    def test_non_object_root(self, root):
        result = validate_document(root)
        assert not result.is_valid
        assert result.errors == ["Root JSON is not an object."]

    @pytest.mark.unit
    def test_missing_metadata(self, valid_document):
        del valid_document["metadata"]
        result = validate_document(valid_document)
        assert not result.is_valid
        assert any("metadata" in e for e in result.errors)

    @pytest.mark.unit
    def test_each_missing_key_reported(self):
        result = validate_document({"elements": []})
        assert result.errors == [
            "Missing root key: project",
            "Missing root key: canvas",
            "Missing root key: metadata",
        ]

    @pytest.mark.unit
    def test_elements_not_array_stops(self, valid_document):
        valid_document["elements"] = {"0": _element()}
        result = validate_document(valid_document)
        assert result.errors == ["elements must be an array."]

    @pytest.mark.unit
    def test_missing_elements_stops(self):
        result = validate_document({"project": {}, "canvas": {}, "metadata": {}})
        assert result.errors == [
            "Missing root key: elements",
            "elements must be an array.",
        ]

    @pytest.mark.unit
    def test_empty_elements_valid(self, valid_document):
        valid_document["elements"] = []
        assert validate_document(valid_document).is_valid

    @pytest.mark.unit
    def test_document_not_mutated(self, valid_document):
        snapshot = copy.deepcopy(valid_document)
        validate_document(valid_document)
        assert valid_document == snapshot


class TestRequiredElementFields:
    """Tests for id/type/position presence."""

    @pytest.mark.unit
    def test_missing_all_three(self, valid_document):
        valid_document["elements"] = [{}]
        result = validate_document(valid_document)
        assert result.errors == [
            "Element[0] missing id.",
            "Element[0] missing type.",
            "Element[0] missing position.",
        ]

    @pytest.mark.unit
    def test_missing_id_skips_remaining_checks(self, valid_document):
        element = _element(1, "carousel", x=-5)
        del element["id"]
        valid_document["elements"] = [element]
        result = validate_document(valid_document)
        assert result.errors == ["Element[0] missing id."]

    @pytest.mark.unit
    def test_missing_type_still_checks_rest(self, valid_document):
        element = _element(1, "card", x=-5)
        del element["type"]
        valid_document["elements"] = [element]
        result = validate_document(valid_document)
        assert result.errors == [
            "Element[0] missing type.",
            "Invalid type: None",
            "Element[0] x is negative.",
        ]

    @pytest.mark.unit
    @pytest.mark.parametrize("empty_id", ["", 0, None, False, float("nan")])
    def test_falsy_id_counts_as_missing(self, valid_document, empty_id):
        valid_document["elements"][0]["id"] = empty_id
        result = validate_document(valid_document)
        assert "Element[0] missing id." in result.errors

    @pytest.mark.unit
    def test_nan_position_counts_as_missing(self, valid_document):
        valid_document["elements"] = [
            {"id": "elem_card_001", "type": "card", "position": float("nan")}
        ]
        result = validate_document(valid_document)
        assert result.errors == ["Element[0] missing position."]

    @pytest.mark.unit
    def test_empty_position_object_is_present(self, valid_document):
        """An empty position object is checked field by field."""
        valid_document["elements"] = [
            {"id": "elem_card_001", "type": "card", "position": {}}
        ]
        result = validate_document(valid_document)
        assert result.errors == [
            "Element[0] invalid width.",
            "Element[0] invalid height.",
            "Element[0] missing numeric zIndex.",
        ]

    @pytest.mark.unit
    def test_non_object_element(self, valid_document):
        valid_document["elements"].append("elem_card_009")
        result = validate_document(valid_document)
        assert result.errors == ["Element[4] is not an object."]


class TestIdAndType:
    """Tests for id uniqueness, id pattern and type checks."""

    @pytest.mark.unit
    def test_duplicate_id(self, valid_document):
        valid_document["elements"][1]["id"] = "elem_header_001"
        result = validate_document(valid_document)
        assert "Duplicate id: elem_header_001" in result.errors

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "bad_id",
        [
            "elem_card_1",
            "elem_card_0001",
            "elem_text_001",
            "card_001",
            "elem_card_001\n",
            "ELEM_card_001",
            "elem_card_٠٠١",
        ],
    )
    def test_id_pattern(self, valid_document, bad_id):
        valid_document["elements"][1]["id"] = bad_id
        result = validate_document(valid_document)
        assert f"ID {bad_id} does not match pattern elem_[type]_NNN." in result.errors

    @pytest.mark.unit
    def test_non_string_id(self, valid_document):
        valid_document["elements"][1]["id"] = 7
        result = validate_document(valid_document)
        assert "ID 7 does not match pattern elem_[type]_NNN." in result.errors

    @pytest.mark.unit
    @pytest.mark.parametrize("unhashable_id", [(1, [2]), ["elem_card_002"], {"n": 2}])
    def test_unhashable_id_is_reported(self, valid_document, unhashable_id):
        valid_document["elements"][1]["id"] = unhashable_id
        duplicate = copy.deepcopy(valid_document["elements"][1])
        valid_document["elements"].append(duplicate)
        duplicate["position"]["zIndex"] = 4
        result = validate_document(valid_document)
        assert not result.is_valid
        assert not any(e.startswith("Duplicate id") for e in result.errors)
        expected = f"ID {unhashable_id} does not match pattern elem_[type]_NNN."
        assert expected in result.errors

    @pytest.mark.unit
    def test_invalid_type(self, valid_document):
        valid_document["elements"][1]["type"] = "text"
        result = validate_document(valid_document)
        assert result.errors == ["Invalid type: text"]

    @pytest.mark.unit
    def test_id_type_mismatch_not_checked(self, valid_document):
        """The id's type segment only needs to be an allowed type."""
        valid_document["elements"][1]["id"] = "elem_slider_002"
        assert validate_document(valid_document).is_valid


class TestPosition:
    """Tests for position field checks."""

    @pytest.mark.unit
    def test_negative_coordinates(self, valid_document):
        valid_document["elements"][1]["position"].update(x=-1, y=-0.5)
        result = validate_document(valid_document)
        assert result.errors == [
            "Element[1] x is negative.",
            "Element[1] y is negative.",
        ]

    @pytest.mark.unit
    def test_non_numeric_coordinates_ignored(self, valid_document):
        valid_document["elements"][1]["position"].update(x="-10", y=None)
        assert validate_document(valid_document).is_valid

    @pytest.mark.unit
    @pytest.mark.parametrize("width", [300, 12.5, "100%", " 50.5% ", "0%"])
    def test_valid_widths(self, valid_document, width):
        valid_document["elements"][1]["position"]["width"] = width
        assert validate_document(valid_document).is_valid

    @pytest.mark.unit
    @pytest.mark.parametrize("width", ["auto", "100", "100px", "%", ".5%", None, True])
    def test_invalid_widths(self, valid_document, width):
        valid_document["elements"][1]["position"]["width"] = width
        result = validate_document(valid_document)
        assert result.errors == ["Element[1] invalid width."]

    @pytest.mark.unit
    @pytest.mark.parametrize("height", [200, "auto", "75%"])
    def test_valid_heights(self, valid_document, height):
        valid_document["elements"][1]["position"]["height"] = height
        assert validate_document(valid_document).is_valid

    @pytest.mark.unit
    @pytest.mark.parametrize("height", ["AUTO", "200px", None, False])
    def test_invalid_heights(self, valid_document, height):
        valid_document["elements"][1]["position"]["height"] = height
        result = validate_document(valid_document)
        assert result.errors == ["Element[1] invalid height."]

    @pytest.mark.unit
    @pytest.mark.parametrize("z_index", ["2", None, True])
    def test_non_numeric_z_index(self, valid_document, z_index):
        valid_document["elements"][1]["position"]["zIndex"] = z_index
        result = validate_document(valid_document)
        assert "Element[1] missing numeric zIndex." in result.errors

    @pytest.mark.unit
    def test_errors_accumulate_across_elements(self, valid_document):
        valid_document["elements"][0]["position"]["width"] = "wide"
        valid_document["elements"][2]["position"]["height"] = "tall"
        result = validate_document(valid_document)
        assert result.errors == [
            "Element[0] invalid width.",
            "Element[2] invalid height.",
        ]


class TestZSequence:
    """Tests for the dense zIndex rule."""

    @pytest.mark.unit
    def test_gap_reported_once(self, valid_document):
        """Hand-built [1, 2, 2, 4] is not dense."""
        for element, z in zip(valid_document["elements"], [1, 2, 2, 4]):
            element["position"]["zIndex"] = z
        result = validate_document(valid_document)
        assert result.errors == ["zIndex must be sequential 1..N. Got: [1, 2, 4]"]

    @pytest.mark.unit
    def test_duplicates_allowed_when_dense(self, valid_document):
        for element, z in zip(valid_document["elements"], [1, 2, 2, 3]):
            element["position"]["zIndex"] = z
        assert validate_document(valid_document).is_valid

    @pytest.mark.unit
    def test_must_start_at_one(self, valid_document):
        for element, z in zip(valid_document["elements"], [0, 1, 2, 3]):
            element["position"]["zIndex"] = z
        result = validate_document(valid_document)
        assert result.errors == ["zIndex must be sequential 1..N. Got: [0, 1, 2, 3]"]

    @pytest.mark.unit
    def test_float_values_render_as_numbers(self, valid_document):
        for element, z in zip(valid_document["elements"], [1.0, 2.0, 3.5, 4.0]):
            element["position"]["zIndex"] = z
        result = validate_document(valid_document)
        assert result.errors == ["zIndex must be sequential 1..N. Got: [1, 2, 3.5, 4]"]

    @pytest.mark.unit
    def test_only_numeric_values_collected(self, valid_document):
        """Non-numeric zIndex is reported per element, not in the sequence."""
        valid_document["elements"][3]["position"]["zIndex"] = "4"
        result = validate_document(valid_document)
        assert result.errors == ["Element[3] missing numeric zIndex."]


class TestHelpers:
    """Tests for convenience helpers."""

    @pytest.mark.unit
    def test_is_valid_document(self, valid_document):
        assert is_valid_document(valid_document) is True
        assert is_valid_document([]) is False

    @pytest.mark.unit
    def test_result_to_dict(self):
        result = ValidationResult.from_errors(["Missing root key: canvas"])
        assert result.to_dict() == {
            "isValid": False,
            "errors": ["Missing root key: canvas"],
        }

    @pytest.mark.unit
    def test_percent_string(self):
        assert is_percent_string("100%")
        assert is_percent_string(" 33.3%\t")
        assert not is_percent_string("33.%")
        assert not is_percent_string(100)

"""Unit tests for page attribute type inference."""

import datetime

import pytest

from asciidoc_pages.attributes import EmptyAttributeNames
from asciidoc_pages.models import DocumentRecord, DocumentTitle, NodeInternal
from asciidoc_pages.schema import infer_page_attribute_types, merge_types, value_type


def _record(page_attributes: dict) -> DocumentRecord:
    return DocumentRecord(
        id="id",
        parent="parent",
        html="",
        title=DocumentTitle(),
        internal=NodeInternal(content=""),
        page_attributes=page_attributes,
    )


@pytest.mark.unit
class TestValueType:
    """Tests for value_type."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (True, "Boolean"),
            (3, "Int"),
            (1.5, "Float"),
            ("x", "String"),
            (datetime.date(2019, 1, 1), "Date"),
            ([1, 2], "[Int]"),
            ([1, 2.5], "[Float]"),
            ([], "[String]"),
            ({"a": 1}, "JSON"),
            (None, None),
        ],
    )
    def test_types(self, value, expected) -> None:
        """Test type names of decoded values."""
        assert value_type(value) == expected

    def test_merge(self) -> None:
        """Test combining types across documents."""
        assert merge_types("Int", "Int") == "Int"
        assert merge_types("Int", "Float") == "Float"
        assert merge_types("Int", "String") == "JSON"


@pytest.mark.unit
class TestInferPageAttributeTypes:
    """Tests for infer_page_attribute_types."""

    def test_types_across_records(self) -> None:
        """Test merging fields across records."""
        schema = infer_page_attribute_types([_record({"order": 1, "tags": ["a"]}), _record({"order": 2.5})])

        assert schema == {"order": "Float", "tags": "[String]"}

    def test_empty_names_are_strings(self) -> None:
        """Test that empty-declared fields are typed as strings."""
        names = EmptyAttributeNames(["draft"])

        schema = infer_page_attribute_types([_record({"draft": ""}), _record({"draft": True})], names)

        assert schema == {"draft": "String"}

    def test_empty_names_without_records(self) -> None:
        """Test that recorded names appear even when no record holds them."""
        assert infer_page_attribute_types([], EmptyAttributeNames(["draft"])) == {"draft": "String"}

    def test_only_null_values(self) -> None:
        """Test that fields only ever null default to strings."""
        assert infer_page_attribute_types([_record({"draft": None})]) == {"draft": "String"}

"""Tests for nested list reconstruction."""

from converters.google_document import GoogleDocument
from converters.list_builder import ListBuilder
from models import ListElement, ParagraphElement

from document_builders import document, list_item, ordered_list, paragraph, text_run, unordered_list


def build(levels, lists=None):
    builder = ListBuilder(lists or {'list-1': unordered_list()})
    current = None
    for index, level in enumerate(levels):
        created = builder.add(chr(ord('a') + index), 'list-1', level, current)
        if created is not None:
            current = created
    return current


class TestListBuilder:
    """Test folding list items into nested lists."""

    def test_flat_list(self):
        """Test same-level items form one flat list."""
        result = build([0, 0, 0])
        assert result == ListElement(ordered=False, items=['a', 'b', 'c'])

    def test_nested_sublist_follows_parent_item(self):
        """Test deeper items form a sublist after their parent."""
        result = build([0, 1, 1])
        assert result.items == ['a', ListElement(ordered=False, items=['b', 'c'])]

    def test_mixed_levels(self):
        """Test a mix of levels nests correctly."""
        result = build([0, 0, 1, 1, 0, 1, 2, 1])

        assert result.items == [
            'a',
            'b',
            ListElement(ordered=False, items=['c', 'd']),
            'e',
            ListElement(ordered=False, items=[
                'f',
                ListElement(ordered=False, items=['g']),
                'h',
            ]),
        ]
        leaves = [item for item in result.items if isinstance(item, str)]
        assert leaves == ['a', 'b', 'e']

    def test_level_jump_nests_one_step(self):
        """Test a two-level jump nests a single step."""
        result = build([0, 2])
        assert result.items == ['a', ListElement(ordered=False, items=['b'])]

    def test_level_jump_descends_one_step_per_item(self):
        """Test each following item descends one more step."""
        result = build([0, 2, 2])
        assert result.items == [
            'a',
            ListElement(ordered=False, items=['b', ListElement(ordered=False, items=['c'])]),
        ]

    def test_ordered_detection_per_level(self):
        """Test orderedness is read per nesting level."""
        lists = {'list-1': {'listProperties': {'nestingLevels': [
            {'glyphType': 'DECIMAL'},
            {'glyphSymbol': '○'},
        ]}}}
        result = build([0, 1], lists=lists)
        assert result.ordered is True
        assert result.items[1].ordered is False

    def test_unspecified_glyph_is_unordered(self):
        """Test an unspecified glyph type is unordered."""
        builder = ListBuilder({'list-1': {'listProperties': {'nestingLevels': [
            {'glyphType': 'GLYPH_TYPE_UNSPECIFIED'},
        ]}}})
        assert builder.is_ordered('list-1', 0) is False

    def test_unknown_list_is_unordered(self):
        """Test unknown list ids are unordered."""
        assert ListBuilder({}).is_ordered('missing', 0) is False


class TestListsInDocument:
    """Test list handling while walking a document."""

    def test_consecutive_items_share_one_list(self):
        """Test consecutive items of one list share an element."""
        doc = GoogleDocument(document(
            list_item("one"),
            list_item("two"),
            list_item("nested", level=1),
            lists={'list-1': ordered_list()},
        ))

        assert doc.elements == [
            ListElement(ordered=True, items=['one', 'two', ListElement(ordered=True, items=['nested'])])
        ]

    def test_paragraph_breaks_the_list(self):
        """Test a paragraph ends the current list."""
        doc = GoogleDocument(document(
            list_item("one"),
            paragraph(text_run("Between\n")),
            list_item("two", level=1),
            lists={'list-1': unordered_list()},
        ))

        assert doc.elements == [
            ListElement(ordered=False, items=['one']),
            ParagraphElement(text="Between"),
            ListElement(ordered=False, items=['two']),
        ]

    def test_new_list_id_starts_new_list(self):
        """Test a different list id starts a new list."""
        doc = GoogleDocument(document(
            list_item("one", list_id='list-1'),
            list_item("two", list_id='list-2'),
            lists={'list-1': unordered_list(), 'list-2': ordered_list()},
        ))

        assert doc.elements == [
            ListElement(ordered=False, items=['one']),
            ListElement(ordered=True, items=['two']),
        ]

"""Unit tests for document.frontmatter module."""

from src.document.frontmatter import FrontmatterHandler
from src.document.models import Document, FolderRef, NoteMetadata
from tests.fixtures.sample_notes import (
    SAMPLE_INLINE_ARRAYS,
    SAMPLE_NEW_NOTE,
    SAMPLE_PLAIN_TEXT,
    SAMPLE_PULLED_FILE,
)


class TestFrontmatterParse:
    """Test cases for FrontmatterHandler.parse()."""

    def test_parse_pulled_file(self):
        """Every field of a pulled file is typed by key."""
        document = FrontmatterHandler.parse(SAMPLE_PULLED_FILE)
        metadata = document.metadata

        assert metadata.id == "Note/12345"
        assert metadata.title == "Release plan: Q3"
        assert metadata.coediting is True
        assert metadata.published is True
        assert metadata.groups == ["Group/1", "Group/2"]
        assert metadata.folders == [FolderRef(group_id="Group/1", folder_name="Plans")]
        assert metadata.author == "alice"
        assert metadata.created_at == "2026-01-10T09:00:00Z"
        assert metadata.updated_at == "2026-01-12T18:00:00Z"
        assert metadata.url == "https://acme.kibe.la/notes/12345"
        assert document.content == "# Release plan\n\n- ship it"

    def test_parse_new_note_without_id(self):
        """Absent keys stay None."""
        metadata = FrontmatterHandler.parse(SAMPLE_NEW_NOTE).metadata

        assert metadata.id is None
        assert metadata.title == "Weekly notes"
        assert metadata.coediting is None
        assert metadata.groups == ["Group/1"]

    def test_parse_inline_arrays(self):
        """Inline arrays accept quoted items and groupId:folderName folders."""
        metadata = FrontmatterHandler.parse(SAMPLE_INLINE_ARRAYS).metadata

        assert metadata.groups == ["Group/1", "Group/2", "Group/3"]
        assert metadata.folders == [
            FolderRef(group_id="Group/1", folder_name="Design/Specs"),
            FolderRef(group_id="Group/2", folder_name="Archive"),
        ]
        assert metadata.published is False

    def test_inline_quoted_item_with_comma(self):
        """Commas inside quotes do not split items."""
        text = '---\ntitle: t\ngroups: ["a, b", c]\n---\n\nx'

        assert FrontmatterHandler.parse(text).metadata.groups == ["a, b", "c"]

    def test_empty_inline_array(self):
        """`key: []` is an empty list."""
        text = "---\ntitle: t\ngroups: []\n---\n\nx"

        assert FrontmatterHandler.parse(text).metadata.groups == []

    def test_boolean_only_true_is_true(self):
        """Any value other than the literal true is false."""
        text = "---\ntitle: t\ncoediting: yes\npublished: true\n---\n\nx"
        metadata = FrontmatterHandler.parse(text).metadata

        assert metadata.coediting is False
        assert metadata.published is True

    def test_value_split_at_first_colon(self):
        """Unquoted values may contain colons after the first one."""
        text = "---\ntitle: a: b\nurl: https://acme.kibe.la/notes/1\n---\n\nx"
        metadata = FrontmatterHandler.parse(text).metadata

        assert metadata.title == "a: b"
        assert metadata.url == "https://acme.kibe.la/notes/1"

    def test_plain_text_is_content(self):
        """Text without frontmatter becomes content with an empty title."""
        document = FrontmatterHandler.parse(SAMPLE_PLAIN_TEXT)

        assert document.metadata.title == ""
        assert document.metadata.id is None
        assert document.content == SAMPLE_PLAIN_TEXT

    def test_unclosed_frontmatter_is_plain(self):
        """A block that is never closed is read as plain content."""
        text = "---\ntitle: Oops\nno closing delimiter"
        document = FrontmatterHandler.parse(text)

        assert document.metadata.title == ""
        assert document.content == text

    def test_delimiter_must_be_first_line(self):
        """Frontmatter later in the file is ignored."""
        text = "intro\n---\ntitle: t\n---\n"

        assert FrontmatterHandler.parse(text).metadata.title == ""

    def test_crlf_line_endings(self):
        """Windows line endings are accepted."""
        text = "---\r\ntitle: Hello\r\nid: Note/1\r\n---\r\n\r\nBody"
        document = FrontmatterHandler.parse(text)

        assert document.metadata.title == "Hello"
        assert document.metadata.id == "Note/1"
        assert document.content == "Body"

    def test_unknown_keys_kept_in_extra(self):
        """Unrecognized keys are preserved as strings."""
        text = "---\ntitle: t\ntags: misc\n---\n\nx"

        assert FrontmatterHandler.parse(text).metadata.extra == {"tags": "misc"}

    def test_unknown_key_block_list_kept(self):
        """Block list items under an unrecognized key are kept as a list."""
        text = "---\ntitle: t\ntags:\n  - a\n  - b\n---\n\nx"

        assert FrontmatterHandler.parse(text).metadata.extra == {"tags": ["a", "b"]}

    def test_unknown_key_without_value_is_empty_string(self):
        """A bare unrecognized key with no list items stays an empty string."""
        text = "---\ntitle: t\ntags:\nurl: u\n---\n\nx"

        metadata = FrontmatterHandler.parse(text).metadata
        assert metadata.extra == {"tags": ""}
        assert metadata.url == "u"

    def test_comments_and_blank_lines_ignored(self):
        """Comment and blank lines inside the block are skipped."""
        text = "---\n# comment\n\ntitle: t\n---\n\nx"

        assert FrontmatterHandler.parse(text).metadata.title == "t"

    def test_empty_block(self):
        """An empty block yields default metadata."""
        document = FrontmatterHandler.parse("---\n---\n\nBody")

        assert document.metadata.title == ""
        assert document.content == "Body"


class TestFrontmatterStringify:
    """Test cases for FrontmatterHandler.stringify()."""

    def test_layout(self):
        """Delimiters, canonical key order, blank line, then content."""
        document = Document(
            metadata=NoteMetadata(id="Note/1", title="Hello", coediting=True, published=False),
            content="Body",
        )

        text = FrontmatterHandler.stringify(document)

        assert text == (
            "---\n"
            "id: Note/1\n"
            "title: Hello\n"
            "coediting: true\n"
            "published: false\n"
            "---\n"
            "\n"
            "Body"
        )

    def test_absent_fields_omitted(self):
        """None fields are not written."""
        text = FrontmatterHandler.stringify(Document(metadata=NoteMetadata(title="t"), content=""))

        assert "id:" not in text
        assert "groups" not in text

    def test_values_needing_quotes(self):
        """Values with colons or quotes are double-quoted and escaped."""
        metadata = NoteMetadata(title='Plan: "Q3"')

        text = FrontmatterHandler.stringify(Document(metadata=metadata, content=""))

        assert 'title: "Plan: \\"Q3\\""' in text

    def test_lists_written_as_block(self):
        """Groups and folders are written as indented block lists."""
        metadata = NoteMetadata(
            title="t",
            groups=["Group/1"],
            folders=[FolderRef(group_id="Group/1", folder_name="Design")],
        )

        text = FrontmatterHandler.stringify(Document(metadata=metadata, content=""))

        assert "groups:\n  - Group/1\n" in text
        assert "folders:\n  - groupId: Group/1\n    folderName: Design\n" in text


class TestFrontmatterRoundTrip:
    """Parsing the output of stringify() returns the same document."""

    def test_round_trip_full_metadata(self):
        """All fields, including tricky strings, survive a round trip."""
        document = Document(
            metadata=NoteMetadata(
                id="Note/12345",
                title="Multi\nline: with # and 'quotes' \\ backslash",
                coediting=False,
                published=True,
                groups=["Group/1", "Group: odd"],
                folders=[FolderRef(group_id="Group/1", folder_name="A/B: C")],
                author="alice",
                created_at="2026-01-10T09:00:00Z",
                updated_at="2026-01-12T18:00:00Z",
                url="https://acme.kibe.la/notes/12345",
                extra={"tags": "misc"},
            ),
            content="# Heading\n\nBody with ---\n",
        )

        parsed = FrontmatterHandler.parse(FrontmatterHandler.stringify(document))

        assert parsed.metadata == document.metadata
        assert parsed.content == "# Heading\n\nBody with ---"

    def test_round_trip_empty_lists_and_title(self):
        """Empty lists and an empty title survive a round trip."""
        document = Document(metadata=NoteMetadata(title="", groups=[], folders=[]), content="x")

        parsed = FrontmatterHandler.parse(FrontmatterHandler.stringify(document))

        assert parsed.metadata.title == ""
        assert parsed.metadata.groups == []
        assert parsed.metadata.folders == []

    def test_round_trip_unknown_key_list(self):
        """Block lists under unrecognized keys survive a round trip."""
        text = "---\ntitle: t\ntags:\n  - a\n  - b\n---\n\nx"

        document = FrontmatterHandler.parse(text)
        parsed = FrontmatterHandler.parse(FrontmatterHandler.stringify(document))

        assert parsed.metadata.extra == {"tags": ["a", "b"]}
        assert FrontmatterHandler.stringify(parsed) == text

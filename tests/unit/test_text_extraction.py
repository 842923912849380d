import json

from jotter.content import extract_text, truncate_text, count_words, load_content
from tests.factories import doc, paragraph, heading, bullet_list, blockquote, image, text


class TestExtractText:
    def test_none_and_empty_give_empty_string(self):
        assert extract_text(None) == ""
        assert extract_text("") == ""
        assert extract_text({}) == ""

    def test_malformed_json_string_gives_empty_string(self):
        assert extract_text("{not json") == ""
        assert extract_text("[1, 2, 3]") == ""

    def test_json_string_and_mapping_agree(self):
        content = doc(heading("Title"), "First paragraph")
        assert extract_text(json.dumps(content)) == extract_text(content)

    def test_blocks_are_separated_by_newlines(self):
        content = doc(heading("Title"), "First", "Second")
        assert extract_text(content) == "Title\nFirst\nSecond"

    def test_inline_runs_are_concatenated_verbatim(self):
        content = doc(paragraph("Hello ", text("bold", "bold"), " world"))
        assert extract_text(content) == "Hello bold world"

    def test_list_items_and_quotes(self):
        content = doc(bullet_list("one", "two"), blockquote(paragraph("quoted")))
        # listItem and its paragraph each close with a newline
        assert extract_text(content) == "one\n\ntwo\n\nquoted"

    def test_block_without_content_list_adds_no_newline(self):
        content = {"type": "doc", "content": [
            {"type": "paragraph"},
            paragraph("text"),
            image("https://example.com/a.png"),
        ]}
        assert extract_text(content) == "text"

    def test_malformed_children_are_skipped(self):
        content = {"type": "doc", "content": [
            "stray string",
            42,
            {"type": "paragraph", "content": [{"type": "text", "text": 7}, text("kept")]},
            {"type": "paragraph", "content": "not a list"},
        ]}
        assert extract_text(content) == "kept"

    def test_unknown_types_contribute_their_text(self):
        content = {"type": "doc", "content": [{"type": "mention", "text": "@ana"}]}
        assert extract_text(content) == "@ana"

    def test_deterministic(self):
        content = doc(heading("T"), bullet_list("a", "b"), "c")
        assert extract_text(content) == extract_text(content)

    def test_deep_tree_does_not_hit_recursion_limit(self):
        node = text("bottom")
        for _ in range(5000):
            node = {"type": "blockquote", "content": [node]}
        result = extract_text({"type": "doc", "content": [node]})
        assert result == "bottom"


class TestLoadContent:
    def test_non_object_root_is_rejected(self):
        assert load_content(42) is None
        assert load_content("\"just a string\"") is None

    def test_marks_accept_objects_and_strings(self):
        node = load_content({"type": "text", "text": "x", "marks": [{"type": "bold"}, "italic", 3]})
        assert node.marks == ("bold", "italic")


class TestTruncateAndCount:
    def test_short_text_unchanged(self):
        assert truncate_text("short", 10) == "short"

    def test_long_text_is_cut_and_marked(self):
        assert truncate_text("hello world again", 12) == "hello world..."

    def test_count_words(self):
        assert count_words("") == 0
        assert count_words("  one two\nthree ") == 3


class TestDeeplyNestedJson:
    def test_nested_json_string_gives_empty_string(self):
        nested = '{"type":"doc","content":[' * 100000 + ']}' * 100000
        assert extract_text(nested) == ""

    def test_unclosed_brackets_give_empty_string(self):
        assert extract_text("[" * 100000) == ""

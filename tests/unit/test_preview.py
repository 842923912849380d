from jotter.content import (
    HOVER, THUMBNAIL, PreviewElement, PreviewKind, extract_structural_elements
)
from tests.factories import doc, heading, paragraph, image, bullet_list, blockquote, text


def test_elements_in_document_order():
    content = doc(
        heading("Trip notes", level=2),
        paragraph(text("Packing", "bold"), " list"),
        image("https://cdn.example.com/map.png", alt="map"),
        bullet_list("tent"),
        blockquote(paragraph("Go light")),
    )
    assert extract_structural_elements(content) == [
        PreviewElement(PreviewKind.HEADING, text="Trip notes", level=2),
        PreviewElement(PreviewKind.PARAGRAPH, text="Packing list", is_bold=True),
        PreviewElement(PreviewKind.IMAGE, src="https://cdn.example.com/map.png", alt="map"),
        PreviewElement(PreviewKind.LIST),
        PreviewElement(PreviewKind.PARAGRAPH, text="tent", is_bold=False),
        PreviewElement(PreviewKind.BLOCKQUOTE),
        PreviewElement(PreviewKind.PARAGRAPH, text="Go light", is_bold=False),
    ]


def test_bound_is_respected():
    content = doc(*[f"paragraph {i}" for i in range(20)])
    elements = extract_structural_elements(content, max_elements=3)
    assert [e.text for e in elements] == ["paragraph 0", "paragraph 1", "paragraph 2"]
    assert len(extract_structural_elements(content)) == HOVER.max_elements
    assert len(extract_structural_elements(content, profile=THUMBNAIL)) == THUMBNAIL.max_elements


def test_zero_bound_gives_nothing():
    assert extract_structural_elements(doc("text"), max_elements=0) == []


def test_profiles_truncate_text():
    long_heading = "H" * 80
    long_paragraph = "p" * 150
    content = doc(heading(long_heading), long_paragraph)

    hover = extract_structural_elements(content)
    assert len(hover[0].text) == HOVER.heading_length
    assert len(hover[1].text) == HOVER.paragraph_length

    thumb = extract_structural_elements(content, profile=THUMBNAIL)
    assert len(thumb[0].text) == THUMBNAIL.heading_length
    assert len(thumb[1].text) == THUMBNAIL.paragraph_length


def test_heading_level_defaults_to_one():
    content = doc(heading("No level", level=None), heading("Bad level", level=0))
    assert [e.level for e in extract_structural_elements(content)] == [1, 1]


def test_blank_blocks_and_images_without_src_are_skipped():
    content = doc(paragraph("   "), heading(" "), {"type": "image", "attrs": {"src": ""}}, "kept")
    assert extract_structural_elements(content) == [
        PreviewElement(PreviewKind.PARAGRAPH, text="kept", is_bold=False)
    ]


def test_malformed_content_gives_empty_preview():
    assert extract_structural_elements(None) == []
    assert extract_structural_elements("not json") == []
    assert extract_structural_elements(["list", "root"]) == []


def test_unknown_node_types_are_ignored():
    content = {"type": "doc", "content": [{"type": "callout", "content": [paragraph("inside")]}]}
    assert extract_structural_elements(content) == [
        PreviewElement(PreviewKind.PARAGRAPH, text="inside", is_bold=False)
    ]


def test_deeply_nested_json_string_gives_empty_preview():
    assert extract_structural_elements("[" * 100000 + "]" * 100000, 4) == []
    assert extract_structural_elements("[" * 100000, 4) == []

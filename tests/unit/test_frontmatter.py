"""Test YAML frontmatter extraction."""

from md2deck.frontmatter import extract_frontmatter


def test_extracts_metadata_and_body():
    text = "---\ntitle: Deck\nauthor: Sam\n---\n# Body\n"

    metadata, body = extract_frontmatter(text)

    assert metadata == {"title": "Deck", "author": "Sam"}
    assert body == "# Body\n"


def test_values_are_strings():
    text = "---\nversion: 2\ndate: 2024-10-01\ndraft: true\nempty:\n---\ncontent"

    metadata, body = extract_frontmatter(text)

    assert metadata == {"version": "2", "date": "2024-10-01", "draft": "True"}
    assert body == "content"


def test_no_frontmatter():
    text = "# Just markdown\n"

    assert extract_frontmatter(text) == ({}, text)


def test_unclosed_frontmatter_keeps_document():
    text = "---\ntitle: Deck\n# Body"

    metadata, body = extract_frontmatter(text)

    assert metadata == {}
    assert body == text


def test_malformed_yaml_is_ignored():
    text = "---\ntitle: [unclosed\n---\n# Body\n"

    metadata, body = extract_frontmatter(text)

    assert metadata == {}
    assert body == "# Body\n"


def test_non_mapping_frontmatter_is_ignored():
    metadata, body = extract_frontmatter("---\n- a\n- b\n---\nrest")

    assert metadata == {}
    assert body == "rest"


def test_empty_input():
    assert extract_frontmatter("") == ({}, "")

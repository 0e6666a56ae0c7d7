"""Test folding of the markdown token stream into document nodes."""

import pytest

from md2deck.errors import ConversionError
from md2deck.tokenizer import (
    BLOCKQUOTE,
    CODE,
    HEADING,
    HR,
    HTML,
    IMAGE,
    LIST_ITEM,
    PARAGRAPH,
    TABLE,
    DocumentTokenizer,
    clean_text,
    tokenize,
)


@pytest.fixture
def tokenizer():
    return DocumentTokenizer()


def test_document_order(tokenizer):
    markdown = """# Title

Intro paragraph.

- one
- two

> quoted

```js
let x = 1;
```

---

<!-- notes: hi -->
"""
    nodes = tokenizer.tokenize(markdown)

    assert [node.kind for node in nodes] == [
        HEADING, PARAGRAPH, LIST_ITEM, LIST_ITEM, BLOCKQUOTE, CODE, HR, HTML,
    ]


def test_heading_levels_and_text(tokenizer):
    nodes = tokenizer.tokenize("# One\n\n## Two *em*\n\n#### Four")

    assert [(node.level, node.text) for node in nodes] == [(1, "One"), (2, "Two em"), (4, "Four")]
    assert nodes[0].line == 1


def test_list_levels(tokenizer):
    nodes = tokenizer.tokenize("- top\n  - nested\n    - deeper\n- back")

    assert [(node.text, node.level) for node in nodes] == [
        ("top", 0), ("nested", 1), ("deeper", 2), ("back", 0),
    ]


def test_ordered_list_items(tokenizer):
    nodes = tokenizer.tokenize("1. first\n2. second")

    assert [node.kind for node in nodes] == [LIST_ITEM, LIST_ITEM]
    assert nodes[1].text == "second"


def test_loose_list_item_paragraphs_merge(tokenizer):
    nodes = tokenizer.tokenize("- first line\n\n  continued here\n- next")

    assert len(nodes) == 2
    assert nodes[0].text == "first line continued here"


def test_paragraph_keeps_raw_source(tokenizer):
    nodes = tokenizer.tokenize("Month,Sales\nJan,100")

    assert nodes[0].kind == PARAGRAPH
    assert nodes[0].raw == "Month,Sales\nJan,100"
    assert nodes[0].text == "Month,Sales Jan,100"


def test_table_cells(tokenizer):
    markdown = "| A | **B** |\n|---|---|\n| 1 | 2 |\n| 3 | 4 |"
    nodes = tokenizer.tokenize(markdown)

    assert len(nodes) == 1
    table = nodes[0]
    assert table.kind == TABLE
    assert table.headers == ["A", "B"]
    assert table.rows == [["1", "2"], ["3", "4"]]


def test_image_splits_paragraph_in_document_order(tokenizer):
    nodes = tokenizer.tokenize('See ![Alt text](img/a.png "Caption") below')

    assert [node.kind for node in nodes] == [PARAGRAPH, IMAGE, PARAGRAPH]
    image = nodes[1]
    assert image.src == "img/a.png"
    assert image.alt == "Alt text"
    assert image.title == "Caption"
    assert [nodes[0].text, nodes[2].text] == ["See", "below"]


def test_comment_next_to_image_survives_in_raw(tokenizer):
    nodes = tokenizer.tokenize("![Chart](plot.png) <!-- notes: explain the plot -->")

    assert [node.kind for node in nodes] == [IMAGE, PARAGRAPH]
    assert nodes[1].text == ""
    assert nodes[1].raw.strip() == "<!-- notes: explain the plot -->"


def test_list_item_with_image(tokenizer):
    nodes = tokenizer.tokenize("- before ![icon](i.png) after")

    assert [node.kind for node in nodes] == [LIST_ITEM, IMAGE]
    assert nodes[0].text == "before after"


def test_image_only_paragraph(tokenizer):
    nodes = tokenizer.tokenize("![Only](only.png)")

    assert [node.kind for node in nodes] == [IMAGE]


def test_code_block_language_and_content(tokenizer):
    nodes = tokenizer.tokenize("```csv title=x\na,b\n1,2\n```")

    assert nodes[0].kind == CODE
    assert nodes[0].language == "csv"
    assert nodes[0].text == "a,b\n1,2"


def test_indented_code_block(tokenizer):
    nodes = tokenizer.tokenize("    indented code")

    assert nodes[0].kind == CODE
    assert nodes[0].language is None
    assert nodes[0].text == "indented code"


def test_blockquote_text(tokenizer):
    nodes = tokenizer.tokenize("> line one\n> line two\n>\n> para two")

    assert nodes[0].kind == BLOCKQUOTE
    assert nodes[0].text == "line one line two para two"


def test_html_block_raw(tokenizer):
    nodes = tokenizer.tokenize('<!-- chart: type="pie" -->')

    assert nodes[0].kind == HTML
    assert nodes[0].raw.strip() == '<!-- chart: type="pie" -->'


def test_module_level_tokenize():
    assert tokenize("") == []


def test_tokenize_rejects_non_text(tokenizer):
    with pytest.raises(ConversionError):
        tokenizer.tokenize(b"# bytes")


@pytest.mark.parametrize("html,expected", [
    ("plain", "plain"),
    ("<strong>bold</strong> text", "bold text"),
    ("Fish &amp; Chips", "Fish & Chips"),
    ("a <!-- hidden --> b", "a b"),
    ("  spaced\n\n out  ", "spaced out"),
    ("", ""),
])
def test_clean_text(html, expected):
    assert clean_text(html) == expected

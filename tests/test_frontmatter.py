import pytest

from src.content.frontmatter import parse_document, yaml_double_quote
from src.twitch.errors import FrontMatterError, ParseError

EPISODE_TEXT = """---
title: "Snake Game"
date: "2026-01-26T17:00:00-05:00"
# editor note: keep tags short
tags:
  - claude-code
  - games
youtubeUrl: "https://youtu.be/abc"
---

We built **Snake** live.

---

Links below.
"""


@pytest.mark.unit
def test_parse_and_render_round_trip_is_exact():
    document = parse_document(EPISODE_TEXT)
    assert document.render() == EPISODE_TEXT


@pytest.mark.unit
def test_parse_keeps_keys_and_opaque_lines():
    document = parse_document(EPISODE_TEXT)

    keys = [line.key for line in document.lines if line.key is not None]
    assert keys == ["title", "date", "tags", "youtubeUrl"]
    assert document.lines[0].raw == 'title: "Snake Game"'
    assert document.lines[2].key is None
    assert document.lines[4].raw == "  - claude-code"


@pytest.mark.unit
def test_body_horizontal_rule_is_not_a_fence():
    document = parse_document(EPISODE_TEXT)
    assert document.body == "\n\nWe built **Snake** live.\n\n---\n\nLinks below.\n"


@pytest.mark.unit
def test_set_field_replaces_in_place():
    document = parse_document(EPISODE_TEXT)
    document.set_field("title", '"Snake Game, part 2"')

    rendered = document.render()
    assert rendered == EPISODE_TEXT.replace('"Snake Game"', '"Snake Game, part 2"')


@pytest.mark.unit
def test_set_field_appends_missing_key_at_end_of_block():
    document = parse_document(EPISODE_TEXT)
    document.set_field("thumbnail", "../../assets/episodes/2026-01-26.jpg")

    rendered = document.render()
    assert 'youtubeUrl: "https://youtu.be/abc"\nthumbnail: ../../assets/episodes/2026-01-26.jpg\n---\n' in rendered


@pytest.mark.unit
def test_nested_key_is_not_treated_as_top_level():
    document = parse_document('---\nmeta:\n  title: "nested"\n---\n')
    document.set_field("title", '"Top"')

    assert document.render() == '---\nmeta:\n  title: "nested"\ntitle: "Top"\n---\n'


@pytest.mark.unit
def test_missing_body_defaults_to_newline():
    document = parse_document('---\ntitle: "x"\n---')
    assert document.body == "\n"
    assert document.render() == '---\ntitle: "x"\n---\n'


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        "No front matter here\n",
        '---\ntitle: "never closed"\n',
        '---\ntitle: "x"\n---- not a fence\n',
    ],
)
def test_unparseable_documents_raise(text):
    with pytest.raises(FrontMatterError):
        parse_document(text)


@pytest.mark.unit
def test_front_matter_error_is_a_parse_error():
    assert issubclass(FrontMatterError, ParseError)


@pytest.mark.unit
def test_yaml_double_quote_escapes():
    assert yaml_double_quote('Say "hi"') == '"Say \\"hi\\""'
    assert yaml_double_quote("back\\slash") == '"back\\\\slash"'

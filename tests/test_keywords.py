import pytest

from exifmeta.errors import CategoriesXmlError
from exifmeta.keywords import (
    KEYWORD_SOURCES,
    extract_keywords,
    join_keywords,
    normalize_keyword_list,
    parse_categories,
    resolve_keywords,
    split_keywords,
)
from exifmeta.tags import Tag

CATEGORIES = "<Categories><Category>Travel</Category><Category>Family</Category></Categories>"


def test_twelve_sources_in_priority_order():
    assert len(KEYWORD_SOURCES) == 12
    assert KEYWORD_SOURCES[0] == ("XMP", "Subject")
    assert KEYWORD_SOURCES[1] == ("IPTC", "Keywords")
    assert KEYWORD_SOURCES[-1] == ("XMP", "Categories")


def test_split_dedupes_case_sensitively_in_first_occurrence_order():
    assert split_keywords("a, A, b; b, a") == ["a", "A", "b"]


def test_extract_sorts_ordinally_uppercase_first():
    assert extract_keywords("a, A, b; b, a") == ["A", "a", "b"]


def test_split_honours_every_delimiter_and_drops_blanks():
    assert split_keywords(" one;two,three|four/five\\six ; ,, ") == [
        "one", "two", "three", "four", "five", "six",
    ]


def test_categories_xml():
    assert parse_categories(CATEGORIES) == ["Travel", "Family"]
    assert extract_keywords(CATEGORIES) == ["Family", "Travel"]


def test_categories_text_is_not_split_on_delimiters():
    value = "<Categories><Category>Places/Paris</Category><Category> Places/Paris </Category></Categories>"
    assert extract_keywords(value) == ["Places/Paris"]


def test_categories_other_root_yields_nothing():
    assert parse_categories("<Tags><Category>x</Category></Tags>") == []


def test_malformed_categories_xml_raises():
    with pytest.raises(CategoriesXmlError):
        extract_keywords("<Categories><Category>Travel</Categories>")
    tags = [Tag("XMP", "Categories", "<Categories><Category>x</Category>")]
    with pytest.raises(CategoriesXmlError):
        resolve_keywords(tags)


def test_combine_unions_all_sources():
    tags = [
        Tag("XMP", "Subject", "x, y"),
        Tag("EXIF", "XP Keywords", "y; z"),
    ]
    assert resolve_keywords(tags) == ["x", "y", "z"]


def test_combine_is_idempotent():
    tags = [
        Tag("IPTC", "Keywords", "b, a"),
        Tag("XMP", "Categories", CATEGORIES),
        Tag("XMP", "Hierarchical Subject", "Places|France"),
    ]
    first = resolve_keywords(tags)
    assert first == resolve_keywords(tags)
    assert first == ["Family", "France", "Places", "Travel", "a", "b"]


def test_first_match_skips_sources_without_tokens():
    tags = [
        Tag("XMP", "Subject", " , ; "),
        Tag("IPTC", "Keywords", "b, a"),
        Tag("EXIF", "XP Keywords", "c"),
    ]
    assert resolve_keywords(tags, combine=False) == ["a", "b"]
    assert resolve_keywords(tags) == ["a", "b", "c"]


def test_unknown_tags_are_not_keyword_sources():
    tags = [Tag("XMP", "Keywords", "ignored"), Tag("File", "Comment", "also ignored")]
    assert resolve_keywords(tags) == []
    assert resolve_keywords(tags, combine=False) == []


def test_custom_sources():
    tags = [Tag("XMP", "Keywords", "k1, k2")]
    assert resolve_keywords(tags, sources=[("XMP", "Keywords")]) == ["k1", "k2"]


def test_normalize_and_join_for_writes():
    values = [" b", "a", "", None, "a", "B", "   "]
    assert normalize_keyword_list(values) == ["B", "a", "b"]
    assert join_keywords(values) == "B, a, b"
    assert join_keywords([]) == ""

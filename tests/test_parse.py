import io

import pytest

from lineyaml.convert import to_python
from lineyaml.document import load, parse, parse_file
from lineyaml.errors import InternalError, OperationError, ParsingError, YamlError
from lineyaml.node import Node, NodeType


def test_map_with_nested_sequence():
    root = parse("a: 1\nb:\n  - x\n  - y\n")
    assert root.is_map()
    assert root.size() == 2
    assert root["a"].as_string() == "1"
    assert root["b"].is_sequence()
    assert [value.as_string() for _, value in root["b"]] == ["x", "y"]


def test_sequence_of_maps():
    root = parse("- name: a\n  value: 1\n- name: b\n")
    assert to_python(root) == [{"name": "a", "value": "1"}, {"name": "b"}]


def test_literal_block_in_map():
    root = parse("text: |\n  line1\n  line2\n")
    assert root["text"].as_string() == "line1\nline2\n"


def test_folded_and_stripped_blocks():
    root = parse("f: >\n  a\n  b\ns: |-\n  a\n    b\n")
    assert root["f"].as_string() == "a b\n"
    assert root["s"].as_string() == "a\n  b"


def test_block_in_sequence():
    assert load("- |\n  a\n  b\n- c\n") == ["a\nb\n", "c"]


def test_nested_inline_sequences():
    assert load("- - a\n  - b\n- c\n") == [["a", "b"], "c"]


def test_empty_values():
    assert load("a:\nb: 1\nc:\n") == {"a": "", "b": "1", "c": ""}
    assert load("- \n- b\n-\n") == ["", "b", ""]


def test_nested_maps():
    assert load("a:\n  b:\n    c: d\n  e: f\ng: h\n") == {"a": {"b": {"c": "d"}, "e": "f"}, "g": "h"}


def test_root_scalar():
    root = parse("just text")
    assert root.is_scalar()
    assert root.as_string() == "just text"


def test_empty_document():
    assert parse("").is_none()
    assert parse("# only a comment\n\n").is_none()


def test_comments_and_quotes():
    assert load('a: 1 # note\nb: "x # y"\nc: "quoted: yes"\n') == {
        "a": "1",
        "b": "x # y",
        "c": "quoted: yes",
    }


def test_value_with_colon_stays_in_value():
    assert load("url: http://example.com:8080/x\n") == {"url": "http://example.com:8080/x"}


def test_document_markers():
    assert load("ignored: 1\n---\na: 1\n...\nb: 2\n") == {"a": "1"}


def test_duplicate_keys_last_wins():
    assert load("a: 1\na:\n  - x\n") == {"a": ["x"]}


def test_crlf_input():
    assert load("a: 1\r\nb: 2\r\n") == {"a": "1", "b": "2"}


def test_invalid_character_in_document():
    with pytest.raises(ParsingError) as excinfo:
        parse("a: 1\nb: \x01\n")
    assert excinfo.value.line == 2
    assert excinfo.value.column == 4
    assert "Line 2 column 4" in str(excinfo.value)


def test_misaligned_sibling_is_rejected():
    with pytest.raises(ParsingError) as excinfo:
        parse("a:\n  b: 1\n c: 2\n")
    assert excinfo.value.message == "Incorrect offset."
    assert excinfo.value.line == 3


def test_deeper_sequence_entry_is_rejected():
    with pytest.raises(ParsingError):
        parse("- a\n  - b\n")


def test_mixed_sibling_kinds():
    with pytest.raises(InternalError) as excinfo:
        parse("- a\nb: c\n")
    assert excinfo.value.message == "Different entry is not allowed in this context."
    assert excinfo.value.kind == "internal"


def test_two_root_scalars():
    with pytest.raises(InternalError) as excinfo:
        parse("a\nb\n")
    assert excinfo.value.message == "Unexpected document end."


def test_failed_parse_clears_root():
    root = Node()
    root["keep"] = "me"
    with pytest.raises(YamlError):
        parse("key: - a", root)
    assert root.is_none()


def test_parse_into_existing_root_replaces_content():
    root = Node("old")
    result = parse("- x", root)
    assert result is root
    assert root.type is NodeType.SEQUENCE


def test_parse_bytes_and_streams():
    assert load(b"a: 1") == {"a": "1"}
    assert load(io.StringIO("- x\n")) == ["x"]
    assert load(io.BytesIO(b"k: v\n")) == {"k": "v"}


def test_parse_rejects_unknown_source():
    with pytest.raises(TypeError):
        parse(42)


def test_parse_file(tmp_path):
    path = tmp_path / "doc.yml"
    path.write_text("a:\n  - 1\n", encoding="utf-8")
    assert to_python(parse_file(path)) == {"a": ["1"]}
    assert to_python(parse_file(str(path))) == {"a": ["1"]}


def test_parse_missing_file(tmp_path):
    with pytest.raises(OperationError) as excinfo:
        parse_file(tmp_path / "missing.yml")
    assert excinfo.value.message == "Cannot open file."
    assert excinfo.value.kind == "operation"

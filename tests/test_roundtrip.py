import pytest
import yaml

from lineyaml.config import SerializeConfig
from lineyaml.convert import from_python, to_python
from lineyaml.document import dump, load, parse, serialize

DOCUMENT = {
    "name": "lineyaml",
    "empty": "",
    "list": ["one", "two words", "", ["nested", "deeper"], {"k": "v", "k2": ["x"]}],
    "text": "first line\nsecond line\n",
    "strip": "no newline\n  indented",
    "long": (
        "lorem ipsum dolor sit amet consectetur adipiscing elit sed do eiusmod "
        "tempor incididunt ut labore et dolore magna aliqua ut enim ad minim veniam"
    ),
    "weird key: yes": "value # not a comment",
    "url": "http://example.com/path",
    "quoted": '"already quoted"',
    "dash": "- looks like a list",
    "backslash": "C:\\temp\\dir",
    "map": {"inner": {"deep": "value"}, "blocks": ["a\nb", "c\n"]},
}

CONFIGS = [
    SerializeConfig(),
    SerializeConfig(indent_width=4),
    SerializeConfig(max_scalar_length=0),
    SerializeConfig(max_scalar_length=12),
    SerializeConfig(sequence_map_newline=True),
    SerializeConfig(map_scalar_newline=True),
    SerializeConfig(indent_width=3, sequence_map_newline=True, map_scalar_newline=True),
]


@pytest.mark.parametrize("config", CONFIGS)
def test_serialize_then_parse_restores_the_tree(config):
    tree = from_python(DOCUMENT)
    text = serialize(tree, config=config)
    assert parse(text) == tree


@pytest.mark.parametrize("config", CONFIGS)
def test_serialization_is_idempotent(config):
    text = dump(DOCUMENT, config)
    assert serialize(parse(text), config=config) == text


def test_map_keys_are_written_sorted():
    text = dump({"b": "2", "c": "3", "a": "1"})
    assert text == "a: 1\nb: 2\nc: 3\n"


def test_parse_then_serialize_normalizes_layout():
    source = "# settings\nz:   last\na:\n    - x\n    -   y\n"
    assert dump(load(source)) == "a: \n  - x\n  - y\nz: last\n"


def test_output_is_understood_by_pyyaml():
    # PyYAML reads empty values as null and resolves plain numbers, so keep to text
    document = {
        "name": "lineyaml",
        "list": ["one", "two words", ["nested"], {"k": "v"}],
        "text": "first line\nsecond line\n",
        "strip": "no newline\n  indented",
        "long": "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda mu nu xi omicron",
        "weird key: yes": "value # not a comment",
        "quoted": '"already quoted"',
        "dash": "- looks like a list",
    }
    for config in CONFIGS:
        assert yaml.safe_load(dump(document, config)) == document


def test_reads_what_pyyaml_reads():
    text = "service:\n  name: api\n  hosts:\n    - alpha\n    - beta\nnote: plain text # trailing\n"
    assert load(text) == yaml.safe_load(text)


@pytest.mark.parametrize("max_length", [1, 3, 5])
def test_space_runs_survive_folding(max_length):
    config = SerializeConfig(max_scalar_length=max_length)
    values = ["a    b", "|-  :b", "one  two  three four", "tab \tthen", "plain words only here"]
    tree = from_python({"map": {str(i): value for i, value in enumerate(values)}, "list": values})
    assert parse(serialize(tree, config=config)) == tree


def test_space_runs_stay_inline():
    assert dump({"k": "a    b"}, SerializeConfig(max_scalar_length=1)) == "k: a    b\n"

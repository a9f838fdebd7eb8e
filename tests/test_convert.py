import unittest

from lineyaml.convert import from_python, to_python
from lineyaml.node import Node


class TestConvert(unittest.TestCase):
    def test_from_python_builds_tree(self):
        """Dicts become maps, lists become sequences, scalars become text."""
        root = from_python({"a": [1, 2.5, False, None], "b": {"c": "d"}, 3: "x"})
        self.assertTrue(root.is_map())
        self.assertEqual(root.keys(), ["3", "a", "b"])
        self.assertEqual([value.as_string() for _, value in root["a"]][:3], ["1", "2.5", "false"])
        self.assertTrue(root["a"][3].is_none())
        self.assertEqual(root["b"]["c"].as_string(), "d")

    def test_from_python_preserves_sequence_order(self):
        root = from_python(("z", "a", "m"))
        self.assertEqual(to_python(root), ["z", "a", "m"])

    def test_from_python_replaces_existing_content(self):
        node = Node("old")
        result = from_python(["x"], node)
        self.assertIs(result, node)
        self.assertTrue(node.is_sequence())

    def test_to_python(self):
        root = Node()
        root["list"].push_back().set("x")
        root["map"]["k"] = "v"
        self.assertEqual(to_python(root), {"list": ["x"], "map": {"k": "v"}})
        self.assertIsNone(to_python(Node()))
        self.assertEqual(to_python(Node("s")), "s")

    def test_empty_containers(self):
        self.assertEqual(to_python(from_python({})), {})
        self.assertEqual(to_python(from_python([])), [])


if __name__ == "__main__":
    unittest.main()

"""Clipboard document serialization."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from treecopy.errors import FileReadError
from treecopy.output import (
    dedupe_selection,
    read_text,
    render_ascii_tree,
    serialize_selection,
    tree_order_key,
)
from treecopy.tree_model import TreeIndex, build_tree, iter_nodes, selected_nodes, toggle_selection


def _write(root: Path, rel: str, text: str) -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class SerializeSelectionTests(unittest.TestCase):
    def test_folder_and_file_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "a/file1.txt", "one")
            _write(root, "a/file2.txt", "two")
            _write(root, "b.txt", "bee")
            tree = build_tree(root)
            index = TreeIndex(tree)
            folder_a, file_b = tree

            selection = toggle_selection(folder_a.id, index, frozenset())
            selection = toggle_selection(file_b.id, index, selection)
            roots = selected_nodes(selection, index)
            result = serialize_selection(roots, include_tree=False)

            self.assertEqual(len(roots), 2)
            self.assertEqual(result.file_count, 3)
            self.assertEqual(result.file_paths, ["./a/file1.txt", "./a/file2.txt", "./b.txt"])
            self.assertEqual(
                result.content,
                '<folder name="a">\n'
                '<file name="a/file1.txt">\none\n</file>\n'
                '<file name="a/file2.txt">\ntwo\n</file>\n'
                "</folder>\n\n"
                '<file name="b.txt">\nbee\n</file>\n\n'
                "```files.txt\n./a/file1.txt\n./a/file2.txt\n./b.txt\n```",
            )

    def test_two_files_in_folder_count_two(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "a/file1.txt", "one")
            _write(root, "a/file2.txt", "two")
            tree = build_tree(root)
            index = TreeIndex(tree)

            selection = toggle_selection(tree[0].id, index, frozenset())
            result = serialize_selection(selected_nodes(selection, index))

            self.assertEqual(result.file_count, 2)
            self.assertIn("```files.txt\n./a/file1.txt\n./a/file2.txt\n```", result.content)
            self.assertTrue(result.content.endswith("```tree.txt\na/\n├── file1.txt\n└── file2.txt\n```"))

    def test_file_reachable_twice_is_emitted_once(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "a/file1.txt", "one")
            tree = build_tree(root)
            folder = tree[0]
            file_node = folder.children[0]

            result = serialize_selection([file_node, folder], include_tree=False)

            self.assertEqual(result.file_count, 1)
            self.assertEqual(result.content.count('<file name="a/file1.txt">'), 1)
            self.assertEqual(result.file_paths, ["./a/file1.txt"])

    def test_output_does_not_depend_on_input_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "a/x.txt", "x")
            _write(root, "b.txt", "b")
            _write(root, "C.txt", "c")
            nodes = list(build_tree(root))

            forward = serialize_selection(nodes)
            backward = serialize_selection(list(reversed(nodes)))

            self.assertEqual(forward.content, backward.content)

    def test_unreadable_file_raises_file_read_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "gone.txt", "x")
            tree = build_tree(root)
            (root / "gone.txt").unlink()

            with self.assertRaises(FileReadError) as ctx:
                serialize_selection(tree)

            self.assertEqual(ctx.exception.path, tree[0].path)

    def test_folder_with_directory_symlink_serializes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "a/f.txt", "eff")
            _write(root, "shared/s.txt", "shh")
            try:
                os.symlink(root / "shared", root / "a" / "linked", target_is_directory=True)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks unavailable")
            tree = build_tree(root)
            index = TreeIndex(tree)
            folder_a = tree[0]

            selection = toggle_selection(folder_a.id, index, frozenset())
            result = serialize_selection(selected_nodes(selection, index), include_tree=False)

            self.assertEqual(result.file_count, 1)
            self.assertEqual(result.file_paths, ["./a/f.txt"])
            self.assertEqual(
                result.content,
                '<folder name="a">\n'
                '<folder name="a/linked">\n\n</folder>\n'
                '<file name="a/f.txt">\neff\n</file>\n'
                "</folder>\n\n"
                "```files.txt\n./a/f.txt\n```",
            )

    def test_dangling_symlink_is_left_out(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "a/f.txt", "eff")
            try:
                os.symlink(root / "gone", root / "a" / "broken")
            except (OSError, NotImplementedError):
                self.skipTest("symlinks unavailable")
            tree = build_tree(root)
            index = TreeIndex(tree)

            selection = toggle_selection(tree[0].id, index, frozenset())
            result = serialize_selection(selected_nodes(selection, index))

            self.assertEqual(result.file_paths, ["./a/f.txt"])
            self.assertNotIn("broken", result.content)

    def test_custom_reader_is_used_for_file_contents(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "f.txt", "on disk")
            tree = build_tree(root)

            result = serialize_selection(tree, include_tree=False, reader=lambda path: f"read {path.name}")

            self.assertIn('<file name="f.txt">\nread f.txt\n</file>', result.content)

    def test_empty_selected_folder_keeps_its_wrapper(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "empty").mkdir()
            tree = build_tree(root)

            result = serialize_selection(tree, include_tree=False)

            self.assertEqual(result.file_count, 0)
            self.assertTrue(result.content.startswith('<folder name="empty">\n\n</folder>'))


class ReadTextTests(unittest.TestCase):
    def test_decodes_utf8_bom_and_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            (root / "plain.txt").write_bytes("héllo".encode("utf-8"))
            (root / "latin.txt").write_bytes("héllo".encode("latin-1"))

            self.assertEqual(read_text(root / "plain.txt"), "héllo")
            self.assertEqual(read_text(root / "latin.txt"), "héllo")

    def test_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileReadError):
                read_text(Path(tmp) / "nope.txt")


class OrderingAndTreeTests(unittest.TestCase):
    def test_tree_order_key_matches_pre_order(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            for rel in ("z/a.txt", "B/c.txt", "a.txt", "Z.txt"):
                _write(root, rel, rel)
            nodes = list(iter_nodes(build_tree(root)))

            self.assertEqual(sorted(nodes, key=tree_order_key), nodes)

    def test_dedupe_keeps_file_inside_folder(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "a/f.txt", "f")
            folder = build_tree(root)[0]

            cleaned = dedupe_selection([folder.children[0], folder])

            self.assertEqual([node.name for node in cleaned], ["a"])
            self.assertEqual([child.name for child in cleaned[0].children], ["f.txt"])

    def test_ascii_tree_nests_connectors(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "src/pkg/mod.py", "")
            _write(root, "src/main.py", "")
            _write(root, "README.md", "")

            self.assertEqual(
                render_ascii_tree(build_tree(root)),
                "src/\n"
                "├── pkg/\n"
                "│   └── mod.py\n"
                "└── main.py\n"
                "README.md",
            )


if __name__ == "__main__":
    unittest.main()

"""Session bootstrap: initial state and output hand-off."""

from __future__ import annotations

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from treecopy.output import SerializedSelection
from treecopy.runtime import AppOptions, load_initial_state, run_app
from treecopy.runtime.app import ui_output_fd


def _write(root: Path, rel: str, text: str = "x") -> None:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


class _FakeStdout(io.StringIO):
    def fileno(self) -> int:
        return 1


class LoadInitialStateTests(unittest.TestCase):
    def test_options_shape_the_tree(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            _write(root, "dist/bundle.js")
            _write(root, ".env")
            _write(root, "main.py")

            state = load_initial_state(
                AppOptions(root=root, use_gitignore=False, show_hidden=False, extra_excludes=frozenset({"dist"}))
            )

            self.assertEqual([node.name for node in state.tree], ["main.py"])
            self.assertEqual(state.current_id, str(root.resolve() / "main.py"))
            self.assertEqual(state.root, root.resolve())

    def test_empty_directory_has_no_cursor(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            state = load_initial_state(AppOptions(root=Path(tmp), use_gitignore=False))

            self.assertEqual(state.tree, [])
            self.assertIsNone(state.current_id)


class RunAppTests(unittest.TestCase):
    def _run(self, options: AppOptions, result: SerializedSelection | None, message: str = ""):
        def fake_loop(state, _registry, _callbacks):
            state.message = message
            return result

        stdout = _FakeStdout()
        stdin = mock.Mock()
        stdin.fileno.return_value = 0
        with mock.patch("treecopy.runtime.app.TerminalController") as controller, mock.patch(
            "treecopy.runtime.app.run_main_loop", side_effect=fake_loop
        ), mock.patch("treecopy.runtime.app.sys.stdout", stdout), mock.patch(
            "treecopy.runtime.app.sys.stdin", stdin
        ), mock.patch("treecopy.runtime.app.ui_output_fd", return_value=(1, False)), mock.patch(
            "treecopy.runtime.app.sys.stderr", io.StringIO()
        ) as stderr:
            returned = run_app(options)
        return returned, stdout.getvalue(), stderr.getvalue(), controller

    def test_stdout_destination_prints_document_after_restoring_terminal(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            _write(Path(tmp), "a.txt")
            document = SerializedSelection(content="DOC", file_count=1, file_paths=["./a.txt"])

            returned, out, err, controller = self._run(
                AppOptions(root=Path(tmp), use_gitignore=False, destination="stdout"),
                document,
                "Copied 1 file to output",
            )

        self.assertIs(returned, document)
        self.assertEqual(out, "DOC\n")
        self.assertEqual(err, "Copied 1 file to output\n")
        controller.return_value.raw_mode.assert_called_once_with()

    def test_clipboard_destination_prints_confirmation(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            _write(Path(tmp), "a.txt")
            document = SerializedSelection(content="DOC", file_count=1, file_paths=["./a.txt"])

            returned, out, _err, _controller = self._run(
                AppOptions(root=Path(tmp), use_gitignore=False),
                document,
                "Copied 1 file to clipboard",
            )

        self.assertIs(returned, document)
        self.assertEqual(out, "Copied 1 file to clipboard\n")

    def test_quit_prints_nothing(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            returned, out, err, _controller = self._run(AppOptions(root=Path(tmp), use_gitignore=False), None)

        self.assertIsNone(returned)
        self.assertEqual(out, "")
        self.assertEqual(err, "")


class RedirectedStdoutTests(unittest.TestCase):
    def test_redirected_stdout_receives_only_the_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmp, tempfile.TemporaryDirectory() as out_dir:
            _write(Path(tmp), "b.txt")
            out_path = Path(out_dir) / "out.md"
            read_fd, write_fd = os.pipe()
            stdin = mock.Mock()
            stdin.fileno.return_value = 0
            try:
                with open(out_path, "w", encoding="utf-8") as stdout, mock.patch(
                    "treecopy.runtime.app.TerminalController"
                ), mock.patch("treecopy.runtime.app._open_tty", return_value=write_fd), mock.patch(
                    "treecopy.runtime.app.read_key", side_effect=["RIGHT", "ENTER_CR"]
                ), mock.patch("treecopy.runtime.app.sys.stdout", stdout), mock.patch(
                    "treecopy.runtime.app.sys.stdin", stdin
                ), mock.patch("treecopy.runtime.app.sys.stderr", io.StringIO()) as stderr:
                    result = run_app(AppOptions(root=Path(tmp), use_gitignore=False, destination="stdout"))

                chunks = []
                while True:
                    chunk = os.read(read_fd, 65536)
                    if not chunk:
                        break
                    chunks.append(chunk)
            finally:
                os.close(read_fd)

            written = out_path.read_text(encoding="utf-8")

        self.assertIsNotNone(result)
        self.assertTrue(written.startswith('<file name="b.txt">\nx\n</file>'))
        self.assertNotIn("\033", written)
        self.assertIn(b"Select files and folders to include.", b"".join(chunks))
        self.assertEqual(stderr.getvalue(), "Copied 1 file to output\n")


class UiOutputFdTests(unittest.TestCase):
    def test_clipboard_destination_draws_on_stdout(self) -> None:
        with mock.patch("treecopy.runtime.app._open_tty") as open_tty:
            self.assertEqual(ui_output_fd("clipboard", 7), (7, False))

        open_tty.assert_not_called()

    def test_stdout_destination_on_a_terminal_draws_on_stdout(self) -> None:
        with mock.patch("treecopy.runtime.app.os.isatty", return_value=True):
            self.assertEqual(ui_output_fd("stdout", 7), (7, False))

    def test_redirected_stdout_without_tty_falls_back_to_stderr(self) -> None:
        stderr = mock.Mock()
        stderr.fileno.return_value = 2
        with mock.patch("treecopy.runtime.app.os.isatty", return_value=False), mock.patch(
            "treecopy.runtime.app._open_tty", return_value=None
        ), mock.patch("treecopy.runtime.app.sys.stderr", stderr):
            self.assertEqual(ui_output_fd("stdout", 7), (2, False))

    def test_redirected_stdout_uses_controlling_terminal(self) -> None:
        with mock.patch("treecopy.runtime.app.os.isatty", return_value=False), mock.patch(
            "treecopy.runtime.app._open_tty", return_value=11
        ):
            self.assertEqual(ui_output_fd("stdout", 7), (11, True))


if __name__ == "__main__":
    unittest.main()

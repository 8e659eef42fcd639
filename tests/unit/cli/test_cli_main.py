"""Tests for CLI argument handling and output modes."""

from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from branchscan import cli
from branchscan.errors import RemoteAccessError
from branchscan.repository import MemoryRepositoryView

URL = "https://svn.example.org/repo/project"


def _repository() -> MemoryRepositoryView:
    view = MemoryRepositoryView(root_url="https://svn.example.org/repo", uuid="cafe-babe")
    view.commit(add_dirs=["project/trunk", "project/branches/old"])
    view.commit(add_dirs=["project/branches/stable"], add_files=["project/branches/stable/pom.xml"])
    return view


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "config.json"
        config_patch = mock.patch("branchscan.config.CONFIG_PATH", self.config_path)
        config_patch.start()
        self.addCleanup(config_patch.stop)
        self.addCleanup(self._tmp.cleanup)

        self.view = _repository()
        view_class_patch = mock.patch("branchscan.cli.SvnRepositoryView")
        self.view_class = view_class_patch.start()
        self.addCleanup(view_class_patch.stop)
        self.view_class.open.side_effect = lambda _url, **_kwargs: self.view

    def _run(self, *argv: str) -> str:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            cli.main(list(argv))
        return out.getvalue()

    def test_default_crawl_prints_heads(self) -> None:
        output = self._run(URL)
        self.assertEqual(output, "branches/stable@2\nbranches/old@1\ntrunk@1\n")
        self.assertTrue(self.view.closed)

    def test_svn_settings_are_passed_to_view_factory(self) -> None:
        self._run(URL, "--svn", "/opt/svn/bin/svn", "--timeout", "5")
        _args, kwargs = self.view_class.open.call_args
        self.assertEqual(kwargs, {"svn_binary": "/opt/svn/bin/svn", "timeout_seconds": 5.0})

    def test_excludes_and_requirements(self) -> None:
        self.assertEqual(self._run(URL, "--excludes", "branches/old"), "branches/stable@2\ntrunk@1\n")
        self.assertEqual(self._run(URL, "--require", "pom.xml"), "branches/stable@2\n")

    def test_any_of_requirements_combine_with_required_paths(self) -> None:
        self.assertEqual(
            self._run(URL, "--require-any", "build.xml", "--require-any", "pom.xml"),
            "branches/stable@2\n",
        )
        self.assertEqual(self._run(URL, "--require", "pom.xml", "--require-any", "build.xml"), "")

    def test_find_crawls_until_named_head(self) -> None:
        self.assertEqual(self._run(URL, "--find", "branches/old/"), "branches/old@1\n")
        with self.assertRaises(SystemExit) as ctx:
            self._run(URL, "--find", "branches/gone")
        self.assertEqual(str(ctx.exception.code), "Head not found: branches/gone")

    def test_limit_and_json_output(self) -> None:
        decoded = json.loads(self._run(URL, "--limit", "1", "--format", "json"))
        self.assertEqual(decoded, [{"name": "branches/stable", "revision": 2, "last_modified": 2000}])

    def test_head_lookup(self) -> None:
        self.assertEqual(self._run(URL, "--head", "trunk"), "trunk@1\n")
        with self.assertRaises(SystemExit) as ctx:
            self._run(URL, "--head", "branches/gone")
        self.assertEqual(str(ctx.exception.code), "Head not found: branches/gone")

    def test_uuid_lookup(self) -> None:
        self.assertEqual(self._run(URL, "--uuid"), "cafe-babe\n")

    def test_remote_failure_exits_with_status_two(self) -> None:
        self.view_class.open.side_effect = RemoteAccessError("svn: E170013: Unable to connect")
        err = io.StringIO()
        with contextlib.redirect_stderr(err), self.assertLogs("branchscan.source", level="ERROR"):
            with self.assertRaises(SystemExit) as ctx:
                self._run(URL)
        self.assertEqual(ctx.exception.code, 2)
        self.assertIn("Unable to connect", err.getvalue())

    def test_rejects_non_repository_url(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit) as ctx:
                self._run("/tmp/not-a-url")
        self.assertEqual(ctx.exception.code, 2)

    def test_save_defaults_persists_patterns(self) -> None:
        self._run(URL, "--includes", "trunk", "--save-defaults")
        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved, {"includes": "trunk"})
        self.assertEqual(self._run(URL), "trunk@1\n")


if __name__ == "__main__":
    unittest.main()

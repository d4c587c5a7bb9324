"""End-to-end tests for the detection chain against a real filesystem."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from project_detect import detect_project, detect_project_from_file, is_in_project
from project_detect.detector import DETECTION_TIERS
from project_detect.models import DEFAULT_KNOWN_HOSTS, DetectorConfig


class DetectProjectTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _mkdir(self, *parts: str) -> Path:
        path = self.root.joinpath(*parts)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def test_known_host_layout(self) -> None:
        target = self._mkdir("Code", "github.com", "acme", "widget", "anything")
        self.assertEqual(detect_project(target), "github.com/acme/widget")
        self.assertEqual(detect_project(str(target)), "github.com/acme/widget")

    def test_host_substitution_only_changes_first_segment(self) -> None:
        for host in DEFAULT_KNOWN_HOSTS:
            with self.subTest(host=host):
                target = self._mkdir("ghq", host, "acme", "widget", "src")
                self.assertEqual(detect_project(target), f"{host}/acme/widget")

    def test_symlink_is_followed_to_code_root(self) -> None:
        real = self._mkdir("Code", "github.com", "acme", "widget", "src")
        link = self.root / "incubated" / "widget"
        link.parent.mkdir()
        os.symlink(real.parent, link, target_is_directory=True)

        self.assertEqual(detect_project(link / "src"), "github.com/acme/widget")

    def test_loose_code_root_layout(self) -> None:
        target = self._mkdir("Code", "git.internal", "team", "service", "lib")
        self.assertEqual(detect_project(target), "git.internal/team/service")

    def test_git_remote_fallback(self) -> None:
        repo = self._mkdir("work", "widget")
        git_dir = self._mkdir("work", "widget", ".git")
        (git_dir / "config").write_text(
            '[remote "origin"]\n\turl = git@github.com:acme/widget.git\n',
            encoding="utf-8",
        )
        nested = self._mkdir("work", "widget", "pkg", "sub")

        self.assertEqual(detect_project(nested), "github.com/acme/widget")
        self.assertEqual(detect_project(repo), "github.com/acme/widget")

    def test_path_pattern_wins_over_git_remote(self) -> None:
        repo = self._mkdir("Code", "gitlab.com", "group", "app")
        git_dir = self._mkdir("Code", "gitlab.com", "group", "app", ".git")
        (git_dir / "config").write_text(
            '[remote "origin"]\n\turl = https://github.com/fork/app.git\n',
            encoding="utf-8",
        )
        self.assertEqual(detect_project(repo), "gitlab.com/group/app")

    def test_metadata_without_origin_stops_walk(self) -> None:
        outer_git = self._mkdir("work", "outer", ".git")
        (outer_git / "config").write_text(
            '[remote "origin"]\n\turl = git@github.com:acme/outer.git\n',
            encoding="utf-8",
        )
        inner_git = self._mkdir("work", "outer", "inner", ".git")
        (inner_git / "config").write_text("[core]\n\tbare = false\n", encoding="utf-8")

        self.assertIsNone(detect_project(self.root / "work" / "outer" / "inner"))
        self.assertEqual(detect_project(self.root / "work" / "outer"), "github.com/acme/outer")

    def test_malformed_origin_url_returns_none(self) -> None:
        repo = self._mkdir("work", "broken")
        git_dir = self._mkdir("work", "broken", ".git")
        (git_dir / "config").write_text(
            '[remote "origin"]\n\turl = https://[github.com/acme/widget\n',
            encoding="utf-8",
        )

        self.assertIsNone(detect_project(repo))
        self.assertFalse(is_in_project(repo, "github.com/acme/widget"))

    def test_null_byte_in_path_returns_none(self) -> None:
        self.assertIsNone(detect_project(str(self.root) + "/a\x00b"))

    def test_nonexistent_path_returns_none(self) -> None:
        self.assertIsNone(detect_project(self.root / "Code" / "github.com" / "acme" / "missing"))

    def test_missing_location_returns_none(self) -> None:
        self.assertIsNone(detect_project())
        self.assertIsNone(detect_project(""))

    def test_custom_config_is_threaded_through(self) -> None:
        config = DetectorConfig(known_hosts=("git.example.org",), code_root="src")
        target = self._mkdir("mirror", "git.example.org", "team", "svc")
        self.assertEqual(detect_project(target, config), "git.example.org/team/svc")
        self.assertIsNone(detect_project(self._mkdir("Code", "github.com", "acme", "widget"), config))

    def test_tier_order(self) -> None:
        self.assertEqual(
            [tier.__name__ for tier in DETECTION_TIERS],
            ["match_known_host", "match_code_root", "detect_from_metadata"],
        )


class DetectProjectFromFileTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_uses_containing_directory(self) -> None:
        directory = self.root / "Code" / "github.com" / "acme" / "widget"
        directory.mkdir(parents=True)
        source = directory / "main.py"
        source.write_text("print('hi')\n", encoding="utf-8")

        self.assertEqual(detect_project_from_file(source), "github.com/acme/widget")
        self.assertEqual(detect_project_from_file(str(source)), "github.com/acme/widget")

    def test_file_need_not_exist(self) -> None:
        directory = self.root / "Code" / "bitbucket.org" / "team" / "tool"
        directory.mkdir(parents=True)
        self.assertEqual(detect_project_from_file(directory / "new_file.py"), "bitbucket.org/team/tool")

    def test_empty_path(self) -> None:
        self.assertIsNone(detect_project_from_file(""))


class IsInProjectTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.repo = self.root / "Code" / "github.com" / "acme" / "widget" / "src"
        self.repo.mkdir(parents=True)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_matches_detected_project(self) -> None:
        self.assertTrue(is_in_project(self.repo, "github.com/acme/widget"))

    def test_other_project(self) -> None:
        self.assertFalse(is_in_project(self.repo, "github.com/acme/other"))

    def test_false_when_detection_fails(self) -> None:
        missing = self.root / "nowhere"
        self.assertFalse(is_in_project(missing, "github.com/acme/widget"))
        self.assertFalse(is_in_project(missing, None))
        self.assertFalse(is_in_project(missing, ""))


if __name__ == "__main__":
    unittest.main()

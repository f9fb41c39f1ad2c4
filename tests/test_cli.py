"""
Tests for the command-line interface and summary formatters.
"""

import json
import logging
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from click.testing import CliRunner

from mv_git.cli import cli
from mv_git.core.config import Config
from mv_git.relocation.models import RelocationSummary, TransferOutcome, TransferStatus
from mv_git.reporting.formatter import JSONFormatter, TextFormatter, get_formatter


def _extract_json(output: str) -> dict:
    return json.loads(output[output.index("{"):output.rindex("}") + 1])


class TestCli(unittest.TestCase):
    """Tests for the mv-git command."""

    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp())
        self.source = self.tmpdir / "source"
        self.dest = self.tmpdir / "dest"
        repo = self.source / "repoA"
        (repo / ".git").mkdir(parents=True)
        (repo / "file.txt").write_text("a")
        (self.source / "plainDir").mkdir()
        (self.source / "plainDir" / "notes.txt").write_text("notes")
        self.runner = CliRunner()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)
        logging.getLogger().handlers.clear()
        Config.reset()

    def _invoke(self, *args):
        return self.runner.invoke(cli, [str(a) for a in args])

    def test_move(self):
        result = self._invoke(self.source, self.dest)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.dest / "repoA" / "file.txt").exists())
        self.assertFalse((self.source / "repoA").exists())
        self.assertTrue((self.source / "plainDir").exists())
        self.assertIn("repoA: moved", result.output)

    def test_copy_short_flag(self):
        result = self._invoke(self.source, self.dest, "-c")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.source / "repoA").exists())
        self.assertTrue((self.dest / "repoA" / "file.txt").exists())

    def test_copy_long_flag(self):
        result = self._invoke(self.source, self.dest, "--copy")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.source / "repoA").exists())

    def test_dry_run(self):
        result = self._invoke(self.source, self.dest, "--dry-run")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertFalse(self.dest.exists())
        self.assertIn("DRY RUN", result.output)

    def test_json_output(self):
        result = self._invoke(self.source, self.dest, "--copy", "-f", "json")

        self.assertEqual(result.exit_code, 0, result.output)
        data = _extract_json(result.output)
        self.assertTrue(data["succeeded"])
        self.assertEqual(data["counts"]["relocated"], 1)
        self.assertTrue(data["copy_mode"])

    def test_missing_source(self):
        result = self._invoke(self.tmpdir / "missing", self.dest)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Error:", result.output)
        self.assertFalse(self.dest.exists())

    def test_source_is_file(self):
        file_path = self.tmpdir / "file.txt"
        file_path.write_text("x")

        result = self._invoke(file_path, self.dest)

        self.assertEqual(result.exit_code, 1)
        self.assertIn("not a directory", result.output)

    def test_missing_arguments(self):
        result = self._invoke(self.source)

        self.assertNotEqual(result.exit_code, 0)

    def test_partial_failure_exit_code(self):
        archive = self.source / "repoA" / "archive"

        result = self._invoke(self.source, archive)

        self.assertEqual(result.exit_code, 2)
        self.assertIn("FAILED", result.output)

    def test_config_file(self):
        config_path = self.tmpdir / "config.json"
        config_path.write_text(json.dumps({"transfer": {"copy_mode": True}}))

        result = self._invoke(self.source, self.dest, "--config", config_path)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.source / "repoA").exists())

    def test_dotenv_in_working_directory(self):
        """Test that a .env file in the working directory is honoured."""
        workdir = self.tmpdir / "work"
        workdir.mkdir()
        (workdir / ".env").write_text("MVGIT_COPY=true\n")
        previous_cwd = os.getcwd()

        with mock.patch.dict(os.environ):
            os.environ.pop("MVGIT_COPY", None)
            os.chdir(workdir)
            try:
                result = self._invoke(self.source, self.dest)
            finally:
                os.chdir(previous_cwd)

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue((self.source / "repoA").exists())
        self.assertTrue((self.dest / "repoA" / "file.txt").exists())

    def test_bad_config_file(self):
        result = self._invoke(self.source, self.dest, "--config", self.tmpdir / "nope.json")

        self.assertEqual(result.exit_code, 1)
        self.assertIn("Configuration file not found", result.output)
        self.assertTrue((self.source / "repoA").exists())

    def test_log_file(self):
        log_file = self.tmpdir / "logs" / "mv-git.log"

        result = self._invoke(self.source, self.dest, "--log-file", log_file, "-v")

        self.assertEqual(result.exit_code, 0, result.output)
        logging.shutdown()
        self.assertIn("Moved", log_file.read_text())

    def test_version(self):
        result = self._invoke("--version")

        self.assertEqual(result.exit_code, 0)
        self.assertIn("1.0.0", result.output)


class TestFormatters(unittest.TestCase):
    """Tests for summary formatting."""

    def setUp(self):
        self.summary = RelocationSummary(
            source=Path("/src"), destination=Path("/dst"), copy_mode=False
        )
        self.summary.add(TransferOutcome(
            name="repoA", source=Path("/src/repoA"), destination=Path("/dst/repoA"),
            status=TransferStatus.MOVED, method="copy+remove",
            files_copied=3, files_ignored=2, branch="main", commit_hash="0123456789abcdef",
        ))
        self.summary.add(TransferOutcome(
            name="plain", source=Path("/src/plain"), destination=None,
            status=TransferStatus.SKIPPED,
        ))
        self.summary.add(TransferOutcome(
            name="broken", source=Path("/src/broken"), destination=Path("/dst/broken"),
            status=TransferStatus.FAILED, error="permission denied",
        ))
        self.summary.finish()

    def test_text_format(self):
        text = TextFormatter().format(self.summary)

        self.assertIn("RELOCATION SUMMARY (move)", text)
        self.assertIn("repoA: moved (3 files, 2 ignored) [main @ 0123456789ab]", text)
        self.assertIn("plain: not a git repo", text)
        self.assertIn("broken: FAILED - permission denied", text)
        self.assertIn("Relocated: 1  Skipped: 1  Failed: 1", text)

    def test_text_format_hides_skipped(self):
        text = TextFormatter(show_skipped=False).format(self.summary)

        self.assertNotIn("plain:", text)

    def test_json_format(self):
        data = json.loads(JSONFormatter().format(self.summary))

        self.assertFalse(data["succeeded"])
        self.assertEqual(data["tool"], "mv-git")
        self.assertEqual(len(data["outcomes"]), 3)
        self.assertEqual(data["outcomes"][0]["files_ignored"], 2)
        self.assertEqual(data["outcomes"][2]["error"], "permission denied")

    def test_get_formatter(self):
        self.assertIsInstance(get_formatter("json"), JSONFormatter)
        self.assertIsInstance(get_formatter("text"), TextFormatter)


if __name__ == "__main__":
    unittest.main()

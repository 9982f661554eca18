from __future__ import annotations

import contextlib
import io
import json
import subprocess
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from branchborder.store import STATE_KEY
from branchborder.tools import doctor


def _git_ok(cmd, **kwargs):  # type: ignore[no-untyped-def]
    return subprocess.CompletedProcess(cmd, 0, stdout=b"main\n", stderr=b"")


class TestDoctorContract(unittest.TestCase):
    def _run(self, *argv: str) -> tuple[int, str]:
        out = io.StringIO()
        with patch("shutil.which", return_value="/usr/bin/git"), patch(
            "subprocess.run", side_effect=_git_ok
        ), contextlib.redirect_stdout(out):
            rc = doctor.main(list(argv))
        return rc, out.getvalue()

    def test_healthy_environment(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tmp = Path(td)
            (tmp / "ext" / "be5invis.vscode-custom-css-7.4.2").mkdir(parents=True)
            settings = tmp / "settings.json"
            settings.write_text("{}", encoding="utf-8")
            rc, out = self._run(
                "--workspace", td,
                "--settings-file", str(settings),
                "--state-file", str(tmp / "state.json"),
                "--extensions-dir", str(tmp / "ext"),
            )
        self.assertEqual(rc, 0, out)
        self.assertIn("RESULT: OK", out)

    def test_broken_settings_is_an_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tmp = Path(td)
            settings = tmp / "settings.json"
            settings.write_text("{ // jsonc\n}", encoding="utf-8")
            rc, out = self._run("--workspace", td, "--settings-file", str(settings), "--extensions-dir", str(tmp))
        self.assertEqual(rc, 2)
        self.assertIn("not valid JSON", out)

    def test_warnings_fail_only_in_strict_mode(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            tmp = Path(td)
            state = tmp / "state.json"
            state.write_text(json.dumps({STATE_KEY: ["bad"]}), encoding="utf-8")
            args = ["--workspace", td, "--settings-file", str(tmp / "none.json"), "--state-file", str(state), "--extensions-dir", str(tmp)]
            rc, out = self._run(*args)
            self.assertEqual(rc, 1)
            self.assertIn("will be reset", out)
            rc, _ = self._run(*args, "--strict")
            self.assertEqual(rc, 2)


if __name__ == "__main__":
    unittest.main(verbosity=2)

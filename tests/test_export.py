"""Tests for PDF export; the browser process is replaced by a fake."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

import texmark.export as export
from texmark.errors import ExportError
from texmark.export import BROWSER_ENV_VAR, browser_command, find_browser, print_pdf


class FakeBrowser:
    """Stand-in for subprocess.run that records calls and fakes output."""

    def __init__(self, returncode: int = 0, write_output: bool = True) -> None:
        self.returncode = returncode
        self.write_output = write_output
        self.commands: list[list[str]] = []
        self.html_seen: list[str] = []

    def __call__(self, command: list[str], **kwargs: object) -> subprocess.CompletedProcess[str]:
        self.commands.append(command)
        html_path = Path(command[-1].removeprefix("file://"))
        self.html_seen.append(html_path.read_text(encoding="utf-8"))
        if self.write_output:
            pdf = next(arg for arg in command if arg.startswith("--print-to-pdf="))
            Path(pdf.split("=", 1)[1]).write_bytes(b"%PDF-1.4")
        return subprocess.CompletedProcess(command, self.returncode, "", "boom")


class TestFindBrowser:
    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        chrome = tmp_path / "chrome"
        chrome.write_text("")
        monkeypatch.setenv(BROWSER_ENV_VAR, str(chrome))
        assert find_browser() == chrome

    def test_path_search(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(BROWSER_ENV_VAR, raising=False)
        monkeypatch.setattr(export.shutil, "which", lambda name: "/usr/bin/chromium" if name == "chromium" else None)
        assert find_browser() == Path("/usr/bin/chromium")

    def test_nothing_found(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(BROWSER_ENV_VAR, raising=False)
        monkeypatch.setattr(export.shutil, "which", lambda name: None)
        assert find_browser() is None


class TestPrintPdf:
    def test_command_shape(self, tmp_path: Path) -> None:
        command = browser_command(Path("/bin/chrome"), tmp_path / "doc.html", tmp_path / "doc.pdf")
        assert command[0] == "/bin/chrome"
        assert "--headless" in command
        assert f"--print-to-pdf={tmp_path / 'doc.pdf'}" in command
        assert command[-1].startswith("file://")

    def test_success(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        fake = FakeBrowser()
        monkeypatch.setattr(export.subprocess, "run", fake)
        written = print_pdf("<html>hi</html>", tmp_path / "out.pdf", browser=tmp_path / "chrome")
        assert written == (tmp_path / "out.pdf").resolve()
        assert written.read_bytes() == b"%PDF-1.4"
        assert fake.html_seen == ["<html>hi</html>"]
        assert not (tmp_path / "out.html").exists()

    def test_no_browser(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(export, "find_browser", lambda: None)
        with pytest.raises(ExportError, match=BROWSER_ENV_VAR):
            print_pdf("<html></html>", tmp_path / "out.pdf")

    def test_browser_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(export.subprocess, "run", FakeBrowser(returncode=3, write_output=False))
        with pytest.raises(ExportError) as excinfo:
            print_pdf("<html></html>", tmp_path / "out.pdf", browser="chrome")
        assert excinfo.value.returncode == 3
        assert not (tmp_path / "out.html").exists()

    def test_missing_output(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(export.subprocess, "run", FakeBrowser(write_output=False))
        with pytest.raises(ExportError, match="not written"):
            print_pdf("<html></html>", tmp_path / "out.pdf", browser="chrome")

    def test_timeout(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def hang(command: list[str], **kwargs: object) -> None:
            raise subprocess.TimeoutExpired(command, 1.0)

        monkeypatch.setattr(export.subprocess, "run", hang)
        with pytest.raises(ExportError, match="timed out"):
            print_pdf("<html></html>", tmp_path / "out.pdf", browser="chrome", timeout=1.0)
        assert not (tmp_path / "out.html").exists()

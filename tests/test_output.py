"""Tests for the output formatter."""

import json

from docsupload.output import OutputFormatter


class TestOutputFormatter:
    """Tests for OutputFormatter modes."""

    def test_normal_mode_prints(self, capsys):
        out = OutputFormatter()

        out.info("hello")
        out.success("done")

        captured = capsys.readouterr().out
        assert "hello" in captured
        assert "done" in captured

    def test_quiet_mode_keeps_warnings(self, capsys):
        out = OutputFormatter(quiet=True)

        out.info("hello")
        out.warning("careful")

        captured = capsys.readouterr().out
        assert "hello" not in captured
        assert "careful" in captured

    def test_json_mode_sends_warnings_to_stderr(self, capsys):
        out = OutputFormatter(json_output=True)

        out.progress_message("[1/1] file")
        out.warning("careful")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "careful" in captured.err

    def test_errors_go_to_stderr(self, capsys):
        OutputFormatter().error("boom")

        assert "boom" in capsys.readouterr().err

    def test_summary_as_json(self, capsys):
        out = OutputFormatter(json_output=True)

        out.print_summary("Upload Complete", [("Skipped", "2 files")])

        assert json.loads(capsys.readouterr().out) == {"Skipped": "2 files"}

    def test_summary_table(self, capsys):
        OutputFormatter().print_summary("Upload Complete", [("Skipped", "2 files")])

        captured = capsys.readouterr().out
        assert "Upload Complete" in captured
        assert "2 files" in captured

    def test_summary_silent_when_quiet(self, capsys):
        OutputFormatter(quiet=True).print_summary("Title", [("a", "b")])

        assert capsys.readouterr().out == ""

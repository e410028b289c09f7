"""End-to-end tests for the task commands against a temporary task file."""

from __future__ import annotations

import csv
import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from timed_cli.adapters.csv_codec import HEADER
from timed_cli.main import app
from timed_cli.utils.exit_codes import (
    ERROR_CONFLICT,
    ERROR_FILE,
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
)

runner = CliRunner()


def _rows(path) -> list[list[str]]:
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


@pytest.fixture()
def run(tasks_file):
    """Invoke a command with --file pointing at the temporary task file."""

    def _run(*args: str, input: str | None = None):
        return runner.invoke(app, [*args, "--file", str(tasks_file)], input=input)

    return _run


# ---------------------------------------------------------------------------
# start / stop
# ---------------------------------------------------------------------------


class TestStartStop:
    def test_start_creates_file(self, run, tasks_file):
        result = run("start", "Write report", "--tags", "work,deep")

        assert result.exit_code == 0, result.output
        assert "Started task: Write report" in result.output
        rows = _rows(tasks_file)
        assert rows[0] == HEADER
        assert rows[1][0] == "1"
        assert rows[1][1] == "Write report"
        assert rows[1][3] == ""
        assert rows[1][5] == "work,deep"

    def test_start_twice_conflicts(self, run, tasks_file):
        run("start", "first")

        result = run("start", "second")

        assert result.exit_code == ERROR_CONFLICT
        assert "Task already active" in result.output
        assert len(_rows(tasks_file)) == 2

    def test_start_blank_name(self, run):
        result = run("start", "   ")
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_stop_records_energy_and_comment(self, run, tasks_file):
        run("start", "Reading")

        result = run("stop", input="7\ngreat session\n")

        assert result.exit_code == 0, result.output
        assert "Stopped task: Reading" in result.output
        row = _rows(tasks_file)[1]
        assert row[3] != ""
        assert row[6] == "7"
        assert row[7] == "great session"

    def test_stop_reasks_out_of_range_energy(self, run, tasks_file):
        run("start", "Reading")

        result = run("stop", input="11\n4\n\n")

        assert result.exit_code == 0, result.output
        assert "between 1 and 10" in result.output
        row = _rows(tasks_file)[1]
        assert row[6] == "4"
        assert row[7] == ""

    def test_stop_without_active_task(self, run):
        result = run("stop")

        assert result.exit_code == ERROR_NOT_FOUND
        assert "No active tasks" in result.output

    def test_stop_twice(self, run):
        run("start", "Reading")
        run("stop", input="5\n\n")

        assert run("stop").exit_code == ERROR_NOT_FOUND

    def test_stop_cancelled_keeps_task_active(self, run, tasks_file):
        run("start", "Reading")

        result = run("stop", input="")

        assert result.exit_code == ERROR_GENERAL
        assert "Cancelled" in result.output
        assert _rows(tasks_file)[1][3] == ""


# ---------------------------------------------------------------------------
# add
# ---------------------------------------------------------------------------


class TestAdd:
    def test_add_from_menu(self, run, tasks_file):
        result = run("add", input="2\n")

        assert result.exit_code == 0, result.output
        assert "1: Meetings" in result.output
        assert "8: Other" in result.output
        assert "Started task: Reading" in result.output
        assert _rows(tasks_file)[1][1] == "Reading"

    @pytest.mark.parametrize("answer", ["0", "99", "reading"])
    def test_add_invalid_selection(self, run, tasks_file, answer):
        result = run("add", input=f"{answer}\n")

        assert result.exit_code == ERROR_INVALID_ARGS
        assert _rows(tasks_file) == [HEADER]

    def test_add_while_active_does_not_prompt(self, run):
        run("start", "Reading")

        result = run("add", input="2\n")

        assert result.exit_code == ERROR_CONFLICT
        assert "Select a task" not in result.output

    def test_add_manual(self, run, tasks_file):
        result = run(
            "add",
            "--type",
            "manual",
            "--tags",
            "notes",
            input="3\n2024-02-28\n45\n6\nwrote notes\n",
        )

        assert result.exit_code == 0, result.output
        assert "Logged task: Journaling on 2024-02-28 (45 minutes)" in result.output
        row = _rows(tasks_file)[1]
        assert row[1] == "Journaling"
        assert row[2].startswith("2024-02-28 00:00:00")
        assert row[3].startswith("2024-02-28 00:45:00")
        assert row[4] == "2700"
        assert row[5] == "notes"
        assert row[6] == "6"
        assert row[7] == "wrote notes"

    def test_add_manual_bad_date(self, run, tasks_file):
        result = run("add", "-t", "manual", input="3\n28.02.2024\n")

        assert result.exit_code == ERROR_INVALID_ARGS
        assert _rows(tasks_file) == [HEADER]

    def test_add_manual_duration_out_of_range(self, run):
        result = run("add", "-t", "manual", input="3\n2024-02-28\n2000\n5\n\n")
        assert result.exit_code == ERROR_INVALID_ARGS

    def test_add_manual_early_year_reloads(self, run, tasks_file):
        result = run("add", "-t", "manual", input="2\n0999-06-01\n30\n5\n\n")
        assert result.exit_code == 0, result.output
        assert "Logged task: Reading on 0999-06-01" in result.output
        assert _rows(tasks_file)[1][2].startswith("0999-06-01 00:00:00")

        listed = run("ls")

        assert listed.exit_code == 0, listed.output
        assert "Start: 0999-06-01 00:00" in listed.output

    def test_add_unknown_type(self, run):
        result = run("add", "--type", "later")

        assert result.exit_code == ERROR_INVALID_ARGS
        assert "Unknown entry type" in result.output


# ---------------------------------------------------------------------------
# status / ls / rm
# ---------------------------------------------------------------------------


class TestQueries:
    def test_status_shows_active_task(self, run):
        run("start", "Reading", "--tags", "books")

        result = run("status")

        assert result.exit_code == 0, result.output
        assert "Task: Reading" in result.output
        assert "End: In Progress..." in result.output
        assert "Tags: books" in result.output

    def test_status_without_active_task(self, run):
        result = run("status")
        assert result.exit_code == ERROR_NOT_FOUND
        assert "No active tasks" in result.output

    def test_ls_empty(self, run, tasks_file):
        result = run("ls")

        assert result.exit_code == 0, result.output
        assert result.output.strip() == ""
        assert _rows(tasks_file) == [HEADER]

    def test_ls_pretty_in_creation_order(self, run):
        run("start", "first")
        run("stop", input="5\n\n")
        run("start", "second")

        result = run("ls")

        assert result.exit_code == 0, result.output
        assert result.output.index("Task: first") < result.output.index("Task: second")
        assert result.output.count("Life Energy:") == 2

    def test_ls_json(self, run):
        run("start", "Reading", "--tags", "a,b")

        result = run("ls", "--json")

        assert result.exit_code == 0, result.output
        (item,) = json.loads(result.output)
        assert item["id"] == 1
        assert item["name"] == "Reading"
        assert item["end"] is None
        assert item["tags"] == ["a", "b"]

    def test_ls_table_empty(self, run):
        result = run("ls", "-o", "table")
        assert "No tasks recorded" in result.output

    def test_ls_unknown_format(self, run):
        assert run("ls", "-o", "xml").exit_code == ERROR_INVALID_ARGS

    def test_ls_uses_configured_format(self, run):
        runner.invoke(app, ["config", "set", "output.format", "json"])
        run("start", "Reading")

        result = run("ls")

        assert json.loads(result.output)[0]["name"] == "Reading"

    def test_rm(self, run, tasks_file):
        run("start", "first")
        run("stop", input="5\n\n")
        run("start", "second")

        result = run("rm", "1")

        assert result.exit_code == 0, result.output
        assert "Removed task 1: first" in result.output
        rows = _rows(tasks_file)
        assert [row[:2] for row in rows[1:]] == [["2", "second"]]

    def test_rm_unknown_id(self, run):
        result = run("rm", "42")

        assert result.exit_code == ERROR_NOT_FOUND
        assert "No task with id 42" in result.output

    def test_rm_non_numeric_id(self, run):
        assert run("rm", "abc").exit_code == 2


# ---------------------------------------------------------------------------
# Task file handling
# ---------------------------------------------------------------------------


class TestTaskFile:
    def test_corrupt_file_is_not_rewritten(self, run, tasks_file):
        content = "id,name\n1,Reading,not-a-time,,0,,,\n"
        tasks_file.write_text(content, encoding="utf-8")

        result = run("ls")

        assert result.exit_code == ERROR_FILE
        assert "line 2: malformed timestamp" in " ".join(result.output.split())
        assert tasks_file.read_text(encoding="utf-8") == content

    def test_non_utf8_file_is_not_rewritten(self, run, tasks_file):
        content = b"id,name\n\xff\xfe\n"
        tasks_file.write_bytes(content)

        result = run("ls")

        assert result.exit_code == ERROR_FILE
        assert "not valid UTF-8" in " ".join(result.output.split())
        assert tasks_file.read_bytes() == content

    def test_unreadable_file_is_not_overwritten(self, run, tasks_file):
        run("start", "Reading")
        run("stop", input="6\n\n")
        content = tasks_file.read_bytes()

        with patch(
            "timed_cli.adapters.csv_codec.open",
            side_effect=PermissionError("denied"),
            create=True,
        ):
            result = run("start", "Anki")

        assert result.exit_code == 0, result.output
        assert "changes were not saved" in " ".join(result.output.split())
        assert tasks_file.read_bytes() == content

    def test_environment_variable_selects_file(self, tmp_path, monkeypatch):
        path = tmp_path / "env_tasks.csv"
        monkeypatch.setenv("TIMED_TASKS", str(path))

        result = runner.invoke(app, ["start", "Reading"])

        assert result.exit_code == 0, result.output
        assert _rows(path)[1][1] == "Reading"

    def test_configured_file_is_default(self, config_dir):
        result = runner.invoke(app, ["start", "Reading"])

        assert result.exit_code == 0, result.output
        assert (config_dir / "timed_tasks.csv").exists()

    def test_ids_continue_across_invocations(self, run, tasks_file):
        run("start", "first")
        run("stop", input="5\n\n")
        run("start", "second")
        run("stop", input="5\n\n")
        run("rm", "1")
        run("start", "third")

        ids = [row[0] for row in _rows(tasks_file)[1:]]
        assert ids == ["2", "3"]

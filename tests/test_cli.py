"""Tests for the tagmap CLI."""

import json

import pytest
from click.testing import CliRunner

from tagmap.cli import main

PERSON = "tests.fixtures.targets:Person"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def person_document(tmp_path):
    """Write a JSON document with default and alternate layouts."""
    path = tmp_path / "person.json"
    path.write_text(
        json.dumps(
            {
                "name": "Ada",
                "fullName": "Augusta Ada King",
                "address": {"city": "Berlin", "town": "Mitte"},
                "location": {"city": "Hamburg", "town": "Altona"},
            }
        )
    )
    return path


class TestMapCommand:
    """Tests for the map command."""

    def test_map_default_namespace(self, runner, person_document):
        result = runner.invoke(main, ["map", str(person_document), PERSON])

        assert result.exit_code == 0, result.output
        record = json.loads(result.stdout)
        assert record["name"] == "Ada"
        assert record["address"]["city"] == "Berlin"
        assert "billing" not in record

    def test_map_include_nulls(self, runner, person_document):
        result = runner.invoke(main, ["map", str(person_document), PERSON, "--include-nulls"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)["billing"] is None

    def test_map_alternate_namespace(self, runner, person_document):
        result = runner.invoke(
            main, ["map", str(person_document), PERSON, "--namespace", "Alt", "--propagate"]
        )

        assert result.exit_code == 0
        record = json.loads(result.stdout)
        assert record["name"] == "Augusta Ada King"
        assert record["address"]["city"] == "Altona"

    def test_map_compact(self, runner, person_document):
        result = runner.invoke(main, ["map", str(person_document), PERSON, "--compact"])

        assert result.exit_code == 0
        assert result.stdout.count("\n") == 1

    def test_map_timestamps_and_faults(self, runner, tmp_path):
        path = tmp_path / "times.json"
        path.write_text('{"at": "2003-01-02 04:05:06", "maybe": "never"}')

        result = runner.invoke(main, ["map", str(path), "tests.fixtures.targets:Times"])

        assert result.exit_code == 0
        assert "Warning" in result.stderr
        record = json.loads(result.stdout)
        assert record["at"] == "2003-01-02T04:05:06Z"
        assert "maybe" not in record

    def test_invalid_document(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text('{"name": ')

        result = runner.invoke(main, ["map", str(path), PERSON])

        assert result.exit_code == 1
        assert "Error parsing document" in result.output

    def test_bad_target_reference(self, runner, person_document):
        result = runner.invoke(main, ["map", str(person_document), "no_colon_here"])
        assert result.exit_code == 1
        assert "expected module:ClassName" in result.output

    def test_target_not_a_dataclass(self, runner, person_document):
        result = runner.invoke(main, ["map", str(person_document), "json:dumps"])
        assert result.exit_code == 1
        assert "not a dataclass" in result.output

    def test_unknown_zone(self, runner, person_document):
        result = runner.invoke(main, ["map", str(person_document), PERSON, "--tz", "Not/AZone"])
        assert result.exit_code == 1
        assert "--tz" in result.output

    def test_unimportable_module(self, runner, person_document):
        result = runner.invoke(main, ["map", str(person_document), "no_such_module_xyz:Thing"])
        assert result.exit_code == 1
        assert "cannot import" in result.output

    def test_paths_bad_target(self, runner):
        result = runner.invoke(main, ["paths", "json:dumps"])
        assert result.exit_code == 1


class TestDateCommand:
    """Tests for the date command."""

    def test_parse(self, runner):
        result = runner.invoke(main, ["date", "01/02/2003 04:05:06"])
        assert result.exit_code == 0
        assert result.output.strip() == "2003-01-02T04:05:06Z"

    def test_failure(self, runner):
        result = runner.invoke(main, ["date", "99/99/9999"])
        assert result.exit_code == 1
        assert "Error parsing timestamp" in result.output
        assert "99/99/9999" in result.output


class TestPathsCommand:
    """Tests for the paths command."""

    def test_default_paths(self, runner):
        result = runner.invoke(main, ["paths", PERSON])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert "name\tname\tscalar" in lines
        assert "address.city\taddress.city\tscalar" in lines
        assert "billing\tbilling\toptional_composite" in lines

    def test_alternate_without_propagation(self, runner):
        result = runner.invoke(main, ["paths", PERSON, "--namespace", "Alt"])
        assert "address.city\tlocation.city\tscalar" in result.output.splitlines()

    def test_alternate_with_propagation(self, runner):
        result = runner.invoke(main, ["paths", PERSON, "--namespace", "Alt", "--propagate"])
        assert "address.city\tlocation.town\tscalar" in result.output.splitlines()

    def test_self_reference_terminates(self, runner):
        result = runner.invoke(main, ["paths", "tests.fixtures.targets:Node"])
        assert result.exit_code == 0
        assert "next\tnext\toptional_composite" in result.output.splitlines()


class TestVersion:
    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

"""Tests for the command line and its settings."""

import json

from click.testing import CliRunner

from snippetgen.__main__ import main
from snippetgen.config import Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.languages == ["javascript"]
        assert settings.normalize is False
        assert settings.indent == 2

    def test_from_env(self):
        settings = Settings.from_env({
            "SNIPGEN_LANGUAGES": "shell, node_fetch,",
            "SNIPGEN_NORMALIZE": "Yes",
            "SNIPGEN_INDENT": "4",
        })
        assert settings.languages == ["shell", "node_fetch"]
        assert settings.normalize is True
        assert settings.indent == 4

    def test_command_line_wins(self):
        settings = Settings.from_env({"SNIPGEN_LANGUAGES": "shell"}).merged(("python",), True)
        assert settings.languages == ["python"]
        assert settings.normalize is True

    def test_empty_command_line_keeps_env(self):
        settings = Settings.from_env({"SNIPGEN_LANGUAGES": "shell"}).merged((), None)
        assert settings.languages == ["shell"]


class TestCliTargets:
    def test_lists_defaults(self):
        result = CliRunner().invoke(main, ["targets"])
        assert result.exit_code == 0
        assert "javascript (JavaScript): xhr*, fetch, axios, jquery" in result.output
        assert "shell (Shell): curl*, httpie, wget" in result.output


class TestCliHar:
    def test_single_operation(self, users_yaml):
        result = CliRunner().invoke(main, ["har", str(users_yaml), "--path", "/api/users", "--method", "post"])
        assert result.exit_code == 0, result.output
        hars = json.loads(result.output)
        assert hars[0]["headers"][0]["value"] == "Bearer REPLACE_BEARER_TOKEN"

    def test_path(self, users_yaml):
        result = CliRunner().invoke(main, ["har", str(users_yaml), "--path", "/api/users/{id}"])
        assert [a["method"] for a in json.loads(result.output)] == ["PATCH", "GET"]

    def test_all(self, users_json):
        result = CliRunner().invoke(main, ["har", str(users_json)])
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 4

    def test_method_requires_path(self, users_yaml):
        result = CliRunner().invoke(main, ["har", str(users_yaml), "--method", "get"])
        assert result.exit_code == 2

    def test_unknown_path_is_reported(self, users_yaml):
        result = CliRunner().invoke(main, ["har", str(users_yaml), "--path", "/nope"])
        assert result.exit_code == 1
        assert "The path /nope is not available" in result.output


class TestCliSnippets:
    def test_endpoint(self, users_yaml):
        result = CliRunner().invoke(
            main, ["endpoint", str(users_yaml), "/api/users/{id}", "get", "-l", "shell", "-l", "node_fetch"],
        )
        assert result.exit_code == 0, result.output
        endpoint = json.loads(result.output)
        assert endpoint["resource"] == "users"
        assert [s["title"] for s in endpoint["snippets"]] == ["Shell + cURL", "Node.js + Fetch"]

    def test_endpoint_normalize(self, users_yaml):
        result = CliRunner().invoke(
            main, ["endpoint", str(users_yaml), "/api/users/{id}", "get", "-l", "shell", "--normalize"],
        )
        content = json.loads(result.output)["snippets"][0]["content"]
        assert "/api/users/{id}" in content

    def test_snippets_sorted(self, users_yaml):
        result = CliRunner().invoke(main, ["snippets", str(users_yaml)])
        assert result.exit_code == 0, result.output
        results = json.loads(result.output)
        assert [(r["resource"], r["method"]) for r in results][:2] == [("login", "POST"), ("users", "GET")]

    def test_languages_from_env(self, users_yaml):
        result = CliRunner().invoke(main, ["snippets", str(users_yaml)], env={"SNIPGEN_LANGUAGES": "http"})
        titles = {s["title"] for r in json.loads(result.output) for s in r["snippets"]}
        assert titles == {"HTTP + HTTP/1.1"}

    def test_invalid_language(self, users_yaml):
        result = CliRunner().invoke(main, ["snippets", str(users_yaml), "-l", "klingon"])
        assert result.exit_code == 1
        assert "The language klingon is not available" in result.output

    def test_unparseable_document(self, tmp_path):
        doc = tmp_path / "broken.json"
        doc.write_text("{not json", encoding="utf-8")
        result = CliRunner().invoke(main, ["snippets", str(doc)])
        assert result.exit_code == 1
        assert "Cannot parse" in result.output

    def test_yaml_dates(self, tmp_path):
        """Unquoted date examples end up in the snippet as written."""
        doc = tmp_path / "events.yaml"
        doc.write_text(
            "openapi: 3.0.0\n"
            "servers:\n"
            "  - url: http://events.example.com\n"
            "paths:\n"
            "  /events:\n"
            "    post:\n"
            "      parameters:\n"
            "        - name: day\n"
            "          in: query\n"
            "          example: 2020-01-01\n"
            "      requestBody:\n"
            "        content:\n"
            "          application/json:\n"
            "            schema:\n"
            "              type: object\n"
            "              properties:\n"
            "                starts:\n"
            "                  type: string\n"
            "                  example: 2020-01-01\n",
            encoding="utf-8",
        )
        result = CliRunner().invoke(main, ["snippets", str(doc), "-l", "shell"])
        assert result.exit_code == 0, result.output
        content = json.loads(result.output)[0]["snippets"][0]["content"]
        assert "day=2020-01-01" in content
        assert '"starts":"2020-01-01"' in content

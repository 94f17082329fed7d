"""
Tests for the templater command line interface
"""

import json

import pytest
from click.testing import CliRunner

from templater import __version__
from templater.cli.commands.helpers import (
    incremental_name,
    parse_dependencies,
    parse_list,
    validate_extension,
    validate_template_filename,
    write_file_with_incremental_name,
    write_output_file,
)
from templater.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, templates_dir):
    """Invoke the CLI against the test templates directory."""
    def _invoke(*args):
        return runner.invoke(cli, ["--templates-dir", str(templates_dir), *args])
    return _invoke


class TestGroup:
    """Test the top level command group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert f"TEMPLATER CLI v{__version__}" in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ("insert", "generate", "add-template", "list", "show-dir"):
            assert command in result.output

    def test_invalid_log_level(self, runner):
        result = runner.invoke(cli, ["--log-level", "LOUD", "list"])
        assert result.exit_code == 2


class TestShowDir:
    def test_prints_resolved_directory(self, invoke, templates_dir):
        result = invoke("show-dir")
        assert result.exit_code == 0
        assert result.output.strip() == str(templates_dir.resolve())

    def test_templates_dir_from_environment(self, runner, templates_dir):
        result = runner.invoke(cli, ["show-dir"], env={"TEMPLATER_TEMPLATES_DIR": str(templates_dir)})
        assert result.output.strip() == str(templates_dir.resolve())


class TestList:
    """Test listing the templates store."""

    def test_lists_templates(self, invoke):
        result = invoke("list")

        assert result.exit_code == 0
        assert "api (API service)" in result.output
        assert "Service functions for an entity" in result.output
        assert "Extensions: ts, types: ts" in result.output
        assert "Validators: zod" in result.output
        assert "plain" in result.output
        assert "Validators: none" in result.output

    def test_empty_store(self, runner, tmp_path):
        result = runner.invoke(cli, ["--templates-dir", str(tmp_path), "list"])
        assert result.exit_code == 0
        assert "No templates found" in result.output


class TestInsert:
    """Test generating files from a template."""

    def test_separate_types(self, invoke, tmp_path):
        src, types = tmp_path / "out" / "src", tmp_path / "out" / "types"

        result = invoke(
            "insert", "-e", "blog post", "-t", "api", "-v", "zod",
            "--keep-comments", "--separate-types", "--make-dirs",
            "--entity-dir", str(src), "--types-dir", str(types),
        )

        assert result.exit_code == 0, result.output
        assert "Boilerplate setup complete!" in result.output
        main = (src / "blog_post.ts").read_text(encoding="utf-8")
        assert main.startswith("import { z } from 'zod';")
        assert "export function createBlogPost(input) {" in main
        types_text = (types / "blog_post.ts").read_text(encoding="utf-8")
        assert types_text.startswith("const blogPostSchema = z.object({")

    def test_prints_dependencies(self, invoke, tmp_path):
        result = invoke(
            "insert", "-e", "user", "-t", "api", "-v", "zod",
            "--remove-comments", "--inline-types", "--entity-dir", str(tmp_path),
        )

        assert result.exit_code == 0, result.output
        assert '"nanoid": "^5.0.0"' in result.output
        assert '"zod": "^3.23.8"' in result.output

    def test_types_suffix_in_shared_directory(self, invoke, tmp_path):
        result = invoke(
            "insert", "-e", "user", "-t", "api", "-v", "none",
            "--remove-comments", "--separate-types",
            "--entity-dir", str(tmp_path), "--types-dir", str(tmp_path), "--types-suffix", ".types",
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "user.ts").exists()
        assert (tmp_path / "user.types.ts").read_text(encoding="utf-8") == "export type User = { id: string };\n"

    def test_empty_types_suffix_in_shared_directory(self, invoke, tmp_path):
        result = invoke(
            "insert", "-e", "user", "-t", "api", "-v", "none",
            "--remove-comments", "--separate-types",
            "--entity-dir", str(tmp_path), "--types-dir", str(tmp_path), "--types-suffix", " ",
        )

        assert result.exit_code == 1
        assert "[ERROR E004]" in result.output

    def test_generate_alias_and_print(self, invoke, tmp_path):
        result = invoke(
            "generate", "-e", "user profile", "-t", "plain", "-v", "none",
            "--keep-comments", "--entity-dir", str(tmp_path), "--print",
        )

        assert result.exit_code == 0, result.output
        assert (tmp_path / "user_profile.ts").read_text(encoding="utf-8") == \
            "export const userProfileId = 'UserProfile';"
        assert "MAIN FILE CONTENT" in result.output

    def test_dry_run_writes_nothing(self, invoke, tmp_path):
        result = invoke(
            "insert", "-e", "user", "-t", "plain", "-v", "none",
            "--keep-comments", "--entity-dir", str(tmp_path / "src"), "--dry-run",
        )

        assert result.exit_code == 0, result.output
        assert "Would create main file" in result.output
        assert "export const userId = 'User';" in result.output
        assert not (tmp_path / "src").exists()

    def test_overwrite_existing_file(self, invoke, tmp_path):
        target = tmp_path / "user.ts"
        target.write_text("old", encoding="utf-8")

        result = invoke(
            "insert", "-e", "user", "-t", "plain", "-v", "none",
            "--keep-comments", "--entity-dir", str(tmp_path), "--overwrite",
        )

        assert result.exit_code == 0, result.output
        assert target.read_text(encoding="utf-8") == "export const userId = 'User';"

    def test_append_to_existing_file(self, invoke, tmp_path):
        target = tmp_path / "user.ts"
        target.write_text("old", encoding="utf-8")

        result = invoke(
            "insert", "-e", "user", "-t", "plain", "-v", "none",
            "--keep-comments", "--entity-dir", str(tmp_path), "--append",
        )

        assert result.exit_code == 0, result.output
        assert target.read_text(encoding="utf-8") == "old\nexport const userId = 'User';"

    def test_invalid_entity(self, invoke, tmp_path):
        result = invoke("insert", "-e", "1user", "-t", "plain", "--entity-dir", str(tmp_path))
        assert result.exit_code == 1
        assert "[ERROR E001]" in result.output
        assert "must not start with a number" in result.output

    def test_unknown_template(self, invoke, tmp_path):
        result = invoke("insert", "-e", "user", "-t", "missing", "--entity-dir", str(tmp_path))
        assert result.exit_code == 1
        assert "[ERROR N001]" in result.output

    def test_unsupported_validator(self, invoke, tmp_path):
        result = invoke("insert", "-e", "user", "-t", "plain", "-v", "yup", "--entity-dir", str(tmp_path))
        assert result.exit_code == 1
        assert "[ERROR E003]" in result.output

    def test_no_templates(self, runner, tmp_path):
        result = runner.invoke(cli, ["--templates-dir", str(tmp_path), "insert", "-e", "user"])
        assert result.exit_code == 1
        assert "[ERROR E002]" in result.output

    def test_missing_required_validator_placeholder(self, invoke, templates_dir, tmp_path):
        (templates_dir / "plain" / "validators").mkdir()
        (templates_dir / "plain" / "validators" / "default.config.json").write_text(json.dumps({
            "name": "default",
            "placeholders": {"header": {"value": "// generated", "required": True}},
        }), encoding="utf-8")

        result = invoke(
            "insert", "-e", "user", "-t", "plain", "-v", "none",
            "--keep-comments", "--entity-dir", str(tmp_path),
        )

        assert result.exit_code == 1
        assert "[ERROR V001]" in result.output
        assert not (tmp_path / "user.ts").exists()


class TestAddTemplate:
    """Test scaffolding new templates."""

    def test_creates_template_from_options(self, invoke, templates_dir):
        result = invoke(
            "add-template",
            "--name", "Express router",
            "--filename", "express",
            "--description", "",
            "--output-extension", ".ts",
            "--types-file-output-extension", "d.ts",
            "--required", "entity, Entity",
            "--optional", "imports, entity",
            "--validators", "zod",
            "--dependencies", "express@^4.19.0, broken",
            "--dev-dependencies", "@types/express@^4.17.21",
        )

        assert result.exit_code == 0, result.output
        assert "Template created successfully!" in result.output

        template_dir = templates_dir / "express"
        config = json.loads((template_dir / "express.config.json").read_text(encoding="utf-8"))
        assert config["name"] == "Express router"
        assert "description" not in config
        assert config["outputExtension"] == "ts"
        assert config["typesFileOutputExtension"] == "d.ts"
        assert config["validatorSupport"] == ["zod"]
        assert config["placeholders"] == {
            "entity": {"description": "", "required": True},
            "Entity": {"description": "", "required": True},
            "imports": {"description": "", "required": False},
        }
        assert config["dependencies"] == {"express": "^4.19.0"}
        assert config["devDependencies"] == {"@types/express": "^4.17.21"}

        template = (template_dir / "express.tpl").read_text(encoding="utf-8")
        assert "// - {{entity}}" in template
        assert "// - {{imports}}" in template
        assert "{{types}}" in template
        assert (template_dir / "express.types.tpl").exists()

        validator = json.loads((template_dir / "validators" / "zod.config.json").read_text(encoding="utf-8"))
        assert validator["name"] == "zod"

    def test_new_template_is_usable(self, invoke, tmp_path):
        invoke(
            "add-template", "--name", "Notes", "--filename", "notes", "--description", "Notes",
            "--output-extension", "js", "--types-file-output-extension", "",
            "--required", "entities", "--optional", "", "--validators", "",
            "--dependencies", "", "--dev-dependencies", "",
        )

        result = invoke(
            "insert", "-e", "note", "-t", "notes", "-v", "none",
            "--keep-comments", "--entity-dir", str(tmp_path),
        )

        assert result.exit_code == 0, result.output
        assert "// - notes" in (tmp_path / "note.js").read_text(encoding="utf-8")

    def test_force_replaces_existing(self, invoke, templates_dir):
        result = invoke(
            "add-template", "--name", "Plain", "--filename", "plain", "--description", "",
            "--output-extension", "py", "--types-file-output-extension", "",
            "--required", "", "--optional", "", "--validators", "",
            "--dependencies", "", "--dev-dependencies", "", "--force",
        )

        assert result.exit_code == 0, result.output
        config = json.loads((templates_dir / "plain" / "plain.config.json").read_text(encoding="utf-8"))
        assert config["outputExtension"] == "py"

    def test_invalid_options_rejected_before_prompting(self, invoke, templates_dir):
        result = invoke("add-template", "--filename", "bad name", "--output-extension", "t s")

        assert result.exit_code == 1
        assert "[ERROR E006]" in result.output
        assert "1- The filename must only contain" in result.output
        assert "2- Output extension must only contain" in result.output
        assert not (templates_dir / "bad name").exists()

    def test_invalid_validator_name(self, invoke, templates_dir):
        result = invoke(
            "add-template", "--name", "X", "--filename", "x", "--description", "",
            "--output-extension", "ts", "--types-file-output-extension", "",
            "--required", "", "--optional", "", "--validators", "zod, y up",
            "--dependencies", "", "--dev-dependencies", "",
        )

        assert result.exit_code == 1
        assert "Invalid validator name: 'y up'" in result.output
        assert not (templates_dir / "x").exists()


class TestHelpers:
    """Test shared CLI helpers."""

    def test_parse_list(self):
        assert parse_list("entity, Entity,,entity") == ["entity", "Entity"]
        assert parse_list("") == []
        assert parse_list(None) == []

    def test_parse_dependencies(self):
        dependencies, invalid = parse_dependencies("hono@^4.6.0, @hono/zod-validator@^0.4.1, zod, @scoped")
        assert dependencies == {"hono": "^4.6.0", "@hono/zod-validator": "^0.4.1"}
        assert invalid == ["zod", "@scoped"]

    @pytest.mark.parametrize("text,expected", [
        ("ts", True),
        ("d.ts", True),
        (".md", True),
        ("", "Output extension cannot be empty"),
        ("t s", "Output extension must only contain letters, numbers and dots"),
    ])
    def test_validate_extension(self, text, expected):
        assert validate_extension(text) == expected

    def test_validate_extension_allow_empty(self):
        assert validate_extension("", allow_empty=True) is True

    def test_validate_template_filename(self):
        assert validate_template_filename("hono-v2") is True
        assert validate_template_filename("") == "Template filename cannot be empty"
        assert validate_template_filename("a/b") is not True

    def test_incremental_name(self, tmp_path):
        assert incremental_name(tmp_path / "user.ts", 0) == tmp_path / "user.ts"
        assert incremental_name(tmp_path / "user.types.ts", 2) == tmp_path / "user.types_2.ts"

    def test_write_with_incremental_name(self, tmp_path):
        target = tmp_path / "user.ts"
        target.write_text("first", encoding="utf-8")
        (tmp_path / "user_1.ts").write_text("second", encoding="utf-8")

        written = write_file_with_incremental_name(target, "third", increment=True)

        assert written == tmp_path / "user_2.ts"
        assert written.read_text(encoding="utf-8") == "third"
        assert target.read_text(encoding="utf-8") == "first"

    def test_write_without_increment_refuses_existing(self, tmp_path):
        target = tmp_path / "user.ts"
        target.write_text("first", encoding="utf-8")

        with pytest.raises(FileExistsError):
            write_file_with_incremental_name(target, "second")

    def test_write_output_file_modes(self, tmp_path):
        target = tmp_path / "user.ts"
        assert write_output_file(target, "a") == target
        assert write_output_file(target, "b", append=True) == target
        assert target.read_text(encoding="utf-8") == "a\nb"
        assert write_output_file(target, "c", overwrite=True, append=True) == target
        assert target.read_text(encoding="utf-8") == "c"
        assert write_output_file(target, "d") == tmp_path / "user_1.ts"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

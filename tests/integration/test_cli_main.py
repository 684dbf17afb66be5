#  Copyright (c) 2025 Tom Villani, Ph.D.
"""End-to-end tests of the snooty2mdx command line."""

import json

import pytest
from utils import page_root, paragraph, section, text, write_json_archive

from snooty2mdx.cli import main
from snooty2mdx.cli.builder import (
    EXIT_FILE_ERROR,
    EXIT_MALFORMED_INPUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)


def _list_page():
    bullet_list = {
        "type": "bullet_list",
        "children": [{"type": "list_item", "children": [paragraph(text("one"))]}],
    }
    return {"ast": page_root(bullet_list)}


def _write_json(path, document):
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


@pytest.mark.integration
@pytest.mark.cli
@pytest.mark.usefixtures("restore_root_logger")
class TestCliMain:
    """Test running the CLI entry point."""

    def test_no_input(self, capsys):
        """Test a missing input argument is a validation error."""
        assert main([]) == EXIT_VALIDATION_ERROR
        assert "No input file provided" in capsys.readouterr().err

    def test_unsupported_suffix(self, capsys):
        """Test inputs other than .json and .zip are rejected."""
        assert main(["page.rst"]) == EXIT_VALIDATION_ERROR
        assert "must end in .json or .zip" in capsys.readouterr().err

    def test_convert_json(self, tmp_path, capsys, sample_page):
        """Test converting a page to an explicit output path."""
        input_path = _write_json(tmp_path / "install_ast-input.json", sample_page)
        output_path = tmp_path / "out" / "install.mdx"

        code = main([str(input_path), "--out", str(output_path), "--no-config"])

        assert code == EXIT_SUCCESS
        assert output_path.read_text(encoding="utf-8").startswith('---\ntitle: "Install Atlas"\n---')
        assert (tmp_path / "out" / "references.ts").exists()
        stdout = capsys.readouterr().out
        assert "✓ Wrote 1 file" in stdout
        assert str(output_path) in stdout

    def test_convert_json_default_output(self, tmp_path):
        """Test the output file is named after the input by default."""
        input_path = _write_json(tmp_path / "page_ast-input.json", {"ast": page_root(section("Intro"))})

        assert main([str(input_path), "--no-config"]) == EXIT_SUCCESS
        assert (tmp_path / "page_output.mdx").read_text(encoding="utf-8") == "# Intro\n"

    def test_mdast_json_flag(self, tmp_path, capsys):
        """Test --mdast-json writes the page tree next to the MDX output."""
        input_path = _write_json(tmp_path / "page.json", {"ast": page_root(section("Intro"))})
        dump = tmp_path / "page.mdast.json"

        code = main([str(input_path), "--out", str(tmp_path / "page.mdx"), "--mdast-json", str(dump), "--no-config"])

        assert code == EXIT_SUCCESS
        assert json.loads(dump.read_text(encoding="utf-8"))["children"][0] == {
            "type": "heading",
            "depth": 1,
            "children": [{"type": "text", "value": "Intro"}],
        }
        assert "✓ Wrote mdast JSON" in capsys.readouterr().out

    def test_flag_reaches_renderer(self, tmp_path):
        """Test generated option flags are applied."""
        input_path = _write_json(tmp_path / "list.json", _list_page())
        output_path = tmp_path / "list.mdx"

        code = main([str(input_path), "-o", str(output_path), "--no-config", "--mdx-bullet-marker", "*"])

        assert code == EXIT_SUCCESS
        assert output_path.read_text(encoding="utf-8") == "* one\n"

    def test_config_file(self, tmp_path):
        """Test an explicit configuration file is applied."""
        config = tmp_path / "settings.toml"
        config.write_text('[mdx]\nbullet_marker = "+"\n', encoding="utf-8")
        input_path = _write_json(tmp_path / "list.json", _list_page())
        output_path = tmp_path / "list.mdx"

        assert main([str(input_path), "-o", str(output_path), "--config", str(config)]) == EXIT_SUCCESS
        assert output_path.read_text(encoding="utf-8") == "+ one\n"

    def test_config_from_environment(self, tmp_path, monkeypatch):
        """Test SNOOTY2MDX_CONFIG names the configuration file."""
        config = tmp_path / "settings.json"
        config.write_text('{"mdx": {"bullet_marker": "+"}}', encoding="utf-8")
        monkeypatch.setenv("SNOOTY2MDX_CONFIG", str(config))
        input_path = _write_json(tmp_path / "list.json", _list_page())
        output_path = tmp_path / "list.mdx"

        assert main([str(input_path), "-o", str(output_path)]) == EXIT_SUCCESS
        assert output_path.read_text(encoding="utf-8") == "+ one\n"

    def test_missing_config_file(self, tmp_path, capsys):
        """Test a configuration file that does not exist."""
        input_path = _write_json(tmp_path / "list.json", _list_page())

        code = main([str(input_path), "--config", str(tmp_path / "missing.toml")])

        assert code == EXIT_VALIDATION_ERROR
        assert "does not exist" in capsys.readouterr().err

    def test_unknown_config_option(self, tmp_path):
        """Test configuration tables naming unknown options."""
        config = tmp_path / "settings.toml"
        config.write_text("[snooty]\ndepth = 2\n", encoding="utf-8")
        input_path = _write_json(tmp_path / "list.json", _list_page())

        assert main([str(input_path), "--config", str(config)]) == EXIT_VALIDATION_ERROR

    def test_missing_input_file(self, tmp_path, capsys):
        """Test a JSON input that does not exist."""
        code = main([str(tmp_path / "missing.json"), "--no-config"])

        assert code == EXIT_FILE_ERROR
        assert "Error:" in capsys.readouterr().err

    def test_malformed_json(self, tmp_path):
        """Test a JSON input that does not parse."""
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")

        assert main([str(path), "--no-config"]) == EXIT_MALFORMED_INPUT_ERROR

    def test_convert_archive(self, tmp_path, capsys):
        """Test converting a site archive to a folder."""
        archive = write_json_archive(
            tmp_path / "site.zip",
            {"docs/a.json": {"ast": page_root(section("A"))}, "docs/b.json": {"ast": page_root(section("B"))}},
        )
        output_dir = tmp_path / "build"

        code = main([str(archive), "--out", str(output_dir), "--no-config"])

        assert code == EXIT_SUCCESS
        assert (output_dir / "docs" / "a.mdx").read_text(encoding="utf-8") == "# A\n"
        assert (output_dir / "docs" / "b.mdx").read_text(encoding="utf-8") == "# B\n"
        assert (output_dir / "references.ts").exists()
        stdout = capsys.readouterr().out
        assert "✓ Wrote 2 files" in stdout
        assert "✓ Wrote folder" in stdout

    def test_malformed_archive(self, tmp_path):
        """Test a .zip input that is not an archive."""
        path = tmp_path / "site.zip"
        path.write_bytes(b"not a zip file")

        assert main([str(path), "--out", str(tmp_path / "build"), "--no-config"]) == EXIT_MALFORMED_INPUT_ERROR

    def test_version(self, capsys):
        """Test --version prints the program name and exits."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert (captured.out + captured.err).startswith("snooty2mdx ")

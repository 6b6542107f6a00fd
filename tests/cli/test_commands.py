"""Tests for the paconvert command line."""

import io
import json

import pytest

from paconvert.__main__ import build_parser, main


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "PACONVERT_MAPPINGS_FILE",
        "PACONVERT_MERGE_MAPPINGS",
        "PACONVERT_LOG_TIMESTAMPS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def classic_file(tmp_path, classic_button_full):
    path = tmp_path / "button.yaml"
    path.write_text(classic_button_full, encoding="utf-8")
    return path


class TestConvertCommand:
    """Tests for `paconvert convert`."""

    @pytest.mark.unit
    def test_prints_modern_document(self, classic_file, capsys):
        assert main(["convert", str(classic_file)]) == 0

        out = capsys.readouterr().out
        assert out.startswith("- Button1:\n    Control: Button@0.0.45\n")
        assert "      BasePaletteColor: =RGBA(56, 96, 178, 1)\n" in out
        assert "ButtonType: Standard" in out

    @pytest.mark.unit
    def test_writes_output_file(self, classic_file, tmp_path, engine):
        target = tmp_path / "modern.yaml"
        assert main(["convert", str(classic_file), "-o", str(target)]) == 0
        assert target.read_text(encoding="utf-8") == engine.convert(
            classic_file.read_text(encoding="utf-8")
        )

    @pytest.mark.unit
    def test_reads_stdin(self, monkeypatch, classic_button, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(classic_button))
        assert main(["convert", "-"]) == 0
        assert "Control: Button@0.0.45" in capsys.readouterr().out

    @pytest.mark.unit
    def test_log_without_timestamps(self, classic_file, monkeypatch, capsys):
        """--log prints entries; timestamps follow the environment."""
        monkeypatch.setenv("PACONVERT_LOG_TIMESTAMPS", "false")
        assert main(["convert", str(classic_file), "--log"]) == 0

        err = capsys.readouterr().err.splitlines()
        assert "Starting conversion" in err
        assert "Conversion completed" in err

    @pytest.mark.unit
    def test_unsupported_type_fails(self, tmp_path, capsys):
        """Conversion errors exit with 1 and still print the log."""
        path = tmp_path / "unknown.yaml"
        path.write_text(
            "- Thing1:\n"
            "    Control: Classic/Teleporter@1.0.0\n"
            "    Properties:\n"
            "      X: 1\n",
            encoding="utf-8",
        )
        assert main(["convert", str(path), "--log"]) == 1

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Unsupported control type: Classic/Teleporter@1.0.0" in captured.err

    @pytest.mark.unit
    def test_missing_input_fails(self, tmp_path):
        assert main(["convert", str(tmp_path / "missing.yaml")]) == 1

    @pytest.mark.unit
    def test_custom_mappings(self, classic_file, tmp_path, capsys):
        """A mapping file passed on the command line is layered in."""
        mappings = tmp_path / "mappings.json"
        mappings.write_text(
            json.dumps(
                {
                    "controlTypes": {"Classic/Button@2.2.0": "Button@9.9.9"},
                    "properties": {},
                }
            ),
            encoding="utf-8",
        )
        assert main(["convert", str(classic_file), "-m", str(mappings)]) == 0
        assert "Control: Button@9.9.9" in capsys.readouterr().out


class TestInspectionCommands:
    """Tests for `validate`, `info` and `sample`."""

    @pytest.mark.unit
    def test_validate(self, classic_file, tmp_path, capsys):
        assert main(["validate", str(classic_file)]) == 0
        assert capsys.readouterr().out == "valid\n"

        broken = tmp_path / "broken.yaml"
        broken.write_text("a: 1\n  b: 2\n", encoding="utf-8")
        assert main(["validate", str(broken)]) == 1
        assert capsys.readouterr().out == "invalid\n"

    @pytest.mark.unit
    def test_info(self, classic_file, capsys):
        assert main(["info", str(classic_file)]) == 0
        out = capsys.readouterr().out
        assert "Name:    Button1" in out
        assert "Type:    Classic/Button" in out
        assert "Version: 2.2.0" in out

    @pytest.mark.unit
    def test_info_without_control(self, tmp_path):
        path = tmp_path / "plain.yaml"
        path.write_text("a: 1\n", encoding="utf-8")
        assert main(["info", str(path)]) == 1

    @pytest.mark.unit
    @pytest.mark.parametrize("kind", ["button", "gallery", "form"])
    def test_sample(self, kind, capsys):
        assert main(["sample", kind]) == 0
        assert "Control:" in capsys.readouterr().out

    @pytest.mark.unit
    def test_unknown_sample(self):
        assert main(["sample", "slider"]) == 1


class TestMappingsCommands:
    """Tests for `mappings export` and `mappings check`."""

    @pytest.mark.unit
    def test_export_then_check(self, tmp_path, capsys):
        target = tmp_path / "mappings.json"
        assert main(["mappings", "export", "-o", str(target)]) == 0

        data = json.loads(target.read_text(encoding="utf-8"))
        assert data["controlTypes"]["Classic/Button@2.2.0"] == "Button@0.0.45"

        assert main(["mappings", "check", str(target)]) == 0
        assert capsys.readouterr().out.startswith("OK: ")

    @pytest.mark.unit
    def test_check_rejects_bad_shape(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"controlTypes": {}}), encoding="utf-8")
        assert main(["mappings", "check", str(path)]) == 1

    @pytest.mark.unit
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage: paconvert" in capsys.readouterr().out

    @pytest.mark.unit
    def test_parser_lists_commands(self):
        help_text = build_parser().format_help()
        for command in ("convert", "validate", "info", "mappings", "sample"):
            assert command in help_text

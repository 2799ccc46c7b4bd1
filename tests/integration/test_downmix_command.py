"""Integration tests for the downmix command.

ffprobe and ffmpeg are replaced at the run_command seam so the whole
CLI -> config -> processor -> introspector/executor path is exercised.
"""

from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from downmix.cli import main
from downmix.cli.exit_codes import ExitCode
from downmix.exceptions import ToolNotFoundError


class FakeTools:
    """Records ffprobe/ffmpeg invocations and returns canned results."""

    def __init__(self, probe_stdout: str, probe_stderr: str = "", probe_rc: int = 0):
        self.probe_stdout = probe_stdout
        self.probe_stderr = probe_stderr
        self.probe_rc = probe_rc
        self.ffmpeg_stderr = ""
        self.ffmpeg_rc = 0
        self.probe_calls: list[list[str]] = []
        self.ffmpeg_calls: list[list[str]] = []

    def ffprobe(self, cmd, timeout=None):
        self.probe_calls.append(cmd)
        return self.probe_stdout, self.probe_stderr, self.probe_rc

    def ffmpeg(self, cmd, timeout=None):
        self.ffmpeg_calls.append(cmd)
        if self.ffmpeg_rc == 0:
            Path(cmd[-1]).write_bytes(b"stereo")
        return "", self.ffmpeg_stderr, self.ffmpeg_rc


@pytest.fixture
def tools_factory():
    """Patch both tools; yields a function that installs a FakeTools."""
    patches = []

    def install(probe_stdout: str, **kwargs) -> FakeTools:
        fake = FakeTools(probe_stdout, **kwargs)
        patches.extend(
            [
                patch(
                    "downmix.introspector.ffprobe.require_tool",
                    return_value=Path("/usr/bin/ffprobe"),
                ),
                patch(
                    "downmix.executor.ffmpeg_downmix.require_tool",
                    return_value=Path("/usr/bin/ffmpeg"),
                ),
                patch(
                    "downmix.introspector.ffprobe.run_command",
                    side_effect=fake.ffprobe,
                ),
                patch(
                    "downmix.executor.ffmpeg_downmix.run_command",
                    side_effect=fake.ffmpeg,
                ),
            ]
        )
        for p in patches:
            p.start()
        return fake

    yield install

    for p in patches:
        p.stop()


def _invoke(*args: str):
    return CliRunner().invoke(main, list(args))


class TestDownmixCommand:
    """Tests for the downmix CLI."""

    def test_help(self) -> None:
        result = _invoke("--help")

        assert result.exit_code == 0
        assert "Downmix a video file's audio into stereo" in result.output
        assert "--quiet" in result.output
        assert "--force" in result.output

    def test_surround_is_downmixed(
        self, tools_factory, ffprobe_output, input_file: Path, output_file: Path
    ) -> None:
        tools = tools_factory(ffprobe_output("multi_audio_surround"))

        result = _invoke(str(input_file), str(output_file))

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert len(tools.ffmpeg_calls) == 1
        cmd = tools.ffmpeg_calls[0]
        assert cmd[cmd.index("-ac") + 1] == "2"
        assert cmd[cmd.index("-c:v") + 1] == "copy"
        assert output_file.read_bytes() == b"stereo"
        assert f"Found 6 channels for '{input_file}'" in result.output
        assert f"Downmixing '{input_file}' to '{output_file}'" in result.output
        assert f"Successfully downmixed to '{output_file}'" in result.output

    def test_stereo_is_not_downmixed(
        self, tools_factory, ffprobe_output, input_file: Path, output_file: Path
    ) -> None:
        tools = tools_factory(ffprobe_output("stereo_only"))

        result = _invoke(str(input_file), str(output_file))

        assert result.exit_code == ExitCode.SUCCESS
        assert tools.ffmpeg_calls == []
        assert f"File '{input_file}' does not need to be downmixed." in result.output
        assert not output_file.exists()

    def test_quiet_hides_info_but_not_result_message(
        self, tools_factory, ffprobe_output, input_file: Path, output_file: Path
    ) -> None:
        tools_factory(ffprobe_output("stereo_only"))

        result = _invoke("-q", str(input_file), str(output_file))

        assert result.exit_code == ExitCode.SUCCESS
        assert "Found 2 channels" not in result.output
        assert "does not need to be downmixed" in result.output

    def test_quiet_hides_downmix_logging(
        self, tools_factory, ffprobe_output, input_file: Path, output_file: Path
    ) -> None:
        tools_factory(ffprobe_output("multi_audio_surround"))

        result = _invoke("--quiet", str(input_file), str(output_file))

        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == ""
        assert output_file.exists()

    def test_missing_input(self, tools_factory, temp_dir: Path) -> None:
        tools = tools_factory("{}")
        missing = temp_dir / "missing.mkv"

        result = _invoke(str(missing), str(temp_dir / "out.mkv"))

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert f"Error: '{missing}' does not exist" in result.output
        assert tools.probe_calls == []

    def test_input_is_directory(self, tools_factory, temp_dir: Path) -> None:
        tools_factory("{}")

        result = _invoke(str(temp_dir), str(temp_dir / "out.mkv"))

        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        assert "is not a file" in result.output

    def test_existing_output_without_force(
        self, tools_factory, ffprobe_output, input_file: Path, output_file: Path
    ) -> None:
        tools = tools_factory(ffprobe_output("multi_audio_surround"))
        output_file.write_bytes(b"keep me")

        result = _invoke(str(input_file), str(output_file))

        assert result.exit_code == ExitCode.OUTPUT_EXISTS
        assert "already exists. Use --force to overwrite." in result.output
        assert tools.probe_calls == []
        assert tools.ffmpeg_calls == []
        assert output_file.read_bytes() == b"keep me"

    def test_existing_output_with_force(
        self, tools_factory, ffprobe_output, input_file: Path, output_file: Path
    ) -> None:
        tools_factory(ffprobe_output("multi_audio_surround"))
        output_file.write_bytes(b"old")

        result = _invoke("-f", str(input_file), str(output_file))

        assert result.exit_code == ExitCode.SUCCESS
        assert output_file.read_bytes() == b"stereo"

    def test_malformed_probe_output(
        self, tools_factory, input_file: Path, output_file: Path
    ) -> None:
        tools = tools_factory("{not json")

        result = _invoke(str(input_file), str(output_file))

        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "Error: invalid json" in result.output
        assert tools.ffmpeg_calls == []

    def test_quiet_still_shows_errors(
        self, tools_factory, input_file: Path, output_file: Path
    ) -> None:
        tools_factory('{"format": {}}')

        result = _invoke("-q", str(input_file), str(output_file))

        assert result.exit_code == ExitCode.PARSE_ERROR
        assert "Error:" in result.output

    def test_probe_failure(
        self, tools_factory, input_file: Path, output_file: Path
    ) -> None:
        tools_factory(
            "", probe_stderr="movie.mkv: Invalid data found when processing input\n",
            probe_rc=1,
        )

        result = _invoke(str(input_file), str(output_file))

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "Error from ffprobe" in result.output
        assert "Invalid data found" in result.output

    def test_transcode_failure(
        self, tools_factory, ffprobe_output, input_file: Path, output_file: Path
    ) -> None:
        tools = tools_factory(ffprobe_output("multi_audio_surround"))
        tools.ffmpeg_stderr = "Conversion failed!\n"
        tools.ffmpeg_rc = 1

        result = _invoke(str(input_file), str(output_file))

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "Error from ffmpeg" in result.output
        assert not output_file.exists()

    def test_strict_stderr_from_env(
        self,
        tools_factory,
        ffprobe_output,
        input_file: Path,
        output_file: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("DOWNMIX_STRICT_STDERR", "1")
        tools_factory(ffprobe_output("stereo_only"), probe_stderr="warning text\n")

        result = _invoke(str(input_file), str(output_file))

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "warning text" in result.output

    def test_tool_not_found(self, input_file: Path, output_file: Path) -> None:
        with patch(
            "downmix.introspector.ffprobe.require_tool",
            side_effect=ToolNotFoundError("ffprobe"),
        ):
            result = _invoke(str(input_file), str(output_file))

        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert "ffprobe is not installed" in result.output

    def test_invalid_config_file(
        self, input_file: Path, output_file: Path, tmp_path: Path
    ) -> None:
        config = tmp_path / "bad.toml"
        config.write_text("[processing\n")

        result = _invoke("--config", str(config), str(input_file), str(output_file))

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Invalid TOML" in result.output

    @pytest.mark.parametrize(
        ("body", "name"),
        [
            ("[logging]\nlevel = 10\n", "level"),
            ('[logging]\nmax_bytes = "big"\n', "max_bytes"),
            ('[processing]\natomic_output = "false"\n', "atomic_output"),
        ],
    )
    def test_wrongly_typed_config_value(
        self,
        tools_factory,
        input_file: Path,
        output_file: Path,
        tmp_path: Path,
        body: str,
        name: str,
    ) -> None:
        tools = tools_factory("{}")
        config = tmp_path / "config.toml"
        config.write_text(body)

        result = _invoke("--config", str(config), str(input_file), str(output_file))

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert f"Error: Invalid configuration: {name}" in result.output
        assert tools.probe_calls == []

    def test_missing_config_file(
        self, input_file: Path, output_file: Path, tmp_path: Path
    ) -> None:
        missing = tmp_path / "nope.toml"

        result = _invoke("--config", str(missing), str(input_file), str(output_file))

        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert f"Error: Config file not found: {missing}" in result.output

    def test_json_logging(
        self, tools_factory, ffprobe_output, input_file: Path, output_file: Path
    ) -> None:
        tools_factory(ffprobe_output("stereo_only"))

        result = _invoke("--log-json", str(input_file), str(output_file))

        assert result.exit_code == ExitCode.SUCCESS
        assert '"message": "Found 2 channels for' in result.output

import json

import pytest
from typer.testing import CliRunner

from decoderring import __version__
from decoderring.cli import app
from decoderring.config.loader import load_config, reset_config_cache
from decoderring.config.paths import get_user_config_file
from decoderring.core.transformer import encrypt

runner = CliRunner()
ORIGINAL = b"user: alice\npassword: hunter2!\n"


def invoke(*args, input=None):
    return runner.invoke(app, ["--no-log-file", *args], input=input)


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output

def test_encrypt_then_decrypt_with_flags(text_file):
    result = invoke("encrypt", str(text_file), "--seed1", "1", "--seed2", "2", "--yes", "--quiet")
    assert result.exit_code == 0, result.output
    assert text_file.read_bytes() == encrypt(1, 2, ORIGINAL)
    assert "Successfully overwritten." in result.output

    result = invoke("decrypt", str(text_file), "--seed1", "1", "--seed2", "2", "--yes", "--quiet")
    assert result.exit_code == 0, result.output
    assert text_file.read_bytes() == ORIGINAL

def test_encrypt_shows_contents_and_asks_before_writing(text_file):
    result = invoke("encrypt", str(text_file), "--inner", "1", "--outer", "2", input="n\n")
    assert result.exit_code == 0, result.output
    assert "File Contents" in result.output
    assert "Overwrite the contents of the file?" in result.output
    assert text_file.read_bytes() == ORIGINAL

def test_seeds_are_prompted_when_missing(text_file):
    result = invoke("encrypt", str(text_file), "--quiet", "--yes", input="1\n2\n")
    assert result.exit_code == 0, result.output
    assert "Enter inner seed" in result.output
    assert "Enter outer seed" in result.output
    assert text_file.read_bytes() == encrypt(1, 2, ORIGINAL)

def test_negative_prompted_seed_is_asked_again(text_file):
    result = invoke("encrypt", str(text_file), "--quiet", "--yes", input="-5\n1\n2\n")
    assert result.exit_code == 0, result.output
    assert "Seed must not be negative." in result.output
    assert text_file.read_bytes() == encrypt(1, 2, ORIGINAL)

def test_negative_seed_option_is_usage_error(text_file):
    result = invoke("encrypt", str(text_file), "--seed1", "-1", "--seed2", "2")
    assert result.exit_code == 2
    assert text_file.read_bytes() == ORIGINAL

def test_missing_file_exits_with_error(tmp_path):
    result = invoke("decrypt", str(tmp_path / "missing.txt"), "--seed1", "1", "--seed2", "2", "--yes")
    assert result.exit_code == 1
    assert not (tmp_path / "missing.txt").exists()

def test_unknown_engine_is_rejected(text_file):
    result = runner.invoke(app, ["--no-log-file", "--engine", "nope", "encrypt", str(text_file), "--seed1", "1", "--seed2", "2", "--yes"])
    assert result.exit_code == 2
    assert text_file.read_bytes() == ORIGINAL

def test_engine_option_changes_output(text_file):
    result = invoke("--engine", "python", "encrypt", str(text_file), "--seed1", "1", "--seed2", "2", "--yes", "--quiet")
    assert result.exit_code == 0, result.output
    assert text_file.read_bytes() == encrypt(1, 2, ORIGINAL, engine="python")

def test_config_disables_confirmation(text_file):
    get_user_config_file().write_text(json.dumps({"confirm_overwrite": False, "show_contents": False}), encoding="utf-8")
    result = invoke("encrypt", str(text_file), "--seed1", "3", "--seed2", "4")
    assert result.exit_code == 0, result.output
    assert "Overwrite" not in result.output
    assert text_file.read_bytes() == encrypt(3, 4, ORIGINAL)

def test_append(text_file):
    result = invoke("append", str(text_file), "--text", "site: example.org", "--seed1", "1", "--seed2", "2")
    assert result.exit_code == 0, result.output
    assert text_file.read_bytes() == ORIGINAL + b"\n" + encrypt(1, 2, b"site: example.org")
    assert "was appended to the file" in result.output

def test_append_prompts_for_text(text_file):
    result = invoke("append", str(text_file), input="pin 1234\n7\n8\n")
    assert result.exit_code == 0, result.output
    assert text_file.read_bytes() == ORIGINAL + b"\n" + encrypt(7, 8, b"pin 1234")

def test_session_round_trip(text_file):
    steps = "\n".join(["encrypt", "11", "22", "y", "decrypt", "11", "22", "y", "exit"]) + "\n"
    result = invoke("session", str(text_file), input=steps)
    assert result.exit_code == 0, result.output
    assert text_file.read_bytes() == ORIGINAL
    assert result.output.count("Successfully overwritten.") == 2

def test_session_invalid_command_continues(text_file):
    steps = "\n".join(["shred", "encrypt", "1", "2", "n", "exit"]) + "\n"
    result = invoke("session", str(text_file), input=steps)
    assert result.exit_code == 0, result.output
    assert "Invalid command! Try again." in result.output
    assert "File Contents" in result.output
    assert text_file.read_bytes() == ORIGINAL

def test_session_prompts_for_path_and_survives_missing_file(tmp_path):
    missing = tmp_path / "missing.txt"
    steps = "\n".join([str(missing), "encrypt", "exit"]) + "\n"
    result = invoke("session", input=steps)
    assert result.exit_code == 0, result.output
    assert "ERROR: File not found." in result.output
    assert not missing.exists()

def test_session_append(text_file):
    steps = "\n".join(["append", "new entry", "5", "6", "exit"]) + "\n"
    result = invoke("session", str(text_file), input=steps)
    assert result.exit_code == 0, result.output
    assert text_file.read_bytes() == ORIGINAL + b"\n" + encrypt(5, 6, b"new entry")

def test_config_command_shows_and_saves():
    result = invoke("config")
    assert result.exit_code == 0, result.output
    assert '"engine": "minstd"' in result.output
    assert "Available engines: minstd, python" in result.output

    result = invoke("config", "--engine", "python", "--no-confirm")
    assert result.exit_code == 0, result.output
    reset_config_cache()
    config = load_config()
    assert config.engine == "python"
    assert config.confirm_overwrite is False

def test_config_command_rejects_unknown_engine():
    result = invoke("config", "--engine", "nope")
    assert result.exit_code == 2
    assert not get_user_config_file().exists()

@pytest.mark.parametrize("command", ["encrypt", "decrypt", "append", "session", "config"])
def test_help(command):
    result = runner.invoke(app, [command, "--help"])
    assert result.exit_code == 0

def test_opposing_flags_are_usage_error(text_file):
    result = invoke("encrypt", str(text_file), "--seed1", "1", "--seed2", "2", "--yes", "--no-write")
    assert result.exit_code == 2
    assert text_file.read_bytes() == ORIGINAL

def test_unknown_log_level_in_config_does_not_break_commands(text_file):
    get_user_config_file().write_text(json.dumps({"log_level": "verbose"}), encoding="utf-8")
    result = invoke("encrypt", str(text_file), "--seed1", "1", "--seed2", "2", "--yes", "--quiet")
    assert result.exit_code == 0, result.output
    assert text_file.read_bytes() == encrypt(1, 2, ORIGINAL)

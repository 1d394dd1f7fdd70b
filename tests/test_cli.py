"""Tests for the skey and skey-read commands."""

import pytest

from skey import cli
from skey.cli import UsageError, generate_command, read_command, run_generate, run_read
from skey.config import SkeyConfig
from skey.errors import (
    ChecksumMismatch,
    InputTooShort,
    InvalidRoundCount,
    UnknownHashAlgorithm,
    UnknownWord,
)

SECRET = "This is a test."


class TestRunGenerate:
    def test_default_algorithm(self, scripted_secret):
        """Two arguments use the configured default hash (MD5)."""
        reader = scripted_secret(SECRET)
        otp = run_generate(["0", "test"], config=SkeyConfig(), read_secret=reader)
        assert otp.hex == "9e876134d90499dd"
        assert reader.calls == 1

    def test_configured_default_algorithm(self, scripted_secret):
        config = SkeyConfig(default_hash="otp-sha1")
        otp = run_generate(["0", "test"], config=config, read_secret=scripted_secret(SECRET))
        assert otp.hex == "bb9e6ae1979d8ff4"

    def test_explicit_algorithm(self, scripted_secret):
        otp = run_generate(
            ["otp-md4", "99", "test"], config=SkeyConfig(), read_secret=scripted_secret(SECRET)
        )
        assert otp.hex == "c5e612776e6c237a"
        assert otp.words == ("NOTE", "OUT", "IBIS", "SINK", "NAVE", "MODE")

    def test_seed_used_verbatim(self, scripted_secret):
        otp = run_generate(["0", "TeSt"], config=SkeyConfig(), read_secret=scripted_secret(SECRET))
        assert otp.hex != "9e876134d90499dd"

    def test_lowercase_seed_flag(self, scripted_secret):
        otp = run_generate(
            ["0", "TeSt"],
            config=SkeyConfig(),
            read_secret=scripted_secret(SECRET),
            lowercase_seed=True,
        )
        assert otp.hex == "9e876134d90499dd"

    def test_lowercase_seed_config(self, scripted_secret):
        config = SkeyConfig(lowercase_seed=True)
        otp = run_generate(["0", "TeSt"], config=config, read_secret=scripted_secret(SECRET))
        assert otp.hex == "9e876134d90499dd"

    @pytest.mark.parametrize("tokens", [[], ["3"], ["otp-md5", "3", "seed", "extra"]])
    def test_wrong_argument_count(self, tokens, scripted_secret):
        reader = scripted_secret(SECRET)
        with pytest.raises(UsageError):
            run_generate(tokens, config=SkeyConfig(), read_secret=reader)
        assert reader.calls == 0

    def test_unknown_hash_before_prompt(self, scripted_secret):
        reader = scripted_secret(SECRET)
        with pytest.raises(UnknownHashAlgorithm):
            run_generate(["otp-bogus", "3", "seed"], config=SkeyConfig(), read_secret=reader)
        assert reader.calls == 0

    @pytest.mark.parametrize("rounds", ["-1", "x", "2.5"])
    def test_invalid_rounds_before_prompt(self, rounds, scripted_secret):
        reader = scripted_secret(SECRET)
        with pytest.raises(InvalidRoundCount):
            run_generate([rounds, "seed"], config=SkeyConfig(), read_secret=reader)
        assert reader.calls == 0


class TestRunRead:
    def test_words_from_arguments(self, scripted_words):
        reader = scripted_words()
        words = ["INCH", "SEA", "ANNE", "LONG", "AHEM", "TOUR"]
        assert run_read(words, config=SkeyConfig(), read_words=reader) == "9e876134d90499dd"
        assert reader.calls == 0

    def test_extra_words_ignored(self):
        words = ["INCH", "SEA", "ANNE", "LONG", "AHEM", "TOUR", "EXTRA"]
        assert run_read(words, config=SkeyConfig()) == "9e876134d90499dd"

    def test_prompts_when_too_few(self, scripted_words):
        reader = scripted_words("rome mug fred scan live lace")
        assert run_read(["ROME"], config=SkeyConfig(), read_words=reader) == "d1854218ebbb0b51"
        assert reader.calls == 1

    def test_too_few_after_prompt(self, scripted_words):
        with pytest.raises(InputTooShort) as exc_info:
            run_read([], config=SkeyConfig(), read_words=scripted_words("ROME MUG"))
        assert exc_info.value.count == 2

    def test_unknown_word(self):
        with pytest.raises(UnknownWord) as exc_info:
            run_read(["INCH", "SEA", "ANNE", "LONG", "AHEM", "ZZZZ"], config=SkeyConfig())
        assert exc_info.value.word == "ZZZZ"

    def test_verify_from_config(self):
        words = ["INCH", "SEA", "ANNE", "LONG", "AHEM", "TOUT"]
        assert run_read(words, config=SkeyConfig()) == "9e876134d90499dd"
        with pytest.raises(ChecksumMismatch):
            run_read(words, config=SkeyConfig(verify_checksum=True))


def interrupted():
    raise KeyboardInterrupt


class TestGenerateCommand:
    def test_output(self, monkeypatch, capsys, scripted_secret):
        monkeypatch.setattr(cli, "prompt_secret", scripted_secret(SECRET))
        generate_command("otp-md5", "0", "test")
        out = capsys.readouterr().out
        assert out == "9e876134d90499dd\nINCH SEA ANNE LONG AHEM TOUR\n"

    def test_unknown_hash_exits(self, monkeypatch, capsys, scripted_secret):
        monkeypatch.setattr(cli, "prompt_secret", scripted_secret(SECRET))
        with pytest.raises(SystemExit) as exc_info:
            generate_command("otp-bogus", "3", "seed")
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "otp-bogus" in captured.err
        assert captured.out == ""

    def test_end_of_input_at_secret_prompt(self, monkeypatch, capsys, scripted_secret):
        """Closed stdin at the secret prompt exits cleanly."""
        monkeypatch.setattr(cli, "prompt_secret", scripted_secret())
        with pytest.raises(SystemExit) as exc_info:
            generate_command("0", "seed")
        assert exc_info.value.code == 1
        captured = capsys.readouterr()
        assert "Error: no secret entered" in captured.err
        assert captured.out == ""

    def test_interrupt_at_secret_prompt(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "prompt_secret", interrupted)
        with pytest.raises(SystemExit) as exc_info:
            generate_command("0", "seed")
        assert exc_info.value.code == 1
        assert "Error: no secret entered" in capsys.readouterr().err

    def test_usage_on_missing_arguments(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            generate_command("3")
        assert exc_info.value.code == 1
        assert "usage: skey [otp-<hash>] <rounds> <seed>" in capsys.readouterr().err

    def test_bad_config_exits(self, skey_config_dir, capsys):
        skey_config_dir.mkdir(parents=True)
        (skey_config_dir / "config.yaml").write_text("default_hash: otp-nope\n")
        with pytest.raises(SystemExit) as exc_info:
            generate_command("0", "seed")
        assert exc_info.value.code == 1
        assert "default_hash" in capsys.readouterr().err


class TestReadCommand:
    def test_output(self, capsys):
        read_command("FULL", "PEW", "DOWN", "ONCE", "MORT", "ARC")
        assert capsys.readouterr().out == "87066dd9644bf206\n"

    def test_prompted_words(self, monkeypatch, capsys, scripted_words):
        monkeypatch.setattr(cli, "prompt_words", scripted_words("lest or heel scot rob suit"))
        read_command()
        assert capsys.readouterr().out == "ad85f658ebe383c9\n"

    def test_interrupt_at_words_prompt(self, monkeypatch, capsys):
        monkeypatch.setattr(cli, "prompt_words", interrupted)
        with pytest.raises(SystemExit) as exc_info:
            read_command()
        assert exc_info.value.code == 1
        assert "Error: no words entered" in capsys.readouterr().err

    def test_unknown_word_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            read_command("FULL", "PEW", "DOWN", "ONCE", "MORT", "QQQ")
        assert exc_info.value.code == 1
        assert '"QQQ"' in capsys.readouterr().err

    def test_verify_flag(self, capsys):
        with pytest.raises(SystemExit):
            read_command("INCH", "SEA", "ANNE", "LONG", "AHEM", "TOUT", verify=True)
        assert "checksum mismatch" in capsys.readouterr().err

"""Tests for the inistream CLI."""

import pytest

from inistream.cli import main


def test_version_flag(run_inistream):
    """inistream --version should print version string and exit 0."""
    result = run_inistream(["--version"])
    assert result.returncode == 0
    assert "inistream" in result.stdout
    assert "0." in result.stdout


def test_help_flag(run_inistream):
    """inistream --help should print usage and exit 0."""
    result = run_inistream(["--help"])
    assert result.returncode == 0
    assert "FILE" in result.stdout
    assert "SECTION" in result.stdout


def test_get_value(run_inistream, sample_ini):
    result = run_inistream([sample_ini, "Section1", "var1"])
    assert result.returncode == 0
    assert result.stdout == "hello\n"


def test_get_dotted_typed(run_inistream, sample_ini):
    result = run_inistream([sample_ini, "Section1.var3", "-t", "float"])
    assert result.returncode == 0
    assert result.stdout == "3.14\n"


def test_key_not_found_shows_suggestions(run_inistream, sample_ini):
    result = run_inistream([sample_ini, "Section1", "var9"])
    assert result.returncode == 1
    assert "maybe you meant: var1, var2, var3" in result.stderr


def test_syntax_error_exit(run_inistream, ini_file):
    path = ini_file("[S]\nk = 1\n[Bad\n")
    result = run_inistream([path, "S", "k"])
    assert result.returncode == 1
    assert result.stderr.strip() == "inistream: row 3: wrong section syntax"


# In-process tests of main() for faster coverage of dispatch paths

def test_main_int(sample_ini, inistream_home, capsys):
    main([str(sample_ini), "Section1", "var2", "--type", "int"])
    assert capsys.readouterr().out == "42\n"


def test_main_conversion_error(sample_ini, inistream_home, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(sample_ini), "Section1", "var1", "-t", "int"])
    assert exc.value.code == 1
    assert "cannot convert 'hello' to int" in capsys.readouterr().err


def test_main_section_not_found(sample_ini, inistream_home, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(sample_ini), "Nope", "var1"])
    assert exc.value.code == 1
    assert "section 'Nope' is not found" in capsys.readouterr().err


def test_main_no_suggestions(sample_ini, inistream_home, capsys):
    with pytest.raises(SystemExit):
        main([str(sample_ini), "Section1", "var9", "--no-suggestions"])
    err = capsys.readouterr().err
    assert "var9" in err
    assert "maybe" not in err


def test_main_suggestions_disabled_by_config(sample_ini, config_file, capsys):
    config_file("[output]\nsuggestions = false\n")
    with pytest.raises(SystemExit):
        main([str(sample_ini), "Section1", "var9"])
    assert "maybe" not in capsys.readouterr().err


def test_main_missing_file(tmp_path, inistream_home, capsys):
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path / "nope.ini"), "S", "k"])
    assert exc.value.code == 1
    assert "nope.ini" in capsys.readouterr().err


def test_main_dump(ini_file, inistream_home, capsys):
    path = ini_file("[A]\nx = 1\nflag\n[B]\ny = two words\n")
    main([str(path), "--dump"])
    assert capsys.readouterr().out == "[A]\nx = 1\nflag = \n[B]\ny = two words\n"


def test_main_check_ok(sample_ini, inistream_home, capsys):
    main([str(sample_ini), "--check"])
    out = capsys.readouterr().out
    assert "ok (1 sections, 3 keys)" in out


def test_main_check_quiet(sample_ini, inistream_home, capsys):
    main([str(sample_ini), "--check", "-q"])
    assert capsys.readouterr().out == ""


def test_main_check_error(ini_file, inistream_home, capsys):
    path = ini_file("key = 1\n")
    with pytest.raises(SystemExit) as exc:
        main([str(path), "--check"])
    assert exc.value.code == 1
    assert "row 1: no section for variable" in capsys.readouterr().err


def test_main_complete_last_line(ini_file, inistream_home, capsys):
    path = ini_file("[S]\nk = last")
    main([str(path), "S", "k"])
    assert capsys.readouterr().out == "\n"
    main([str(path), "S", "k", "--complete-last-line"])
    assert capsys.readouterr().out == "last\n"


def test_main_encoding(tmp_path, inistream_home, capsys):
    path = tmp_path / "latin.ini"
    path.write_bytes(b"[S]\nk = caf\xe9\n")
    main([str(path), "S", "k", "--encoding", "latin-1"])
    assert capsys.readouterr().out == "caf\xe9\n"


def test_main_show_config(inistream_home, capsys):
    main(["--config"])
    out = capsys.readouterr().out
    assert "[parser]" in out
    assert "exists: no" in out


def test_main_requires_file(inistream_home):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_main_requires_section(sample_ini, inistream_home):
    with pytest.raises(SystemExit) as exc:
        main([str(sample_ini)])
    assert exc.value.code == 2


def test_main_dotted_name_without_dot(sample_ini, inistream_home):
    with pytest.raises(SystemExit) as exc:
        main([str(sample_ini), "Section1"])
    assert exc.value.code == 2

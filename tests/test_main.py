import pytest

import main


def run(tmp_path, *argv):
    return main.main(["--base-dir", str(tmp_path), "--db", "clidb", *argv])


def test_put_get(tmp_path, capsys):
    assert run(tmp_path, "put", "r1", "a=1", "b=x=y") == 0
    assert capsys.readouterr().out == "OK\n"

    assert run(tmp_path, "get", "r1") == 0
    assert capsys.readouterr().out == "a:1\nb:x=y\n"


def test_get_escapes_newlines(tmp_path, capsys):
    assert run(tmp_path, "put", "r1", "nl=one\ntwo") == 0
    capsys.readouterr()
    assert run(tmp_path, "get", "r1") == 0
    assert capsys.readouterr().out == "nl:one\\ntwo\n"


def test_put_exists_and_overwrite(tmp_path, capsys):
    assert run(tmp_path, "put", "r1", "a=1") == 0
    assert run(tmp_path, "put", "r1", "a=2") == 1
    assert run(tmp_path, "put", "--overwrite", "r1", "a=2") == 0
    out = capsys.readouterr().out
    assert out == "OK\nRECORD_EXISTS\nOK\n"


def test_put_bad_pair(tmp_path):
    with pytest.raises(SystemExit) as exc:
        run(tmp_path, "put", "r1", "novalue")
    assert exc.value.code == 2


def test_has_delete_destroy(tmp_path, capsys):
    assert run(tmp_path, "put", "r1") == 0
    assert run(tmp_path, "has", "r1") == 0
    assert run(tmp_path, "delete", "r1") == 0
    assert run(tmp_path, "has", "r1") == 1
    assert run(tmp_path, "get", "r1") == 1
    assert run(tmp_path, "destroy") == 0
    out = capsys.readouterr().out.splitlines()
    assert out == ["OK", "yes", "OK", "no", "RECORD_NOT_FOUND", "OK"]
    assert not (tmp_path / "clidb").exists()


def test_invalid_db_name(tmp_path, capsys):
    assert main.main(["--base-dir", str(tmp_path), "--db", "bad name", "has", "r"]) == 2
    assert "Invalid database name" in capsys.readouterr().err


def test_no_command(capsys):
    assert main.main([]) == 2

import io
import os

from minish.commands import cd, echo, pwd


def test_echo_joins_with_spaces():
    out = io.StringIO()
    assert echo(["hello", "world"], out) == 0
    assert out.getvalue() == "hello world"


def test_echo_no_arguments():
    out = io.StringIO()
    assert echo([], out) == 0
    assert out.getvalue() == ""


def test_pwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out, err = io.StringIO(), io.StringIO()
    assert pwd(out, err) == 0
    assert out.getvalue() == f"{os.getcwd()}\n"
    assert err.getvalue() == ""


def test_cd_changes_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    sub = tmp_path / "sub"
    sub.mkdir()
    out, err = io.StringIO(), io.StringIO()
    assert cd(str(sub), out, err) == 0
    assert os.path.samefile(os.getcwd(), sub)


def test_cd_missing_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    missing = str(tmp_path / "nowhere")
    out, err = io.StringIO(), io.StringIO()
    assert cd(missing, out, err) == 1
    assert out.getvalue() == f"cd: {missing}: No such file or directory\n"
    assert os.path.samefile(os.getcwd(), tmp_path)


def test_cd_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    out, err = io.StringIO(), io.StringIO()
    assert cd(None, out, err) == 0
    assert os.path.samefile(os.getcwd(), home)
    monkeypatch.chdir(tmp_path)
    assert cd("~", out, err) == 0
    assert os.path.samefile(os.getcwd(), home)


def test_cd_home_not_set(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("HOME", raising=False)
    out, err = io.StringIO(), io.StringIO()
    assert cd(None, out, err) == 1
    assert err.getvalue() == "cd: HOME not set\n"
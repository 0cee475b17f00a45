"""Tests for project meta files and the command-line interface."""

import json

import pytest

import mewlix
from mewlix import cli
from mewlixtest import run


PROJECT = '''
import mewlix


def register(runtime):
    def main():
        runtime.meow("hello from main")
        return mewlix.library("main", {"answer": 42})

    async def app():
        std = await runtime.modules.get_module("std")
        runtime.meow(std.push_up("app"))
        return mewlix.library("app", {})

    runtime.modules.add_module("main", main)
    runtime.modules.add_module("app", app)
'''


@pytest.fixture
def project(tmp_path):
    path = tmp_path / "project.py"
    path.write_text(PROJECT, encoding="utf-8")
    return path


def _meta(tmp_path, data):
    path = tmp_path / "meta.json"
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


def _exit_code(argv):
    with pytest.raises(SystemExit) as info:
        cli.main(argv)
    return info.value.code


def test_load_meta_defaults():
    meta = mewlix.load_meta(None)
    assert meta == mewlix.ProjectMeta()
    assert meta.name == "mewlix"
    assert meta.entrypoint == "main"


def test_load_meta(tmp_path):
    meta = mewlix.load_meta(_meta(tmp_path, {"name": "cats", "entrypoint": "app", "extra": 1}))
    assert meta.name == "cats"
    assert meta.entrypoint == "app"

    meta = mewlix.load_meta(_meta(tmp_path, {"name": "cats"}))
    assert meta.entrypoint == "main"


@pytest.mark.parametrize("data", [
    "not json",
    "[]",
    {"name": 1},
    {"entrypoint": ""},
])
def test_load_meta_invalid(tmp_path, data):
    with pytest.raises(mewlix.MewlixError) as info:
        mewlix.load_meta(_meta(tmp_path, data))
    assert info.value.code is mewlix.ErrorCode.BadConversion


def test_load_meta_missing(tmp_path):
    with pytest.raises(mewlix.MewlixError) as info:
        mewlix.load_meta(tmp_path / "missing.json")
    assert info.value.code is mewlix.ErrorCode.ExternalError


def test_json_command(capsys):
    assert _exit_code(["json", '{"cats": ["jake", "princess"]}']) == 0
    assert capsys.readouterr().out == '📦 [ cats: ["jake", "princess"] ]\n'


def test_json_command_invalid(capsys):
    assert _exit_code(["json", "[1,"]) == 1
    assert "BadConversion" in capsys.readouterr().err


def test_run_command(project, capsys):
    assert _exit_code(["run", str(project)]) == 0
    assert capsys.readouterr().out == "hello from main\n"


def test_run_command_entrypoint(project, capsys):
    assert _exit_code(["run", str(project), "--entrypoint", "app"]) == 0
    assert capsys.readouterr().out == "APP\n"


def test_run_command_meta(project, tmp_path, capsys):
    meta = _meta(tmp_path, {"name": "cats", "entrypoint": "app"})
    assert _exit_code(["-v", "run", str(project), "--meta", str(meta)]) == 0
    assert "APP" in capsys.readouterr().out


def test_run_command_errors(project, tmp_path, capsys):
    assert _exit_code(["run", str(project), "--entrypoint", "nope"]) == 1
    assert "InvalidImport" in capsys.readouterr().err

    assert _exit_code(["run", str(tmp_path / "missing.py")]) == 1
    assert "not found" in capsys.readouterr().err

    empty = tmp_path / "empty.py"
    empty.write_text("x = 1\n", encoding="utf-8")
    assert _exit_code(["run", str(empty)]) == 1
    assert "InvalidImport" in capsys.readouterr().err


def test_run_project(project):
    ball = run(cli.run_project(project))
    assert ball.answer == 42


def test_format_error():
    error = mewlix.MewlixError(mewlix.ErrorCode.ExternalError, "load failed")
    error.__cause__ = ValueError("bad")
    assert cli.format_error(error).plain == "[ExternalError] load failed\n  Caused by: ValueError: bad"


@pytest.mark.parametrize("source,detail", [
    ("def register(runtime):\n    raise KeyError('oops')\n", "KeyError"),
    ("async def register(runtime):\n    raise RuntimeError('later')\n", "RuntimeError"),
    ("missing_name\n\ndef register(runtime):\n    pass\n", "NameError"),
    ("def register(:\n", "SyntaxError"),
])
def test_run_command_host_errors(tmp_path, capsys, source, detail):
    path = tmp_path / "broken.py"
    path.write_text(source, encoding="utf-8")
    assert _exit_code(["run", str(path)]) == 1
    err = capsys.readouterr().err
    assert "ExternalError" in err
    assert detail in err


def test_register_errors_keep_cause(tmp_path):
    path = tmp_path / "broken.py"
    path.write_text("def register(runtime):\n    raise KeyError('oops')\n", encoding="utf-8")
    with pytest.raises(mewlix.MewlixError) as info:
        run(cli.run_project(path))
    assert info.value.code is mewlix.ErrorCode.ExternalError
    assert isinstance(info.value.__cause__, KeyError)

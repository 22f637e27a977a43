import os

from conftest import write
from system_reader import SystemReader


def test_read_beneath_root(tmp_path):
    write(tmp_path, "/etc/hostname", "archbox\n")
    reader = SystemReader(root=str(tmp_path) + "/")
    assert reader.resolve("/etc/hostname") == f"{tmp_path}/etc/hostname"
    assert reader.read("/etc/hostname") == "archbox\n"


def test_read_missing_file_is_unavailable(tmp_path):
    assert SystemReader(root=str(tmp_path)).read("/etc/os-release") is None


def test_read_undecodable_file_is_unavailable(tmp_path):
    (tmp_path / "blob").write_bytes(b"\xff\xfe\x00garbage")
    assert SystemReader(root=str(tmp_path)).read("/blob") is None


def test_read_without_root_uses_real_path(tmp_path):
    path = write(tmp_path, "/note", "hello")
    assert SystemReader().read(str(path)) == "hello"


def test_getenv_uses_given_environment():
    reader = SystemReader(environ={"SHELL": "/usr/bin/zsh"})
    assert reader.getenv("SHELL") == "/usr/bin/zsh"
    assert reader.getenv("LOGNAME") is None


def test_getenv_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("SHELL", "/bin/fish")
    assert SystemReader().getenv("SHELL") == "/bin/fish"


def test_stat(tmp_path):
    reader = SystemReader(root=str(tmp_path))
    assert reader.stat("/").st_ctime == os.stat(tmp_path).st_ctime
    assert reader.stat("/nope") is None

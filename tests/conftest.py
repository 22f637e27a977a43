import os
import stat

import pytest
import requests

import i18n
from command_runner import CommandResult
from fact_collector import FactCollector
from system_reader import SystemReader
from tool_detector import ToolDetector

OS_RELEASE = '''NAME="Arch Linux"
PRETTY_NAME="Arch Linux"
ID=arch
BUILD_ID=rolling
'''

CPUINFO = '''processor\t: 0
vendor_id\t: GenuineIntel
cpu family\t: 6
model\t\t: 142
model name\t: Intel(R) Core(TM) i7-8550U CPU @ 1.80GHz
stepping\t: 10

processor\t: 1
model name\t: Intel(R) Core(TM) i7-8550U CPU @ 1.80GHz
'''

MEMINFO = '''MemTotal:        2097152 kB
MemFree:          524288 kB
MemAvailable:    1048576 kB
Buffers:           65536 kB
'''


class FakeRunner:
    """Answers commands by executable basename and arguments."""

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def run(self, argv):
        key = (os.path.basename(argv[0]),) + tuple(argv[1:])
        self.calls.append(key)
        return self.responses.get(key, CommandResult(ok=False))


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code


class FakeHttp:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def write(root, path, content):
    full = root / path.lstrip("/")
    full.parent.mkdir(parents=True, exist_ok=True)
    full.write_text(content)
    return full


def make_executable(root, path):
    full = write(root, path, "#!/bin/sh\n")
    full.chmod(full.stat().st_mode | stat.S_IXUSR)
    return full


@pytest.fixture(autouse=True)
def english(monkeypatch):
    monkeypatch.delenv("LANG", raising=False)
    i18n.init("en")
    yield
    i18n.init("en")


@pytest.fixture
def fake_root(tmp_path):
    write(tmp_path, "/etc/hostname", "archbox\n")
    write(tmp_path, "/etc/os-release", OS_RELEASE)
    write(tmp_path, "/proc/uptime", "90061.52 350000.10\n")
    write(tmp_path, "/proc/cpuinfo", CPUINFO)
    write(tmp_path, "/proc/meminfo", MEMINFO)
    return tmp_path


@pytest.fixture
def environ():
    return {"SHELL": "/bin/bash", "USER": "alice"}


@pytest.fixture
def runner():
    return FakeRunner()


@pytest.fixture
def http():
    return FakeHttp(error=requests.ConnectionError("offline"))


@pytest.fixture
def no_login(monkeypatch):
    def _getlogin():
        raise OSError("no controlling terminal")
    monkeypatch.setattr(os, "getlogin", _getlogin)


@pytest.fixture
def collector(fake_root, environ, runner, http, no_login):
    return FactCollector(
        reader=SystemReader(root=str(fake_root), environ=environ),
        runner=runner,
        detector=ToolDetector(root=str(fake_root)),
        http=http,
    )

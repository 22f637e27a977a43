import pytest

from conftest import make_executable, write
from tool_detector import (
    CAPABILITIES,
    FLATPAK,
    NETWORK_TOOL,
    PACKAGE_MANAGER,
    ToolDetector,
)


def test_first_candidate_wins(tmp_path):
    for path in ("/usr/bin/rpm", "/usr/bin/dpkg-query", "/usr/bin/pacman"):
        make_executable(tmp_path, path)
    choice = ToolDetector(root=str(tmp_path)).detect(PACKAGE_MANAGER)
    assert choice.name == "pacman"
    assert choice.path == f"{tmp_path}/usr/bin/pacman"
    assert choice.command == (f"{tmp_path}/usr/bin/pacman", "-Qq")


def test_dpkg_outranks_rpm(tmp_path):
    make_executable(tmp_path, "/usr/bin/rpm")
    make_executable(tmp_path, "/bin/dpkg-query")
    choice = ToolDetector(root=str(tmp_path)).detect(PACKAGE_MANAGER)
    assert choice.name == "dpkg"
    assert choice.command[1:] == ("-f", "${binary:Package}\n", "-W")


def test_no_candidate(tmp_path):
    detector = ToolDetector(root=str(tmp_path))
    assert detector.detect(PACKAGE_MANAGER) is None
    assert detector.detect(NETWORK_TOOL) is None
    assert detector.detect(FLATPAK) is None


def test_non_executable_file_is_ignored(tmp_path):
    write(tmp_path, "/usr/bin/ip", "not a program")
    make_executable(tmp_path, "/sbin/ifconfig")
    choice = ToolDetector(root=str(tmp_path)).detect(NETWORK_TOOL)
    assert choice.name == "ifconfig"


def test_directory_is_ignored(tmp_path):
    (tmp_path / "usr" / "bin" / "flatpak").mkdir(parents=True)
    assert ToolDetector(root=str(tmp_path)).detect(FLATPAK) is None


def test_unknown_capability():
    with pytest.raises(KeyError):
        ToolDetector().detect("init_system")


def test_candidate_order_is_fixed():
    assert [c.name for c in CAPABILITIES[PACKAGE_MANAGER]] == ["pacman", "dpkg", "rpm"]
    assert [c.name for c in CAPABILITIES[NETWORK_TOOL]] == ["ip", "ifconfig"]

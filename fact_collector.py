#!/usr/bin/env python3
"""
Fact Collector - Discovers the host facts shown in the hostfetch report

Sources
───────
• identity, OS     → /etc/hostname, session login name, uname(), /etc/os-release
                     (read from /var/lib/snapd/hostfs when running as a snap)
• uptime, CPU, RAM → /proc/uptime, /proc/cpuinfo, /proc/meminfo
• install date     → ctime of the filesystem root
• packages         → pacman / dpkg-query / rpm, whichever is found first
• Flatpak apps     → flatpak list
• disk usage       → df on /
• local IP         → ip or ifconfig, whichever is found first
• public IP        → HTTPS request to an echo-my-IP service

Every probe returns a Fact.  When a source is missing the Fact carries a fixed
placeholder and available=False; the run never stops half way unless the
collector was created with strict=True and a mandatory source is unreadable.
"""

import ipaddress
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

import requests

import i18n
from command_runner import CommandRunner
from system_reader import SystemReader
from tool_detector import FLATPAK, NETWORK_TOOL, PACKAGE_MANAGER, ToolDetector

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 10  # seconds
PUBLIC_IP_URL = "https://ifconfig.me/ip"

HOSTNAME_PATH = "/etc/hostname"
OS_RELEASE_PATH = "/etc/os-release"
UPTIME_PATH = "/proc/uptime"
CPUINFO_PATH = "/proc/cpuinfo"
MEMINFO_PATH = "/proc/meminfo"
DISK_COMMAND = ("df", "-h", "--output=used,size", "/")
LOOPBACK_ADDRESS = "127.0.0.1"

_INET_RE = re.compile(r"\binet (?:addr:)?(\d{1,3}(?:\.\d{1,3}){3})\b")


class MandatorySourceError(Exception):
    """A source the report cannot do without could not be read (strict mode)."""

    def __init__(self, source: str, error):
        super().__init__(f"{source}: {error}")
        self.source = source
        self.error = error


@dataclass(frozen=True)
class Fact:
    """One line of the report."""
    key: str
    value: str
    available: bool = True

    @property
    def label(self) -> str:
        return i18n.t(f"label.{self.key}")

    def to_dict(self) -> Dict:
        return {
            "key": self.key,
            "label": self.label,
            "value": self.value,
            "available": self.available,
        }


# ── Pure formatting helpers ────────────────────────────────────────────────────

def format_uptime(seconds: float) -> str:
    """Whole days, then remaining whole hours and minutes (truncated)."""
    days = int(seconds // 86400)
    hours = int(seconds / 3600) - days * 24
    minutes = int(seconds / 60) - days * 1440 - hours * 60
    return i18n.t("fact.uptime", days=days, hours=hours, minutes=minutes)


def format_memory(total_kb: int, available_kb: int) -> str:
    used_kb = total_kb - available_kb
    return f"{used_kb / 1024 / 1024:.2f}Gi / {total_kb / 1024 / 1024:.2f}Gi"


def parse_pretty_name(os_release: str) -> Optional[str]:
    """Return the PRETTY_NAME value from os-release text, without quotes."""
    for line in os_release.splitlines():
        if line.startswith("PRETTY_NAME="):
            value = line.split("=", 1)[1].strip().strip("\"'")
            return value or None
    return None


def extract_ipv4_addresses(output: str) -> List[str]:
    """IPv4 addresses from `ip -4 addr show` or `ifconfig` output, loopback excluded."""
    return [
        addr for addr in _INET_RE.findall(output)
        if addr != LOOPBACK_ADDRESS
    ]


class FactCollector:
    """Runs the probes, in report order, against the live system."""

    def __init__(
        self,
        reader: SystemReader = None,
        runner: CommandRunner = None,
        detector: ToolDetector = None,
        http=None,
        public_ip: bool = True,
        public_ip_url: str = None,
        http_timeout: float = DEFAULT_HTTP_TIMEOUT,
        strict: bool = False,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.reader = reader or SystemReader()
        self.runner = runner or CommandRunner()
        self.detector = detector or ToolDetector()
        self.http = http or requests
        self.public_ip = public_ip
        self.public_ip_url = (
            public_ip_url
            or self.reader.getenv("HOSTFETCH_PUBLIC_IP_URL")
            or PUBLIC_IP_URL
        )
        self.http_timeout = http_timeout
        self.strict = strict
        self._now = now

    def collect(self) -> List[Fact]:
        """Run every probe once and return the facts in report order."""
        facts = [
            self.get_identity(),
            self.get_os(),
            self.get_uptime(),
            self.get_install_date(),
            self.get_packages(),
            self.get_flatpak(),
            self.get_shell(),
            self.get_cpu(),
            self.get_memory(),
            self.get_disk(),
        ]
        facts.extend(self.get_ip_addresses())
        return facts

    # ── Failure policy ─────────────────────────────────────────────────────────

    def _unavailable(self, key: str, reason: str = "unavailable") -> Fact:
        return Fact(key, i18n.t(f"{reason}.{key}"), available=False)

    def _mandatory_failed(self, source: str, error) -> None:
        if self.strict:
            raise MandatorySourceError(source, error)
        logger.debug("mandatory source %s failed: %s", source, error)

    # ── Identity & OS ──────────────────────────────────────────────────────────

    def _get_username(self) -> str:
        """Login name of the session; empty when there is none."""
        try:
            return os.getlogin()
        except OSError:
            pass
        for var in ("LOGNAME", "USER"):
            name = self.reader.getenv(var)
            if name:
                return name
        return ""

    def get_identity(self) -> Fact:
        text = self.reader.read(HOSTNAME_PATH)
        lines = text.splitlines() if text else []
        hostname = lines[0].strip() if lines else ""
        if not hostname:
            self._mandatory_failed(HOSTNAME_PATH, "unreadable or empty")
            return self._unavailable("identity")
        return Fact("identity", f"{self._get_username()}@{hostname}")

    def _get_distro_name(self) -> str:
        # When running in a snap, read the host's os-release; otherwise /etc
        path = (
            "/var/lib/snapd/hostfs" + OS_RELEASE_PATH
            if self.reader.getenv("SNAP")
            else OS_RELEASE_PATH
        )
        text = self.reader.read(path)
        name = parse_pretty_name(text) if text else None
        return name or i18n.t("fact.unknown_distro")

    def get_os(self) -> Fact:
        try:
            uname = os.uname()
        except OSError as e:
            self._mandatory_failed("uname", e)
            return self._unavailable("os")
        distro = self._get_distro_name()
        return Fact("os", f"{distro}@{uname.sysname} {uname.release} {uname.machine}")

    def get_uptime(self) -> Fact:
        text = self.reader.read(UPTIME_PATH)
        if text is None:
            self._mandatory_failed(UPTIME_PATH, "unreadable")
            return self._unavailable("uptime")
        try:
            seconds = float(text.split()[0])
        except (IndexError, ValueError) as e:
            self._mandatory_failed(UPTIME_PATH, e)
            return self._unavailable("uptime")
        return Fact("uptime", format_uptime(seconds))

    def get_install_date(self) -> Fact:
        """Age of the root filesystem, taken from its change time."""
        st = self.reader.stat("/")
        if st is None:
            return self._unavailable("install_date")
        installed = datetime.fromtimestamp(st.st_ctime)
        elapsed = (self._now() - installed).total_seconds()
        days = max(0, int(elapsed // 86400))
        return Fact(
            "install_date",
            i18n.t(
                "fact.install_date",
                date=installed.strftime("%Y-%m-%d %H:%M:%S"),
                days=days,
            ),
        )

    # ── Packages ───────────────────────────────────────────────────────────────

    def _count_listing(self, key: str, capability: str) -> Fact:
        choice = self.detector.detect(capability)
        if choice is None:
            return self._unavailable(key, "unsupported")
        result = self.runner.run(choice.command)
        if not result.ok:
            return self._unavailable(key)
        return Fact(key, i18n.t(f"fact.{key}", count=len(result.lines())))

    def get_packages(self) -> Fact:
        return self._count_listing("packages", PACKAGE_MANAGER)

    def get_flatpak(self) -> Fact:
        return self._count_listing("flatpak", FLATPAK)

    # ── Environment & hardware ─────────────────────────────────────────────────

    def get_shell(self) -> Fact:
        shell = self.reader.getenv("SHELL")
        if not shell:
            return self._unavailable("shell")
        return Fact("shell", shell)

    def get_cpu(self) -> Fact:
        text = self.reader.read(CPUINFO_PATH)
        if text is None:
            self._mandatory_failed(CPUINFO_PATH, "unreadable")
            return self._unavailable("cpu")
        for line in text.splitlines():
            if line.startswith("model name"):
                _, sep, model = line.partition(":")
                model = model.strip()
                if sep and model:
                    return Fact("cpu", model)
                break
        # ARM and some virtual CPUs have no "model name" line at all
        return self._unavailable("cpu")

    def get_memory(self) -> Fact:
        text = self.reader.read(MEMINFO_PATH)
        if text is None:
            self._mandatory_failed(MEMINFO_PATH, "unreadable")
            return self._unavailable("memory")

        meminfo: Dict[str, int] = {}
        for line in text.splitlines():
            key, _, val = line.partition(":")
            if key in ("MemTotal", "MemAvailable"):
                try:
                    meminfo[key] = int(val.split()[0])
                except (ValueError, IndexError):
                    break
                if len(meminfo) == 2:
                    break

        if len(meminfo) != 2:
            logger.debug("meminfo lacks MemTotal/MemAvailable: %s", sorted(meminfo))
            return self._unavailable("memory")
        return Fact("memory", format_memory(meminfo["MemTotal"], meminfo["MemAvailable"]))

    def get_disk(self) -> Fact:
        result = self.runner.run(DISK_COMMAND)
        lines = result.lines()
        # First line is the df header
        if not result.ok or len(lines) < 2:
            return self._unavailable("disk")
        fields = lines[-1].split()
        if len(fields) < 2:
            return self._unavailable("disk")
        used, size = fields[0], fields[1]
        return Fact("disk", f"{used:>5} / {size}")

    # ── Network ────────────────────────────────────────────────────────────────

    def get_local_ip(self) -> Fact:
        choice = self.detector.detect(NETWORK_TOOL)
        if choice is None:
            return self._unavailable("local_ip")
        result = self.runner.run(choice.command)
        addresses = extract_ipv4_addresses(result.stdout) if result.ok else []
        if not addresses:
            return self._unavailable("local_ip")
        return Fact("local_ip", addresses[0])

    def get_public_ip(self) -> Fact:
        if not self.public_ip:
            return self._unavailable("public_ip")
        try:
            resp = self.http.get(
                self.public_ip_url,
                headers={"User-Agent": "hostfetch/1.0"},
                timeout=self.http_timeout,
            )
        except (requests.RequestException, ValueError) as e:
            logger.debug("public IP lookup failed: %s", e)
            return self._unavailable("public_ip")
        if resp.status_code != 200:
            logger.debug("public IP lookup returned HTTP %s", resp.status_code)
            return self._unavailable("public_ip")

        lines = resp.text.strip().splitlines()
        candidate = lines[0].strip() if lines else ""
        try:
            address = str(ipaddress.ip_address(candidate))
        except ValueError:
            logger.debug("public IP lookup returned %r", candidate[:60])
            return self._unavailable("public_ip")
        return Fact("public_ip", address)

    def get_ip_addresses(self) -> List[Fact]:
        """Local address first, then the public one."""
        return [self.get_local_ip(), self.get_public_ip()]

"""
Lightweight i18n module for hostfetch.

Usage:
    import i18n
    i18n.init()                           # detect locale, load strings
    i18n.t('label.shell')                 # → "Shell"
    i18n.t('fact.packages', count=120)    # → "120 packages installed"

English strings are built in, so t() works before init() and when no
locales/ directory was installed.  A locales/<code>.json file overlays them.
"""

import json
import locale
import os
import sys
from pathlib import Path

_BASE_STRINGS = {
    # Report labels
    'label.identity': 'Host',
    'label.os': 'OS',
    'label.uptime': 'Uptime',
    'label.install_date': 'Installed',
    'label.packages': 'Packages',
    'label.flatpak': 'Flatpak',
    'label.shell': 'Shell',
    'label.cpu': 'CPU',
    'label.memory': 'Memory',
    'label.disk': 'Disk',
    'label.local_ip': 'Local IP',
    'label.public_ip': 'Public IP',

    # Fact values
    'fact.unknown_distro': 'Unknown Distro',
    'fact.uptime': '{days} days, {hours} hours, {minutes} minutes',
    'fact.install_date': '{date} ({days} days ago)',
    'fact.packages': '{count} packages installed',
    'fact.flatpak': '{count} Flatpak packages installed',

    # Placeholders for degraded facts
    'unavailable.identity': 'Hostname not available',
    'unavailable.os': 'OS information not available',
    'unavailable.uptime': 'Uptime not available',
    'unavailable.install_date': 'Installation date not available',
    'unavailable.packages': 'Package count not available',
    'unsupported.packages': 'Package manager not supported',
    'unavailable.flatpak': 'Flatpak package count not available',
    'unsupported.flatpak': 'Flatpak not installed',
    'unavailable.shell': 'Shell not available',
    'unavailable.cpu': 'CPU model not available',
    'unavailable.memory': 'Memory information not available',
    'unavailable.disk': 'Disk usage not available',
    'unavailable.local_ip': 'Local IP not available',
    'unavailable.public_ip': 'Public IP not available',

    # CLI
    'cli.arg_description': 'Print a short report of facts about this Linux host.',
    'cli.arg_json': 'print the facts as JSON instead of a text report',
    'cli.arg_labels': 'show text labels instead of Font Awesome icons',
    'cli.arg_no_public_ip': 'skip the public IP lookup (no network access)',
    'cli.arg_timeout': 'timeout in seconds for each external command and the HTTP lookup',
    'cli.arg_strict': 'abort when a mandatory system source cannot be read',
    'cli.arg_no_color': 'disable colored output',
    'cli.arg_lang': 'override the locale used for labels and messages',
    'cli.arg_debug': 'log probe failures to stderr',
    'cli.arg_version': 'show version information and exit',
    'cli.mandatory_failed': 'Cannot read mandatory source {source}: {error}',
    'cli.interrupted': 'Interrupted',
    'cli.timeout_positive': 'timeout must be a positive number of seconds, got {value!r}',
}

_strings: dict = dict(_BASE_STRINGS)


def _requested_locale(override: str = None) -> str:
    """Locale asked for on the command line, else by $LANG ("es_ES.UTF-8" → "es_ES")."""
    requested = override or os.environ.get('LANG', '').partition('.')[0]
    if requested in ('', 'C', 'POSIX'):
        return 'en'
    return requested


def _locale_search_path() -> list:
    """Directories that may hold locale overlays, most specific first."""
    dirs = []
    if os.environ.get('SNAP'):
        dirs.append(Path(os.environ['SNAP']) / 'locales')
    dirs.append(Path(__file__).resolve().parent / 'locales')
    dirs.append(Path(sys.prefix) / 'share' / 'hostfetch' / 'locales')
    return dirs


def _find_overlay(code: str):
    """Return the path of the best overlay for `code`, or None for English.

    A region-specific file wins over the bare language (es_MX.json, then es.json).
    """
    names = [code]
    language = code.split('_')[0]
    if language != code:
        names.append(language)
    for name in names:
        if name == 'en':
            break
        for directory in _locale_search_path():
            candidate = directory / f'{name}.json'
            if candidate.is_file():
                return candidate
    return None


def init(locale_override: str = None):
    """Reset to the built-in English strings and apply the matching overlay."""
    global _strings

    overlay = _find_overlay(_requested_locale(locale_override))
    _strings = dict(_BASE_STRINGS)
    if overlay is not None:
        _strings.update(json.loads(overlay.read_text(encoding='utf-8')))

    try:
        locale.setlocale(locale.LC_ALL, '')
    except locale.Error:
        pass


def t(key: str, **kwargs) -> str:
    """Look up a translated string by key, with optional placeholder interpolation.

    Placeholders use {name} syntax: t('fact.packages', count=120).
    Unknown keys return the key itself.
    """
    text = _strings.get(key, key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, IndexError):
            pass

    return text

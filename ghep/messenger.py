"""
Message streams and priority configuration.

Every component logs through a named stream (a standard ``logging`` logger)
such as ``GHEP``. Priorities per stream can be set programmatically or from
XML files of the form::

    <messenger_config>
      <priority msgstream="GHEP">WARN</priority>
    </messenger_config>

``configure()`` applies every file listed (':'-separated) in the
``GHEP_MSGCONF`` environment variable; later files win.
"""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Mapping, Optional

NOTICE = 25
logging.addLevelName(NOTICE, "NOTICE")

RECORD_STREAM = "GHEP"
MESSENGER_STREAM = "Messenger"
CONF_ENV_VAR = "GHEP_MSGCONF"

# substring match, first hit wins
_PRIORITIES = (
    ("FATAL", logging.CRITICAL),
    ("ALERT", logging.CRITICAL),
    ("CRIT", logging.CRITICAL),
    ("ERROR", logging.ERROR),
    ("WARN", logging.WARNING),
    ("NOTICE", NOTICE),
    ("INFO", logging.INFO),
    ("DEBUG", logging.DEBUG),
)


def get_logger(stream: str = RECORD_STREAM) -> logging.Logger:
    return logging.getLogger(stream)


def _log() -> logging.Logger:
    return get_logger(MESSENGER_STREAM)


def priority_from_string(text: str) -> int:
    """Map a priority name to a logging level.

    Matching is by substring, so "pWARN" and "WARNING" both map to WARNING.
    Unknown names fall back to INFO.
    """
    upper = text.upper()
    for key, level in _PRIORITIES:
        if key in upper:
            return level
    _log().warning("Unknown priority = %s - Setting to INFO", text)
    return logging.INFO


def set_priority_level(stream: str, level: int | str) -> None:
    if isinstance(level, str):
        level = priority_from_string(level)
    get_logger(stream).setLevel(level)


def set_priorities(levels: Mapping[str, int | str]) -> None:
    for stream, level in levels.items():
        set_priority_level(stream, level)


def set_priorities_from_xml(filename: str | Path) -> bool:
    """Read stream priorities from an XML file and apply them.

    Returns False if the file cannot be parsed or has the wrong root.
    """
    log = _log()
    log.info("Reading msg stream priorities from XML file: %s", filename)
    try:
        tree = ET.parse(filename)
    except (OSError, ET.ParseError) as e:
        log.error("XML file could not be parsed! [file: %s] (%s)", filename, e)
        return False

    root = tree.getroot()
    if root.tag != "messenger_config":
        log.error("XML doc. has invalid root element! [file: %s]", filename)
        return False

    for node in root.iter("priority"):
        stream = (node.get("msgstream") or "").strip()
        priority = (node.text or "").strip()
        if not stream:
            log.warning("Skipping <priority> without a msgstream attribute")
            continue
        log.info("Setting priority level: %s --> %s", stream, priority)
        set_priority_level(stream, priority_from_string(priority))
    return True


def configure(environ: Optional[Mapping[str, str]] = None) -> list[str]:
    """Apply the priority files listed in ``GHEP_MSGCONF``.

    Returns the list of files that were applied successfully.
    """
    env = os.environ if environ is None else environ
    conf = env.get(CONF_ENV_VAR, "")
    log = _log()
    log.info("$%s env.var = %s", CONF_ENV_VAR, conf)

    applied: list[str] = []
    if not conf:
        log.info("No additional messenger config XML file was specified")
        return applied

    for filename in conf.split(":"):
        filename = filename.strip()
        if not filename:
            continue
        if set_priorities_from_xml(filename):
            applied.append(filename)
        else:
            log.error("Priority levels from: %s were not set!", filename)
    return applied


def bool_as_io_string(on_off: bool) -> str:
    return "ON" if on_off else "OFF"

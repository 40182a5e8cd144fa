# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.

""" """

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import consts

_LOG = logging.getLogger(__name__)


@dataclass
class Config:
    port: str = consts.DEFAULT_PORT
    baudrate: int = consts.DEFAULT_BAUDRATE
    # read/write timeout in seconds
    timeout: float = consts.DEFAULT_TIMEOUT
    # default memory dump file
    memory_file: str = "kenwood-memory.json"


CONFIG = Config()

# seconds
MIN_TIMEOUT = 0.1


def load(file: Path) -> Config:
    _LOG.info("loading %s", file)
    if not file.exists():
        return CONFIG

    cfg = configparser.ConfigParser()
    with file.open() as fin:
        cfg.read_file(fin)

    CONFIG.port = cfg.get("main", "port", fallback="") or CONFIG.port
    CONFIG.baudrate = cfg.getint(
        "main", "baudrate", fallback=CONFIG.baudrate
    )
    CONFIG.timeout = max(
        cfg.getfloat("main", "timeout", fallback=CONFIG.timeout), MIN_TIMEOUT
    )
    CONFIG.memory_file = (
        cfg.get("main", "memory_file", fallback="") or CONFIG.memory_file
    )

    _LOG.debug("config %r", CONFIG)
    return CONFIG


def save(file: Path) -> None:
    _LOG.info("saving %s", file)
    _LOG.debug("config %r", CONFIG)

    cfg = configparser.ConfigParser()
    cfg["main"] = {
        "port": CONFIG.port,
        "baudrate": str(CONFIG.baudrate),
        "timeout": f"{CONFIG.timeout:.1f}",
        "memory_file": CONFIG.memory_file,
    }

    file.parent.mkdir(parents=True, exist_ok=True)
    with file.open(mode="w") as fout:
        cfg.write(fout)


def default_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME", "~/.config/")
    return Path(config_home, "kenwood_mem", "app.config").expanduser()

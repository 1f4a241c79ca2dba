from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from .exporter import EXPORT_FORMATS
from .model import Require

logger = logging.getLogger(__name__)


@dataclass
class Paths:
    root: Path
    in_dir: Path
    out_dir: Path
    local_dir: Path
    conf_file: Path


@dataclass
class Settings:
    owner_name: str = "me"
    require: Require = Require.IDENTIFIER
    export_format: str = "txt"


DEFAULT_CONF = """# xma local config (TOML)
owner_name = "me"
# minimum address level accepted from roster sources: identifier, logon or full
require = "identifier"
# roster export format: txt or vcf
export_format = "txt"
"""


def load_settings(conf: Path) -> Settings:
    """Read ``conf``; anything missing or invalid keeps its default."""
    settings = Settings()
    try:
        data = tomllib.loads(conf.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("%s: unreadable config, using defaults (%s)", conf, e)
        return settings

    settings.owner_name = str(data.get("owner_name", settings.owner_name))

    require = str(data.get("require", settings.require.value)).lower()
    try:
        settings.require = Require(require)
    except ValueError:
        logger.warning("%s: unknown require level %r, using identifier", conf, require)

    export_format = str(data.get("export_format", settings.export_format)).lower()
    if export_format in EXPORT_FORMATS:
        settings.export_format = export_format
    else:
        logger.warning("%s: unknown export format %r, using txt", conf, export_format)
    return settings


def ensure_workspace(base: Path | None = None) -> tuple[Paths, Settings]:
    root = Path(base or os.getcwd())
    in_dir = root / "roster-in"
    out_dir = root / "roster-out"
    local = root / "local"
    conf = local / "xma.conf"

    for d in (in_dir, out_dir, local):
        d.mkdir(parents=True, exist_ok=True)

    if not conf.exists():
        conf.write_text(DEFAULT_CONF, encoding="utf-8")

    return (
        Paths(root=root, in_dir=in_dir, out_dir=out_dir, local_dir=local, conf_file=conf),
        load_settings(conf),
    )

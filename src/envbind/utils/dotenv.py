"""
SignalCraft
Copyright (c) 2026 Chris Menendez.
All Rights Reserved.
See LICENSE for permitted use.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from ..binder import normalized_values
from ..dialects import DialectProfile
from ..sources import read_dotenv_file

logger = logging.getLogger(__name__)


def load_dotenv(
    path: Optional[Union[str, Path]] = None,
    *,
    dialect: Union[str, DialectProfile] = "python",
    override: bool = False,
) -> Dict[str, str]:
    """
    Export a .env file into os.environ:
      - Scanned with the given dialect (quotes, comments, multiline values)
      - Values are trimmed and unquoted the same way the binder does it
      - Naked variables are skipped
      - By default does NOT override existing environment variables
    Returns dict of loaded key/values.
    """
    env_path = Path(path) if path else Path(".env")
    if not env_path.exists():
        logger.debug("[load_dotenv] skipped missing file path=%s", env_path)
        return {}

    raw = read_dotenv_file(env_path, dialect)

    loaded: Dict[str, str] = {}
    for key, val in normalized_values(raw).items():
        if val is None:
            continue
        if override or (key not in os.environ):
            os.environ[key] = val

        loaded[key] = val

    logger.debug("[load_dotenv] path=%s loaded=%d", env_path, len(loaded))
    return loaded

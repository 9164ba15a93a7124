"""HPM SDK access: locate the SoC headers that belong to a chip.

SDK layout: <sdk_base>/soc/<series>/<variant>/<header>

The SDK root is passed to HeaderLocator explicitly. Reading HPM_SDK_BASE
is left to the caller (see sdk_base_from_env).
"""

import os
from pathlib import Path
from typing import Optional

from hpmdata.errors import HeaderReadError

SDK_BASE_ENV = 'HPM_SDK_BASE'
DEFAULT_SDK_DIR = 'hpm_sdk'

DMAMUX_HEADER = 'hpm_dmamux_src.h'
IRQ_HEADER = 'hpm_soc_irq.h'

# Chip name prefix -> SoC directory, first match wins.
# HPM5301 has its own headers and must be checked before the HPM53 bucket.
SOC_DIRS = [
    ('HPM5301', 'soc/HPM5300/HPM5301'),
    ('HPM53',   'soc/HPM5300/HPM5361'),
    ('HPM5E',   'soc/HPM5E00/HPM5E31'),
    ('HPM62',   'soc/HPM6200/HPM6280'),
    ('HPM63',   'soc/HPM6300/HPM6360'),
    ('HPM67',   'soc/HPM6700/HPM6750'),
    ('HPM64',   'soc/HPM6700/HPM6750'),
    ('HPM68',   'soc/HPM6800/HPM6880'),
    ('HPM6E',   'soc/HPM6E00/HPM6E80'),
    ('HPM6P',   'soc/HPM6P00/HPM6P81'),
]


def sdk_base_from_env(environ=None, cwd=None) -> Path:
    """Return the SDK root from HPM_SDK_BASE, or ./hpm_sdk if it is not set."""
    environ = os.environ if environ is None else environ
    base = environ.get(SDK_BASE_ENV)
    if base:
        return Path(base)
    return Path(cwd if cwd is not None else Path.cwd()) / DEFAULT_SDK_DIR


def read_header(path: Path) -> str:
    """Read a header file as text."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise HeaderReadError(path, e) from e


class HeaderLocator:
    """Maps chip names to header files below an SDK root."""

    def __init__(self, sdk_base):
        self.sdk_base = Path(sdk_base)

    def soc_dir(self, chip_name: str) -> Optional[str]:
        for prefix, subdir in SOC_DIRS:
            if chip_name.startswith(prefix):
                return subdir
        return None

    def header_path(self, chip_name: str, header: str) -> Optional[Path]:
        """Return the path of `header` for this chip, or None if there is none on disk."""
        subdir = self.soc_dir(chip_name)
        if subdir is None:
            return None
        candidate = self.sdk_base / subdir / header
        if candidate.exists():
            return candidate
        return None

    def dmamux_header(self, chip_name: str) -> Optional[Path]:
        return self.header_path(chip_name, DMAMUX_HEADER)

    def irq_header(self, chip_name: str) -> Optional[Path]:
        return self.header_path(chip_name, IRQ_HEADER)

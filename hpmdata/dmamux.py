"""DMAMUX request numbers from hpm_dmamux_src.h.

The header lists one define per DMA request source:

    #define HPM_DMA_SRC_UART0_RX (0x8UL) /* UART0 Receive */

Each source is attached to the peripheral named by the part before the
first underscore, as a DMA channel routed through the DMAMUX.
"""

import re
from pathlib import Path

from hpmdata.errors import HeaderParseError
from hpmdata.sdk import read_header

DMAMUX_INSTANCE = 'DMAMUX'

_DMA_SRC_PATTERN = re.compile(r'#define\s+HPM_DMA_SRC_(\w+)\s+\((0x[0-9A-F]+)UL\)')


def parse_dmamux(text: str, source) -> dict:
    """Return {signal_name: request_number} for all DMA source defines in text."""
    dmamux = {}
    for m in _DMA_SRC_PATTERN.finditer(text):
        signal_name = m.group(1)
        value = int(m.group(2)[2:], 16)
        if value > 0xFF:
            raise HeaderParseError(source, f"DMA request {signal_name}={m.group(2)} exceeds 8 bits")
        dmamux[signal_name] = value
    if not dmamux:
        raise HeaderParseError(source, "No DMAMUX definitions found")
    return dmamux


def parse_dmamux_from_header(header_path: Path) -> dict:
    dmamux = parse_dmamux(read_header(header_path), header_path)
    print(f"    Loaded {len(dmamux)} dmamux entries from header: {Path(header_path).name}")
    return dmamux


def parse_signal(signal_name: str, periph_name: str) -> str:
    """Derive the DMA signal label of a request source.

    GPTMR0_CH1 -> CH1, UART0_RX -> RX, I2C0 -> GLOBAL, anything else
    without an underscore, or ending in one, keeps the peripheral name.
    """
    if '_' in signal_name:
        suffix = signal_name.split('_')[-1]
        if not suffix:
            return periph_name
        if signal_name.startswith('GPTMR') or signal_name.startswith('NTMR'):
            return f"CH{suffix}"
        return suffix
    if signal_name.startswith('I2C'):
        return 'GLOBAL'
    return periph_name


def attach_dma_channels(core: dict, dmamux: dict) -> int:
    """Append a DMA channel to each peripheral of the core matching a request source."""
    count = 0
    for signal_name, request_no in dmamux.items():
        signal_periph_prefix = signal_name.split('_')[0]
        for periph in core.get('peripherals', []):
            if periph['name'] != signal_periph_prefix:
                continue
            periph.setdefault('dma_channels', []).append({
                'signal': parse_signal(signal_name, periph['name']),
                'dmamux': DMAMUX_INSTANCE,
                'request': request_no,
            })
            count += 1
    return count


def handle_chip_dmamux_include(chip: dict, locator) -> int:
    """Load DMAMUX data for every core that asks for it via include_dmamux.

    The marker is removed before anything else, so a second call on the same
    chip does nothing. Returns the number of DMA channels attached.
    """
    count = 0
    for core in chip.get('cores', []):
        if core.get('include_dmamux') is None:
            continue
        del core['include_dmamux']
        print(f"    Loading DMAMUX from header file for chip: {chip['name']}")

        header_path = locator.dmamux_header(chip['name'])
        if header_path is None:
            print(f"    ⚠️  No DMAMUX header found for chip: {chip['name']}, skipping")
            continue

        dmamux = parse_dmamux_from_header(header_path)
        count += attach_dma_channels(core, dmamux)
    return count

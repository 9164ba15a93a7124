"""Interrupt numbers from hpm_soc_irq.h and per-peripheral interrupt lists.

Header lines look like

    #define IRQn_HDMA    34    /* HDMA IRQ */

Only defines followed by a comment are taken; the helper macros in the same
header have none.

Loading the header table and filling peripheral interrupts are separate
steps: fill_peripheral_interrupts() works from the interrupts already listed
on each core, not from the header.
"""

import re
from pathlib import Path
from typing import Optional

from hpmdata.errors import HeaderParseError
from hpmdata.sdk import read_header

# Header name -> name used in the chip data.
# For other inconsistencies the header names are kept, they are the official source.
INTERRUPT_NAME_FIXES = {
    'DAC': 'DAC0',      # HPM6360
}

_IRQ_PATTERN = re.compile(r'#define\s+IRQn_(\w+)\s+(\d+)\s+/\*.*\*/')


def fix_interrupt_naming(name: str) -> str:
    return INTERRUPT_NAME_FIXES.get(name, name)


def parse_interrupts(text: str, source) -> dict:
    """Return {interrupt_name: irq_number} for all IRQn defines in text."""
    interrupts = {}
    for m in _IRQ_PATTERN.finditer(text):
        irq_name = m.group(1)
        irq_number = int(m.group(2))
        if irq_number > 0xFF:
            raise HeaderParseError(source, f"Interrupt number {irq_name}={irq_number} exceeds 8 bits")
        interrupts[fix_interrupt_naming(irq_name)] = irq_number
    if not interrupts:
        raise HeaderParseError(source, "No interrupt definitions found")
    return interrupts


def parse_interrupts_from_header(header_path: Path) -> dict:
    interrupts = parse_interrupts(read_header(header_path), header_path)
    print(f"    Loaded {len(interrupts)} interrupts from header: {Path(header_path).name}")
    return interrupts


def load_interrupts_from_header(chip_name: str, locator) -> Optional[dict]:
    """Load the interrupt table for a chip.

    Returns None if the SDK has no interrupt header for it; the caller
    decides what that means.
    """
    header_path = locator.irq_header(chip_name)
    if header_path is None:
        return None
    return parse_interrupts_from_header(header_path)


def parse_interrupt_signal(irq_name: str) -> str:
    """Derive the signal label of an interrupt.

    GPIO0_A -> PA, ACMP0_1 -> CH1, PWM0_FAULT -> FAULT, HDMA -> GLOBAL, PWM0_ -> GLOBAL.
    """
    if '_' in irq_name:
        suffix = irq_name.split('_')[-1]
        if not suffix:
            return 'GLOBAL'
        if irq_name.startswith('GPIO'):
            return f"P{suffix}"
        if irq_name.startswith('ACMP'):
            return f"CH{suffix}"
        return suffix
    return 'GLOBAL'


def fill_peripheral_interrupts(chip: dict) -> int:
    """Attach each core interrupt to the peripherals whose name prefixes it.

    Returns the number of interrupt records attached.
    """
    count = 0
    for core in chip.get('cores', []):
        interrupts = list(core.get('interrupts') or [])
        for interrupt in interrupts:
            irq_name = interrupt['name']
            for periph in core.get('peripherals', []):
                if not irq_name.startswith(periph['name']):
                    continue
                # UART1 would otherwise pick up UART10..UART15
                if periph['name'].startswith('UART') and periph['name'] != irq_name:
                    continue
                periph_ints = periph.get('interrupts')
                if periph_ints is None:
                    periph_ints = periph['interrupts'] = []
                periph_ints.append({
                    'signal': parse_interrupt_signal(irq_name),
                    'interrupt': irq_name,
                })
                count += 1
    return count

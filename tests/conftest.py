from pathlib import Path

import pytest

DMAMUX_H = """\
#ifndef HPM_DMAMUX_SRC_H
#define HPM_DMAMUX_SRC_H

/* dma mux definitions */
#define HPM_DMA_SRC_GPTMR0_0 (0x0UL) /* GPTMR0 channel 0 */
#define HPM_DMA_SRC_GPTMR0_1 (0x1UL) /* GPTMR0 channel 1 */
#define HPM_DMA_SRC_UART0_RX (0x8UL) /* UART0 Receive */
#define HPM_DMA_SRC_UART0_TX (0x9UL) /* UART0 Transmit */
#define HPM_DMA_SRC_I2C0 (0x1CUL) /* I2C0 */
#define HPM_DMA_SRC_XPI0_RX (0x3EUL) /* XPI0 Receive */
#define HPM_DMA_SRC_ADC0 (0x3FUL) /* ADC0 */

#endif /* HPM_DMAMUX_SRC_H */
"""

IRQ_H = """\
#ifndef HPM_SOC_IRQ_H
#define HPM_SOC_IRQ_H

/* List of external IRQs */
#define IRQn_GPIO0_A    1   /* GPIO0_A IRQ */
#define IRQn_GPIO0_B    2   /* GPIO0_B IRQ */
#define IRQn_UART0      13  /* UART0 IRQ */
#define IRQn_UART1      14  /* UART1 IRQ */
#define IRQn_DAC        40  /* DAC IRQ */
#define IRQn_HDMA       34  /* HDMA IRQ */

#endif /* HPM_SOC_IRQ_H */
"""


@pytest.fixture
def make_sdk(tmp_path):
    """Create a fake SDK tree; returns the SDK root."""
    def _make(soc_dir='soc/HPM6700/HPM6750', dmamux=DMAMUX_H, irq=IRQ_H):
        root = tmp_path / 'hpm_sdk'
        d = root / soc_dir
        d.mkdir(parents=True, exist_ok=True)
        if dmamux is not None:
            (d / 'hpm_dmamux_src.h').write_text(dmamux)
        if irq is not None:
            (d / 'hpm_soc_irq.h').write_text(irq)
        return root
    return _make


@pytest.fixture
def chip():
    return {
        'name': 'HPM6750IVM1',
        'cores': [{
            'name': 'HPM6750IVM1',
            'peripherals': [
                {'name': 'GPTMR0', 'dma_channels': []},
                {'name': 'UART0', 'dma_channels': []},
                {'name': 'UART1', 'dma_channels': []},
                {'name': 'I2C0', 'dma_channels': []},
                {'name': 'ADC0', 'dma_channels': []},
                {'name': 'GPIO0', 'dma_channels': []},
            ],
            'interrupts': [
                {'name': 'GPIO0_A', 'number': 1},
                {'name': 'UART0', 'number': 13},
                {'name': 'UART1', 'number': 14},
                {'name': 'UART10', 'number': 50},
            ],
            'include_dmamux': '../dmamux/HPM6750.yaml',
        }],
    }


@pytest.fixture
def dmamux_text():
    return DMAMUX_H


@pytest.fixture
def irq_text():
    return IRQ_H

#!/usr/bin/env python3
"""
Merge DMAMUX and interrupt data from the HPM SDK into chip descriptions.

Usage:
    python3 -m hpmdata fill chips/HPM6750IVM1.yaml [-o out/] [--sdk PATH]
    python3 -m hpmdata irqs HPM6360IPA [-o irqs.yaml]
    python3 -m hpmdata dmamux HPM5361EG1
    python3 -m hpmdata locate HPM5301xEGx

The SDK root is taken from --sdk, then from $HPM_SDK_BASE, then ./hpm_sdk.
"""

import argparse
import sys
from pathlib import Path

from hpmdata import chipfile
from hpmdata.dmamux import handle_chip_dmamux_include, parse_dmamux_from_header
from hpmdata.errors import HpmDataError
from hpmdata.interrupts import fill_peripheral_interrupts, load_interrupts_from_header
from hpmdata.sdk import DMAMUX_HEADER, IRQ_HEADER, HeaderLocator, sdk_base_from_env


def _locator(args):
    sdk_base = args.sdk if args.sdk is not None else sdk_base_from_env()
    return HeaderLocator(sdk_base)


def _write_mapping(mapping, output):
    if output is None:
        chipfile.dump_mapping(mapping, sys.stdout)
    else:
        with open(output, 'w', encoding='utf-8') as f:
            chipfile.dump_mapping(mapping, f)


def fill_chip(chip, locator, dmamux=True, interrupts=True):
    """Run the DMAMUX and peripheral interrupt steps on one chip.

    Returns (dma_channel_count, interrupt_count).
    """
    dma_count = handle_chip_dmamux_include(chip, locator) if dmamux else 0
    irq_count = fill_peripheral_interrupts(chip) if interrupts else 0
    return dma_count, irq_count


def cmd_fill(args):
    locator = _locator(args)
    if args.output_dir is not None:
        args.output_dir.mkdir(parents=True, exist_ok=True)

    print(f"SDK: {locator.sdk_base}")
    failed = []
    for chip_path in args.chips:
        if not chip_path.exists():
            print(f"  ERROR processing {chip_path}: file not found")
            failed.append(chip_path)
            continue
        try:
            chip = chipfile.load_chip(chip_path)
            if not args.no_validate:
                chipfile.validate_chip(chip, chip_path)
            print(f"\nProcessing {chip['name']} ({chip_path})...")
            dma_count, irq_count = fill_chip(
                chip, locator,
                dmamux=not args.skip_dmamux,
                interrupts=not args.skip_interrupts)
            out_path = chip_path if args.output_dir is None else args.output_dir / chip_path.name
            chipfile.dump_chip(chip, out_path)
        except Exception as e:
            print(f"  ERROR processing {chip_path}: {type(e).__name__}: {e}")
            failed.append(chip_path)
            continue

        print(f"  + {dma_count} dma channels, {irq_count} peripheral interrupts -> {out_path}")

    print(f"\n{'='*60}")
    print(f"  Chips processed: {len(args.chips) - len(failed)}")
    if failed:
        print(f"  Chips failed:    {len(failed)}")
    print(f"{'='*60}")
    return 1 if failed else 0


def cmd_irqs(args):
    locator = _locator(args)
    try:
        interrupts = load_interrupts_from_header(args.chip_name, locator)
    except HpmDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if interrupts is None:
        print(f"No interrupt header found for chip: {args.chip_name}", file=sys.stderr)
        return 1
    _write_mapping(interrupts, args.output)
    return 0


def cmd_dmamux(args):
    locator = _locator(args)
    header_path = locator.dmamux_header(args.chip_name)
    if header_path is None:
        print(f"No DMAMUX header found for chip: {args.chip_name}", file=sys.stderr)
        return 1
    try:
        dmamux = parse_dmamux_from_header(header_path)
    except HpmDataError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    _write_mapping(dmamux, args.output)
    return 0


def cmd_locate(args):
    locator = _locator(args)
    for header in (DMAMUX_HEADER, IRQ_HEADER):
        path = locator.header_path(args.chip_name, header)
        print(f"{header:18} {path if path is not None else 'not found'}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog='hpm-data-extract',
        description='Merge DMAMUX and interrupt data from HPM SDK headers into chip descriptions.')
    subs = parser.add_subparsers(dest='command', required=True)

    fill = subs.add_parser('fill', help='Fill DMA channels and peripheral interrupts of chip files')
    fill.add_argument('chips', type=Path, nargs='+', help='Chip description YAML files')
    fill.add_argument('-o', '--output-dir', type=Path,
                      help='Write results here instead of updating the files in place')
    fill.add_argument('--skip-dmamux', action='store_true', help='Do not load DMAMUX headers')
    fill.add_argument('--skip-interrupts', action='store_true',
                      help='Do not fill peripheral interrupts')
    fill.add_argument('--no-validate', action='store_true',
                      help='Do not check the structure of the chip files')
    fill.set_defaults(func=cmd_fill)

    irqs = subs.add_parser('irqs', help='Dump the interrupt table of a chip')
    irqs.add_argument('chip_name')
    irqs.add_argument('-o', '--output', type=Path, help='Output YAML file (default: stdout)')
    irqs.set_defaults(func=cmd_irqs)

    dmamux = subs.add_parser('dmamux', help='Dump the DMAMUX request table of a chip')
    dmamux.add_argument('chip_name')
    dmamux.add_argument('-o', '--output', type=Path, help='Output YAML file (default: stdout)')
    dmamux.set_defaults(func=cmd_dmamux)

    locate = subs.add_parser('locate', help='Show which SDK headers a chip uses')
    locate.add_argument('chip_name')
    locate.set_defaults(func=cmd_locate)

    for sub in (fill, irqs, dmamux, locate):
        sub.add_argument('--sdk', type=Path, help='HPM SDK root (default: $HPM_SDK_BASE or ./hpm_sdk)')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())

"""Command line driver for padsampler.

Subcommands
-----------
presets   List the presets the catalog server offers.
load      Load one preset, print the slot table and optionally play pads.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from .app import PadState, SamplerApp
from .config import SamplerConfig
from .logging_setup import configure_logging
from .pads.keymap import pad_grid_order


logger = logging.getLogger(__name__)


# -- shared helpers ----------------------------------------------------------

def _add_server_args(parser: argparse.ArgumentParser):
    parser.add_argument("--api", default=None,
                        help="Catalog base URL (default: $PADSAMPLER_API_BASE "
                             "or http://localhost:3000)")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Per-request timeout in seconds")
    parser.add_argument("--max-concurrency", type=int, default=None,
                        help="Samples fetched at once (0 = all)")


def _build_config(args) -> SamplerConfig:
    config = SamplerConfig.from_env()
    if args.api:
        config.acquisition.api_base = args.api.rstrip("/")
    if args.timeout is not None:
        config.acquisition.request_timeout = args.timeout
    if args.max_concurrency is not None:
        config.acquisition.max_concurrency = args.max_concurrency
    return config


class _NullOutput:
    """Output used when nothing is going to be played."""

    def play(self, buffer, start, end):
        pass


def _print_slot_table(app: SamplerApp):
    views = app.pad_views
    for row_start in range(0, len(views), 4):
        cells = []
        for slot in pad_grid_order()[row_start:row_start + 4]:
            view = views[slot]
            if view.state is PadState.READY:
                sound = app.bank.sound_at(slot)
                text = f"{view.label[:14]} {sound.duration:.2f}s"
            elif view.state is PadState.ERROR:
                text = "error"
            else:
                text = "-"
            cells.append(f"[{view.key or ' '}] {slot:2d} {text:<22}")
        print(" ".join(cells))


# -- subcommand handlers -----------------------------------------------------

async def _list_presets(args):
    app = SamplerApp(_NullOutput(), _build_config(args))
    try:
        presets = await app.refresh_presets()
    finally:
        await app.aclose()

    if not presets:
        print("no presets")
        return 1
    for index, preset in enumerate(presets):
        category = f" ({preset.category})" if preset.category else ""
        print(f"{index:3d}  {preset.name}{category}  {len(preset.samples)} samples")
    return 0


async def _load(args, output):
    app = SamplerApp(output, _build_config(args))
    try:
        presets = await app.refresh_presets()
        if args.preset.isdigit():
            target = int(args.preset)
        else:
            matches = [i for i, p in enumerate(presets) if p.name == args.preset]
            if not matches:
                print(f"unknown preset: {args.preset}")
                return 1
            target = matches[0]

        try:
            results = await app.load_preset(target)
        except IndexError as e:
            print(e)
            return 1

        _print_slot_table(app)
        for result in results:
            if not result.ok:
                print(f"slot {result.slot_index}: {result.outcome.reason.value} {result.outcome.message}")

        for slot in args.play or ():
            if app.on_pad_pressed(slot):
                sound = app.bank.sound_at(slot)
                start, end = sound.playback_bounds()
                await asyncio.sleep(end - start)
            else:
                logger.warning("slot %d is empty", slot)
        return 0
    finally:
        await app.aclose()


def _cmd_presets(args):
    return asyncio.run(_list_presets(args))


def _cmd_load(args):
    if not args.play:
        return asyncio.run(_load(args, _NullOutput()))

    from .audio.output import SoundDeviceOutput

    device = args.output
    if isinstance(device, str) and device.isdigit():
        device = int(device)
    output = SoundDeviceOutput(device=device)
    if not output.start():
        print("could not open the audio device")
        return 1
    try:
        return asyncio.run(_load(args, output))
    finally:
        output.stop()

# -- main --------------------------------------------------------------------

def main(argv=None):
    ap = argparse.ArgumentParser(
        description="padsampler - 16-pad sampler core")
    sub = ap.add_subparsers(dest="command")

    # -- presets -------------------------------------------------------------
    sp_presets = sub.add_parser("presets", help="List catalog presets")
    _add_server_args(sp_presets)
    sp_presets.set_defaults(func=_cmd_presets)

    # -- load ----------------------------------------------------------------
    sp_load = sub.add_parser("load", help="Load a preset and show its pads")
    _add_server_args(sp_load)
    sp_load.add_argument("preset", help="Preset index or name")
    sp_load.add_argument("--play", type=int, nargs="*", default=None,
                         help="Slots to play after loading")
    sp_load.add_argument("--output", default=None, help="Audio output device")
    sp_load.set_defaults(func=_cmd_load)

    args = ap.parse_args(argv)
    if args.command is None:
        ap.error("a command is required: presets or load")

    level = configure_logging(default_level="WARNING")
    logger.debug("log level: %s", logging.getLevelName(level))
    return args.func(args)

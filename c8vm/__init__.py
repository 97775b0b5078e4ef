#!/usr/bin/env python3

"""
Main Startup Module

Simply call main(args) to start the emulator, replacing args with a dictionary
of options.  This can be done via the Terminal or GUI.

Only the filename must be supplied.  Defaults can be specified with a 'None', or by
leaving an option out.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from time import perf_counter
from .config import Config
from .constants import APP_NAME, APP_INTRO, APP_COPYRIGHT
from .debugger import Debugger
from .display import Display
from .vm import VM, VMMode

FRAME_FREQ = 60.0  # 60Hz host display refresh, input scan and fading
FRAME_INTERVAL = 1.0 / FRAME_FREQ


class StartupError(Exception):
    pass


def run(vm, display, renderer, inputs):
    # Runs until the host asks to quit, or the program exits
    next_frame_time = 0
    next_perf_report_time = 0
    frame_count = 0
    last_instr_count = vm.instr_count

    while vm.mode is not VMMode.EMPTY:
        this_time = perf_counter()  # Do this first for maximum precision

        if this_time >= next_perf_report_time:
            next_perf_report_time = int(this_time) + 1.0
            renderer.set_title("{} - {} FPS, {} OPS".format(APP_NAME, frame_count, vm.instr_count - last_instr_count))
            last_instr_count = vm.instr_count
            frame_count = 0

        # Prevent unnecessary display rendering in excess of host frame rate
        if this_time >= next_frame_time:
            if inputs.process_messages():
                return

            next_frame_time = this_time + FRAME_INTERVAL

            if display.fade_enabled:
                display.animate_fade()

            renderer.refresh_display(display)
            frame_count += 1

        vm.update(this_time)


def main(args):
    print("".join((APP_INTRO, APP_COPYRIGHT)))
    cfg = Config.from_args(args)
    opt_renderer = args.get("renderer")
    auto_select_renderer = opt_renderer is None  # If necessary, try PyGame first, then the null plugins

    # flake8: noqa: F401
    if auto_select_renderer or opt_renderer == "pygame":
        # pylint: disable=unused-import, import-outside-toplevel, raise-missing-from
        try:
            import pygame
        except ImportError:
            if auto_select_renderer:
                print("PyGame does not appear to be installed.  Running without display, input or sound.")
                opt_renderer = "null"
            else:
                raise StartupError(
                    "PyGame does not appear to be installed."
                )
        else:
            from .inputs.i_pygame import Inputs
            from .renderers.r_pygame import Renderer

            if cfg.sound.enable:
                from .audio.a_pygame import Audio
            else:
                from .audio.a_null import Audio

    if opt_renderer == "null":
        # pylint: disable=import-outside-toplevel
        from .inputs.i_null import Inputs
        from .renderers.r_null import Renderer
        from .audio.a_null import Audio

    graphics = cfg.graphics
    display = Display(
        on_colour=graphics.on_colour,
        off_colour=graphics.off_colour,
        scale_factor=graphics.scale_factor,
        enable_grid=graphics.enable_grid,
        enable_fade=graphics.enable_fade,
        fade_speed=graphics.fade_speed
    )

    renderer = Renderer(window_size=graphics.window_size)
    audio = Audio(cfg.sound)

    # Set up debugger and live output if necessary
    debugger = Debugger()
    debugger.set_live(cfg.cpu.debug_mode)

    vm = VM(display, cfg, audio, debugger)
    inputs = Inputs(vm, renderer)

    try:
        vm.load_file(args["filename"])
        vm.set_mode(VMMode.RUN)
        run(vm, display, renderer, inputs)
    finally:
        # The VM has stopped, so shut down the rendering framework.  __del__ cannot be relied upon when using PyPy
        audio.shutdown()
        inputs.shutdown()
        renderer.shutdown()

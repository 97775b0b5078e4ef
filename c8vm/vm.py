#!/usr/bin/env python3

"""
Virtual Machine (CHIP-8 and Super-CHIP)

Ties the state, the instruction set and the display together.  The VM doesn't
own a clock or a loop of its own.  Whoever drives it calls update() as often as
it likes (at least once per frame), and the VM works out from the elapsed time
whether an instruction and/or the 60Hz timers are due.  step() can also be
called directly, to single-step a program.

Modes:
    EMPTY  - Nothing is loaded.  update() and step() do nothing.
    RUN    - update() executes instructions at the configured rate.
    STEP   - Only explicit calls to step() execute instructions.  Entered when
             a breakpoint is reached.
    PAUSED - Entered when an instruction fails.  Timers keep running.

Any VMError raised by an instruction pauses the VM and is passed on to the
caller unchanged.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from copy import copy
from enum import Enum
from random import Random
from time import perf_counter
from .audio.a_null import Audio as NullAudio
from .breakpoint import BreakpointMap
from .constants import ADDR_MASK, PROG_OFFSET, PROG_MAX_SIZE, MEM_SIZE, FONTS_END, RPL_FLAG_COUNT, RPL_ENDIAN, \
    TIMER_INTERVAL
from .debugger import Debugger
from .display import Resolution
from .errors import VMError, InvalidOpcode, ROMSizeError
from .hostio import Loader
from .instr_set import load_instruction_set
from .instruction import decode_opcode, disassemble
from .state import VMState


class VMMode(Enum):
    EMPTY = 0
    RUN = 1
    STEP = 2
    PAUSED = 3


class VM:
    def __init__(self, display, cfg, audio=None, debugger=None):
        self.display = display
        self.cfg = cfg
        self.audio = NullAudio(cfg.sound) if audio is None else audio
        self.debugger = Debugger() if debugger is None else debugger
        self.state = VMState()
        self.breakpoints = BreakpointMap()
        self.rng = Random(cfg.cpu.rng_seed)
        self.rpl_flags = bytearray(cfg.cpu.rpl_flags.to_bytes(RPL_FLAG_COUNT, RPL_ENDIAN))
        self.loader = Loader()

        # Fx0A key wait
        self.wait_for_key_release = False
        self.key_to_release = 0

        # Timing
        self.last_time = None
        self.exec_accumulator = 0.0
        self.timer_accumulator = 0.0
        self.instr_count = 0  # For performance reports

        self._mode = VMMode.EMPTY
        self._prev_mode = VMMode.EMPTY
        self.quirks = None
        self.instructions = None
        self.apply_quirks(cfg.quirks)

    # Modes

    @property
    def mode(self):
        return self._mode

    @property
    def prev_mode(self):
        return self._prev_mode

    def set_mode(self, mode):
        if mode is self._mode:
            return

        self._prev_mode = self._mode
        self._mode = mode

    def pause(self):
        if self._mode in (VMMode.RUN, VMMode.STEP):
            self.set_mode(VMMode.PAUSED)

    def resume(self):
        if self._mode is VMMode.PAUSED and self._prev_mode in (VMMode.RUN, VMMode.STEP):
            self.set_mode(self._prev_mode)

    # Quirks

    def set_extension(self, extension):
        self.quirks.extension = extension
        self.instructions = load_instruction_set(extension)

    def apply_quirks(self, quirks):
        # Own copy, so set_extension() leaves cfg.quirks alone
        self.quirks = copy(quirks)
        self.set_extension(quirks.extension)
        self.display.set_wrap(quirks.wrap_x, quirks.wrap_y)

    # Execution

    def update(self, this_time=None):
        if self._mode is VMMode.EMPTY:
            return

        if this_time is None:
            this_time = perf_counter()

        if self.last_time is None:
            # Nothing to measure against yet
            self.last_time = this_time
            return

        delta_time = this_time - self.last_time
        self.last_time = this_time
        self.exec_accumulator += delta_time
        self.timer_accumulator += delta_time
        cpu_cfg = self.cfg.cpu

        if self._mode is VMMode.RUN:
            if cpu_cfg.is_uncapped() or self.exec_accumulator >= 1.0 / cpu_cfg.cycles_per_sec:
                self.exec_accumulator = 0.0

                if self.state.pc in self.breakpoints:
                    # Stop on the breakpoint, before the instruction there runs
                    self.set_mode(VMMode.STEP)
                else:
                    self.step()
        else:
            self.exec_accumulator = 0.0

        # Timers run at 60Hz, whatever the instruction rate
        while self.timer_accumulator >= TIMER_INTERVAL:
            self.state.update_timers()
            self.timer_accumulator -= TIMER_INTERVAL

        if self.cfg.sound.enable and self._mode is VMMode.RUN and self.state.st > 0:
            self.audio.play()

    def step(self):
        if self._mode is VMMode.EMPTY:
            return

        state = self.state
        pc = state.pc
        opcode = state.memory.read_word(pc)

        if self.debugger.is_live():
            self.debugger.output(self, pc, opcode)

        # Program counter updates after fetch, but before execute
        state.pc = (pc + 2) & ADDR_MASK

        try:
            self.exec_instr(opcode)
        except VMError:
            self.set_mode(VMMode.PAUSED)

            if self.debugger.is_live():
                self.debugger.output(self, pc, opcode, verbose=True)

            raise

        self.instr_count += 1

    def exec_instr(self, opcode):
        kind = self.decode_opcode(opcode)
        instruction = self.instructions.get(kind)

        if instruction is None:
            # Decodes, but isn't part of the current extension
            raise InvalidOpcode(opcode, self._instr_offset())

        instruction(self, opcode)

    def decode_opcode(self, opcode):
        kind = decode_opcode(opcode)

        if kind is None:
            raise InvalidOpcode(opcode, self._instr_offset())

        return kind

    def _instr_offset(self):
        # The failing instruction sits just behind the program counter, which may have wrapped to 0x000
        return (self.state.pc - 2) & ADDR_MASK

    # Programs

    def load(self, rom):
        if len(rom) > PROG_MAX_SIZE:
            raise ROMSizeError("Size of program must be <= {} bytes".format(PROG_MAX_SIZE))

        memory = self.state.memory
        memory.zero_block(PROG_OFFSET, PROG_MAX_SIZE)
        memory.write_block(PROG_OFFSET, rom)
        self.state.rom_size = len(rom)
        self.reset()

    def load_file(self, filename):
        try:
            rom = self.loader.load_binary(filename, PROG_MAX_SIZE)
        except OSError as error:
            raise VMError(
                "file '{}' cannot be opened. May not exist or may not have read permission ({})".format(
                    filename, error.strerror
                )
            ) from None

        self.load(rom)

    def reset(self):
        self.state.reset()
        self.display.set_resolution(Resolution.LOW)
        self.display.clear()
        self.wait_for_key_release = False
        self.key_to_release = 0
        self.last_time = None
        self.exec_accumulator = 0.0
        self.timer_accumulator = 0.0

    def unload(self):
        # Everything above the fonts is wiped
        self.state.memory.zero_block(FONTS_END, MEM_SIZE - FONTS_END)
        self.state.rom_size = 0
        self.reset()
        self.set_mode(VMMode.EMPTY)

    # Host

    def update_input_table(self, key_code, pressed, modified=False):
        # Ctrl+X and just X are different things
        if modified:
            return

        key = self.cfg.inputs.layout.get(key_code)

        if key is not None:
            self.state.input_table[key] = pressed

    def disassemble(self, opcode):
        return disassemble(opcode, self.quirks.jump_offset_use_v0)

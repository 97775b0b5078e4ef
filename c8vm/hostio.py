#!/usr/bin/env python3

"""
Host I/O Functionality

Handles reading ROM binaries from the host, ready for loading into the VM.
ROMs are raw bytes, with no header to check.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Loader:
    def load_binary(self, filename, max_size=None):
        # With a maximum size, reads one byte past it at most.  That is enough for the caller to know it's too big.
        with open(filename, "rb") as f:
            return f.read() if max_size is None else f.read(max_size + 1)

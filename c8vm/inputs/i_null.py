#!/usr/bin/env python3

"""
Null Input Plugin

Serves as a base class for other Input plugins.  Can be used on its own if zero
input functionality is required.

Input plugins only pass host key codes on to the VM, which knows the layout.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class InputsError(Exception):
    pass


class Inputs:
    def __init__(self, vm, renderer):
        if vm is None:
            raise InputsError("Inputs need a VM to send keys to")

        self.vm = vm
        self.renderer = renderer

    def process_messages(self):
        return False  # Don't exit the program

    def shutdown(self):
        pass

#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries from the host for later writing into memory.
ROMs have no header and are not validated; the bytes are handed over as they
are.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

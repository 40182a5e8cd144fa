#! /usr/bin/env python3
# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.

"""
Development runner for kenwood_mem; enable icecream when available.
"""

from contextlib import suppress

with suppress(ImportError):
    import icecream

    icecream.install()
    icecream.ic.configureOutput(includeContext=True)


from kenwood_mem import main

main.main()

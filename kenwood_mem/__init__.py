# Copyright © 2024 Karol Będkowski <Karol Będkowski@kkomp>
#
# Distributed under terms of the GPLv3 license.

"""Memory manager for Kenwood TM-D710/TM-V71 radios."""

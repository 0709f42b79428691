"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/models/__init__.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Package initializer for grid data models. Exports Shortcut,
                Folder and the lookup helpers for easy access.
------------------------------------------------------------------------------
"""

from .item import (
    ROOT,
    Folder,
    GridIntegrityError,
    IconKind,
    IconSpec,
    Item,
    ItemKind,
    Location,
    Shortcut,
    check_integrity,
    dump_items,
    find_item,
    iter_all_ids,
    parse_items,
)

"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/folders.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Folder container rules for the root sequence. Every operation
                takes the current sequence and returns a new list, the input
                is never touched. Invalid preconditions return an unchanged
                copy instead of raising.
------------------------------------------------------------------------------
"""

import itertools
import time
from typing import Iterable, List, Optional, Sequence, Union

from startgrid.logger import get_logger
from startgrid.models.item import (
    DEFAULT_FOLDER_TITLE,
    ROOT,
    Folder,
    Location,
    Shortcut,
    find_item,
    iter_all_ids,
)

logger = get_logger("folders")

AnyItem = Union[Shortcut, Folder]

# Timestamp-seeded so ids stay unique across restarts, monotonic within a process
_folder_seq = itertools.count(int(time.time() * 1000))


def new_folder_id(existing_ids: Iterable[str] = ()) -> str:
    taken = set(existing_ids)
    while True:
        candidate = f"folder-{next(_folder_seq)}"
        if candidate not in taken:
            return candidate


def array_move(seq: Sequence, from_index: int, to_index: int) -> list:
    """
    Moves one element and shifts everything in between by one.
    Out-of-range indices leave the order untouched.
    """
    result = list(seq)
    if from_index == to_index:
        return result
    if not (0 <= from_index < len(result) and 0 <= to_index < len(result)):
        return result
    element = result.pop(from_index)
    result.insert(to_index, element)
    return result


def _without(items: Sequence[AnyItem], loc: Location) -> List[AnyItem]:
    """Removes the located item. A folder left without children is dropped."""
    if loc.in_root:
        return [item for index, item in enumerate(items) if index != loc.index]

    result: List[AnyItem] = []
    for item in items:
        if item.id == loc.container and isinstance(item, Folder):
            remaining = [child for child in item.children if child.id != loc.item.id]
            if remaining:
                result.append(item.model_copy(update={"children": remaining}))
            else:
                logger.debug(f"Folder {item.id} emptied, removing it")
        else:
            result.append(item)
    return result


def _root_folder(items: Sequence[AnyItem], folder_id: str) -> Optional[Location]:
    loc = find_item(items, folder_id)
    if loc is None or not loc.in_root or not isinstance(loc.item, Folder):
        return None
    return loc


def move_into_folder(items: Sequence[AnyItem], leaf_id: str, folder_id: str) -> List[AnyItem]:
    """
    Appends a leaf to a folder's children and removes it from its previous
    container.
    """
    leaf_loc = find_item(items, leaf_id)
    folder_loc = _root_folder(items, folder_id)
    if leaf_loc is None or folder_loc is None:
        logger.debug(f"move_into_folder: {leaf_id} or {folder_id} not found")
        return list(items)
    if isinstance(leaf_loc.item, Folder):
        logger.debug(f"move_into_folder: {leaf_id} is a folder, folders cannot nest")
        return list(items)
    if leaf_loc.container == folder_id:
        return list(items)

    result: List[AnyItem] = []
    for item in _without(items, leaf_loc):
        if item.id == folder_id and isinstance(item, Folder):
            item = item.model_copy(update={"children": [*item.children, leaf_loc.item]})
        result.append(item)
    return result


def create_folder(
    items: Sequence[AnyItem],
    target_leaf_id: str,
    source_leaf_id: str,
    folder_id: Optional[str] = None,
    title: str = DEFAULT_FOLDER_TITLE,
) -> List[AnyItem]:
    """
    Replaces the target's root slot with a new folder holding the target
    followed by the source. The source leaves its old root position.
    """
    if target_leaf_id == source_leaf_id:
        return list(items)

    target_loc = find_item(items, target_leaf_id)
    source_loc = find_item(items, source_leaf_id)
    if target_loc is None or source_loc is None:
        return list(items)
    if not (target_loc.in_root and source_loc.in_root):
        logger.debug("create_folder: both items must sit in the root sequence")
        return list(items)
    if isinstance(target_loc.item, Folder) or isinstance(source_loc.item, Folder):
        logger.debug("create_folder: both items must be leaves")
        return list(items)

    folder = Folder(
        id=folder_id or new_folder_id(iter_all_ids(items)),
        title=title,
        children=[target_loc.item, source_loc.item],
    )

    result: List[AnyItem] = []
    for index, item in enumerate(items):
        if index == source_loc.index:
            continue
        result.append(folder if index == target_loc.index else item)
    logger.info(f"Created folder {folder.id} from {target_leaf_id} + {source_leaf_id}")
    return result


def remove_from_folder(
    items: Sequence[AnyItem],
    leaf_id: str,
    folder_id: str,
    insertion_hint: Optional[str] = None,
) -> List[AnyItem]:
    """
    Ejects a leaf from a folder back into the root sequence.

    If the folder becomes empty the leaf takes over the folder's root slot.
    Otherwise the folder keeps its slot and the leaf is inserted next to the
    root item named by insertion_hint, or right after the folder when there
    is no usable hint.
    """
    folder_loc = _root_folder(items, folder_id)
    if folder_loc is None:
        return list(items)
    folder = folder_loc.item
    leaf = next((child for child in folder.children if child.id == leaf_id), None)
    if leaf is None:
        return list(items)

    remaining = [child for child in folder.children if child.id != leaf_id]
    folder_index = folder_loc.index
    result: List[AnyItem] = list(items)

    if not remaining:
        result[folder_index] = leaf
        logger.info(f"Folder {folder_id} dissolved, {leaf_id} promoted to its slot")
        return result

    result[folder_index] = folder.model_copy(update={"children": remaining})

    target_index = None
    if insertion_hint and insertion_hint != folder_id:
        hint_loc = find_item(result, insertion_hint)
        if hint_loc is not None and hint_loc.in_root:
            target_index = hint_loc.index

    if target_index is None:
        insert_at = folder_index + 1
    elif target_index >= folder_index:
        insert_at = target_index + 1
    else:
        insert_at = target_index
    result.insert(insert_at, leaf)
    return result


def reorder_within(
    items: Sequence[AnyItem], container_id: str, from_index: int, to_index: int
) -> List[AnyItem]:
    """Single-element move inside the root sequence or one folder."""
    if from_index == to_index:
        return list(items)
    if container_id == ROOT:
        return array_move(items, from_index, to_index)

    folder_loc = _root_folder(items, container_id)
    if folder_loc is None:
        return list(items)
    result: List[AnyItem] = list(items)
    folder = folder_loc.item
    result[folder_loc.index] = folder.model_copy(
        update={"children": array_move(folder.children, from_index, to_index)}
    )
    return result


def delete_folder(items: Sequence[AnyItem], folder_id: str) -> List[AnyItem]:
    """Removes a folder together with all of its children."""
    folder_loc = _root_folder(items, folder_id)
    if folder_loc is None:
        return list(items)
    logger.info(f"Deleting folder {folder_id} with {len(folder_loc.item.children)} children")
    return _without(items, folder_loc)


def remove_item(items: Sequence[AnyItem], item_id: str) -> List[AnyItem]:
    """
    Explicit remove of a root item or a folder child. Removing a folder's
    last child removes the folder as well.
    """
    loc = find_item(items, item_id)
    if loc is None:
        return list(items)
    return _without(items, loc)


def rename_folder(items: Sequence[AnyItem], folder_id: str, title: str) -> List[AnyItem]:
    folder_loc = _root_folder(items, folder_id)
    if folder_loc is None:
        return list(items)
    result: List[AnyItem] = list(items)
    result[folder_loc.index] = folder_loc.item.model_copy(
        update={"title": (title or "").strip() or DEFAULT_FOLDER_TITLE}
    )
    return result


def update_item(items: Sequence[AnyItem], updated: Shortcut) -> List[AnyItem]:
    """Replaces a leaf by id wherever it lives, keeping its position."""
    loc = find_item(items, updated.id)
    if loc is None or isinstance(loc.item, Folder) or not isinstance(updated, Shortcut):
        return list(items)

    result: List[AnyItem] = list(items)
    if loc.in_root:
        result[loc.index] = updated
        return result

    folder = loc.parent
    children = list(folder.children)
    children[loc.index] = updated
    result = [
        item.model_copy(update={"children": children}) if item.id == folder.id else item
        for item in result
    ]
    return result

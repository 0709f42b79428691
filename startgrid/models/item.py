"""
------------------------------------------------------------------------------
Project:        StartGrid
File:           startgrid/models/item.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Defines the Shortcut/Folder tagged union that makes up the root
                sequence of the start-page grid. Folders hold leaves only, so
                nesting depth is capped by the model itself. Also provides
                id lookup across root and folder children.
------------------------------------------------------------------------------
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Dict, Iterator, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Container identifier of the top-level sequence
ROOT = "root"

DEFAULT_FOLDER_TITLE = "Folder"


class ItemKind(str, Enum):
    LEAF = "leaf"
    FOLDER = "folder"


class IconKind(str, Enum):
    """How the icon of a shortcut is sourced."""
    AUTO = "auto"        # detected from the target site
    SOURCE = "source"    # picked by the user from an icon source
    CUSTOM = "custom"    # uploaded image data
    LETTER = "letter"    # single letter badge


class IconSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: IconKind = IconKind.AUTO
    url: Optional[str] = None
    data: Optional[str] = None
    letter: Optional[str] = None

    def display_letter(self, title: str = "") -> str:
        """Letter shown for letter badges and as fallback for broken images."""
        if self.letter:
            return self.letter[0].upper()
        if title:
            return title[0].upper()
        return "A"


class Shortcut(BaseModel):
    """A leaf item pointing at a destination."""
    model_config = ConfigDict(frozen=True)

    id: str
    kind: Literal["leaf"] = "leaf"
    title: str = ""
    url: str = ""
    icon: Optional[IconSpec] = None
    icon_padding: bool = False

    @property
    def is_folder(self) -> bool:
        return False


class Folder(BaseModel):
    """
    A container item. Children are typed as leaves, a folder placed inside
    another folder is rejected by validation.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    kind: Literal["folder"] = "folder"
    title: str = DEFAULT_FOLDER_TITLE
    children: List[Shortcut] = Field(default_factory=list)

    @property
    def is_folder(self) -> bool:
        return True

    def preview(self, limit: int = 9) -> List[Shortcut]:
        """Children shown on the folder tile (first nine)."""
        return list(self.children[:limit])


Item = Annotated[Union[Shortcut, Folder], Field(discriminator="kind")]

_ITEMS_ADAPTER = TypeAdapter(List[Item])


class GridIntegrityError(ValueError):
    """Raised when an item sequence breaks the container invariants."""


@dataclass(frozen=True)
class Location:
    """Result of an id lookup: the item, its container and its index there."""
    item: Union[Shortcut, Folder]
    container: str
    index: int
    parent: Optional[Folder] = None

    @property
    def in_root(self) -> bool:
        return self.container == ROOT


def find_item(items: Sequence[Union[Shortcut, Folder]], item_id: Optional[str]) -> Optional[Location]:
    """
    Finds an item by id in the root sequence, then one level down in folders.
    Absence is a normal outcome and yields None.
    """
    if item_id is None:
        return None

    for index, item in enumerate(items):
        if item.id == item_id:
            return Location(item=item, container=ROOT, index=index)

    for item in items:
        if isinstance(item, Folder):
            for index, child in enumerate(item.children):
                if child.id == item_id:
                    return Location(item=child, container=item.id, index=index, parent=item)
    return None


def iter_all_ids(items: Sequence[Union[Shortcut, Folder]]) -> Iterator[str]:
    """Yields every id in root order, folder children right after their folder."""
    for item in items:
        yield item.id
        if isinstance(item, Folder):
            for child in item.children:
                yield child.id


def check_integrity(items: Sequence[Union[Shortcut, Folder]]) -> None:
    """
    Verifies id uniqueness across all containers, the leaf-only rule for
    folder children and that no folder is empty.

    Raises:
        GridIntegrityError: On the first violation found.
    """
    seen = set()
    for item_id in iter_all_ids(items):
        if item_id in seen:
            raise GridIntegrityError(f"Duplicate item id: {item_id}")
        seen.add(item_id)

    for item in items:
        if isinstance(item, Folder):
            if not item.children:
                raise GridIntegrityError(f"Folder {item.id} has no children")
            for child in item.children:
                if child.kind != ItemKind.LEAF:
                    raise GridIntegrityError(f"Folder {item.id} contains non-leaf {child.id}")


def parse_items(raw: List[Dict[str, Any]]) -> List[Union[Shortcut, Folder]]:
    """Validates a list of plain dicts into items."""
    return _ITEMS_ADAPTER.validate_python(raw)


def dump_items(items: Sequence[Union[Shortcut, Folder]]) -> List[Dict[str, Any]]:
    return [item.model_dump(mode="json") for item in items]

# services/folders.py — resolve "/type/YYYY/MM[/slug]" to a Wix folder id
from __future__ import annotations
import logging

from errors import AdminError, FolderResolutionError
from paths import path_segments

log = logging.getLogger(__name__)


class FolderResolver:
    """
    Walks a folder path one segment at a time from the root folder: list the
    children of the current folder, descend into the one whose display name
    matches, or create it when absent. Segments are resolved strictly in
    order since each lookup needs the previous id.

    Two callers resolving the same brand-new path at once can both create
    it; the list-then-create sequence is not atomic on the remote side.
    """

    def __init__(self, media, root_folder_id: str = "media-root",
                 default_folder_id: str = "media-root"):
        self.media = media
        self.root_folder_id = root_folder_id
        self.default_folder_id = default_folder_id

    def find_or_create(self, name: str, parent_id: str) -> str:
        try:
            children = self.media.list_folders(parent_id)
        except AdminError as e:
            raise FolderResolutionError(f"cannot list folders under {parent_id}: {e.message}") from e
        for child in children:
            if child.display_name == name:
                return child.id
        try:
            return self.media.create_folder(name, parent_id).id
        except AdminError as e:
            raise FolderResolutionError(f"cannot create folder {name!r} under {parent_id}: {e.message}") from e

    def resolve(self, folder_path: str) -> str | None:
        current = self.root_folder_id
        try:
            for segment in path_segments(folder_path):
                current = self.find_or_create(segment, current)
        except FolderResolutionError as e:
            log.warning("folder resolution failed for %s: %s", folder_path, e.message)
            return None
        return current

    def resolve_or_default(self, folder_path: str) -> str:
        folder_id = self.resolve(folder_path)
        if folder_id is None:
            log.warning("falling back to folder %s for %s", self.default_folder_id, folder_path)
            return self.default_folder_id
        return folder_id

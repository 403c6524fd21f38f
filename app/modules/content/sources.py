"""Local file source.

Collects the content files of a repository checkout and hands them to the
batch driver as raw file items, each tagged with its owning collection.
"""

import hashlib
import os
import posixpath
from pathlib import Path
from typing import List, Optional, Sequence

from infrastructure.logging import get_module_logger
from modules.content.domain.models import FileFolder, RawFileItem
from modules.content.registry import CollectionRegistry, EntryFolderInfo

logger = get_module_logger()

IGNORED_DIRECTORIES = frozenset({".git", "node_modules"})


def git_blob_sha(data: bytes) -> str:
    """Compute the SHA-1 git uses to identify a blob with the given bytes."""
    header = f"blob {len(data)}\0".encode()
    return hashlib.sha1(header + data).hexdigest()


def _matched_depth(folder_path: str, path: str) -> Optional[int]:
    """Length of ``folder_path`` when it contains ``path``, otherwise None."""
    folder_path = folder_path.strip("/")
    if not folder_path:
        return 0
    if path.startswith(f"{folder_path}/"):
        return len(folder_path)
    return None


def find_folder(path: str, folders: Sequence[EntryFolderInfo]) -> Optional[FileFolder]:
    """Find the collection a repository path belongs to.

    A collection file listed by exact path wins. Otherwise the entry
    collection with the deepest folder containing the path is chosen, so
    ``content/posts`` takes precedence over ``content``.

    Args:
        path: Repository path of the file, with forward slashes.
        folders: Folder descriptors from ``CollectionRegistry.folders``.

    Returns:
        FileFolder of the matching collection (or collection file), or None.
    """
    best: Optional[FileFolder] = None
    best_depth = -1

    for info in folders:
        file_path_map = info.folder.file_path_map
        if file_path_map is not None:
            if path in file_path_map.values():
                return info.folder
            continue

        for folder_path in info.folder_path_map.values():
            depth = _matched_depth(folder_path, path)
            if depth is not None and depth > best_depth:
                best, best_depth = info.folder, depth

    return best


def collect_local_files(
    root: Path, registry: CollectionRegistry, encoding: str = "utf-8"
) -> List[RawFileItem]:
    """Collect the files of a local repository that belong to a collection.

    Args:
        root: Repository root directory.
        registry: Resolved collections of the site.
        encoding: Text encoding of the content files.

    Returns:
        Raw file items in path order.
    """
    root = Path(root)
    folders = registry.folders()
    files: List[RawFileItem] = []

    for dir_path, dir_names, file_names in os.walk(root):
        dir_names[:] = sorted(name for name in dir_names if name not in IGNORED_DIRECTORIES)

        for file_name in sorted(file_names):
            full_path = Path(dir_path) / file_name
            path = full_path.relative_to(root).as_posix()
            folder = find_folder(path, folders)
            if folder is None:
                continue

            data = full_path.read_bytes()
            try:
                text = data.decode(encoding)
            except UnicodeDecodeError:
                logger.debug("binary_file_ignored", path=path)
                continue

            files.append(
                RawFileItem(
                    name=posixpath.basename(path),
                    path=path,
                    text=text,
                    content_id=git_blob_sha(data),
                    size=len(data),
                    folder=folder,
                )
            )

    files.sort(key=lambda item: item.path)

    logger.info("local_files_collected", root=str(root), file_count=len(files))

    return files

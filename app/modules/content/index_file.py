"""Index file policy.

Some static site generators (Hugo in particular) keep section-level content
in a special ``_index`` file next to the leaf pages. Such files are skipped
when a folder collection is read unless the collection opts in.
"""

import re
from typing import Callable, Optional

from modules.content.domain.models import IndexFileConfig
from modules.content.domain.schemas import CollectionConfig, IndexFileOptions
from modules.content.paths import get_base_name

DEFAULT_INDEX_FILE_NAME = "_index"

INDEX_FILE_REGEX = re.compile(r"^_index(?:\.[A-Za-z0-9_-]+)?\.[^.]+$")

IndexFileLookup = Callable[[CollectionConfig], Optional[IndexFileConfig]]


def is_index_file(path: str) -> bool:
    """Check whether the path points to an ``_index`` or ``_index.<locale>`` file."""
    return bool(INDEX_FILE_REGEX.match(get_base_name(path)))


def get_index_file(collection: CollectionConfig) -> Optional[IndexFileConfig]:
    """Get the collection's index file configuration.

    Args:
        collection: Collection configuration.

    Returns:
        IndexFileConfig if index file inclusion is enabled for this entry
        collection, otherwise None.
    """
    index_file = collection.index_file

    if not collection.is_entry_collection or not index_file:
        return None

    if isinstance(index_file, IndexFileOptions):
        return IndexFileConfig(
            name=index_file.name or DEFAULT_INDEX_FILE_NAME,
            label=index_file.label,
        )

    return IndexFileConfig(name=DEFAULT_INDEX_FILE_NAME)


def should_skip_index_file(
    path: str,
    file_name: Optional[str],
    collection: CollectionConfig,
    sub_path_template: Optional[str],
    extension: str,
    *,
    index_file_lookup: IndexFileLookup = get_index_file,
) -> bool:
    """Decide whether a file must be left out because it is a special index file.

    Args:
        path: Repository path of the file.
        file_name: Collection file name, for file collection items.
        collection: Owning collection.
        sub_path_template: Collection ``path`` template.
        extension: Collection file extension.
        index_file_lookup: Resolves the collection's index file inclusion.

    Returns:
        True if the file should be skipped.
    """
    if file_name:
        return False

    if not is_index_file(path):
        return False

    if index_file_lookup(collection) is not None:
        return False

    # Only Markdown collections may address the index file through their path
    if (
        sub_path_template
        and sub_path_template.split("/")[-1] == DEFAULT_INDEX_FILE_NAME
        and extension == "md"
    ):
        return False

    return True

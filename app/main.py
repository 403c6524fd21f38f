from pathlib import Path

from dotenv import load_dotenv

from infrastructure.configuration import settings
from infrastructure.logging import configure_logging, get_module_logger
from modules.content import (
    CollectionRegistry,
    EntryIngestionService,
    collect_local_files,
    load_site_config,
)

load_dotenv()

logger = get_module_logger()


def main():
    """Prepare the entries of a local content repository and log a summary."""
    configure_logging()
    ingestion = settings.ingestion

    logger.info(
        "application_startup",
        git_sha=settings.GIT_SHA,
        repository_root=ingestion.repository_root,
        site_config_path=ingestion.site_config_path,
        max_workers=ingestion.max_workers,
    )

    root = Path(ingestion.repository_root)
    site_config = load_site_config(root / ingestion.site_config_path)
    registry = CollectionRegistry(site_config)

    files = collect_local_files(root, registry, encoding=ingestion.encoding)
    result = EntryIngestionService(registry, ingestion_settings=ingestion).prepare(files)

    for error in result.errors:
        logger.warning("entry_file_rejected", error=str(error))

    logger.info(
        "ingestion_completed",
        entry_count=len(result.entries),
        error_count=len(result.errors),
    )
    return result


if __name__ == "__main__":
    main()

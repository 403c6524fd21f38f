"""Feature modules for the content ingestion engine."""

"""Infrastructure modules for the content ingestion engine.

Centralized infrastructure components:
- configuration: Settings management (settings, IngestionSettings)
- logging: Structured logging (configure_logging, get_module_logger, bind_batch_context)
"""

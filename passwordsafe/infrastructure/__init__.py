"""Infrastructure adapters: HTTP transport, retry and logging."""

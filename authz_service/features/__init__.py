"""Feature modules: permission storage, the authorization flow and health checks."""

"""filedex: directory-scoped file listing and caching loaders."""

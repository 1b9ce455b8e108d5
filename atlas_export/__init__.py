"""atlasExport - quota-bounded Jira/Confluence export with optional vectorization."""

"""HTTP API for chapter, passage and reading-plan lookups."""

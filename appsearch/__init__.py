"""In-memory app search: matches queries against a live app catalog."""

"""REST API for errorgen."""

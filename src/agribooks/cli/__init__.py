"""Command-line tools for operating a running AgriBooks API."""

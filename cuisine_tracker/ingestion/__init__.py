"""
Ingestion layer — snapshot files for the CLI.

Submodules:
  snapshot — JSON catalog / progress loader with duplicate checks

The analytics engine itself never reads files; only the CLI calls in here.
"""

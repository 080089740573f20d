"""HTTP API for Pickem."""

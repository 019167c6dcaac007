"""The `gae-support` command-line interface."""

"""CLI subcommands for flakekeeper."""

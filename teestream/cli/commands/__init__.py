"""teestream CLI subcommands."""

"""teestream CLI — Typer-based command-line interface.

Provides the ``teestream`` command. ``teestream tee`` copies stdin to
stdout and any number of files through a Distributor.

All human-facing output uses Rich and goes to stderr, so stdout carries
only the copied bytes.
"""

"""Command line entry points for linkcell."""

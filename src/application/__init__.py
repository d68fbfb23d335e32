"""Application layer: pipeline driver and command line entry point."""

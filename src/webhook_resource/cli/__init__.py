"""Command line entry points for the Concourse resource scripts."""

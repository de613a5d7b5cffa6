"""Command-line interface for SquadRota."""

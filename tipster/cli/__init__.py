"""CLI module for tipster."""

"""Floworx email automation workflow synthesizer."""

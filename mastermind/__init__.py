"""Mastermind game engine and API."""

"""Configuration package for the hold'em engine.

``poker`` holds the tuning constants; ``settings`` holds the validated table
configuration passed to ``initialize_game``.
"""

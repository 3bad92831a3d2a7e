# link_scout/crawler/__init__.py
"""Tree traversal, reference scanners and finding assembly."""

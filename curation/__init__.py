"""Homepage curation and ranking engine.

Derives lifecycle states for stories, detects rank collisions, assembles
the homepage sections, and coordinates optimistic edits against the item
store.
"""

__version__ = "0.1.0"

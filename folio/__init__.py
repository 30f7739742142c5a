"""
FOLIO - Formatted Online Layout for Interactive Overviews

The core of an interactive resume editor: an owned document model, its
synchronization with rendered views, and its durable local store.

Architecture:
- Editing Context: Document model, Document Store mutations, JSON import/export
- Persistence Context: Durable key-value slots and debounced saving
- Projection Context: Pure view models and HTML rendering for collaborating views
"""

__version__ = "0.1.0"

"""LocalVision signage backend.

Stores upload left-side media, a shared right-side collection is targeted
per store, TV players poll generated playlists and report heartbeats.
"""

__all__: list[str] = []

"""Building blocks for a game-world editing toolkit: hashing, mapped files, a thread-safe queue, components, a window manager, rectangle packing and text editing."""

__version__ = "0.1.0"
__all__ = [
    "hashing",
    "mapped_file",
    "safe_queue",
    "components",
    "window_mgr",
    "rect_pack",
    "textedit",
]
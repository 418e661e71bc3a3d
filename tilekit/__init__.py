"""Layout geometry, navigation, command messages and configuration generation for tiling window managers."""

__version__ = "0.1.0"

__all__ = [
    "ahk",
    "arrangement",
    "config_generation",
    "custom_layout",
    "default_layout",
    "direction",
    "kinds",
    "layout",
    "rect",
    "socket_message",
]
"""JSON input and output for walls and rooms."""

from .parser import load_walls, parse_walls, rooms_to_dict, save_rooms

__all__ = ["load_walls", "parse_walls", "rooms_to_dict", "save_rooms"]

"""
UI package for the function, hex and disassembly columns.

This package implements the curses interface: the WindowManager that lays
out and draws the three columns and status bar, and the InputHandler that
turns key presses into navigation, editing and write-back commands.
"""

from .window import WindowManager
from .input_handler import InputHandler

__all__ = ['WindowManager', 'InputHandler']

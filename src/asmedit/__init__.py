"""
asmedit - terminal editor for the disassembled functions of a binary.
"""

__version__ = "0.1.0"

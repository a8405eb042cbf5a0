#!/usr/bin/python3

"""
Entry point script for asmedit.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

from asmedit.__main__ import main


if __name__ == "__main__":
    main()

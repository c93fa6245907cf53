#!/usr/bin/env python3
"""
Simple server startup script for the Patent Translation Review API.
"""

import os
import sys

# Make the src/ layout importable without an install
sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "src"))

if __name__ == "__main__":
    from main import main
    main()

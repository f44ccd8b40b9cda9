#!/usr/bin/env python3
"""
Metaball Field — quick launcher.

Usage:
    python run_metafield.py [options]

Run ``python run_metafield.py --help`` for full options.
"""

from metafield.app import main

if __name__ == "__main__":
    main()

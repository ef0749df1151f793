#!/usr/bin/env python3
"""
Main script for running geometry optimizations from input files.
"""

import sys

from geomopt.cli import main

if __name__ == "__main__":
	sys.exit(main())

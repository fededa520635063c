#!/usr/bin/env python3
"""
Entry point for running ddl_formatter as a module.
This file enables: python -m ddl_formatter
"""

import sys

from .main import main

if __name__ == '__main__':
    sys.exit(main())

"""
Main entry point for the Lox interpreter when run as a module.
"""

import sys
from lox.lox_cli import main

if __name__ == '__main__':
    sys.exit(main())

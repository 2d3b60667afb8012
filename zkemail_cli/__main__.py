"""
Module execution entry point.

Allows running with: python -m zkemail_cli
"""

import sys
from zkemail_cli.main import main

if __name__ == "__main__":
    sys.exit(main())

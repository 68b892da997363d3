#!/usr/bin/env python3
"""
scriptui demo window
Entry point script for running from a source checkout
"""

import sys
from scriptui.__main__ import main
if __name__ == "__main__":
    sys.exit(main())

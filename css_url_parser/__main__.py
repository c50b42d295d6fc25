"""
Main entry point for the css_url_parser package.

Allows running the parser as: python -m css_url_parser
"""

import sys

from css_url_parser.cli import main

if __name__ == "__main__":
    sys.exit(main())

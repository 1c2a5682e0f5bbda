"""Main entry point for running pyrequests as a module.

Usage:
    python -m pyrequests get <url>
    python -m pyrequests --help
"""

from pyrequests.cli import main

if __name__ == '__main__':
    main()

"""
smashlog CLI Entry Point

Allows running the package as a module: python -m smashlog
"""

from smashlog.cli import main

if __name__ == "__main__":
    main()

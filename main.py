#!/usr/bin/env python3
"""chronomatch - Date/time expression extraction

Development entry point; installed copies use the ``chronomatch`` script.
"""

import sys
from pathlib import Path

# Adding src to path for development
sys.path.insert(0, str(Path(__file__).parent / "src"))


def main():
    """Main entry point for the chronomatch command line."""
    try:
        from chronomatch.cli import main as cli_main
    except ImportError as e:
        print(f"Failed to import chronomatch: {e}")
        print("Try running: pip install -e .")
        sys.exit(1)

    sys.exit(cli_main())


if __name__ == "__main__":
    main()

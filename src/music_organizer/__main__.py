"""Allow ``python -m music_organizer``."""

import sys

from music_organizer.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())

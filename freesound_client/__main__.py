"""Package entry point for ``python -m freesound_client``.

WHY: Users run quick lookups and downloads from the terminal as
``python -m freesound_client search cars``. Python's ``-m`` flag looks for
``__main__.py`` inside the package and executes it.

HOW: Delegates to the CLI's main() function.
"""

import sys

from freesound_client.cli import main

if __name__ == "__main__":
    sys.exit(main())

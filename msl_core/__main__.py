"""MSL module entry point"""

import sys

from msl_core.cli import main

if __name__ == "__main__":
    sys.exit(main())

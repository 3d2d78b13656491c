import sys

from spacewx.cli import main

sys.exit(main())

import sys

from autoscrape.cli import main

sys.exit(main())

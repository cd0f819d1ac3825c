import sys

from persistence_lib.cli import main

sys.exit(main())

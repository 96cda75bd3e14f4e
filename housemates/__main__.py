import sys

from housemates.cli import main

sys.exit(main())

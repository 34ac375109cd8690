import sys

from wxcal.cli import main

sys.exit(main())

import sys

from featgen.cli import main

sys.exit(main())

import sys

from casey.cli import main

sys.exit(main())

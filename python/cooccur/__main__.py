import sys

from cooccur.cli import main

sys.exit(main())

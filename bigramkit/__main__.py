import sys

from bigramkit.cli import main

sys.exit(main())

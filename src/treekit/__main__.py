import sys

from treekit.cli import main

sys.exit(main())

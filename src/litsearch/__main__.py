import sys

from litsearch.cli import main

sys.exit(main())

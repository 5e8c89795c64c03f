import sys

from opexport.cli import main

sys.exit(main())

import sys

from rs2gene.cli import main

sys.exit(main())

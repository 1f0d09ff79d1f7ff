import sys

from lensray.cli import main

sys.exit(main())

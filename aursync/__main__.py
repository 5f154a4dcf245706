import sys

from aursync.main import main

sys.exit(main())

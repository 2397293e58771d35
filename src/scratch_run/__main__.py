import sys

from scratch_run.main import main

sys.exit(main())

import sys

from worker.handler import main

sys.exit(main())

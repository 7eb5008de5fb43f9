import sys

from dimstep.main import main

sys.exit(main())

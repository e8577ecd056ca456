import sys

from rtss.main import main

sys.exit(main())

import sys

from termtype.main import main

sys.exit(main())

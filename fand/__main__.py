import sys

from fand.main import main

sys.exit(main())

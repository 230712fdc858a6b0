import sys

from laserheat.main import main

sys.exit(main())

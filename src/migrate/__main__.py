import sys

from migrate.handler import main


sys.exit(main())

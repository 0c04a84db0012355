import sys

from gitree.cli.main import main

sys.exit(main())

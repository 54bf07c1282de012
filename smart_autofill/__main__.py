import sys

from smart_autofill.cli.cli import main

sys.exit(main())

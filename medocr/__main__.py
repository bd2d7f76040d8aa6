import sys

from medocr.cli import main

sys.exit(main())

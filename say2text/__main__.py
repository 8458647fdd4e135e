import sys

from say2text.cli import main

sys.exit(main())

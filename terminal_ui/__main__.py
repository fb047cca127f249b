import sys

from terminal_ui.main import main

sys.exit(main())

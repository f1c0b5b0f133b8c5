"""Allow ``python -m ghrelay``."""

import sys

from ghrelay.main import main

sys.exit(main())

"""Allow ``python -m pathtracer`` as an alias of ``pathtracer-render``."""

import sys

from pathtracer.cli import render_main

sys.exit(render_main())

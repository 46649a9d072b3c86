# mkctx/__init__.py

__version__ = "0.1.0"

# Console-script entry point, also reachable as `python -m mkctx`
from .cli import main

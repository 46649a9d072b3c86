# mkctx/__main__.py

from .cli import main

main()

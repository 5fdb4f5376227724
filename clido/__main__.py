import sys

from clido.cli import main

main(['clido'] + sys.argv[1:])

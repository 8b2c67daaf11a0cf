"""python -m ri_exporter"""

from ri_exporter.cli import main

main()

from pylogistic.cli import main

main()

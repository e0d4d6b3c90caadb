from clselect.cli import main

main()

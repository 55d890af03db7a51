from grel.cli.app import main

main()

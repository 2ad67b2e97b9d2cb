from spotimeta.cli.main import main

main()

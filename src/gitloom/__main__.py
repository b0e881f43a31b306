from gitloom.cli.cli import main

main()

from pewsetup.cli.app import main

main()

from initsort.bootstrap.entrypoints import main

main()

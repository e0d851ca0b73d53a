from metadict.server import main

main()

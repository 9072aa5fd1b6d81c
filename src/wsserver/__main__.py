from wsserver.server import main

main()

from bus_finder.server import main

main()

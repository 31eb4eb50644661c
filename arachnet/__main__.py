from arachnet.cli import main

main()

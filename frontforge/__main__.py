from frontforge.cli import main

main()

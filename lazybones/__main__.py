from lazybones.cmdline import main

main()

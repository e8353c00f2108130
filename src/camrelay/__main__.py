from camrelay.cli import main

main()

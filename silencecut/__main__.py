from silencecut.cli import main

main()

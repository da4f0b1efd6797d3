from gitprompt.cli import main

main()

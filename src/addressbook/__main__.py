from addressbook.cli import main

main()

from OutlookMigrator.cli import main

main()

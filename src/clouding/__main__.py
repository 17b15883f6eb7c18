from clouding.cli.main import main

raise SystemExit(main())

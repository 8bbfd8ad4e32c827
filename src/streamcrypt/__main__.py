from streamcrypt.cli.main import main

raise SystemExit(main())

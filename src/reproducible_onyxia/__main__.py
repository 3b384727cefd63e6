from reproducible_onyxia.cli import main

raise SystemExit(main())

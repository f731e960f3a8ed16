from quotewatch.cli import main

raise SystemExit(main())

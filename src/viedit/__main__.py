from viedit.cli import main

raise SystemExit(main())

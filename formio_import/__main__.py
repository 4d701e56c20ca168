from formio_import.main import main

raise SystemExit(main())

from schema_redactor.main import main

raise SystemExit(main())
